"""
Configuration management for the skincare tracker CLI.
Loads settings from environment variables and an optional .env file.
"""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

OUTPUT_FORMATS = ['text', 'json']

@dataclass
class Config:
    """Configuration settings for the skincare tracker CLI."""
    
    # Database settings
    database_url: str
    
    # Logging settings
    log_level: str = 'INFO'
    log_dir: Optional[Path] = None
    
    # Output settings
    output_format: str = 'text'  # text, json
    
    # Runtime settings
    interactive: bool = True
    
    # Import settings
    batch_size: int = 100
    
    # Dashboard settings
    upcoming_limit: int = 5
    
    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'Config':
        """Create configuration from environment variables.
        
        Args:
            env_file: Optional path to .env file
            
        Returns:
            Config: Configuration instance
            
        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()
            
        database_url = os.getenv('DATABASE_URL')
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is required")
        
        try:
            batch_size = int(os.getenv('BATCH_SIZE', '100'))
            upcoming_limit = int(os.getenv('UPCOMING_LIMIT', '5'))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting: {e}") from e
            
        config = cls(
            database_url=database_url,
            log_level=os.getenv('LOG_LEVEL', 'INFO'),
            log_dir=Path(os.getenv('LOG_DIR')) if os.getenv('LOG_DIR') else None,
            output_format=os.getenv('OUTPUT_FORMAT', 'text').lower(),
            interactive=os.getenv('INTERACTIVE', 'true').lower() == 'true',
            batch_size=batch_size,
            upcoming_limit=upcoming_limit
        )
        config.validate()
        return config
    
    def validate(self) -> bool:
        """Validate configuration settings.
        
        Returns:
            bool: True if configuration is valid
            
        Raises:
            ValueError: If a setting is out of range
        """
        if self.log_dir and not self.log_dir.exists():
            try:
                self.log_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ValueError(f"Failed to create log directory: {e}")
        
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.upcoming_limit < 0:
            raise ValueError("upcoming_limit cannot be negative")
            
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of: {', '.join(OUTPUT_FORMATS)}")
        
        if self.log_level.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Unknown log level: {self.log_level}")
            
        return True
