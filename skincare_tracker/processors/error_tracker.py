"""Error tracking and aggregation for batch processors and commands."""

from collections import defaultdict
from typing import Dict, List, Optional, Set
import logging

class ErrorTracker:
    """Count errors by category and keep a few samples of each."""
    
    def __init__(self, max_samples: int = 3):
        """Initialize error tracker.
        
        Args:
            max_samples: Maximum number of samples to keep per category
        """
        self.error_counts: Dict[str, int] = defaultdict(int)
        self.error_samples: Dict[str, List[Dict]] = defaultdict(list)
        self.max_samples = max_samples
        self.seen_errors: Set[str] = set()
        
    def add_error(self, error_type: str, message: str, context: Optional[Dict] = None) -> None:
        """Record an error.
        
        Repeats of the same category and message are counted once.
        
        Args:
            error_type: Error category, e.g. ``validation``
            message: Error message
            context: Optional details such as the CSV row number
        """
        error_key = f"{error_type}:{message}"
        if error_key in self.seen_errors:
            return
        self.seen_errors.add(error_key)
        self.error_counts[error_type] += 1
        
        if len(self.error_samples[error_type]) < self.max_samples:
            self.error_samples[error_type].append({
                'message': message,
                'context': context or {}
            })
    
    @property
    def total(self) -> int:
        return sum(self.error_counts.values())
    
    def get_summary(self) -> Dict:
        """Error counts and samples, ready for JSON output."""
        return {
            'counts': dict(self.error_counts),
            'samples': dict(self.error_samples)
        }
    
    def log_summary(self, logger: logging.Logger) -> None:
        """Write the error summary to a logger as warnings."""
        if not self.error_counts:
            return
            
        logger.warning("Error Summary:")
        for error_type, count in self.error_counts.items():
            logger.warning(f"{error_type} ({count} occurrences):")
            for i, sample in enumerate(self.error_samples[error_type], 1):
                logger.warning(f"  Sample {i}: {sample['message']}")
                for key, value in sample['context'].items():
                    logger.warning(f"    {key}: {value}")
