"""
Base command infrastructure for the skincare tracker CLI.
Provides common functionality and utilities for all commands.
"""

import functools
import json
import click
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from .config import Config
from ..db.session import SessionManager
from ..exceptions import ProductValidationError, TrackerError
from ..processors.error_tracker import ErrorTracker
from ..store import ProductStore

class BaseCommand(ABC):
    """Base class for all CLI commands.

    The product store is created from the configured database URL on first
    use; tests and embedding code can pass a ready-made store instead.
    """

    def __init__(self, config: Config, store: Optional[ProductStore] = None):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self.error_tracker = ErrorTracker()
        self._store = store

        # Get debug status from click context
        ctx = click.get_current_context(silent=True)
        self.debug = bool(ctx and ctx.obj and ctx.obj.get('debug'))
        if self.debug:
            self.logger.debug(f"Debug mode enabled for {self.__class__.__name__}")

    @property
    def store(self) -> ProductStore:
        """Get or create the product store."""
        if self._store is None:
            if self.debug:
                self.logger.debug(f"Creating store for {self.config.database_url}")
            self._store = ProductStore(SessionManager(self.config.database_url))
        return self._store

    @property
    def as_json(self) -> bool:
        return self.config.output_format == 'json'

    def echo_json(self, data: Any) -> None:
        click.echo(json.dumps(data, indent=2, default=str))

    @abstractmethod
    def execute(self) -> None:
        """Execute the command. Must be implemented by subclasses."""

    def validate(self) -> bool:
        """Validate command configuration and requirements.

        Returns:
            bool: True if validation passes, False otherwise
        """
        if self.debug:
            self.logger.debug("Validating command configuration")
        return True

class FileInputCommand(BaseCommand):
    """Base class for commands that process input files."""

    def __init__(self, config: Config, input_file: Path, output_file: Optional[Path] = None,
                 store: Optional[ProductStore] = None):
        super().__init__(config, store)
        self.input_file = input_file
        self.output_file = output_file

    def validate(self) -> bool:
        """Validate input file exists and is readable."""
        if not super().validate():
            return False

        if not self.input_file.exists():
            self.logger.error(f"Input file not found: {self.input_file}")
            return False

        if not self.input_file.is_file():
            self.logger.error(f"Input path is not a file: {self.input_file}")
            return False

        return True

def command_error_handler(f):
    """Decorator to handle command execution errors consistently.

    Known tracker errors are shown to the user as they are; anything else
    is logged with its traceback in debug mode. Both end the command with
    ``click.Abort``.
    """
    @functools.wraps(f)
    def wrapper(self, *args, **kwargs):
        start = time.time()
        if self.debug:
            self.logger.debug(f"Starting command execution: {f.__name__}")
        try:
            result = f(self, *args, **kwargs)
        except (click.Abort, click.exceptions.Exit):
            raise
        except ProductValidationError as e:
            self.error_tracker.add_error('VALIDATION_ERROR', str(e), {'command': self.__class__.__name__})
            click.secho("Product is not valid:", fg='red', err=True)
            for error in e.errors:
                click.secho(f"  - {error.field}: {error.message}", fg='red', err=True)
            raise click.Abort()
        except TrackerError as e:
            self.error_tracker.add_error('COMMAND_ERROR', str(e), {'command': self.__class__.__name__})
            click.secho(f"Error: {str(e)}", fg='red', err=True)
            raise click.Abort()
        except Exception as e:
            self.error_tracker.add_error(
                'COMMAND_EXECUTION_ERROR',
                f"Command failed: {str(e)}",
                {
                    'command': self.__class__.__name__,
                    'args': str(args),
                    'kwargs': str(kwargs)
                }
            )
            self.logger.error(f"Command failed: {str(e)}", exc_info=self.debug)
            click.secho(f"Error: {str(e)}", fg='red', err=True)
            raise click.Abort()

        if self.debug:
            self.logger.debug(f"Command completed in {time.time() - start:.3f}s")
        return result
    return wrapper
