"""Base processor for batch imports."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Any, List, Tuple
import logging
import time
import pandas as pd
from sqlalchemy.orm import Session

from ..db.session import SessionManager

class ProcessingStats:
    """Counters for a processing run.

    Unknown counters read as 0, so processors can add their own
    (``stats.created += 1``) without declaring them first.
    """

    def __init__(self):
        self._stats = {
            'total_processed': 0,
            'successful_batches': 0,
            'failed_batches': 0,
            'total_errors': 0,
            'processing_time': 0.0,
            'started_at': datetime.utcnow(),
            'completed_at': None
        }

    def __getitem__(self, key: str) -> Any:
        return self._stats[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._stats[key] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith('__'):
            raise AttributeError(name)
        return self._stats.setdefault(name, 0)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == '_stats':
            super().__setattr__(name, value)
        else:
            self._stats[name] = value

    def to_dict(self) -> Dict[str, Any]:
        """Stats with datetimes as ISO strings and floats rounded."""
        result = {}
        for key, value in self._stats.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, float):
                result[key] = round(value, 3)
            else:
                result[key] = value
        return result

class BaseProcessor(ABC):
    """Validate a DataFrame, then process it in batches.

    Each batch runs in its own session; a failing batch is rolled back and
    counted, and processing continues with the next one until the error
    limit is reached.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        batch_size: int = 100,
        error_limit: int = 1000,
        debug: bool = False
    ):
        """Initialize processor with session manager and configuration.

        Args:
            session_manager: Database session manager
            batch_size: Number of records to process in each batch
            error_limit: Maximum number of errors before stopping
            debug: Enable debug logging
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.session_manager = session_manager
        self.batch_size = batch_size
        self.error_limit = error_limit
        self.debug = debug
        self.logger = logging.getLogger(self.__class__.__name__)
        self.stats = ProcessingStats()

        if self.debug:
            self.logger.debug(f"Initialized {self.__class__.__name__} with batch_size={batch_size}")

    @abstractmethod
    def validate_data(self, df: pd.DataFrame) -> Tuple[List[str], List[str]]:
        """Validate data before processing.

        Returns:
            Tuple of (critical_issues, warnings)
        """

    @abstractmethod
    def _process_batch(self, session: Session, batch_df: pd.DataFrame) -> pd.DataFrame:
        """Process one batch inside an open session and return it annotated."""

    def process(self, data: pd.DataFrame) -> pd.DataFrame:
        """Validate and process the data in batches.

        Args:
            data: DataFrame to process

        Returns:
            Processed rows, empty when validation found critical issues
        """
        start_time = time.time()
        critical_issues, warnings = self.validate_data(data)

        for warning in warnings:
            self.logger.warning(f"Validation warning: {warning}")

        if critical_issues:
            for issue in critical_issues:
                self.logger.error(f"Validation failed: {issue}")
            self.stats.total_errors += len(critical_issues)
            self.stats.completed_at = datetime.utcnow()
            return pd.DataFrame()

        total_rows = len(data)
        total_batches = (total_rows + self.batch_size - 1) // self.batch_size
        result_dfs = []

        if self.debug:
            self.logger.debug(f"Processing {total_rows} rows in {total_batches} batches")

        for batch_num, start_idx in enumerate(range(0, total_rows, self.batch_size), 1):
            batch_df = data.iloc[start_idx:start_idx + self.batch_size].copy()

            try:
                with self.session_manager as session:
                    result_dfs.append(self._process_batch(session, batch_df))
                self.stats.successful_batches += 1
                self.stats.total_processed += len(batch_df)

                if self.debug:
                    self.logger.debug(f"Batch {batch_num}/{total_batches} completed")

            except Exception as e:
                self.logger.error(f"Error in batch {batch_num} (rows {start_idx}-{start_idx + len(batch_df) - 1}): {str(e)}")
                if self.debug:
                    self.logger.debug("Batch failure details", exc_info=True)
                self.stats.failed_batches += 1
                self.stats.total_errors += 1

            if self.stats.total_errors >= self.error_limit:
                self.logger.error(f"Stopping: Error limit ({self.error_limit}) reached")
                break

        self.stats.processing_time = time.time() - start_time
        self.stats.completed_at = datetime.utcnow()

        return pd.concat(result_dfs, ignore_index=True) if result_dfs else pd.DataFrame()

    def get_stats(self) -> Dict[str, Any]:
        """Get processing statistics."""
        return self.stats.to_dict()
