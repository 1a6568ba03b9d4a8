"""Error tracking and aggregation for background sync tasks."""

from collections import defaultdict
from typing import Dict, Optional
import logging
import threading

class ErrorTracker:
    """Track and aggregate errors raised by background tasks.

    Written from the sync worker thread and read from the caller's thread.
    """

    def __init__(self, max_samples: int = 3):
        """Initialize error tracker.

        Args:
            max_samples: Maximum number of samples to store per error type
        """
        self.error_counts = defaultdict(int)
        self.error_samples = defaultdict(list)
        self.max_samples = max_samples
        self._lock = threading.Lock()

    def add_error(self, error_type: str, message: str, context: Optional[Dict] = None) -> None:
        """Add an error occurrence.

        Args:
            error_type: Category of error, e.g. the task kind
            message: Error message
            context: Optional context data for the error
        """
        with self._lock:
            self.error_counts[error_type] += 1
            if len(self.error_samples[error_type]) < self.max_samples:
                self.error_samples[error_type].append({
                    'message': message,
                    'context': context or {}
                })

    @property
    def total(self) -> int:
        with self._lock:
            return sum(self.error_counts.values())

    def get_summary(self) -> Dict:
        """Get error summary.

        Returns:
            Dict containing error counts and samples
        """
        with self._lock:
            return {
                'counts': dict(self.error_counts),
                'samples': {k: list(v) for k, v in self.error_samples.items()}
            }

    def log_summary(self, logger: logging.Logger) -> None:
        """Log error summary.

        Args:
            logger: Logger to use for output
        """
        summary = self.get_summary()
        if not summary['counts']:
            return

        logger.warning("Background sync errors:")
        for error_type, count in summary['counts'].items():
            logger.warning(f"  {error_type} ({count} occurrences)")
            for sample in summary['samples'].get(error_type, []):
                logger.warning(f"    {sample['message']}")
