"""
Logging utilities for the fingerprint comparison engine.

Library modules log through logging.getLogger(__name__); experiment
scripts configure the "ridgematch" logger once and record their
comparisons in a ComparisonLog that is persisted as JSON.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str = "ridgematch",
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Configure a standard Python logger.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file to also write records to
        console_output: Whether to output to console

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = []  # Clear existing handlers

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class ComparisonLog:
    """
    Record of a fingerprint comparison run.

    Every comparison is logged as it happens and kept, together with
    the run parameters and summary, for saving to a JSON report.

    Attributes:
        name: Run name, also used for the log and report filenames
        log_dir: Directory for the log file and the report
        logger: Python logger instance
        params: Parameters of the run
        comparisons: One entry per compared pair
        summary: Aggregated results
    """

    def __init__(
        self,
        name: str,
        log_dir: Union[str, Path] = "logs",
        level: str = "INFO",
        console_output: bool = True,
        file_output: bool = True
    ):
        self.name = name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.start_time = datetime.now()

        self.params: Dict[str, Any] = {}
        self.comparisons: List[Dict[str, Any]] = []
        self.summary: Dict[str, Any] = {}

        log_file = None
        if file_output:
            log_file = self.log_dir / f"{name}_{self._timestamp}.log"

        self.logger = setup_logger(name, level, log_file, console_output)

    @property
    def _timestamp(self) -> str:
        return self.start_time.strftime('%Y%m%d_%H%M%S')

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def log_params(self, params: Dict[str, Any]) -> None:
        """Record the parameters of the run."""
        self.params = dict(params)
        for key, value in self.params.items():
            self.info(f"  {key}: {value}")

    def log_comparison(self, name1: str, name2: str, result) -> None:
        """
        Record the outcome of comparing two fingerprints.

        Args:
            name1: Name of the first fingerprint (usually a filename)
            name2: Name of the second fingerprint
            result: MatchResult of the comparison
        """
        entry = {'first': name1, 'second': name2}
        entry.update(result.to_dict())
        self.comparisons.append(entry)

        self.info(
            f"Compare {name1} ({result.num_minutiae1} minutiae) with "
            f"{name2} ({result.num_minutiae2} minutiae): match = {result.is_match}"
        )

    def log_summary(self, summary: Dict[str, Any]) -> None:
        """Record and print the aggregated results of the run."""
        self.summary = dict(summary)
        self.info("Summary:")
        for key, value in self.summary.items():
            if isinstance(value, float):
                self.info(f"  {key}: {value:.4f}")
            else:
                self.info(f"  {key}: {value}")

    def save(self, filename: Optional[str] = None) -> Path:
        """
        Save the run report to a JSON file in log_dir.

        Args:
            filename: Optional custom filename

        Returns:
            Path to the saved report
        """
        filepath = self.log_dir / (filename or f"{self.name}_{self._timestamp}.json")

        report = {
            'name': self.name,
            'start_time': self.start_time.isoformat(),
            'end_time': datetime.now().isoformat(),
            'params': self.params,
            'comparisons': self.comparisons,
            'summary': self.summary,
        }

        with open(filepath, 'w') as f:
            json.dump(report, f, indent=2, default=str)

        self.info(f"Report saved to {filepath}")
        return filepath


class ProgressTracker:
    """
    Periodic progress and ETA reporting for a batch of comparisons.
    """

    def __init__(
        self,
        total: int,
        logger: Optional[ComparisonLog] = None,
        report_every: float = 0.1
    ):
        """
        Args:
            total: Number of items to process
            logger: Optional log to report to
            report_every: Fraction of the total between two reports
        """
        self.total = total
        self.current = 0
        self.logger = logger
        self.step = max(1, int(total * report_every))
        self.start_time = datetime.now()

    def elapsed(self) -> float:
        return (datetime.now() - self.start_time).total_seconds()

    def update(self, n: int = 1) -> None:
        self.current += n

        if self.logger is None or self.current % self.step:
            return

        elapsed = self.elapsed()
        remaining = (self.total - self.current) * elapsed / self.current
        self.logger.info(
            f"Progress: {self.current}/{self.total} "
            f"({100 * self.current / self.total:.0f}%), {remaining:.1f}s left"
        )

    def finish(self) -> float:
        """Report completion and return the elapsed time in seconds."""
        elapsed = self.elapsed()
        if self.logger is not None:
            self.logger.info(f"Processed {self.current} items in {elapsed:.2f}s")
        return elapsed
