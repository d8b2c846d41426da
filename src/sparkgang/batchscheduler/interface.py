"""Batch scheduler plugin contract.

A batch scheduler prepares a SparkApplication for a gang-scheduling backend
before its pods are created, and releases any backend state once the
application finishes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sparkgang.config.schema import SparkApplication


class BatchSchedulerError(Exception):
    """Base exception for batch scheduler errors."""

    pass


class UnknownSchedulerError(BatchSchedulerError):
    """Raised when no scheduler is registered under the requested name."""

    pass


class ResourceUsageError(BatchSchedulerError):
    """Raised when a pod role's minimum resources cannot be calculated."""

    def __init__(self, role: str, cause: Exception):
        super().__init__(f"failed to calculate {role} pod resource usage: {cause}")
        self.role = role


class SerializationError(BatchSchedulerError):
    """Raised when scheduler annotations cannot be encoded."""

    pass


class BatchScheduler(ABC):
    """Abstract base class for all batch scheduler backends."""

    @abstractmethod
    def name(self) -> str:
        """Registered name of the backend."""

    @abstractmethod
    def should_schedule(self, app: SparkApplication) -> bool:
        """Whether this backend handles the application."""

    @abstractmethod
    def do_batch_scheduling_on_submission(self, app: SparkApplication) -> None:
        """Mutate the application in place before its pods are submitted.

        Raises:
            BatchSchedulerError: If the application cannot be prepared
        """

    @abstractmethod
    def cleanup_on_completion(self, app: SparkApplication) -> None:
        """Release backend state held for a finished application."""
