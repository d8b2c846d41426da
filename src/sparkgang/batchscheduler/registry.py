"""Registry of batch scheduler backends.

Backends are looked up by the name a SparkApplication gives in
``spec.batchScheduler``. Additional backends register a factory here and
need no changes to the resource accounting code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .interface import BatchScheduler, UnknownSchedulerError
from .yunikorn import SCHEDULER_NAME as YUNIKORN, YunikornScheduler

if TYPE_CHECKING:
    from sparkgang.config.schema import SparkApplication

logger = logging.getLogger(__name__)

SchedulerFactory = Callable[..., BatchScheduler]

_SCHEDULERS: dict[str, SchedulerFactory] = {
    YUNIKORN: YunikornScheduler,
}


def register_scheduler(name: str, factory: SchedulerFactory) -> None:
    """Register a backend factory under ``name``, replacing any previous one."""
    if name in _SCHEDULERS:
        logger.warning("Replacing batch scheduler registered as '%s'", name)
    _SCHEDULERS[name] = factory


def registered_schedulers() -> list[str]:
    """Names of all registered backends, sorted."""
    return sorted(_SCHEDULERS)


def get_scheduler(name: str, **kwargs: Any) -> BatchScheduler:
    """Create the backend registered under ``name``.

    Raises:
        UnknownSchedulerError: If no backend has that name
    """
    factory = _SCHEDULERS.get(name)
    if factory is None:
        valid = ", ".join(registered_schedulers())
        raise UnknownSchedulerError(f"Unknown batch scheduler: {name}. Valid schedulers: {valid}")
    return factory(**kwargs)


def scheduler_for(app: SparkApplication) -> BatchScheduler | None:
    """Backend named by the application, or None when it names none.

    Raises:
        UnknownSchedulerError: If the named backend is not registered
    """
    if not app.spec.batch_scheduler:
        return None
    return get_scheduler(app.spec.batch_scheduler)
