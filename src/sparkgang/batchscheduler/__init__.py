"""Batch scheduler backends for sparkgang.

Prepares SparkApplications for gang scheduling before their pods exist.
"""

from .interface import (
    BatchScheduler,
    BatchSchedulerError,
    ResourceUsageError,
    SerializationError,
    UnknownSchedulerError,
)
from .registry import get_scheduler, register_scheduler, registered_schedulers, scheduler_for
from .yunikorn import (
    DRIVER_TASK_GROUP_NAME,
    EXECUTOR_TASK_GROUP_NAME,
    QUEUE_LABEL,
    TASK_GROUP_NAME_ANNOTATION,
    TASK_GROUPS_ANNOTATION,
    TaskGroup,
    YunikornScheduler,
    build_task_groups,
    merge_maps,
)

__all__ = [
    # Interface
    "BatchScheduler",
    # Registry
    "get_scheduler",
    "register_scheduler",
    "registered_schedulers",
    "scheduler_for",
    # YuniKorn
    "YunikornScheduler",
    "TaskGroup",
    "build_task_groups",
    "merge_maps",
    "DRIVER_TASK_GROUP_NAME",
    "EXECUTOR_TASK_GROUP_NAME",
    "TASK_GROUP_NAME_ANNOTATION",
    "TASK_GROUPS_ANNOTATION",
    "QUEUE_LABEL",
    # Errors
    "BatchSchedulerError",
    "ResourceUsageError",
    "SerializationError",
    "UnknownSchedulerError",
]
