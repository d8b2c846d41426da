"""Apache YuniKorn gang scheduling for Spark applications.

YuniKorn reads gang definitions from pod annotations: every pod names its own
task group, and the originating (driver) pod carries the JSON list of all task
groups with their minimum member counts and per-member resources. The
scheduler then reserves capacity for the whole gang before admitting any of
it.

Task group wire format:
https://github.com/apache/yunikorn-k8shim/blob/master/pkg/cache/amprotocol.go
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sparkgang.resources import (
    ParseError,
    driver_pod_resource_usage,
    executor_pod_resource_usage,
    get_initial_executors,
)

from .interface import BatchScheduler, ResourceUsageError, SerializationError

if TYPE_CHECKING:
    from sparkgang.config.schema import SparkApplication, SparkPodSpec

logger = logging.getLogger(__name__)

SCHEDULER_NAME = "yunikorn"

DRIVER_TASK_GROUP_NAME = "spark-driver"
EXECUTOR_TASK_GROUP_NAME = "spark-executor"

TASK_GROUP_NAME_ANNOTATION = "yunikorn.apache.org/task-group-name"
TASK_GROUPS_ANNOTATION = "yunikorn.apache.org/task-groups"

QUEUE_LABEL = "queue"


@dataclass
class TaskGroup:
    """One gang: a named set of identical pods admitted all-or-nothing."""

    name: str
    min_member: int
    min_resource: dict[str, str] | None = None
    node_selector: dict[str, str] | None = None
    tolerations: list[dict[str, Any]] | None = None
    affinity: dict[str, Any] | None = None
    labels: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the YuniKorn wire shape, omitting empty fields."""
        d: dict[str, Any] = {"name": self.name, "minMember": self.min_member}
        if self.min_resource:
            d["minResource"] = dict(sorted(self.min_resource.items()))
        if self.node_selector:
            d["nodeSelector"] = dict(sorted(self.node_selector.items()))
        if self.tolerations:
            d["tolerations"] = list(self.tolerations)
        if self.affinity is not None:
            d["affinity"] = self.affinity
        if self.labels:
            d["labels"] = dict(sorted(self.labels.items()))
        return d


def merge_maps(
    base: dict[str, str] | None, override: dict[str, str] | None
) -> dict[str, str] | None:
    """Overlay ``override`` on ``base``.

    Returns None instead of an empty dict so the field is left out of the
    task group entirely.
    """
    out: dict[str, str] = {}
    out.update(base or {})
    out.update(override or {})
    return out or None


def _task_group(
    name: str,
    min_member: int,
    min_resource: dict[str, str],
    app: SparkApplication,
    pod: SparkPodSpec,
) -> TaskGroup:
    return TaskGroup(
        name=name,
        min_member=min_member,
        min_resource=min_resource,
        node_selector=merge_maps(app.spec.node_selector, pod.node_selector),
        tolerations=list(pod.tolerations) if pod.tolerations is not None else None,
        affinity=pod.affinity,
        labels=dict(pod.labels) if pod.labels is not None else None,
    )


def build_task_groups(app: SparkApplication) -> list[TaskGroup]:
    """Build the driver task group and, when executors start with the app,
    the executor task group.

    A task group with ``minMember`` 0 is rejected by YuniKorn, so the executor
    group is left out when the initial executor count is zero.

    Raises:
        ResourceUsageError: If a role's resources cannot be calculated
    """
    try:
        driver_min_resources = driver_pod_resource_usage(app)
    except ParseError as e:
        raise ResourceUsageError("driver", e) from e

    task_groups = [
        _task_group(DRIVER_TASK_GROUP_NAME, 1, driver_min_resources, app, app.spec.driver)
    ]

    initial_executors = get_initial_executors(app)
    if initial_executors > 0:
        try:
            executor_min_resources = executor_pod_resource_usage(app)
        except ParseError as e:
            raise ResourceUsageError("executor", e) from e

        task_groups.append(
            _task_group(
                EXECUTOR_TASK_GROUP_NAME,
                initial_executors,
                executor_min_resources,
                app,
                app.spec.executor,
            )
        )
    else:
        logger.debug("No initial executors for %s, skipping executor task group", app.name)

    return task_groups


def serialize_task_groups(task_groups: list[TaskGroup]) -> str:
    """Encode task groups as compact JSON.

    Raises:
        SerializationError: If a field holds a value JSON cannot represent
    """
    try:
        return json.dumps(
            [tg.to_dict() for tg in task_groups],
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to marshal task groups: {e}") from e


def add_task_group_annotations(app: SparkApplication, task_groups: list[TaskGroup]) -> None:
    """Annotate both pod templates with their task group name and the
    driver template with the full task group list.

    Raises:
        SerializationError: If the task groups cannot be encoded
    """
    marshalled = serialize_task_groups(task_groups)

    driver = app.spec.driver
    executor = app.spec.executor
    if driver.annotations is None:
        driver.annotations = {}
    if executor.annotations is None:
        executor.annotations = {}

    driver.annotations[TASK_GROUP_NAME_ANNOTATION] = DRIVER_TASK_GROUP_NAME
    executor.annotations[TASK_GROUP_NAME_ANNOTATION] = EXECUTOR_TASK_GROUP_NAME

    # Only the originating pod needs the task group list
    driver.annotations[TASK_GROUPS_ANNOTATION] = marshalled


def add_queue_labels(app: SparkApplication) -> None:
    """Label both pod templates with the configured YuniKorn queue, if any."""
    options = app.spec.batch_scheduler_options
    if options is None or options.queue is None:
        return

    for pod in (app.spec.driver, app.spec.executor):
        if pod.labels is None:
            pod.labels = {}
        pod.labels[QUEUE_LABEL] = options.queue


class YunikornScheduler(BatchScheduler):
    """Gang-schedules Spark driver and executors through YuniKorn task groups.

    YuniKorn keeps no custom resources of its own for an application, so
    there is nothing to clean up on completion.
    """

    def name(self) -> str:
        return SCHEDULER_NAME

    def should_schedule(self, app: SparkApplication) -> bool:
        return True

    def do_batch_scheduling_on_submission(self, app: SparkApplication) -> None:
        """Attach task group annotations and queue labels to the pod templates.

        Raises:
            ResourceUsageError: If driver or executor resources cannot be calculated
            SerializationError: If the task groups cannot be encoded
        """
        task_groups = build_task_groups(app)
        add_task_group_annotations(app, task_groups)
        add_queue_labels(app)

        logger.info(
            "Attached %d YuniKorn task group(s) to SparkApplication %s",
            len(task_groups),
            app.name,
        )

    def cleanup_on_completion(self, app: SparkApplication) -> None:
        return None
