"""Minimum resource usage of Spark driver and executor pods."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .memory import memory_required_for_spark_pod
from .quantity import Quantity, QuantityFormat

if TYPE_CHECKING:
    from sparkgang.config.schema import (
        Container,
        SparkApplication,
        SparkApplicationType,
        SparkPodSpec,
    )

logger = logging.getLogger(__name__)

RESOURCE_CPU = "cpu"
RESOURCE_MEMORY = "memory"

DEFAULT_CPU = Quantity.from_milli(1000, QuantityFormat.DECIMAL_SI)


def cores_required_for_spark_pod(pod: SparkPodSpec) -> Quantity:
    """CPU for a driver or executor container: ``cores`` or one full core."""
    if pod.cores is not None:
        return Quantity.from_milli(pod.cores * 1000, QuantityFormat.BINARY_SI)
    return DEFAULT_CPU


def _sidecar_request(sidecar: Container, resource_name: str) -> Quantity:
    request = sidecar.resources.requests.get(resource_name)
    if request is None:
        return Quantity()
    return Quantity.parse(request)


def cpu_required_for_sidecar(sidecar: Container) -> Quantity:
    return _sidecar_request(sidecar, RESOURCE_CPU)


def memory_required_for_sidecar(sidecar: Container) -> Quantity:
    return _sidecar_request(sidecar, RESOURCE_MEMORY)


def sidecar_resource_requests(sidecars: Iterable[Container] | None) -> tuple[Quantity, Quantity]:
    """Sum the CPU and memory requests of a role's sidecars.

    Sidecars without a request for a resource contribute zero.

    Returns:
        Tuple of (cpu, memory)
    """
    cpu = Quantity()
    memory = Quantity()
    for sidecar in sidecars or ():
        cpu = cpu + cpu_required_for_sidecar(sidecar)
        memory = memory + memory_required_for_sidecar(sidecar)
    return cpu, memory


def pod_resource_usage(
    pod: SparkPodSpec,
    memory_overhead_factor: str | None,
    app_type: SparkApplicationType | str,
) -> dict[str, str]:
    """Minimum CPU and memory for one pod of a role, sidecars included.

    Returns:
        Mapping of resource name to canonical quantity string

    Raises:
        ParseError: If a memory literal or the overhead factor is malformed
    """
    memory = memory_required_for_spark_pod(pod, memory_overhead_factor, app_type)
    cores = cores_required_for_spark_pod(pod)
    sidecar_cpu, sidecar_memory = sidecar_resource_requests(pod.sidecars)

    return {
        RESOURCE_CPU: str(cores + sidecar_cpu),
        RESOURCE_MEMORY: str(memory + sidecar_memory),
    }


def driver_pod_resource_usage(app: SparkApplication) -> dict[str, str]:
    spec = app.spec
    return pod_resource_usage(spec.driver, spec.memory_overhead_factor, spec.type)


def executor_pod_resource_usage(app: SparkApplication) -> dict[str, str]:
    spec = app.spec
    return pod_resource_usage(spec.executor, spec.memory_overhead_factor, spec.type)


def get_initial_executors(app: SparkApplication) -> int:
    """Number of executors that must be admitted together with the driver.

    Takes the largest of ``executor.instances``, ``dynamicAllocation.minExecutors``
    and ``dynamicAllocation.initialExecutors``, the same way Spark resolves its
    initial executor target (``Utils.getDynamicAllocationInitialExecutors``).
    Absent values count as zero.
    """
    spec = app.spec
    candidates = [spec.executor.instances]
    if spec.dynamic_allocation is not None:
        candidates.append(spec.dynamic_allocation.min_executors)
        candidates.append(spec.dynamic_allocation.initial_executors)

    initial_executors = max((c for c in candidates if c is not None), default=0)
    logger.debug("Initial executors for %s: %d", app.name, initial_executors)
    return max(initial_executors, 0)
