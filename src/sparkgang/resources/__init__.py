"""Resource accounting for Spark driver and executor pods."""

from .memory import (
    DEFAULT_MEMORY,
    MIN_MEMORY_OVERHEAD,
    MemoryParseError,
    OverheadFactorError,
    ParseError,
    memory_required_for_spark_pod,
    parse_java_memory_string,
    parse_overhead_factor,
)
from .quantity import Quantity, QuantityFormat
from .usage import (
    DEFAULT_CPU,
    RESOURCE_CPU,
    RESOURCE_MEMORY,
    cores_required_for_spark_pod,
    cpu_required_for_sidecar,
    driver_pod_resource_usage,
    executor_pod_resource_usage,
    get_initial_executors,
    memory_required_for_sidecar,
    pod_resource_usage,
    sidecar_resource_requests,
)

__all__ = [
    # Quantities
    "Quantity",
    "QuantityFormat",
    # Memory
    "DEFAULT_MEMORY",
    "MIN_MEMORY_OVERHEAD",
    "parse_java_memory_string",
    "parse_overhead_factor",
    "memory_required_for_spark_pod",
    # Pod usage
    "DEFAULT_CPU",
    "RESOURCE_CPU",
    "RESOURCE_MEMORY",
    "cores_required_for_spark_pod",
    "cpu_required_for_sidecar",
    "memory_required_for_sidecar",
    "sidecar_resource_requests",
    "pod_resource_usage",
    "driver_pod_resource_usage",
    "executor_pod_resource_usage",
    "get_initial_executors",
    # Exceptions
    "ParseError",
    "MemoryParseError",
    "OverheadFactorError",
]
