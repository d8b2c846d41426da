"""sparkgang configuration module."""

from .loader import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    dump_application_yaml,
    load_application,
    parse_application,
    save_application,
)
from .schema import (
    BatchSchedulerConfiguration,
    Container,
    DriverSpec,
    DynamicAllocation,
    ExecutorSpec,
    ResourceRequirements,
    SparkApplication,
    SparkApplicationSpec,
    SparkApplicationType,
    SparkPodSpec,
)

__all__ = [
    # Models
    "SparkApplication",
    "SparkApplicationSpec",
    "SparkPodSpec",
    "DriverSpec",
    "ExecutorSpec",
    "Container",
    "ResourceRequirements",
    "DynamicAllocation",
    "BatchSchedulerConfiguration",
    # Enums
    "SparkApplicationType",
    # Loader functions
    "load_application",
    "parse_application",
    "save_application",
    "dump_application_yaml",
    # Exceptions
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
]
