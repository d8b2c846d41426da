"""Pydantic models for SparkApplication manifests.

Covers the subset of the ``sparkoperator.k8s.io/v1beta2`` SparkApplication
spec that resource accounting and batch scheduling read or write. Fields are
snake_case in Python and accept the manifest's camelCase keys. Keys the models
do not declare are kept as extra fields so a loaded manifest dumps back
without losing unrelated pod settings.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sparkgang._constants import SPARK_APPLICATION_KIND, SPARK_OPERATOR_API_VERSION

# =============================================================================
# Enums
# =============================================================================


class SparkApplicationType(str, Enum):
    """Language of the Spark application's main resource."""

    JAVA = "Java"
    SCALA = "Scala"
    PYTHON = "Python"
    R = "R"


# =============================================================================
# Base
# =============================================================================


class ManifestModel(BaseModel):
    """Base for models that mirror objects in a SparkApplication manifest."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


def _stringify(value: Any) -> Any:
    """Accept bare YAML numbers for string fields (``memory: 512``)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


# =============================================================================
# Containers
# =============================================================================


class ResourceRequirements(ManifestModel):
    """Compute resource requests and limits of a container."""

    requests: dict[str, str] = Field(default_factory=dict)
    limits: dict[str, str] = Field(default_factory=dict)

    @field_validator("requests", "limits", mode="before")
    @classmethod
    def validate_quantities(cls, value: Any) -> Any:
        """Ensure every request/limit is a valid Kubernetes quantity."""
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value

        from sparkgang.resources.quantity import Quantity

        quantities: dict[str, str] = {}
        for name, raw in value.items():
            text = str(_stringify(raw))
            try:
                Quantity.parse(text)
            except ValueError:
                raise ValueError(f"Invalid quantity for '{name}': {raw!r}")  # noqa: B904
            quantities[name] = text
        return quantities


class Container(ManifestModel):
    """Sidecar container attached to a driver or executor pod."""

    name: str
    image: str | None = None
    resources: ResourceRequirements = Field(default_factory=ResourceRequirements)


# =============================================================================
# Driver / Executor
# =============================================================================


class SparkPodSpec(ManifestModel):
    """Settings shared by the driver and executor pod templates.

    ``None`` and ``{}`` are kept distinct for map fields: an absent map stays
    absent when the manifest is dumped again.
    """

    cores: int | None = Field(default=None, ge=1)
    core_limit: str | None = None
    memory: str | None = None
    memory_overhead: str | None = None
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    node_selector: dict[str, str] | None = None
    tolerations: list[dict[str, Any]] | None = None
    affinity: dict[str, Any] | None = None
    sidecars: list[Container] | None = None

    @field_validator("core_limit", "memory", "memory_overhead", mode="before")
    @classmethod
    def coerce_str(cls, value: Any) -> Any:
        return _stringify(value)


class DriverSpec(SparkPodSpec):
    """Spark driver pod settings."""

    pod_name: str | None = None
    service_account: str | None = None


class ExecutorSpec(SparkPodSpec):
    """Spark executor pod settings."""

    instances: int | None = Field(default=None, ge=0)


# =============================================================================
# Application
# =============================================================================


class DynamicAllocation(ManifestModel):
    """Dynamic executor allocation range."""

    enabled: bool = False
    initial_executors: int | None = Field(default=None, ge=0)
    min_executors: int | None = Field(default=None, ge=0)
    max_executors: int | None = Field(default=None, ge=0)


class BatchSchedulerConfiguration(ManifestModel):
    """Options passed through to the batch scheduler."""

    queue: str | None = None
    priority_class_name: str | None = None
    resources: dict[str, str] | None = None


class SparkApplicationSpec(ManifestModel):
    """The ``spec`` block of a SparkApplication."""

    type: SparkApplicationType
    mode: str | None = None
    image: str | None = None
    spark_version: str | None = None
    node_selector: dict[str, str] | None = None
    memory_overhead_factor: str | None = None
    driver: DriverSpec = Field(default_factory=DriverSpec)
    executor: ExecutorSpec = Field(default_factory=ExecutorSpec)
    dynamic_allocation: DynamicAllocation | None = None
    batch_scheduler: str | None = None
    batch_scheduler_options: BatchSchedulerConfiguration | None = None

    @field_validator("memory_overhead_factor", mode="before")
    @classmethod
    def coerce_factor(cls, value: Any) -> Any:
        return _stringify(value)


class SparkApplication(ManifestModel):
    """A SparkApplication custom resource."""

    api_version: str = SPARK_OPERATOR_API_VERSION
    kind: str = SPARK_APPLICATION_KIND
    metadata: dict[str, Any] = Field(default_factory=dict)
    spec: SparkApplicationSpec

    @property
    def name(self) -> str:
        """Application name from ``metadata.name``."""
        return str(self.metadata.get("name", ""))

    def to_manifest(self) -> dict[str, Any]:
        """Dump to a camelCase manifest dict, dropping unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
