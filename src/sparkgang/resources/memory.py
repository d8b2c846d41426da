"""Spark pod memory accounting.

Parses Java-style memory literals and applies Spark's Kubernetes memory
overhead rules (see ``BasicDriverFeatureStep`` / ``BasicExecutorFeatureStep``
in Spark's ``resource-managers/kubernetes`` module):

* base memory is ``spark.{driver,executor}.memory`` or 1 GiB;
* an explicit ``memoryOverhead`` is taken as-is;
* otherwise the overhead is ``base * factor`` with a 384 MiB floor, where the
  factor is ``memoryOverheadFactor`` or 0.10 for JVM applications and 0.40
  for everything else.
"""

from __future__ import annotations

import logging
import math
import re
from typing import TYPE_CHECKING

from sparkgang.config.schema import SparkApplicationType

from .quantity import Quantity, QuantityFormat

if TYPE_CHECKING:
    from sparkgang.config.schema import SparkPodSpec

logger = logging.getLogger(__name__)

DEFAULT_MEMORY = Quantity.from_int(1 << 30, QuantityFormat.BINARY_SI)
MIN_MEMORY_OVERHEAD = Quantity.from_int(384 * (1 << 20), QuantityFormat.BINARY_SI)
DEFAULT_MEMORY_OVERHEAD_FACTOR = 0.1
NON_JVM_MEMORY_OVERHEAD_FACTOR = 0.4

_JAVA_MEMORY_SUFFIX_TO_SCALE = {
    "": "",
    "b": "",
    "kb": "Ki",
    "k": "Ki",
    "mb": "Mi",
    "m": "Mi",
    "gb": "Gi",
    "g": "Gi",
    "tb": "Ti",
    "t": "Ti",
    "pb": "Pi",
    "p": "Pi",
}

_JAVA_INTEGER_PATTERN = re.compile(r"([0-9]+)([a-z]+)?")
_JAVA_FRACTION_PATTERN = re.compile(r"([0-9]+\.[0-9]+)([a-z]+)?")


class ParseError(ValueError):
    """Raised when a user-supplied resource string cannot be parsed."""

    def __init__(self, message: str, value: str):
        super().__init__(message)
        self.value = value


class MemoryParseError(ParseError):
    """Raised for a malformed Java-style memory literal."""

    def __init__(self, value: str):
        super().__init__(
            f"could not parse string '{value}' as a Java-style memory value. "
            "Examples: 100kb, 1.5mb, 1g",
            value,
        )


class OverheadFactorError(ParseError):
    """Raised when ``memoryOverheadFactor`` is not a number."""

    def __init__(self, value: str):
        super().__init__(f"could not parse memory overhead factor '{value}' as a number", value)


def parse_java_memory_string(text: str) -> Quantity:
    """Parse a Java-style memory literal into a binary-scaled quantity.

    Accepts ``<integer>[suffix]`` or ``<decimal>[suffix]`` (case-insensitive)
    with suffixes b, k/kb, m/mb, g/gb, t/tb, p/pb. No suffix means bytes.

    Examples:
        >>> str(parse_java_memory_string("512m"))
        '512Mi'
        >>> str(parse_java_memory_string("1.5g"))
        '1536Mi'

    Raises:
        MemoryParseError: If the string is not a recognised memory literal.
    """
    lower = text.lower()
    for pattern in (_JAVA_INTEGER_PATTERN, _JAVA_FRACTION_PATTERN):
        match = pattern.fullmatch(lower)
        if match is None:
            continue
        value, suffix = match.group(1), match.group(2) or ""
        scale = _JAVA_MEMORY_SUFFIX_TO_SCALE.get(suffix)
        if scale is not None:
            return Quantity.parse(f"{value}{scale}")
        break
    raise MemoryParseError(text)


def parse_overhead_factor(text: str) -> float:
    """Parse ``memoryOverheadFactor`` as a float.

    Raises:
        OverheadFactorError: If the string is not a finite number.
    """
    try:
        factor = float(text)
    except ValueError:
        raise OverheadFactorError(text)  # noqa: B904
    if not math.isfinite(factor):
        raise OverheadFactorError(text)
    return factor


def _default_overhead_factor(app_type: SparkApplicationType | str) -> float:
    if app_type == SparkApplicationType.JAVA:
        return DEFAULT_MEMORY_OVERHEAD_FACTOR
    return NON_JVM_MEMORY_OVERHEAD_FACTOR


def memory_required_for_spark_pod(
    pod: SparkPodSpec,
    memory_overhead_factor: str | None,
    app_type: SparkApplicationType | str,
) -> Quantity:
    """Total memory (base + overhead) a Spark driver or executor container needs.

    Args:
        pod: Driver or executor pod spec
        memory_overhead_factor: Application-level ``memoryOverheadFactor``
        app_type: Application type; only Java uses the JVM default factor

    Returns:
        Base memory plus overhead as an exact quantity

    Raises:
        MemoryParseError: If ``memory`` or ``memoryOverhead`` is malformed
        OverheadFactorError: If ``memory_overhead_factor`` is not a number
    """
    if pod.memory is not None:
        memory = parse_java_memory_string(pod.memory)
    else:
        memory = DEFAULT_MEMORY

    if pod.memory_overhead is not None:
        overhead = parse_java_memory_string(pod.memory_overhead)
    else:
        if memory_overhead_factor is not None:
            factor = parse_overhead_factor(memory_overhead_factor)
        else:
            factor = _default_overhead_factor(app_type)
        overhead = Quantity.from_int(int(memory.value() * factor), QuantityFormat.BINARY_SI)
        if overhead < MIN_MEMORY_OVERHEAD:
            overhead = MIN_MEMORY_OVERHEAD

    logger.debug("Pod memory %s + overhead %s", memory, overhead)
    return memory + overhead
