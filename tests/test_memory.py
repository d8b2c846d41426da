"""Tests for Java memory literals and Spark memory overhead."""

import pytest

from sparkgang.config import SparkApplicationType, SparkPodSpec
from sparkgang.resources import (
    MemoryParseError,
    OverheadFactorError,
    ParseError,
    memory_required_for_spark_pod,
    parse_java_memory_string,
    parse_overhead_factor,
)

MiB = 1024**2
GiB = 1024**3


class TestParseJavaMemoryString:
    """Tests for Java-style memory literal parsing."""

    @pytest.mark.parametrize(
        "suffix,power",
        [
            ("b", 0),
            ("k", 1),
            ("kb", 1),
            ("m", 2),
            ("mb", 2),
            ("g", 3),
            ("gb", 3),
            ("t", 4),
            ("tb", 4),
            ("p", 5),
            ("pb", 5),
        ],
    )
    def test_integer_suffixes(self, suffix, power):
        assert parse_java_memory_string(f"3{suffix}").value() == 3 * 1024**power

    def test_no_suffix_is_bytes(self):
        assert parse_java_memory_string("1024").value() == 1024

    def test_case_insensitive(self):
        assert parse_java_memory_string("512M").value() == 512 * MiB
        assert parse_java_memory_string("2Gb").value() == 2 * GiB

    def test_decimal_values(self):
        assert parse_java_memory_string("1.5g").value() == 1536 * MiB
        assert parse_java_memory_string("0.5k").value() == 512
        assert parse_java_memory_string("1.5MB").value() == 1536 * 1024

    def test_binary_format(self):
        assert str(parse_java_memory_string("2048m")) == "2Gi"
        assert str(parse_java_memory_string("1.5g")) == "1536Mi"

    @pytest.mark.parametrize(
        "text",
        ["", "abc", "g", "1x", "1.5xb", "1 g", "-1g", "1.g", "1e3", "1.5.5g", "10gib"],
    )
    def test_invalid(self, text):
        with pytest.raises(MemoryParseError):
            parse_java_memory_string(text)

    def test_error_carries_value_and_examples(self):
        with pytest.raises(ParseError) as exc_info:
            parse_java_memory_string("Lots")
        assert exc_info.value.value == "Lots"
        assert "'Lots'" in str(exc_info.value)
        assert "Examples: 100kb, 1.5mb, 1g" in str(exc_info.value)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_java_memory_string("nope")


class TestParseOverheadFactor:
    """Tests for memoryOverheadFactor parsing."""

    def test_valid(self):
        assert parse_overhead_factor("0.2") == pytest.approx(0.2)
        assert parse_overhead_factor("1") == 1.0

    def test_invalid(self):
        with pytest.raises(OverheadFactorError) as exc_info:
            parse_overhead_factor("high")
        assert exc_info.value.value == "high"

    def test_not_a_memory_error(self):
        with pytest.raises(OverheadFactorError) as exc_info:
            parse_overhead_factor("0.1g")
        assert not isinstance(exc_info.value, MemoryParseError)

    def test_non_finite(self):
        with pytest.raises(OverheadFactorError):
            parse_overhead_factor("nan")


class TestMemoryRequiredForSparkPod:
    """Tests for base memory + overhead."""

    def test_defaults_jvm_floor_dominates(self):
        """1g * 0.10 = 102.4Mi, raised to the 384Mi floor."""
        total = memory_required_for_spark_pod(SparkPodSpec(), None, SparkApplicationType.JAVA)
        assert total.value() == GiB + 384 * MiB
        assert str(total) == "1408Mi"

    def test_defaults_non_jvm(self):
        """1g * 0.40 = 409.6Mi is above the floor and truncated to bytes."""
        total = memory_required_for_spark_pod(SparkPodSpec(), None, SparkApplicationType.PYTHON)
        assert total.value() == GiB + int(GiB * 0.4)
        assert str(total) == "1503238553"

    def test_scala_uses_non_jvm_default(self):
        total = memory_required_for_spark_pod(SparkPodSpec(), None, SparkApplicationType.SCALA)
        assert total.value() == GiB + int(GiB * 0.4)

    def test_jvm_factor_above_floor(self):
        pod = SparkPodSpec(memory="8g")
        total = memory_required_for_spark_pod(pod, None, SparkApplicationType.JAVA)
        assert total.value() == 8 * GiB + int(8 * GiB * 0.1)

    def test_explicit_factor(self):
        pod = SparkPodSpec(memory="8g")
        total = memory_required_for_spark_pod(pod, "0.5", SparkApplicationType.JAVA)
        assert str(total) == "12Gi"

    def test_explicit_factor_still_floored(self):
        pod = SparkPodSpec(memory="512m")
        total = memory_required_for_spark_pod(pod, "0.2", SparkApplicationType.PYTHON)
        assert str(total) == "896Mi"

    def test_explicit_overhead_has_no_floor(self):
        pod = SparkPodSpec(memory="2g", memory_overhead="100m")
        total = memory_required_for_spark_pod(pod, None, SparkApplicationType.JAVA)
        assert total.value() == 2 * GiB + 100 * MiB
        assert str(total) == "2148Mi"

    def test_explicit_overhead_ignores_factor(self):
        pod = SparkPodSpec(memory="1g", memory_overhead="1g")
        total = memory_required_for_spark_pod(pod, "not-a-number", SparkApplicationType.JAVA)
        assert str(total) == "2Gi"

    def test_invalid_memory(self):
        pod = SparkPodSpec(memory="eight gigs")
        with pytest.raises(MemoryParseError):
            memory_required_for_spark_pod(pod, None, SparkApplicationType.JAVA)

    def test_invalid_overhead(self):
        pod = SparkPodSpec(memory_overhead="1q")
        with pytest.raises(MemoryParseError):
            memory_required_for_spark_pod(pod, None, SparkApplicationType.JAVA)

    def test_invalid_factor(self):
        with pytest.raises(OverheadFactorError):
            memory_required_for_spark_pod(SparkPodSpec(), "ten percent", SparkApplicationType.JAVA)

    def test_accepts_plain_string_type(self):
        total = memory_required_for_spark_pod(SparkPodSpec(), None, "Java")
        assert str(total) == "1408Mi"
