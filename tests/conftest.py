"""Shared fixtures for sparkgang test suite."""

from __future__ import annotations

from typing import Any

import pytest
import yaml

from sparkgang.config import SparkApplication


def _deep_update(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def make_manifest(**spec_overrides) -> dict[str, Any]:
    """Build a minimal SparkApplication manifest dict.

    Keyword arguments are merged into ``spec`` (nested dicts merge recursively),
    using the manifest's camelCase keys.
    """
    manifest: dict[str, Any] = {
        "apiVersion": "sparkoperator.k8s.io/v1beta2",
        "kind": "SparkApplication",
        "metadata": {"name": "spark-pi", "namespace": "default"},
        "spec": {
            "type": "Java",
            "mode": "cluster",
            "image": "apache/spark:3.5.4",
            "mainClass": "org.apache.spark.examples.SparkPi",
            "sparkVersion": "3.5.4",
            "driver": {},
            "executor": {},
        },
    }
    _deep_update(manifest["spec"], spec_overrides)
    return manifest


def make_application(**spec_overrides) -> SparkApplication:
    """Create a SparkApplication for testing.

    This is the canonical factory for tests. Prefer this over hand-building
    models so that new required fields are handled in one place.
    """
    return SparkApplication.model_validate(make_manifest(**spec_overrides))


@pytest.fixture
def default_app() -> SparkApplication:
    """A Java SparkApplication with no resources set."""
    return make_application()


@pytest.fixture
def gang_app() -> SparkApplication:
    """Java app with two 2-core / 4g executors and a queue."""
    return make_application(
        executor={"instances": 2, "cores": 2, "memory": "4g"},
        batchSchedulerOptions={"queue": "root.default"},
    )


@pytest.fixture
def write_manifest(tmp_path):
    """Write a manifest dict to a YAML file and return its path."""

    def _write(manifest: dict[str, Any], name: str = "app.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(manifest, sort_keys=False))
        return path

    return _write
