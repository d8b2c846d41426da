"""SparkApplication manifest loader for sparkgang."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import SparkApplication


class ConfigError(Exception):
    """Base exception for manifest errors."""

    pass


class ConfigFileNotFoundError(ConfigError):
    """Raised when the manifest file is not found."""

    pass


class ConfigParseError(ConfigError):
    """Raised when the manifest file cannot be parsed."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when the manifest does not match the SparkApplication model."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping from file.

    Raises:
        ConfigFileNotFoundError: If file doesn't exist
        ConfigParseError: If YAML parsing fails or the document is not a mapping
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"Manifest file not found: {path}")

    try:
        with open(path) as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Failed to parse YAML: {e}")  # noqa: B904

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigParseError(f"Expected a mapping at the top of {path}, got {type(content).__name__}")
    return content


def parse_application(data: dict[str, Any]) -> SparkApplication:
    """Validate a manifest dict into a SparkApplication.

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        return SparkApplication.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        error_messages = []
        for err in errors:
            loc = ".".join(str(x) for x in err["loc"])
            error_messages.append(f"  - {loc}: {err['msg']}")

        raise ConfigValidationError(  # noqa: B904
            "SparkApplication validation failed:\n" + "\n".join(error_messages),
            errors=[dict(e) for e in errors],  # type: ignore[call-overload]
        )


def load_application(path: str | Path) -> SparkApplication:
    """Load and validate a SparkApplication manifest from file.

    Raises:
        ConfigFileNotFoundError: If file doesn't exist
        ConfigParseError: If YAML parsing fails
        ConfigValidationError: If validation fails
    """
    return parse_application(load_yaml(Path(path)))


def dump_application_yaml(app: SparkApplication) -> str:
    """Render a SparkApplication as a YAML manifest."""
    return yaml.safe_dump(
        app.to_manifest(), default_flow_style=False, sort_keys=False, indent=2
    )


def save_application(app: SparkApplication, path: str | Path) -> None:
    """Write a SparkApplication manifest to a YAML file."""
    with open(Path(path), "w") as f:
        f.write(dump_application_yaml(app))
