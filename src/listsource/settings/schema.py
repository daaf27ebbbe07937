"""Schema helpers for list source options."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Mapping

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from ..config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_POLICY,
    MAX_PAGE_SIZE,
    OPTIONS_SCHEMA_ID,
    POLICIES,
)
from ..errors import SettingsValidationError

OPTIONS_SCHEMA: dict[str, Any] = {
    "$id": "listsource/options.schema.json",
    "type": "object",
    "required": ["schema", "policy", "page_size"],
    "properties": {
        "schema": {"const": OPTIONS_SCHEMA_ID},
        "policy": {"type": "string", "enum": list(POLICIES)},
        "page_size": {"type": "integer", "minimum": 1, "maximum": MAX_PAGE_SIZE},
        "publish_events": {"type": "boolean"},
        "source_id": {"type": "string"},
    },
    "additionalProperties": False,
}

DEFAULT_OPTIONS: dict[str, Any] = {
    "schema": OPTIONS_SCHEMA_ID,
    "policy": DEFAULT_POLICY,
    "page_size": DEFAULT_PAGE_SIZE,
    "publish_events": True,
    "source_id": "",
}

_validator = Draft202012Validator(OPTIONS_SCHEMA)


def merge_with_defaults(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_OPTIONS` and validate the result."""

    merged = deepcopy(DEFAULT_OPTIONS)
    if data:
        for key, value in data.items():
            if key == "policy" and isinstance(value, str):
                merged[key] = value.strip().lower()
                continue
            merged[key] = value
    validate_options(merged)
    return merged


def validate_options(data: Mapping[str, Any]) -> None:
    """Validate *data* against the options schema.

    Raises :class:`SettingsValidationError` naming the offending field.
    """

    try:
        _validator.validate(dict(data))
    except ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise SettingsValidationError(f"invalid option {location}: {exc.message}") from exc


__all__ = ["DEFAULT_OPTIONS", "OPTIONS_SCHEMA", "merge_with_defaults", "validate_options"]
