"""Serialization of caller-supplied values for the release backend.

The backend merges values in two stages, so every install and update
carries the same map twice: as one YAML document and as a flat overlay of
individually stringified values.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import yaml

from release_gateway.integrations.backend.models import Config, Value


def stringify_value(value: Any) -> str:
    """Render one value the way the backend's overlay expects.

    Booleans are lowercase, integral floats drop their fraction, ``None``
    becomes ``null`` and containers become compact JSON.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"), sort_keys=True, default=str)
    return str(value)


def build_values_config(values: Mapping[str, Any] | None) -> Config:
    """Build the dual-form values config for one request.

    Args:
        values: Caller-supplied values map (may be empty or None).

    Returns:
        Config whose ``raw`` is the YAML dump of the whole map and whose
        ``values`` holds every key with its stringified value.
    """
    values = dict(values or {})
    raw = yaml.safe_dump(values, default_flow_style=False, sort_keys=True)
    return Config(
        raw=raw,
        values={key: Value(value=stringify_value(v)) for key, v in values.items()},
    )
