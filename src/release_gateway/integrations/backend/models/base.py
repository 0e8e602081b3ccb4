"""Base model for release backend payloads.

The backend speaks camelCase JSON; Python code uses snake_case attribute
names. Binary fields (chart templates and files) travel base64-encoded.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BackendModel(BaseModel):
    """Base class for every request or payload sent to the release backend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON-ready dict posted to the backend.

        Returns:
            camelCase keyed dictionary with bytes encoded as base64.
        """
        return self.model_dump(mode="json", by_alias=True)
