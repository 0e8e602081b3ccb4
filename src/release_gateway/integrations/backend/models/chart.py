"""Chart and values payloads understood by the release backend."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from release_gateway.integrations.backend.models.base import BackendModel


class Value(BackendModel):
    """A single stringified override value."""

    value: str = ""


class Config(BackendModel):
    """Values configuration sent with install and update requests.

    Attributes:
        raw: YAML serialization of the whole values map.
        values: Per-key overlay with every value stringified.
    """

    raw: str = ""
    values: dict[str, Value] = Field(default_factory=dict)


class Maintainer(BackendModel):
    """A chart maintainer entry from Chart.yaml."""

    name: str = ""
    email: str = ""
    url: str = ""


class ChartMetadata(BackendModel):
    """Parsed Chart.yaml.

    Unknown keys are preserved so newer chart API versions pass through.
    Unquoted numeric versions (``appVersion: 1.25``) are read as strings.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    name: str
    version: str = ""
    api_version: str = ""
    app_version: str = ""
    description: str = ""
    home: str = ""
    icon: str = ""
    engine: str = ""
    kube_version: str = ""
    tiller_version: str = ""
    deprecated: bool = False
    keywords: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    maintainers: list[Maintainer] = Field(default_factory=list)
    annotations: dict[str, str] = Field(default_factory=dict)


class Template(BackendModel):
    """A template file, named relative to the chart root."""

    name: str
    data: bytes = b""


class ChartFile(BackendModel):
    """A non-template file shipped inside the chart (README, NOTES, ...)."""

    type_url: str
    value: bytes = b""


class Chart(BackendModel):
    """In-memory representation of a loaded chart archive."""

    metadata: ChartMetadata
    templates: list[Template] = Field(default_factory=list)
    values: Config = Field(default_factory=Config)
    files: list[ChartFile] = Field(default_factory=list)
    dependencies: list[Chart] = Field(default_factory=list)
