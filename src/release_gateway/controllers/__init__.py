"""Controllers translating release operations into backend calls."""

from release_gateway.controllers.release import ReleaseController
from release_gateway.controllers.values import build_values_config, stringify_value

__all__ = ["ReleaseController", "build_values_config", "stringify_value"]
