"""Route manifest loader.

Reads a YAML or JSON manifest describing a route registry. Type handles
(``read_sample`` and response ``model``) are written as type expressions,
e.g. ``"[]store.Pet"`` or ``"*store.Pet"``.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from api_spec_builder.errors import RouteLoadError
from api_spec_builder.routes.base import RouteRegistry


def load_routes(file_path: Path) -> RouteRegistry:
    """Parse a route manifest file into a RouteRegistry."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RouteLoadError(f"{file_path}: not valid YAML or JSON: {e}") from e

    if data is None:
        return RouteRegistry()
    if not isinstance(data, dict):
        raise RouteLoadError(f"{file_path}: expected a mapping with 'routes', got {type(data).__name__}")

    try:
        return RouteRegistry.model_validate(data)
    except ValidationError as e:
        raise RouteLoadError(f"{file_path}: invalid route manifest:\n{e}") from e
