"""Builder configuration.

A Config is passed explicitly into every builder function; nothing is
looked up from module-level state.
"""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

DEFAULT_TITLE = "API"
DEFAULT_VERSION = "1.0.0"


class Config(BaseModel):
    """Settings for one document build."""

    model_config = ConfigDict(protected_namespaces=())

    # Maps a type descriptor to a definition name; returning None keeps the raw type name.
    model_type_name_handler: Callable[[Any], str | None] | None = None
    # Called with the finished Document, may modify it in place.
    post_build_handler: Callable[[Any], None] | None = None
    title: str = DEFAULT_TITLE
    version: str = DEFAULT_VERSION
