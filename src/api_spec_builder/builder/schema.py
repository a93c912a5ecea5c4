"""Type classification and small value helpers shared by the builders."""

import logging
import re
from typing import Any

from api_spec_builder.builder.document import ARRAY_TYPE, Extensible, Schema
from api_spec_builder.config import Config
from api_spec_builder.routes.types import PRIMITIVE_NAMES, TypeDescriptor, canonical_name

logger = logging.getLogger(__name__)

# Only extension keys with this prefix are copied into the document.
EXTENSION_PREFIX = "x-"

DEFINITION_ROOT = "#/definitions/"

_JSON_SCHEMA_TYPES = {
    "uint": "integer",
    "uint8": "integer",
    "uint16": "integer",
    "uint32": "integer",
    "uint64": "integer",
    "int": "integer",
    "int8": "integer",
    "int16": "integer",
    "int32": "integer",
    "int64": "integer",
    "byte": "integer",
    "rune": "integer",
    "float32": "number",
    "float64": "number",
    "bool": "boolean",
    "string": "string",
    "datetime": "string",
    "timedelta": "integer",
    "time.Time": "string",
    "time.Duration": "integer",
}

_TAG_RE = re.compile(r"<[^>]*>")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_BOOL_STRINGS = {
    "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
    "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
}


def is_primitive_type(model_name: str) -> bool:
    return model_name in PRIMITIVE_NAMES


def json_schema_type(model_name: str) -> str:
    """Map a primitive name to integer / number / boolean / string; other names pass through."""
    return _JSON_SCHEMA_TYPES.get(model_name, model_name)


def definition_ref(name: str) -> str:
    return DEFINITION_ROOT + name


def element_schema(element: TypeDescriptor, config: Config) -> Schema:
    """Items schema of an array: a mapped primitive type or a definition reference."""
    name = canonical_name(element.dereference(), config)
    if is_primitive_type(name):
        return Schema(type=json_schema_type(name))
    return Schema(ref=definition_ref(name))


def array_schema(descriptor: TypeDescriptor, config: Config) -> Schema:
    return Schema(type=ARRAY_TYPE, items=element_schema(descriptor.element_type(), config))


def string_auto_type(ambiguous: str) -> int | bool | str | None:
    """Pick a typed value for a free-text default.

    "" becomes None, "42" an int, "true" a bool and anything else stays a
    string. Integers are tried before booleans, so "1" is 1, not True.
    """
    if ambiguous == "":
        return None
    if _INT_RE.fullmatch(ambiguous):
        parsed = int(ambiguous)
        if _INT64_MIN <= parsed <= _INT64_MAX:
            return parsed
    if ambiguous in _BOOL_STRINGS:
        return _BOOL_STRINGS[ambiguous]
    return ambiguous


def extract_vendor_extensions(extensible: Extensible, extensions: dict[str, Any]) -> None:
    for key, value in extensions.items():
        if key.startswith(EXTENSION_PREFIX):
            extensible.extensions[key] = value
        else:
            logger.debug("Dropping vendor extension %r without %r prefix", key, EXTENSION_PREFIX)


def strip_tags(html: str) -> str:
    """Return only the text of an HTML snippet.

    For example, ``<b>&lt;Hi!&gt;</b> <br>`` becomes ``&lt;Hi!&gt; ``.
    """
    return _TAG_RE.sub("", html)


def non_negative(value: int | None) -> int | None:
    """Clamp a count or length: None and negatives are absent."""
    if value is None or value < 0:
        return None
    return value
