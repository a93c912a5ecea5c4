"""Output document nodes.

The builder produces these in memory; ``to_dict()`` renders any node as
plain data with the document's key names (``$ref``, ``in``, camelCase),
vendor extensions inlined and unset values left out.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

logger = logging.getLogger(__name__)

ARRAY_TYPE = "array"


class Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_defaults=True)


class Extensible(Node):
    """A node that carries ``x-`` vendor extensions."""

    extensions: dict[str, Any] = Field(default_factory=dict, exclude=True)

    @model_serializer(mode="wrap")
    def _inline_extensions(self, handler) -> dict:
        data = handler(self)
        data.update(self.extensions)
        return data


class Schema(Node):
    """Shape of a value: a primitive type, an array of schemas, or a reference."""

    type: str | None = None
    format: str | None = None
    items: "Schema | None" = None
    ref: str | None = Field(default=None, alias="$ref")
    enum: list[Any] | None = None
    pattern: str | None = None
    default: Any = None
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    minimum: float | None = None
    maximum: float | None = None
    min_items: int | None = Field(default=None, alias="minItems")
    max_items: int | None = Field(default=None, alias="maxItems")
    unique_items: bool = Field(default=False, alias="uniqueItems")

    @model_validator(mode="after")
    def _one_of_type_array_or_ref(self) -> "Schema":
        if self.ref and (self.type or self.items is not None):
            raise ValueError(f"schema reference {self.ref} cannot also carry a type")
        if self.items is not None and self.type != ARRAY_TYPE:
            raise ValueError(f"items require type {ARRAY_TYPE!r}, got {self.type!r}")
        return self


class Items(Node):
    """Element description for simple (non-body) arrays and array headers."""

    type: str | None = None
    format: str | None = None
    default: Any = None
    collection_format: str | None = Field(default=None, alias="collectionFormat")
    items: "Items | None" = None


class Header(Node):
    type: str | None = None
    description: str | None = None
    items: Items | None = None


class Parameter(Extensible):
    name: str
    location: str = Field(alias="in")
    description: str = ""
    required: bool = False
    allow_empty_value: bool = Field(default=False, alias="allowEmptyValue")
    style: str | None = None
    explode: bool | None = None
    schema_: Schema | None = Field(default=None, alias="schema")
    # simple-schema encoding for non-body parameters
    type: str | None = None
    format: str | None = None
    items: Items | None = None
    collection_format: str | None = Field(default=None, alias="collectionFormat")
    default: Any = None


class Response(Extensible):
    description: str
    schema_: Schema | None = Field(default=None, alias="schema")
    headers: dict[str, Header] = Field(default_factory=dict)


class Responses(Node):
    """Responses of one operation, rendered flat as ``{"200": ..., "default": ...}``."""

    status_codes: dict[int, Response] = Field(default_factory=dict)
    default: Response | None = None

    @model_serializer(mode="wrap")
    def _flatten(self, handler) -> dict:
        data = handler(self)
        flat = {str(code): data["status_codes"][code] for code in sorted(data.get("status_codes", {}))}
        if "default" in data:
            flat["default"] = data["default"]
        return flat


class Operation(Extensible):
    operation_id: str = Field(default="", alias="operationId")
    summary: str = ""
    description: str = ""
    deprecated: bool = False
    tags: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    responses: Responses


class PathItem(Node):
    """All operations registered under one canonical path, keyed by lowercase method."""

    operations: dict[str, Operation] = Field(default_factory=dict)

    def set_operation(self, method: str, operation: Operation) -> None:
        key = method.lower()
        if key in self.operations:
            logger.debug("Overwriting %s operation %r", method.upper(), self.operations[key].operation_id)
        self.operations[key] = operation

    def get_operation(self, method: str) -> Operation | None:
        return self.operations.get(method.lower())

    def merge(self, other: "PathItem") -> None:
        for method, operation in other.operations.items():
            self.set_operation(method, operation)

    @model_serializer(mode="wrap")
    def _flatten(self, handler) -> dict:
        return handler(self).get("operations", {})


class Info(Node):
    title: str
    version: str
    description: str = ""


class Document(Node):
    swagger: str
    info: Info
    paths: dict[str, PathItem] = Field(default_factory=dict)
