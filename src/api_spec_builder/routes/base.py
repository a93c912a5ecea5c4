"""Route registry models.

These describe the routes of an HTTP service the way the route registry
exposes them: methods, path templates, parameter metadata, response
errors and type handles. The builder only reads them.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ParameterKind(str, Enum):
    PATH = "path"
    QUERY = "query"
    BODY = "body"
    HEADER = "header"
    FORM = "form"


class CollectionFormat(str, Enum):
    CSV = "csv"
    SSV = "ssv"
    TSV = "tsv"
    PIPES = "pipes"
    MULTI = "multi"


class HeaderItems(BaseModel):
    """Element description of an array-typed header, possibly nested."""

    type: str = ""
    format: str = ""
    default: Any = None
    collection_format: str = ""
    items: "HeaderItems | None" = None


class HeaderDescriptor(BaseModel):
    """A response header."""

    type: str = ""
    description: str = ""
    format: str = ""
    default: Any = None
    collection_format: str = ""
    items: HeaderItems | None = None


class ParameterDescriptor(BaseModel):
    """A single route parameter (path, query, body, header, or form)."""

    name: str
    kind: ParameterKind = ParameterKind.QUERY
    description: str = ""
    data_type: str = ""  # string / integer / boolean / a model type name for bodies
    data_format: str = ""
    required: bool = False
    allow_multiple: bool = False
    allow_empty_value: bool = False
    default_value: str = ""
    allowable_values: dict[str, str] = {}  # key -> display value
    minimum: float | None = None
    maximum: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool = False
    collection_format: CollectionFormat | None = None
    pattern: str = ""
    extensions: dict[str, Any] = {}


class ResponseErrorDescriptor(BaseModel):
    """A documented response of a route, keyed by status code on the route."""

    message: str = ""
    model: Any = None  # type handle, see routes.types.describe
    headers: dict[str, HeaderDescriptor] = {}
    extensions: dict[str, Any] = {}


class RouteDescriptor(BaseModel):
    """A single method + path binding with all its documentation."""

    method: str  # GET / POST / PUT / DELETE / PATCH
    path: str  # /api/users/{id:[0-9]+}
    doc: str = ""
    notes: str = ""
    operation: str = ""
    deprecated: bool = False
    metadata: dict[str, Any] = {}
    extensions: dict[str, Any] = {}
    parameters: list[ParameterDescriptor] = []
    response_errors: dict[int, ResponseErrorDescriptor] = {}
    default_response: ResponseErrorDescriptor | None = None
    read_sample: Any = None  # type handle of the expected request body


class RouteRegistry(BaseModel):
    """An ordered route table plus the parameters shared by every path."""

    routes: list[RouteDescriptor] = Field(default_factory=list)
    path_parameters: list[ParameterDescriptor] = Field(default_factory=list)
