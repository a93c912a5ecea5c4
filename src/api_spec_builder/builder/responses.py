"""Response builder — turns route response errors into document responses."""

from api_spec_builder.builder.document import ARRAY_TYPE, Header, Items, Response, Schema
from api_spec_builder.builder.schema import (
    array_schema,
    definition_ref,
    extract_vendor_extensions,
    is_primitive_type,
)
from api_spec_builder.config import Config
from api_spec_builder.routes.base import HeaderDescriptor, HeaderItems, ResponseErrorDescriptor
from api_spec_builder.routes.types import canonical_name, describe


def build_response(error: ResponseErrorDescriptor, config: Config) -> Response:
    r = Response(description=error.message)
    if error.model is not None:
        r.schema_ = build_model_schema(error.model, config)

    if error.headers:
        r.headers = {name: build_header(header) for name, header in error.headers.items()}

    extract_vendor_extensions(r, error.extensions)
    return r


def build_model_schema(model, config: Config) -> Schema:
    """Schema of a response model.

    A primitive scalar model keeps its raw type name (``int64``, not
    ``integer``), unlike array items and request bodies, which use the
    mapped document type.
    """
    # For pointers use the element type, "#/definitions/*Type" is not a valid reference
    st = describe(model).dereference()
    if st.is_sequence:
        return array_schema(st, config)
    model_name = canonical_name(st, config)
    if is_primitive_type(model_name):
        return Schema(type=model_name)
    return Schema(ref=definition_ref(model_name))


def build_header(header: HeaderDescriptor) -> Header:
    h = Header(type=header.type or None, description=header.description or None)
    # If type is "array" the items field is required
    if header.type == ARRAY_TYPE:
        h.items = build_header_items(header.items or HeaderItems())
    return h


def build_header_items(items: HeaderItems) -> Items:
    result = Items(
        type=items.type or None,
        format=items.format or None,
        default=items.default,
        collection_format=items.collection_format or None,
    )
    if items.items is not None:
        result.items = build_header_items(items.items)
    return result
