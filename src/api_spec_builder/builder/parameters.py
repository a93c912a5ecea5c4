"""Parameter builder — turns route parameter descriptors into document parameters."""

from api_spec_builder.builder.document import ARRAY_TYPE, Items, Parameter, Schema
from api_spec_builder.builder.schema import (
    array_schema,
    definition_ref,
    extract_vendor_extensions,
    non_negative,
    string_auto_type,
)
from api_spec_builder.config import Config
from api_spec_builder.routes.base import CollectionFormat, ParameterDescriptor, ParameterKind, RouteDescriptor
from api_spec_builder.routes.types import TypeDescriptor, canonical_name, describe

PARAM_LOCATIONS = {
    ParameterKind.PATH: "path",
    ParameterKind.QUERY: "query",
    ParameterKind.BODY: "body",
    ParameterKind.HEADER: "header",
    ParameterKind.FORM: "formData",
}

# collection format -> (style, explode)
SERIALIZATION_STYLES = {
    CollectionFormat.CSV: ("simple", None),
    CollectionFormat.SSV: ("spaceDelimited", None),
    # There is no drop in replacement for TSV
    CollectionFormat.TSV: ("spaceDelimited", None),
    CollectionFormat.PIPES: ("pipeDelimited", None),
    CollectionFormat.MULTI: ("form", True),
}


def build_parameter(
    route: RouteDescriptor,
    param: ParameterDescriptor,
    pattern: str,
    config: Config,
) -> Parameter:
    """Build the document parameter for one route parameter.

    ``pattern`` is the inline pattern extracted from the path template for
    this parameter, or "" when there is none. A body parameter whose
    data_type names the route's read_sample type is described by that
    type's structure instead of its simple type.
    """
    style, explode = None, None
    if param.allow_multiple:
        # Validations apply to the items of an array parameter
        schema = dict(
            type=ARRAY_TYPE,
            min_items=non_negative(param.min_items) or None,
            max_items=non_negative(param.max_items),
            unique_items=param.unique_items,
            items=Schema(
                type=param.data_type or None,
                pattern=param.pattern or None,
                min_length=non_negative(param.min_length) or None,
                max_length=non_negative(param.max_length),
            ),
        )
        if param.collection_format is not None:
            style, explode = SERIALIZATION_STYLES[param.collection_format]
    else:
        schema = dict(
            type=param.data_type or None,
            min_length=non_negative(param.min_length) or None,
            max_length=non_negative(param.max_length),
            minimum=param.minimum,
            maximum=param.maximum,
        )

    if param.allowable_values:
        # Sorted by key so repeated builds emit the same document
        schema["enum"] = [param.allowable_values[key] for key in sorted(param.allowable_values)]

    if param.kind == ParameterKind.PATH:
        schema["pattern"] = pattern or None
    elif not param.allow_multiple:
        schema["pattern"] = param.pattern or None

    p = Parameter(
        name=param.name,
        location=PARAM_LOCATIONS[param.kind],
        description=param.description,
        required=param.required,
        allow_empty_value=param.allow_empty_value,
        style=style,
        explode=explode,
    )

    sample = _body_sample(route, param)
    if sample is not None:
        p.schema_ = _sample_schema(sample, config)
    else:
        p.schema_ = Schema(**schema)
        if param.allow_multiple:
            p.type = ARRAY_TYPE
            p.items = Items(type=param.data_type or None)
            if param.collection_format is not None:
                p.collection_format = param.collection_format.value
        else:
            p.type = param.data_type or None
        p.default = string_auto_type(param.default_value)
        p.format = param.data_format or None

    extract_vendor_extensions(p, param.extensions)
    return p


def _body_sample(route: RouteDescriptor, param: ParameterDescriptor) -> TypeDescriptor | None:
    """The route's read_sample descriptor, if this body parameter is declared as that type."""
    if param.kind != ParameterKind.BODY or route.read_sample is None:
        return None
    sample = describe(route.read_sample)
    if param.data_type != sample.type_name:
        return None
    return sample


def _sample_schema(sample: TypeDescriptor, config: Config) -> Schema:
    sample = sample.dereference()
    if sample.is_sequence:
        return array_schema(sample, config)
    return Schema(ref=definition_ref(canonical_name(sample, config)))
