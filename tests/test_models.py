import pytest
from pydantic import ValidationError

from api_spec_builder.routes.base import (
    CollectionFormat,
    ParameterDescriptor,
    ParameterKind,
    ResponseErrorDescriptor,
    RouteDescriptor,
    RouteRegistry,
)


class TestParameterDescriptor:
    def test_defaults(self):
        p = ParameterDescriptor(name="q")
        assert p.kind == ParameterKind.QUERY
        assert p.required is False
        assert p.allow_multiple is False
        assert p.default_value == ""
        assert p.allowable_values == {}
        assert p.collection_format is None
        assert p.min_items is None

    def test_enums_from_strings(self):
        p = ParameterDescriptor(name="ids", kind="path", collection_format="pipes")
        assert p.kind == ParameterKind.PATH
        assert p.collection_format == CollectionFormat.PIPES

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValidationError):
            ParameterDescriptor(name="q", kind="cookie")


class TestRouteDescriptor:
    def test_minimal_route(self):
        r = RouteDescriptor(method="GET", path="/pets")
        assert r.parameters == []
        assert r.response_errors == {}
        assert r.default_response is None
        assert r.read_sample is None

    def test_status_codes_are_coerced_to_int(self):
        r = RouteDescriptor(
            method="GET",
            path="/pets",
            response_errors={"404": {"message": "Not found"}},
        )
        assert isinstance(r.response_errors[404], ResponseErrorDescriptor)

    def test_registry_roundtrip(self):
        registry = RouteRegistry(
            routes=[RouteDescriptor(method="GET", path="/pets/{id}", parameters=[ParameterDescriptor(name="id", kind="path")])],
        )
        data = registry.model_dump()
        registry2 = RouteRegistry(**data)
        assert registry2.routes[0].path == "/pets/{id}"
        assert registry2.routes[0].parameters[0].kind == ParameterKind.PATH
