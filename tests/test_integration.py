"""End-to-end build of the petstore route manifest."""

from pathlib import Path

import pytest

from api_spec_builder.builder.paths import build_document
from api_spec_builder.config import Config
from api_spec_builder.routes.loader import load_routes

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def paths():
    registry = load_routes(FIXTURES / "petstore_routes.yaml")
    config = Config(model_type_name_handler=lambda d: d.type_name.rpartition(".")[2])
    return build_document([registry], config).to_dict()["paths"]


class TestPetstoreDocument:
    def test_paths_are_canonical(self, paths):
        assert list(paths) == ["/pets", "/pets/{petId}"]
        assert set(paths["/pets"]) == {"get", "post"}
        assert set(paths["/pets/{petId}"]) == {"get", "delete"}

    def test_list_pets(self, paths):
        op = paths["/pets"]["get"]
        assert op["operationId"] == "listPets"
        assert op["summary"] == "List all pets"
        assert op["description"] == "Returns every pet in the store."
        assert op["tags"] == ["pets"]
        tenant, limit, status = op["parameters"]
        assert tenant == {
            "name": "tenant",
            "in": "header",
            "required": True,
            "schema": {"type": "string"},
            "type": "string",
        }
        assert limit["default"] == 20
        assert limit["schema"] == {"type": "integer", "minimum": 1.0, "maximum": 100.0}
        assert status["style"] == "form"
        assert status["explode"] is True
        assert status["collectionFormat"] == "multi"
        assert status["schema"]["enum"] == ["Available", "Pending", "Sold"]
        assert status["items"] == {"type": "string"}

    def test_list_pets_response(self, paths):
        response = paths["/pets"]["get"]["responses"]["200"]
        assert response["description"] == "A list of pets"
        assert response["schema"] == {"type": "array", "items": {"$ref": "#/definitions/Pet"}}
        assert response["headers"] == {
            "X-Rate-Limit": {"type": "integer", "description": "Calls left in the current window"},
        }

    def test_create_pet(self, paths):
        op = paths["/pets"]["post"]
        assert op["x-audit"] is True
        assert "internal" not in op
        body = op["parameters"][1]
        assert body == {
            "name": "body",
            "in": "body",
            "required": True,
            "schema": {"$ref": "#/definitions/Pet"},
        }
        assert op["responses"] == {"201": {"description": "Created", "schema": {"$ref": "#/definitions/Pet"}}}

    def test_show_pet_by_id(self, paths):
        op = paths["/pets/{petId}"]["get"]
        pet_id = op["parameters"][1]
        assert pet_id["in"] == "path"
        assert pet_id["schema"]["pattern"] == "[0-9]+"
        assert op["responses"]["200"] == {"description": "OK"}
        assert op["responses"]["default"] == {"description": "Unexpected error", "schema": {"$ref": "#/definitions/Error"}}

    def test_delete_pet(self, paths):
        op = paths["/pets/{petId}"]["delete"]
        assert op["deprecated"] is True
        assert op["responses"] == {"200": {"description": "OK"}}
