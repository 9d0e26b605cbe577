"""Tests for contract loading and operation binding."""

import pytest
import yaml
from fastapi import FastAPI

from restaurant_api.config import DEFAULT_CONTRACT_PATH
from restaurant_api.contract import (
    OperationReply,
    bind_contract,
    iter_operations,
    load_contract,
)
from restaurant_api.errors import ContractError
from restaurant_api.server import SCHEMA_MODELS


@pytest.fixture
def contract():
    return load_contract(DEFAULT_CONTRACT_PATH)


def write_contract(tmp_path, document):
    path = tmp_path / "contract.yaml"
    path.write_text(yaml.safe_dump(document) if not isinstance(document, str) else document)
    return path


class TestLoadContract:
    def test_packaged_contract(self, contract):
        assert "/restaurants" in contract["paths"]
        assert "/restaurants/{id}" in contract["paths"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ContractError, match="Cannot read contract"):
            load_contract(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = write_contract(tmp_path, "paths: [unclosed")

        with pytest.raises(ContractError, match="not valid YAML"):
            load_contract(path)

    def test_not_a_mapping(self, tmp_path):
        path = write_contract(tmp_path, "- just\n- a list\n")

        with pytest.raises(ContractError, match="must be a mapping"):
            load_contract(path)

    def test_no_paths(self, tmp_path):
        path = write_contract(tmp_path, {"openapi": "3.0.3", "paths": {}})

        with pytest.raises(ContractError, match="declares no paths"):
            load_contract(path)


class TestIterOperations:
    def test_packaged_operations(self, contract):
        operations = {(op.method, op.path): op for op in iter_operations(contract)}

        assert {key: op.operation_id for key, op in operations.items()} == {
            ("GET", "/restaurants"): "getRestaurants",
            ("POST", "/restaurants"): "addRestaurant",
            ("GET", "/restaurants/{id}"): "getRestaurant",
            ("PATCH", "/restaurants/{id}"): "updateRestaurant",
            ("PUT", "/restaurants/{id}"): "replaceRestaurant",
            ("DELETE", "/restaurants/{id}"): "deleteRestaurant",
        }
        assert operations[("POST", "/restaurants")].body_schema == "NewRestaurant"
        assert operations[("PATCH", "/restaurants/{id}")].body_schema == "RestaurantPatch"
        assert operations[("GET", "/restaurants")].body_schema is None

    def test_path_parameters_key_ignored(self, contract):
        methods = {op.method for op in iter_operations(contract)}

        assert "PARAMETERS" not in methods

    def test_missing_operation_id(self):
        document = {"paths": {"/things": {"get": {"responses": {}}}}}

        with pytest.raises(ContractError, match="GET /things has no operationId"):
            list(iter_operations(document))

    def test_inline_body_schema_rejected(self):
        document = {
            "paths": {
                "/things": {
                    "post": {
                        "operationId": "addThing",
                        "requestBody": {
                            "content": {"application/json": {"schema": {"type": "object"}}}
                        },
                    }
                }
            }
        }

        with pytest.raises(ContractError, match="addThing"):
            list(iter_operations(document))


class TestBindContract:
    def test_missing_handler_fails_fast(self, contract, service):
        app = FastAPI()
        handlers = service.operations()
        del handlers["deleteRestaurant"]
        routes_before = len(app.routes)

        with pytest.raises(ContractError, match="deleteRestaurant"):
            bind_contract(app, contract, handlers, SCHEMA_MODELS)
        assert len(app.routes) == routes_before

    def test_missing_schema_model(self, contract, service):
        with pytest.raises(ContractError, match="NewRestaurant"):
            bind_contract(
                FastAPI(),
                contract,
                service.operations(),
                {"RestaurantPatch": SCHEMA_MODELS["RestaurantPatch"]},
            )

    def test_unused_handler_logged(self, contract, service, caplog):
        handlers = {**service.operations(), "archiveRestaurant": service.delete_restaurant}

        bind_contract(FastAPI(), contract, handlers, SCHEMA_MODELS)

        assert "archiveRestaurant" in caplog.text

    def test_binds_every_operation(self, contract, service):
        app = FastAPI()

        operations = bind_contract(app, contract, service.operations(), SCHEMA_MODELS)

        assert len(operations) == 6
        route_names = {route.name for route in app.routes}
        assert {op.operation_id for op in operations} <= route_names
        assert app.openapi() is contract

    def test_contract_survives_later_routes(self, contract, service):
        """Test that routes added after binding do not replace the served contract."""
        app = FastAPI()
        bind_contract(app, contract, service.operations(), SCHEMA_MODELS)

        @app.get("/extra")
        async def extra():
            return {}

        assert app.openapi() is contract


class TestOperationReply:
    def test_defaults_to_ok(self):
        response = OperationReply().send({"a": 1}).to_response()

        assert response.status_code == 200
        assert response.body == b'{"a":1}'

    def test_no_content_has_empty_body(self):
        response = OperationReply().code(204).send().to_response()

        assert response.status_code == 204
        assert response.body == b""

    def test_code_is_chainable(self):
        reply = OperationReply()

        assert reply.code(201) is reply
