"""Bind contract operations to handler functions on a FastAPI app.

Every operationId declared by the contract must have a handler in the
table passed to ``bind_contract``; otherwise the app refuses to build.
Handlers receive an ``OperationRequest`` and fill in an ``OperationReply``.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from restaurant_api.contract.loader import ContractOperation, iter_operations
from restaurant_api.errors import ContractError

logger = logging.getLogger(__name__)


@dataclass
class OperationRequest:
    """Parsed request handed to an operation."""

    params: dict[str, str] = field(default_factory=dict)
    body: BaseModel | None = None


@dataclass
class OperationReply:
    """Response sink an operation writes its status and payload into."""

    status_code: int = status.HTTP_200_OK
    payload: Any = None

    def code(self, status_code: int) -> "OperationReply":
        self.status_code = status_code
        return self

    def send(self, payload: Any = None) -> "OperationReply":
        self.payload = payload
        return self

    def to_response(self) -> Response:
        """Serialize the reply, using wire (aliased) field names."""
        if self.status_code == status.HTTP_204_NO_CONTENT or self.payload is None:
            return Response(status_code=self.status_code)
        return JSONResponse(
            status_code=self.status_code,
            content=jsonable_encoder(self.payload, by_alias=True),
        )


Handler = Callable[[OperationRequest, OperationReply], Awaitable[None]]


def bind_contract(
    app: FastAPI,
    contract: dict,
    handlers: Mapping[str, Handler],
    schema_models: Mapping[str, type[BaseModel]],
) -> list[ContractOperation]:
    """Register one route per contract operation.

    All operations are checked before any route is added, so a bad contract
    leaves the app untouched.

    Args:
        app: Application to register routes on
        contract: Parsed OpenAPI document
        handlers: operationId to handler table
        schema_models: Component schema name to the model validating it

    Returns:
        The operations that were bound

    Raises:
        ContractError: If an operation has no handler or its body schema
            has no model
    """
    operations = list(iter_operations(contract))

    missing = [op.operation_id for op in operations if op.operation_id not in handlers]
    if missing:
        raise ContractError(f"No handler registered for operations: {', '.join(missing)}")

    for op in operations:
        if op.body_schema is not None and op.body_schema not in schema_models:
            raise ContractError(
                f"No model registered for schema '{op.body_schema}' used by {op.operation_id}"
            )

    declared = {op.operation_id for op in operations}
    for name in handlers:
        if name not in declared:
            logger.warning(f"Handler '{name}' is not referenced by the contract")

    for op in operations:
        body_model = schema_models[op.body_schema] if op.body_schema else None
        app.add_api_route(
            op.path,
            _make_endpoint(op, handlers[op.operation_id], body_model),
            methods=[op.method],
            name=op.operation_id,
        )
        logger.debug(f"Bound {op.method} {op.path} -> {op.operation_id}")

    # Serve the contract itself as the OpenAPI document
    app.openapi = lambda: contract
    logger.info(f"Bound {len(operations)} contract operations")
    return operations


def _make_endpoint(
    op: ContractOperation, handler: Handler, body_model: type[BaseModel] | None
):
    async def endpoint(request: Request) -> Response:
        body = await _parse_body(request, body_model) if body_model else None
        reply = OperationReply()
        await handler(OperationRequest(params=dict(request.path_params), body=body), reply)
        return reply.to_response()

    endpoint.__name__ = op.operation_id
    return endpoint


async def _parse_body(request: Request, body_model: type[BaseModel]) -> BaseModel:
    try:
        raw = await request.json()
    except ValueError:
        raise RequestValidationError(
            [{"loc": ("body",), "msg": "Request body is not valid JSON", "type": "json_invalid"}]
        )

    try:
        return body_model.model_validate(raw)
    except ValidationError as e:
        raise RequestValidationError(
            [
                {"loc": ("body", *err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in e.errors()
            ]
        )
