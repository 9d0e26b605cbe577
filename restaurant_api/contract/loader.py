"""Loading and walking the OpenAPI contract document."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import yaml

from restaurant_api.errors import ContractError

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "patch", "delete")
SCHEMA_REF_PREFIX = "#/components/schemas/"


@dataclass(frozen=True)
class ContractOperation:
    """One route declared by the contract."""

    method: str
    path: str
    operation_id: str
    body_schema: str | None = None


def load_contract(path: Path) -> dict:
    """Read and sanity-check a YAML contract.

    Args:
        path: Location of the OpenAPI document

    Returns:
        The parsed document

    Raises:
        ContractError: If the file is missing, unparsable, or has no paths
    """
    try:
        with open(path, encoding="utf-8") as f:
            contract = yaml.safe_load(f)
    except OSError as e:
        raise ContractError(f"Cannot read contract {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ContractError(f"Contract {path} is not valid YAML: {e}") from e

    if not isinstance(contract, dict):
        raise ContractError(f"Contract {path} must be a mapping")
    if not isinstance(contract.get("paths"), dict) or not contract["paths"]:
        raise ContractError(f"Contract {path} declares no paths")

    logger.debug(f"Loaded contract {path}")
    return contract


def iter_operations(contract: dict) -> Iterator[ContractOperation]:
    """Yield every operation the contract declares, in document order.

    Raises:
        ContractError: If an operation has no operationId or its request
            body does not reference a component schema
    """
    for path, path_item in contract["paths"].items():
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if operation is None:
                continue
            operation_id = operation.get("operationId")
            if not operation_id:
                raise ContractError(
                    f"{method.upper()} {path} has no operationId"
                )
            yield ContractOperation(
                method=method.upper(),
                path=path,
                operation_id=operation_id,
                body_schema=_body_schema_name(operation, operation_id),
            )


def _body_schema_name(operation: dict, operation_id: str) -> str | None:
    request_body = operation.get("requestBody")
    if request_body is None:
        return None
    schema = (
        request_body.get("content", {}).get("application/json", {}).get("schema", {})
    )
    ref = schema.get("$ref", "")
    if not ref.startswith(SCHEMA_REF_PREFIX):
        raise ContractError(
            f"Request body of {operation_id} must reference a component schema"
        )
    return ref[len(SCHEMA_REF_PREFIX):]
