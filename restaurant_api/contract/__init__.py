"""Contract-driven routing for the Restaurant API."""

from restaurant_api.contract.dispatcher import (
    Handler,
    OperationReply,
    OperationRequest,
    bind_contract,
)
from restaurant_api.contract.loader import (
    ContractOperation,
    iter_operations,
    load_contract,
)

__all__ = [
    "ContractOperation",
    "Handler",
    "OperationReply",
    "OperationRequest",
    "bind_contract",
    "iter_operations",
    "load_contract",
]
