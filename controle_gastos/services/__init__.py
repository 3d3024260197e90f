"""Services package."""

from controle_gastos.services.gateway import (
    ExpenseGatewayInterface,
    GatewayError,
    HttpExpenseGateway,
    MalformedResponseError,
    NetworkError,
    ServerError,
)

__all__ = [
    "ExpenseGatewayInterface",
    "GatewayError",
    "HttpExpenseGateway",
    "MalformedResponseError",
    "NetworkError",
    "ServerError",
]
