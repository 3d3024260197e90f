"""
Remote Data Gateway Package

Provides the abstract gateway interface and its HTTP implementation.
"""

from controle_gastos.services.gateway.interface import (
    ExpenseGatewayInterface,
    GatewayError,
    MalformedResponseError,
    NetworkError,
    ServerError,
)
from controle_gastos.services.gateway.http_gateway import HttpExpenseGateway

__all__ = [
    # Interface
    "ExpenseGatewayInterface",
    # Exceptions
    "GatewayError",
    "MalformedResponseError",
    "NetworkError",
    "ServerError",
    # HTTP implementation
    "HttpExpenseGateway",
]
