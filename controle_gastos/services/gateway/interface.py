"""
Abstract Remote Data Gateway

We define an abstract interface for the five operations the client
needs from the Gastos API. This allows us to:
1. Talk HTTP in production
2. Use an in-memory fake in tests
3. Keep command handlers decoupled from the transport

No operation retries. Failures surface immediately to the caller as
one of the GatewayError subclasses below.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from controle_gastos.models.expense import Expense, ExpenseId, ExpensePayload


class ExpenseGatewayInterface(ABC):
    """
    Abstract interface for the remote expense service.

    Any implementation must raise NetworkError when no response was
    received and ServerError when the server answered with a failure.
    """

    @abstractmethod
    async def list_all(self) -> list[Expense]:
        """
        Fetch every expense record.

        Raises:
            NetworkError: If the server could not be reached
            ServerError: If the server answered with a failure status
        """
        pass

    @abstractmethod
    async def fetch_total(self) -> Decimal:
        """
        Fetch the server-computed sum of all amounts.

        Raises:
            NetworkError: If the server could not be reached
            ServerError: If the server answered with a failure status
        """
        pass

    @abstractmethod
    async def create(self, payload: ExpensePayload) -> Expense:
        """
        Create a record. The server assigns the id.

        Returns:
            The created record
        """
        pass

    @abstractmethod
    async def update(self, expense_id: ExpenseId, payload: ExpensePayload) -> Expense:
        """
        Replace a record in full.

        Returns:
            The updated record
        """
        pass

    @abstractmethod
    async def remove(self, expense_id: ExpenseId) -> None:
        """Delete a record."""
        pass


class GatewayError(Exception):
    """Base exception for gateway operations."""
    pass


class NetworkError(GatewayError):
    """The request never reached a server (connectivity, DNS, TLS)."""
    pass


class ServerError(GatewayError):
    """The server responded with a failure status."""

    def __init__(
        self,
        status_code: int,
        server_message: Optional[str] = None,
    ):
        self.status_code = status_code
        self.server_message = server_message
        detail = f": {server_message}" if server_message else ""
        super().__init__(f"Server responded with status {status_code}{detail}")


class MalformedResponseError(GatewayError):
    """The server responded successfully with a body we cannot read."""
    pass
