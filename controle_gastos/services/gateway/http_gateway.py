"""
HTTP Gateway for the Gastos API

Talks to a fixed base URL over HTTPS using a requests Session.
Each blocking request runs on a worker thread (asyncio.to_thread) so that
gateway operations are awaitable and the reload pair can be fetched
concurrently from a single event loop.

No timeouts beyond the transport defaults and no retries: a failure is
reported to the caller as soon as it happens.
"""

import asyncio
from decimal import Decimal
from typing import Any, Optional, Union

import requests
import structlog
from pydantic import ValidationError

from controle_gastos.config import get_settings
from controle_gastos.models.expense import Expense, ExpenseId, ExpensePayload
from controle_gastos.services.gateway.interface import (
    ExpenseGatewayInterface,
    MalformedResponseError,
    NetworkError,
    ServerError,
)


RESOURCE_PATH = "/api/Gastos"
TOTAL_PATH = f"{RESOURCE_PATH}/total"

# Keys checked, in order, for a server-provided error message.
# "title" is what ASP.NET problem details carry.
SERVER_MESSAGE_KEYS = ("title", "message")


def extract_server_message(response: requests.Response) -> Optional[str]:
    """Pull a structured error message out of a failure response, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in SERVER_MESSAGE_KEYS:
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


class HttpExpenseGateway(ExpenseGatewayInterface):
    """
    requests-based implementation of the expense gateway.

    Failure mapping:
    - no response (connection refused, DNS, TLS handshake) -> NetworkError
    - non-2xx response -> ServerError (with the server's message if present)
    - 2xx response we cannot decode -> MalformedResponseError
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        verify_tls: Optional[Union[bool, str]] = None,
        session: Optional[requests.Session] = None,
    ):
        if base_url is None or verify_tls is None:
            settings = get_settings().gastos_api
            base_url = base_url or settings.base_url
            verify_tls = settings.verify_tls if verify_tls is None else verify_tls
        self._base_url = base_url.rstrip("/")
        self._verify = verify_tls
        self._session = session or requests.Session()
        self._logger = structlog.get_logger(__name__)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _send(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> requests.Response:
        """Issue one blocking request and map transport failures."""
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(
                method,
                url,
                json=body,
                verify=self._verify,
            )
        except requests.RequestException as e:
            self._logger.warning(
                "gastos_api_unreachable",
                method=method,
                path=path,
                error=str(e),
            )
            raise NetworkError(f"Could not reach {url}: {e}") from e

        self._logger.debug(
            "gastos_api_request",
            method=method,
            path=path,
            status=response.status_code,
        )

        if not response.ok:
            raise ServerError(
                status_code=response.status_code,
                server_message=extract_server_message(response),
            )
        return response

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> requests.Response:
        return await asyncio.to_thread(self._send, method, path, body)

    def _decode(self, response: requests.Response) -> Any:
        """Decode a JSON body, keeping numbers exact."""
        try:
            return response.json(parse_float=Decimal)
        except ValueError as e:
            raise MalformedResponseError(
                f"Response from {response.url} is not valid JSON"
            ) from e

    def _to_expense(self, data: Any) -> Expense:
        try:
            return Expense.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected expense record: {e}") from e

    async def list_all(self) -> list[Expense]:
        response = await self._request("GET", RESOURCE_PATH)
        data = self._decode(response)
        if not isinstance(data, list):
            raise MalformedResponseError("Expected a list of expenses")
        return [self._to_expense(item) for item in data]

    async def fetch_total(self) -> Decimal:
        response = await self._request("GET", TOTAL_PATH)
        data = self._decode(response)
        # bool is an int subclass; reject it explicitly
        if isinstance(data, bool) or not isinstance(data, (int, Decimal)):
            raise MalformedResponseError(f"Expected a number for the total, got {data!r}")
        return Decimal(data)

    async def create(self, payload: ExpensePayload) -> Expense:
        response = await self._request("POST", RESOURCE_PATH, payload.to_api_dict())
        if not response.content:
            raise MalformedResponseError("Create returned no record")
        return self._to_expense(self._decode(response))

    async def update(self, expense_id: ExpenseId, payload: ExpensePayload) -> Expense:
        response = await self._request(
            "PUT",
            f"{RESOURCE_PATH}/{expense_id}",
            payload.to_api_dict(expense_id),
        )
        # Many APIs answer PUT with 204 No Content
        if not response.content:
            return payload.as_expense(expense_id)
        return self._to_expense(self._decode(response))

    async def remove(self, expense_id: ExpenseId) -> None:
        await self._request("DELETE", f"{RESOURCE_PATH}/{expense_id}")
