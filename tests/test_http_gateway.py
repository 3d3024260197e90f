"""
Tests for the HTTP gateway.

The requests Session is mocked; responses are real requests.Response
objects so status handling and JSON decoding run for real.
"""

import asyncio
import json
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from controle_gastos.models.expense import ExpensePayload
from controle_gastos.services.gateway import (
    HttpExpenseGateway,
    MalformedResponseError,
    NetworkError,
    ServerError,
)


BASE_URL = "https://api.test"


def make_response(status_code: int, body=None) -> requests.Response:
    """Build a requests.Response with a JSON (or raw bytes) body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = BASE_URL
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def http_gateway(session) -> HttpExpenseGateway:
    return HttpExpenseGateway(base_url=f"{BASE_URL}/", verify_tls=True, session=session)


@pytest.fixture
def rent_payload() -> ExpensePayload:
    return ExpensePayload(descricao="Rent", data=date(2024, 2, 1), valor=Decimal("1500"))


class TestHttpGatewayRequests:
    """Tests for the requests sent and the responses decoded."""
    
    def test_list_all(self, http_gateway, session):
        """Test GET /api/Gastos decodes records with exact amounts."""
        session.request.return_value = make_response(200, [
            {"id": 1, "descricao": "Coffee", "data": "2024-01-05T00:00:00Z", "valor": 4.5},
        ])
        
        expenses = asyncio.run(http_gateway.list_all())
        
        session.request.assert_called_once_with(
            "GET", f"{BASE_URL}/api/Gastos", json=None, verify=True,
        )
        assert len(expenses) == 1
        assert expenses[0].descricao == "Coffee"
        assert expenses[0].valor == Decimal("4.5")
    
    def test_fetch_total(self, http_gateway, session):
        """Test GET /api/Gastos/total returns a Decimal."""
        session.request.return_value = make_response(200, 1504.5)
        
        total = asyncio.run(http_gateway.fetch_total())
        
        session.request.assert_called_once_with(
            "GET", f"{BASE_URL}/api/Gastos/total", json=None, verify=True,
        )
        assert total == Decimal("1504.5")
    
    def test_fetch_total_integer(self, http_gateway, session):
        """Test an integral total is accepted."""
        session.request.return_value = make_response(200, 0)
        assert asyncio.run(http_gateway.fetch_total()) == Decimal("0")
    
    def test_create(self, http_gateway, session, rent_payload):
        """Test POST sends the normalized body and returns the created record."""
        session.request.return_value = make_response(201, {
            "id": 42, "descricao": "Rent", "data": "2024-02-01T00:00:00Z", "valor": 1500,
        })
        
        created = asyncio.run(http_gateway.create(rent_payload))
        
        session.request.assert_called_once_with(
            "POST",
            f"{BASE_URL}/api/Gastos",
            json={"descricao": "Rent", "data": "2024-02-01T00:00:00.000Z", "valor": 1500},
            verify=True,
        )
        assert created.id == 42
    
    def test_update(self, http_gateway, session, rent_payload):
        """Test PUT carries the id in path and body."""
        session.request.return_value = make_response(200, {
            "id": 7, "descricao": "Rent", "data": "2024-02-01T00:00:00Z", "valor": 1500,
        })
        
        asyncio.run(http_gateway.update(7, rent_payload))
        
        method, url = session.request.call_args.args
        assert method == "PUT"
        assert url == f"{BASE_URL}/api/Gastos/7"
        assert session.request.call_args.kwargs["json"]["id"] == 7
    
    def test_update_no_content(self, http_gateway, session, rent_payload):
        """Test a 204 answer to PUT yields the submitted record."""
        session.request.return_value = make_response(204)
        
        updated = asyncio.run(http_gateway.update(7, rent_payload))
        
        assert updated.id == 7
        assert updated.valor == Decimal("1500")
    
    def test_remove(self, http_gateway, session):
        """Test DELETE /api/Gastos/{id} ignores the body."""
        session.request.return_value = make_response(204)
        
        assert asyncio.run(http_gateway.remove(3)) is None
        
        session.request.assert_called_once_with(
            "DELETE", f"{BASE_URL}/api/Gastos/3", json=None, verify=True,
        )
    
    def test_verify_setting_is_passed(self, session):
        """Test a CA bundle path reaches every request."""
        gateway = HttpExpenseGateway(base_url=BASE_URL, verify_tls="/etc/ca.pem", session=session)
        session.request.return_value = make_response(200, [])
        
        asyncio.run(gateway.list_all())
        
        assert session.request.call_args.kwargs["verify"] == "/etc/ca.pem"


class TestHttpGatewayFailures:
    """Tests for mapping transport and server failures."""
    
    @pytest.mark.parametrize("error", [
        requests.ConnectionError("refused"),
        requests.exceptions.SSLError("bad certificate"),
        requests.Timeout("timed out"),
    ])
    def test_no_response_is_network_error(self, http_gateway, session, error):
        """Test connectivity failures become NetworkError."""
        session.request.side_effect = error
        
        with pytest.raises(NetworkError):
            asyncio.run(http_gateway.list_all())
    
    def test_problem_details_title(self, http_gateway, session, rent_payload):
        """Test the server's title is carried on the ServerError."""
        session.request.return_value = make_response(400, {
            "title": "One or more validation errors occurred.",
            "status": 400,
        })
        
        with pytest.raises(ServerError) as exc_info:
            asyncio.run(http_gateway.create(rent_payload))
        
        assert exc_info.value.status_code == 400
        assert exc_info.value.server_message == "One or more validation errors occurred."
    
    def test_message_key(self, http_gateway, session):
        """Test a plain {"message": ...} body is used when there is no title."""
        session.request.return_value = make_response(404, {"message": "Gasto não encontrado"})
        
        with pytest.raises(ServerError) as exc_info:
            asyncio.run(http_gateway.remove(99))
        
        assert exc_info.value.server_message == "Gasto não encontrado"
    
    def test_unstructured_failure(self, http_gateway, session):
        """Test a non-JSON failure body gives no server message."""
        session.request.return_value = make_response(500, b"Internal Server Error")
        
        with pytest.raises(ServerError) as exc_info:
            asyncio.run(http_gateway.fetch_total())
        
        assert exc_info.value.status_code == 500
        assert exc_info.value.server_message is None
    
    def test_list_must_be_a_list(self, http_gateway, session):
        """Test an object where a list is expected is malformed."""
        session.request.return_value = make_response(200, {"items": []})
        
        with pytest.raises(MalformedResponseError):
            asyncio.run(http_gateway.list_all())
    
    def test_total_must_be_a_number(self, http_gateway, session):
        """Test a non-numeric total is malformed."""
        session.request.return_value = make_response(200, "abc")
        
        with pytest.raises(MalformedResponseError):
            asyncio.run(http_gateway.fetch_total())
    
    def test_invalid_json(self, http_gateway, session):
        """Test an undecodable success body is malformed."""
        session.request.return_value = make_response(200, b"<html>")
        
        with pytest.raises(MalformedResponseError):
            asyncio.run(http_gateway.list_all())
    
    def test_create_without_body(self, http_gateway, session, rent_payload):
        """Test a create answer with no record is malformed (the id is unknown)."""
        session.request.return_value = make_response(204)
        
        with pytest.raises(MalformedResponseError):
            asyncio.run(http_gateway.create(rent_payload))
