"""
Shared fixtures.

No real API calls in tests: command handlers run against an in-memory
gateway that records every call, the HTTP gateway against a mocked
requests Session.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest

from controle_gastos.models.expense import Expense, ExpenseId, ExpensePayload
from controle_gastos.orchestrator import ExpenseCommands
from controle_gastos.services.gateway import ExpenseGatewayInterface


class RecordingGateway(ExpenseGatewayInterface):
    """
    In-memory stand-in for the Gastos API.

    Every call is appended to `calls` before anything else happens.
    Put an exception in `failures[<operation name>]` to make that
    operation fail.
    """

    def __init__(self, expenses: Optional[list[Expense]] = None):
        self.expenses = list(expenses or [])
        self.calls: list[tuple] = []
        self.failures: dict[str, Exception] = {}
        self.next_id = 100

    @property
    def call_names(self) -> list[str]:
        return [name for name, *_ in self.calls]

    @property
    def total(self) -> Decimal:
        return sum((e.valor for e in self.expenses), Decimal("0"))

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.failures:
            raise self.failures[name]

    async def list_all(self) -> list[Expense]:
        self._record("list_all")
        return list(self.expenses)

    async def fetch_total(self) -> Decimal:
        self._record("fetch_total")
        return self.total

    async def create(self, payload: ExpensePayload) -> Expense:
        self._record("create", payload)
        created = payload.as_expense(self.next_id)
        self.next_id += 1
        self.expenses.append(created)
        return created

    async def update(self, expense_id: ExpenseId, payload: ExpensePayload) -> Expense:
        self._record("update", expense_id, payload)
        updated = payload.as_expense(expense_id)
        self.expenses = [updated if e.id == expense_id else e for e in self.expenses]
        return updated

    async def remove(self, expense_id: ExpenseId) -> None:
        self._record("remove", expense_id)
        self.expenses = [e for e in self.expenses if e.id != expense_id]


@pytest.fixture
def coffee() -> Expense:
    return Expense(
        id=1,
        descricao="Coffee",
        data=datetime.fromisoformat("2024-01-05T00:00:00+00:00"),
        valor=Decimal("4.50"),
    )


@pytest.fixture
def rent() -> Expense:
    return Expense(
        id=2,
        descricao="Rent",
        data=datetime(2024, 2, 1),
        valor=Decimal("1500"),
    )


@pytest.fixture
def gateway(coffee, rent) -> RecordingGateway:
    return RecordingGateway([coffee, rent])


@pytest.fixture
def commands(gateway) -> ExpenseCommands:
    return ExpenseCommands(gateway=gateway)
