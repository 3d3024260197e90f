"""
Core Data Models for Controle de Gastos

These models define the schemas for all data flowing between the
Gastos API, the command handlers and the view:
1. Expense - a record as the server stores it
2. ExpensePayload - a normalized record ready to be sent
3. FormDraft - the transient, client-owned form contents
4. ReloadPair - a list and total fetched together

Field names that travel over the wire (descricao, data, valor) keep the
API's names so records round-trip without a mapping layer.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


ExpenseId = Union[int, str]
"""Server-assigned identifier. Opaque to the client."""


def decimal_to_text(value: Decimal) -> str:
    """Render a decimal the way a user would type it (no trailing zeros)."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def decimal_to_json_number(value: Decimal) -> Union[int, float]:
    """Integral amounts travel as integers, the rest as floats."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def date_to_api_timestamp(value: date) -> str:
    """Midnight UTC of a calendar date, e.g. 2024-02-01T00:00:00.000Z."""
    return f"{value.isoformat()}T00:00:00.000Z"


# =============================================================================
# SERVER RECORDS
# =============================================================================

class Expense(BaseModel):
    """
    An expense record as returned by the Gastos API.

    The id is assigned by the server; the client never fabricates one.
    Records are replaced wholesale on update, never patched.
    """
    model_config = ConfigDict(frozen=True)

    id: ExpenseId = Field(
        ...,
        description="Server-assigned identifier"
    )
    descricao: str = Field(
        ...,
        description="What the money was spent on"
    )
    data: datetime = Field(
        ...,
        description="When the expense happened (midnight of a calendar date)"
    )
    valor: Decimal = Field(
        ...,
        description="Amount spent"
    )

    @property
    def calendar_date(self) -> date:
        """The stored date without its time component."""
        return self.data.date()


class ExpensePayload(BaseModel):
    """
    A validated record ready to be sent to the API.

    Only built from a form draft that passed validation.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    descricao: str = Field(
        ...,
        min_length=1,
        description="Description of the expense"
    )
    data: date = Field(
        ...,
        description="Calendar date of the expense"
    )
    valor: Decimal = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Positive amount"
    )

    def to_api_dict(self, expense_id: Optional[ExpenseId] = None) -> dict:
        """
        Convert to the JSON body the API expects.

        The id is only included for updates (PUT carries the full record).
        """
        body = {
            "descricao": self.descricao,
            "data": date_to_api_timestamp(self.data),
            "valor": decimal_to_json_number(self.valor),
        }
        if expense_id is not None:
            body = {"id": expense_id, **body}
        return body

    def as_expense(self, expense_id: ExpenseId) -> Expense:
        """The record the server holds after a successful write."""
        return Expense(
            id=expense_id,
            descricao=self.descricao,
            data=datetime.combine(self.data, datetime.min.time()),
            valor=self.valor,
        )


# =============================================================================
# CLIENT-OWNED STATE
# =============================================================================

class FormDraft(BaseModel):
    """
    The create/update form contents.

    All fields are text exactly as typed; nothing here is trusted until
    the validator turns it into an ExpensePayload.
    """
    model_config = ConfigDict(frozen=True)

    descricao: str = ""
    data: str = Field(
        default_factory=lambda: date.today().isoformat(),
        description="Calendar date as YYYY-MM-DD (defaults to today)"
    )
    valor: str = ""

    @classmethod
    def from_expense(cls, expense: Expense) -> "FormDraft":
        """Populate a draft from the current fields of a record."""
        return cls(
            descricao=expense.descricao,
            data=expense.calendar_date.isoformat(),
            valor=decimal_to_text(expense.valor),
        )


class ReloadPair(BaseModel):
    """
    The list and the total fetched together.

    Only ever applied as a whole, so the table and the total
    always describe the same server state.
    """
    model_config = ConfigDict(frozen=True)

    expenses: list[Expense] = Field(default_factory=list)
    total: Decimal = Decimal("0")


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found in a form draft."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating a form draft."""

    validated_at: datetime = Field(
        default_factory=datetime.utcnow
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def first_error(self) -> Optional[ValidationIssue]:
        return next(
            (issue for issue in self.issues if issue.severity == "error"),
            None,
        )
