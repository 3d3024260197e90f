"""
Form Draft Validation

Runs before any network call. A draft that fails here never reaches
the gateway.

Checks, in order:
- every field filled in (description, date, amount)
- date is a calendar date (YYYY-MM-DD)
- amount is a positive, finite number ("." or "," as decimal separator)

IMPORTANT: Validation never silently fixes the draft. The only
normalization is whitespace trimming and the decimal separator.
"""

import math
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from controle_gastos.models.expense import (
    ExpensePayload,
    FormDraft,
    ValidationIssue,
    ValidationResult,
)


MISSING_FIELDS_MESSAGE = "Preencha todos os campos"
INVALID_DATE_MESSAGE = "Data inválida"
INVALID_AMOUNT_MESSAGE = "Valor inválido"


class FormValidationError(Exception):
    """The form draft cannot be submitted."""

    def __init__(self, message: str, result: ValidationResult):
        self.result = result
        super().__init__(message)


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse amount text typed by a user.

    Accepts "1500", "4.50" and "4,50". Returns None when the text is
    not a finite number or uses digit grouping ("1_000", "1,000.50").
    """
    text = text.strip()
    if "_" in text:
        return None
    if "," in text:
        if "." in text or text.count(",") > 1:
            return None
        text = text.replace(",", ".")
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def is_sendable_amount(value: Decimal) -> bool:
    """Positive both as typed and as the JSON number that goes on the wire."""
    as_sent = float(value)
    return value > 0 and math.isfinite(as_sent) and as_sent > 0


def parse_calendar_date(text: str) -> Optional[date]:
    """Parse a YYYY-MM-DD date, None if it is not one."""
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        return None


class ExpenseFormValidator:
    """Validates form drafts and turns valid ones into payloads."""

    def validate(self, draft: FormDraft) -> ValidationResult:
        """
        Check a draft.

        Returns:
            ValidationResult with all issues found
        """
        issues = []

        empty = [
            name for name in ("descricao", "data", "valor")
            if not getattr(draft, name).strip()
        ]
        if empty:
            # One message for all empty fields, as the form shows one banner
            issues.append(ValidationIssue(
                field=",".join(empty),
                issue_type="missing",
                message=MISSING_FIELDS_MESSAGE,
            ))
            return ValidationResult(issues=issues)

        if parse_calendar_date(draft.data) is None:
            issues.append(ValidationIssue(
                field="data",
                issue_type="invalid_format",
                message=INVALID_DATE_MESSAGE,
            ))

        amount = parse_amount(draft.valor)
        if amount is None or not is_sendable_amount(amount):
            issues.append(ValidationIssue(
                field="valor",
                issue_type="invalid_value",
                message=INVALID_AMOUNT_MESSAGE,
            ))

        return ValidationResult(issues=issues)

    def to_payload(self, draft: FormDraft) -> ExpensePayload:
        """
        Build the normalized record to send.

        Raises:
            FormValidationError: If the draft has any error-level issue
        """
        result = self.validate(draft)
        if not result.is_valid:
            raise FormValidationError(result.first_error.message, result)

        return ExpensePayload(
            descricao=draft.descricao,
            data=parse_calendar_date(draft.data),
            valor=parse_amount(draft.valor),
        )
