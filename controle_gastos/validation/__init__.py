"""Form validation package."""

from controle_gastos.validation.validator import (
    INVALID_AMOUNT_MESSAGE,
    INVALID_DATE_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    ExpenseFormValidator,
    FormValidationError,
)

__all__ = [
    "INVALID_AMOUNT_MESSAGE",
    "INVALID_DATE_MESSAGE",
    "MISSING_FIELDS_MESSAGE",
    "ExpenseFormValidator",
    "FormValidationError",
]
