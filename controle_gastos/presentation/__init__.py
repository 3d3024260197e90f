"""Presentation package: pure state-to-view functions."""

from controle_gastos.presentation.view import (
    CONFIRM_DELETE_MESSAGE,
    ExpenseRow,
    ExpenseView,
    build_view,
    format_amount,
    format_currency,
    format_date,
)

__all__ = [
    "CONFIRM_DELETE_MESSAGE",
    "ExpenseRow",
    "ExpenseView",
    "build_view",
    "format_amount",
    "format_currency",
    "format_date",
]
