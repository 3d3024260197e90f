"""
View derivation for the expense screen.

Pure functions from ViewState to what is shown. The Streamlit app only
draws what build_view returns; it holds no logic of its own.

Amounts are shown pt-BR style with two fraction digits and a comma
("4,50"); dates as dd/mm/yyyy of the stored calendar date.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import BaseModel, Field

from controle_gastos.models.expense import Expense, ExpenseId
from controle_gastos.models.state import ViewState


TITLE = "Controle de Gastos"
SUBMIT_LABEL_LOADING = "Processando..."
SUBMIT_LABEL_UPDATE = "Atualizar"
SUBMIT_LABEL_CREATE = "Adicionar"
CANCEL_LABEL = "Cancelar"
EDIT_LABEL = "Editar"
DELETE_LABEL = "Excluir"
EMPTY_PLACEHOLDER = "Nenhum gasto registrado"
LOADING_PLACEHOLDER = "Carregando..."
CONFIRM_DELETE_MESSAGE = "Tem certeza que deseja excluir este gasto?"
TABLE_HEADERS = ("Descrição", "Data", "Valor", "Ações")

_CENTS = Decimal("0.01")


def format_amount(value: Decimal) -> str:
    """Two fraction digits, comma separator: Decimal("4.5") -> "4,50"."""
    return f"{value.quantize(_CENTS, rounding=ROUND_HALF_UP):f}".replace(".", ",")


def format_currency(value: Decimal, symbol: str = "R$") -> str:
    return f"{symbol} {format_amount(value)}"


def format_date(value: datetime) -> str:
    """dd/mm/yyyy of the stored calendar date."""
    return value.strftime("%d/%m/%Y")


class ExpenseRow(BaseModel):
    """One table row, already formatted."""

    id: ExpenseId
    description: str
    date_label: str
    amount_label: str

    @classmethod
    def from_expense(cls, expense: Expense, currency_symbol: str = "R$") -> "ExpenseRow":
        return cls(
            id=expense.id,
            description=expense.descricao,
            date_label=format_date(expense.data),
            amount_label=format_currency(expense.valor, currency_symbol),
        )

    def cells(self) -> tuple[str, str, str]:
        return (self.description, self.date_label, self.amount_label)


class ExpenseView(BaseModel):
    """Everything the screen draws, derived from a ViewState."""

    submit_label: str
    controls_disabled: bool
    show_cancel: bool
    error_banner: Optional[str] = None
    total_label: str
    rows: list[ExpenseRow] = Field(default_factory=list)
    empty_placeholder: Optional[str] = None
    show_loading_placeholder: bool = False


def submit_label(state: ViewState) -> str:
    if state.loading:
        return SUBMIT_LABEL_LOADING
    if state.is_editing:
        return SUBMIT_LABEL_UPDATE
    return SUBMIT_LABEL_CREATE


def build_view(state: ViewState, currency_symbol: str = "R$") -> ExpenseView:
    """Derive the screen from state."""
    rows = [ExpenseRow.from_expense(e, currency_symbol) for e in state.expenses]
    return ExpenseView(
        submit_label=submit_label(state),
        controls_disabled=state.loading,
        show_cancel=state.is_editing,
        error_banner=state.error or None,
        total_label=f"Total Gastos: {format_currency(state.total, currency_symbol)}",
        rows=rows,
        empty_placeholder=None if rows else EMPTY_PLACEHOLDER,
        show_loading_placeholder=state.loading and not rows,
    )
