"""
View State Store

The single, explicitly owned snapshot the view is rendered from.
Command handlers receive it and mutate it; nothing else does.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from controle_gastos.models.expense import (
    Expense,
    ExpenseId,
    FormDraft,
    ReloadPair,
)


class ViewState(BaseModel):
    """
    Everything the view needs, and nothing it can derive.

    The error message is an overlay: it can be present while idle or
    while loading, and is only cleared by the next attempted command.
    """
    model_config = ConfigDict(validate_assignment=True)

    expenses: list[Expense] = Field(
        default_factory=list,
        description="Last list applied from a reload pair"
    )
    total: Decimal = Field(
        default=Decimal("0"),
        description="Last total applied from a reload pair (server-computed)"
    )
    draft: FormDraft = Field(default_factory=FormDraft)
    edit_target: Optional[ExpenseId] = Field(
        default=None,
        description="Id of the record being edited, None when composing a new one"
    )
    loading: bool = False
    error: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.edit_target is not None

    def apply_reload(self, pair: ReloadPair) -> None:
        """Replace list and total together."""
        self.expenses = list(pair.expenses)
        self.total = pair.total

    def reset_form(self) -> None:
        """Back to a fresh draft for a new record."""
        self.draft = FormDraft()
        self.edit_target = None
