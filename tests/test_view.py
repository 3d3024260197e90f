"""Tests for the pure view derivation."""

from datetime import datetime
from decimal import Decimal

import pytest

from controle_gastos.models.expense import Expense
from controle_gastos.models.state import ViewState
from controle_gastos.presentation import build_view, format_amount, format_date
from controle_gastos.presentation.view import (
    EMPTY_PLACEHOLDER,
    SUBMIT_LABEL_CREATE,
    SUBMIT_LABEL_LOADING,
    SUBMIT_LABEL_UPDATE,
)


class TestFormatting:
    """Tests for amount and date formatting."""
    
    @pytest.mark.parametrize("value, expected", [
        (Decimal("4.5"), "4,50"),
        (Decimal("1500"), "1500,00"),
        (Decimal("0"), "0,00"),
        (Decimal("2.005"), "2,01"),
        (Decimal("10.499"), "10,50"),
    ])
    def test_format_amount(self, value, expected):
        """Test two fraction digits with a comma separator."""
        assert format_amount(value) == expected
    
    def test_format_date(self):
        """Test dd/mm/yyyy."""
        assert format_date(datetime(2024, 1, 5)) == "05/01/2024"


class TestBuildView:
    """Tests for build_view."""
    
    def test_single_expense_scenario(self):
        """Test one listed expense and its total render pt-BR style."""
        coffee = Expense.model_validate({
            "id": 1,
            "descricao": "Coffee",
            "data": "2024-01-05T00:00:00Z",
            "valor": 4.50,
        })
        state = ViewState(expenses=[coffee], total=Decimal("4.5"))
        
        view = build_view(state)
        
        assert format_amount(state.total) == "4,50"
        assert view.total_label == "Total Gastos: R$ 4,50"
        assert len(view.rows) == 1
        assert " | ".join(view.rows[0].cells()) == "Coffee | 05/01/2024 | R$ 4,50"
        assert view.empty_placeholder is None
    
    def test_empty_list_placeholder(self):
        """Test a placeholder row when there are no expenses."""
        view = build_view(ViewState())
        assert view.rows == []
        assert view.empty_placeholder == EMPTY_PLACEHOLDER
        assert view.show_loading_placeholder is False
    
    def test_loading_empty_list(self):
        """Test the loading placeholder only while loading with nothing to show."""
        assert build_view(ViewState(loading=True)).show_loading_placeholder is True
    
    @pytest.mark.parametrize("loading, edit_target, label", [
        (False, None, SUBMIT_LABEL_CREATE),
        (False, 3, SUBMIT_LABEL_UPDATE),
        (True, 3, SUBMIT_LABEL_LOADING),
        (True, None, SUBMIT_LABEL_LOADING),
    ])
    def test_submit_label(self, loading, edit_target, label):
        """Test the submit label reflects loading and edit state."""
        view = build_view(ViewState(loading=loading, edit_target=edit_target))
        assert view.submit_label == label
        assert view.controls_disabled is loading
        assert view.show_cancel is (edit_target is not None)
    
    def test_error_banner(self):
        """Test the banner shows the error slot."""
        assert build_view(ViewState(error="Erro ao carregar gastos")).error_banner == "Erro ao carregar gastos"
        assert build_view(ViewState()).error_banner is None
    
    def test_currency_symbol(self):
        """Test a configured currency symbol is used."""
        view = build_view(ViewState(total=Decimal("1")), currency_symbol="€")
        assert view.total_label == "Total Gastos: € 1,00"
