"""
Streamlit Frontend for Controle de Gastos

A single page: a form to add or edit an expense, the server-computed
total, and a table of every expense with edit/delete actions.

The page only draws what controle_gastos.presentation.build_view derives
from the session's ViewState, and forwards user intents to the command
handlers. Deleting always goes through an explicit yes/no confirmation.
"""

import asyncio
from datetime import date

import streamlit as st

from controle_gastos.audit import configure_logging
from controle_gastos.config import get_settings, validate_all_settings
from controle_gastos.orchestrator import ExpenseCommands, create_app_components
from controle_gastos.presentation import CONFIRM_DELETE_MESSAGE, build_view
from controle_gastos.presentation.view import (
    CANCEL_LABEL,
    DELETE_LABEL,
    EDIT_LABEL,
    LOADING_PLACEHOLDER,
    TABLE_HEADERS,
    TITLE,
)
from controle_gastos.services.gateway import HttpExpenseGateway


st.set_page_config(
    page_title=TITLE,
    page_icon="💸",
    layout="centered",
)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_gateway() -> HttpExpenseGateway:
    """One HTTP gateway (and connection pool) per server process."""
    configure_logging()
    return HttpExpenseGateway()


def get_commands() -> ExpenseCommands:
    """Command handlers and their ViewState live in the user's session."""
    if "commands" not in st.session_state:
        st.session_state.commands, _ = create_app_components(gateway=get_gateway())
        st.session_state.form_version = 0
        st.session_state.pending_delete = None
        with st.spinner(LOADING_PLACEHOLDER):
            run_async(st.session_state.commands.load())
    return st.session_state.commands


def refresh_form() -> None:
    """Force the form widgets to re-read the draft on the next run."""
    st.session_state.form_version += 1


def render_form(commands: ExpenseCommands, view) -> None:
    state = commands.state
    draft = state.draft
    version = st.session_state.form_version

    with st.form(f"expense_form_{version}"):
        descricao = st.text_input(
            "Descrição:",
            value=draft.descricao,
            disabled=view.controls_disabled,
        )
        try:
            draft_date = date.fromisoformat(draft.data) if draft.data else None
        except ValueError:
            draft_date = None
        data = st.date_input(
            "Data:",
            value=draft_date,
            format="DD/MM/YYYY",
            disabled=view.controls_disabled,
        )
        valor = st.text_input(
            "Valor (R$):",
            value=draft.valor,
            placeholder="0,00",
            disabled=view.controls_disabled,
        )
        submitted = st.form_submit_button(
            view.submit_label,
            type="primary",
            disabled=view.controls_disabled,
        )

    if submitted:
        commands.update_draft(
            descricao=descricao,
            data=data.isoformat() if data else "",
            valor=valor,
        )
        with st.spinner(view.submit_label):
            saved = run_async(commands.submit())
        if saved:
            refresh_form()
        st.rerun()

    if view.show_cancel:
        if st.button(CANCEL_LABEL, disabled=view.controls_disabled):
            commands.cancel_edit()
            refresh_form()
            st.rerun()


def render_delete_confirmation(commands: ExpenseCommands) -> None:
    expense_id = st.session_state.pending_delete
    if expense_id is None:
        return

    st.warning(CONFIRM_DELETE_MESSAGE)
    col1, col2 = st.columns(2)
    with col1:
        confirmed = st.button("Sim", type="primary", key="confirm_delete_yes")
    with col2:
        declined = st.button("Não", key="confirm_delete_no")

    if confirmed or declined:
        st.session_state.pending_delete = None
        run_async(commands.delete(expense_id, confirmed=confirmed))
        st.rerun()


def render_table(commands: ExpenseCommands, view) -> None:
    if view.show_loading_placeholder:
        st.info(LOADING_PLACEHOLDER)
        return

    header = st.columns([3, 2, 2, 1, 1])
    for col, title in zip(header, TABLE_HEADERS):
        col.markdown(f"**{title}**")

    if view.empty_placeholder:
        st.markdown(f"*{view.empty_placeholder}*")
        return

    expenses_by_id = {e.id: e for e in commands.state.expenses}
    for row in view.rows:
        cols = st.columns([3, 2, 2, 1, 1])
        for col, cell in zip(cols, row.cells()):
            col.write(cell)
        if cols[3].button(EDIT_LABEL, key=f"edit_{row.id}", disabled=view.controls_disabled):
            commands.begin_edit(expenses_by_id[row.id])
            refresh_form()
            st.rerun()
        if cols[4].button(DELETE_LABEL, key=f"delete_{row.id}", disabled=view.controls_disabled):
            st.session_state.pending_delete = row.id
            st.rerun()


SETTINGS_SECTIONS = (
    ("API de Gastos", "gastos_api"),
    ("Aplicação", "app"),
)


def render_settings_status() -> None:
    """Sidebar status of each settings section."""
    status = validate_all_settings()

    with st.sidebar:
        st.markdown("### Configuração")
        for name, key in SETTINGS_SECTIONS:
            if status.get(key, False):
                st.success(f"✅ {name}")
            else:
                error = status.get(f"{key}_error", "Não configurado")
                st.error(f"❌ {name} - {error}")


def main():
    """Main application entry point."""
    render_settings_status()
    commands = get_commands()
    view = build_view(commands.state, get_settings().app.currency_symbol)

    st.title(TITLE)
    st.caption(f"API: {get_gateway().base_url}")

    if view.error_banner:
        st.error(view.error_banner)

    render_form(commands, view)

    st.markdown("---")
    st.subheader(view.total_label)

    render_delete_confirmation(commands)
    render_table(commands, view)


if __name__ == "__main__":
    main()
