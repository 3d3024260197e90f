"""
Command Handlers for Controle de Gastos

This module turns user intents (load, submit, edit, cancel, delete) into
gateway calls and state transitions on an explicitly owned ViewState.

The orchestrator enforces the consistency rules:
- List and total are only ever applied together, from one reload pair
- Every successful write is followed by a full reload pair
- A failure never clears previously loaded data
- While a command runs (loading), further commands are ignored

Every failure is recovered here and turned into one message in
state.error. Nothing from the gateway propagates to the view.
"""

import asyncio
from typing import Optional
from uuid import UUID

from controle_gastos.audit import AuditLogger, create_correlation_id
from controle_gastos.models.expense import (
    Expense,
    ExpenseId,
    FormDraft,
    ReloadPair,
)
from controle_gastos.models.state import ViewState
from controle_gastos.services.gateway import (
    ExpenseGatewayInterface,
    GatewayError,
    HttpExpenseGateway,
    NetworkError,
    ServerError,
)
from controle_gastos.validation import ExpenseFormValidator, FormValidationError


LOAD_FAILED_MESSAGE = "Erro ao carregar gastos"
SAVE_FAILED_MESSAGE = "Erro ao salvar gasto"
DELETE_FAILED_MESSAGE = "Erro ao excluir gasto"
SERVER_UNREACHABLE_MESSAGE = (
    "Não foi possível conectar ao servidor. Verifique se a API está rodando."
)


def describe_failure(error: Exception, default_message: str) -> str:
    """
    Pick the message shown for a failed command.

    Order: the server's own message, then the unreachable message,
    then the command's generic message.
    """
    if isinstance(error, ServerError) and error.server_message:
        return error.server_message
    if isinstance(error, NetworkError):
        return SERVER_UNREACHABLE_MESSAGE
    return default_message


async def fetch_reload_pair(gateway: ExpenseGatewayInterface) -> ReloadPair:
    """
    Fetch list and total concurrently and join them.

    Both requests always run to completion. If either failed, the first
    failure is raised and neither result is returned.
    """
    expenses, total = await asyncio.gather(
        gateway.list_all(),
        gateway.fetch_total(),
        return_exceptions=True,
    )
    for result in (expenses, total):
        if isinstance(result, BaseException):
            raise result
    return ReloadPair(expenses=expenses, total=total)


class ExpenseCommands:
    """
    The command handlers of the expense screen.

    Flow of every mutating command:
    1. Guard (busy, validation, confirmation) - no network call on rejection
    2. Enter loading
    3. One gateway write
    4. On success, one reload pair
    5. Leave loading

    Sync commands (begin_edit, cancel_edit, update_draft) never touch
    the network.
    """

    def __init__(
        self,
        gateway: ExpenseGatewayInterface,
        state: Optional[ViewState] = None,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[ExpenseFormValidator] = None,
    ):
        self._gateway = gateway
        self._state = state if state is not None else ViewState()
        self._audit_logger = audit_logger or AuditLogger()
        self._validator = validator or ExpenseFormValidator()

    @property
    def state(self) -> ViewState:
        return self._state

    def _busy(self, command: str) -> bool:
        """Loading doubles as a lock: controls are disabled while it is set."""
        if self._state.loading:
            self._audit_logger.log_command_ignored(command)
            return True
        return False

    async def _reload(self, correlation_id: UUID) -> bool:
        """Fetch and apply a reload pair. Returns False on failure."""
        self._state.error = None
        try:
            pair = await fetch_reload_pair(self._gateway)
        except GatewayError as e:
            message = describe_failure(e, LOAD_FAILED_MESSAGE)
            self._state.error = message
            self._audit_logger.log_load_failed(
                error=e,
                message=message,
                correlation_id=correlation_id,
            )
            return False

        self._state.apply_reload(pair)
        self._audit_logger.log_expenses_loaded(
            count=len(pair.expenses),
            total=str(pair.total),
            correlation_id=correlation_id,
        )
        return True

    async def load(self) -> bool:
        """
        Initial load: fetch list and total and apply them together.

        Returns:
            True if a reload pair was applied
        """
        if self._busy("load"):
            return False

        self._state.loading = True
        try:
            return await self._reload(create_correlation_id())
        finally:
            self._state.loading = False

    async def submit(self) -> bool:
        """
        Create or update a record from the form draft.

        Updates when an edit target is set, creates otherwise. On success
        the form is reset and a reload pair is fetched. On failure the
        draft and edit target are left as they were.

        Returns:
            True if the write succeeded (even if the following reload failed)
        """
        if self._busy("submit"):
            return False

        correlation_id = create_correlation_id()
        self._state.error = None

        try:
            payload = self._validator.to_payload(self._state.draft)
        except FormValidationError as e:
            self._state.error = str(e)
            self._audit_logger.log_validation_failed(
                issues=[issue.model_dump() for issue in e.result.issues],
                correlation_id=correlation_id,
            )
            return False

        edit_target = self._state.edit_target
        self._state.loading = True
        try:
            try:
                if edit_target is not None:
                    saved = await self._gateway.update(edit_target, payload)
                else:
                    saved = await self._gateway.create(payload)
            except GatewayError as e:
                message = describe_failure(e, SAVE_FAILED_MESSAGE)
                self._state.error = message
                self._audit_logger.log_save_failed(
                    expense_id=str(edit_target) if edit_target is not None else None,
                    error=e,
                    message=message,
                    correlation_id=correlation_id,
                )
                return False

            self._audit_logger.log_expense_saved(
                expense_id=str(saved.id),
                amount=str(saved.valor),
                created=edit_target is None,
                correlation_id=correlation_id,
            )
            self._state.reset_form()
            await self._reload(correlation_id)
            return True
        finally:
            self._state.loading = False

    def begin_edit(self, expense: Expense) -> None:
        """Point the form at an existing record and fill it from its fields."""
        if self._busy("begin_edit"):
            return

        self._state.edit_target = expense.id
        self._state.draft = FormDraft.from_expense(expense)
        self._audit_logger.log_edit_started(str(expense.id))

    def cancel_edit(self) -> None:
        """Back to composing a new record."""
        if self._busy("cancel_edit"):
            return

        previous = self._state.edit_target
        self._state.reset_form()
        self._audit_logger.log_edit_cancelled(
            str(previous) if previous is not None else None
        )

    def update_draft(self, **fields: str) -> None:
        """
        Replace named fields of the form draft.

        Raises:
            TypeError: If a name is not one of descricao, data, valor
        """
        unknown = set(fields) - set(FormDraft.model_fields)
        if unknown:
            raise TypeError(f"Unknown form fields: {', '.join(sorted(unknown))}")
        if self._busy("update_draft"):
            return

        self._state.draft = FormDraft(**{**self._state.draft.model_dump(), **fields})

    async def delete(self, expense_id: ExpenseId, confirmed: bool) -> bool:
        """
        Delete a record once the user has confirmed.

        A declined confirmation is a no-op: no call, no state change.

        Returns:
            True if the record was deleted
        """
        if not confirmed:
            self._audit_logger.log_delete_declined(str(expense_id))
            return False
        if self._busy("delete"):
            return False

        correlation_id = create_correlation_id()
        self._state.error = None
        self._state.loading = True
        try:
            try:
                await self._gateway.remove(expense_id)
            except GatewayError as e:
                message = describe_failure(e, DELETE_FAILED_MESSAGE)
                self._state.error = message
                self._audit_logger.log_delete_failed(
                    expense_id=str(expense_id),
                    error=e,
                    message=message,
                    correlation_id=correlation_id,
                )
                return False

            self._audit_logger.log_expense_deleted(
                expense_id=str(expense_id),
                correlation_id=correlation_id,
            )
            await self._reload(correlation_id)
            return True
        finally:
            self._state.loading = False


def create_app_components(
    gateway: Optional[ExpenseGatewayInterface] = None,
) -> tuple[ExpenseCommands, ExpenseGatewayInterface]:
    """
    Factory function to create all application components.

    Args:
        gateway: Gateway to use. Defaults to the HTTP gateway
                 pointed at the configured base URL.

    Returns:
        (commands, gateway)
    """
    gateway = gateway or HttpExpenseGateway()
    commands = ExpenseCommands(
        gateway=gateway,
        state=ViewState(),
        audit_logger=AuditLogger(),
    )
    return commands, gateway
