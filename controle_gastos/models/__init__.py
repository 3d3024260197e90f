"""
Data Models Package

This package contains all Pydantic models used in Controle de Gastos.
All data flowing through the system must conform to these schemas.
"""

from controle_gastos.models.expense import (
    Expense,
    ExpenseId,
    ExpensePayload,
    FormDraft,
    ReloadPair,
    ValidationIssue,
    ValidationResult,
)
from controle_gastos.models.state import ViewState
from controle_gastos.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "Expense",
    "ExpenseId",
    "ExpensePayload",
    "FormDraft",
    "ReloadPair",
    "ValidationIssue",
    "ValidationResult",
    # State
    "ViewState",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
