"""
Audit Models for Controle de Gastos

Every command outcome is recorded as a structured event.
This provides:
1. Traceability of what the user did and what the server answered
2. Debugging information when the API misbehaves

Audit events are local only: they go to the structured log and are
never persisted by this client.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Reload pair
    EXPENSES_LOADED = "expenses_loaded"
    LOAD_FAILED = "load_failed"

    # Form
    VALIDATION_FAILED = "validation_failed"
    EDIT_STARTED = "edit_started"
    EDIT_CANCELLED = "edit_cancelled"

    # Persistence
    EXPENSE_CREATED = "expense_created"
    EXPENSE_UPDATED = "expense_updated"
    SAVE_FAILED = "save_failed"
    EXPENSE_DELETED = "expense_deleted"
    DELETE_DECLINED = "delete_declined"
    DELETE_FAILED = "delete_failed"

    # Guard
    COMMAND_IGNORED = "command_ignored"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every command produces at least one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context
    entity_id: Optional[str] = Field(
        default=None,
        description="Id of the expense this event relates to"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Ties together all events of one command"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expenses_loaded(count, total, correlation_id)
        event = AuditEventBuilder.expense_deleted(expense_id, correlation_id)
    """

    @staticmethod
    def expenses_loaded(
        count: int,
        total: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LOADED,
            correlation_id=correlation_id,
            description=f"Loaded {count} expenses",
            details={"count": count, "total": total},
        )

    @staticmethod
    def load_failed(
        error: Exception,
        message: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description="Failed to load expenses and total",
            error_type=type(error).__name__,
            error_message=str(error),
            details={"shown_message": message},
        )

    @staticmethod
    def validation_failed(
        issues: list[dict],
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="Form draft rejected before submit",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def edit_started(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_STARTED,
            entity_id=expense_id,
            description=f"Editing expense {expense_id}",
            is_user_action=True,
        )

    @staticmethod
    def edit_cancelled(expense_id: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_CANCELLED,
            entity_id=expense_id,
            description="Form reset",
            is_user_action=True,
        )

    @staticmethod
    def expense_saved(
        expense_id: str,
        amount: str,
        created: bool,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=(
                AuditEventType.EXPENSE_CREATED if created
                else AuditEventType.EXPENSE_UPDATED
            ),
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {'created' if created else 'updated'}: {expense_id}",
            details={"amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def save_failed(
        expense_id: Optional[str],
        error: Exception,
        message: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_id=expense_id,
            correlation_id=correlation_id,
            description="Failed to save expense",
            error_type=type(error).__name__,
            error_message=str(error),
            details={"shown_message": message},
        )

    @staticmethod
    def expense_deleted(
        expense_id: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense deleted: {expense_id}",
            is_user_action=True,
        )

    @staticmethod
    def delete_declined(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_DECLINED,
            entity_id=expense_id,
            description=f"Delete of expense {expense_id} not confirmed",
            is_user_action=True,
        )

    @staticmethod
    def delete_failed(
        expense_id: str,
        error: Exception,
        message: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Failed to delete expense {expense_id}",
            error_type=type(error).__name__,
            error_message=str(error),
            details={"shown_message": message},
        )

    @staticmethod
    def command_ignored(command: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_IGNORED,
            severity=AuditSeverity.WARNING,
            description=f"Ignored '{command}' while another command is running",
            details={"command": command},
            is_user_action=True,
        )
