"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import date
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from eventops.application.dtos.design_item import (
        DesignItemResult,
        DesignItemTypeResult,
    )
    from eventops.application.dtos.event import (
        EventCreate,
        EventResult,
        EventTypeResult,
    )
    from eventops.application.dtos.task import TaskResult, TaskTemplateResult
    from eventops.application.dtos.user import TenantResult, UserResult
    from eventops.application.dtos.workflow import (
        WorkflowActionCreate,
        WorkflowActionResult,
        WorkflowCreate,
        WorkflowExecutionResult,
        WorkflowResult,
        WorkflowStats,
        WorkflowUpdate,
    )
    from eventops.domain.entities.design_item import DesignSchedule


# Tenant repository interface
class ITenantRepository(Protocol):
    async def get_by_id(self, tenant_id: str) -> TenantResult | None:
        """Return tenant by ID."""

    async def get_by_code(self, code: str) -> TenantResult | None:
        """Return tenant by unique code (login)."""


# User repository interface
class IUserRepository(Protocol):
    async def get_by_id_and_tenant(
        self, user_id: str, tenant_id: str
    ) -> UserResult | None:
        """Return user if it belongs to tenant."""

    async def authenticate(
        self, tenant_id: str, username: str, password: str
    ) -> UserResult | None:
        """Return the active user when the password matches, else None."""


# Event type repository interface
class IEventTypeRepository(Protocol):
    async def get_by_id_and_tenant(
        self, event_type_id: str, tenant_id: str
    ) -> EventTypeResult | None:
        """Return event type if it belongs to tenant."""

    async def get_by_ids(
        self, tenant_id: str, event_type_ids: Collection[str]
    ) -> list[EventTypeResult]:
        """Return the tenant's event types among the given ids (batch)."""

    async def list_by_tenant(
        self, tenant_id: str, include_inactive: bool = True
    ) -> list[EventTypeResult]:
        """Return event types ordered by name."""

    async def create_event_type(
        self,
        tenant_id: str,
        name: str,
        description: str | None = None,
        is_active: bool = True,
    ) -> EventTypeResult:
        """Create an event type; name is unique per tenant."""


# Event repository interface
class IEventRepository(Protocol):
    async def get_by_id_and_tenant(
        self, event_id: str, tenant_id: str
    ) -> EventResult | None:
        """Return event if it belongs to tenant."""

    async def create_event(
        self, tenant_id: str, data: EventCreate, created_by: str | None
    ) -> EventResult:
        """Insert an event row."""

    async def list_by_tenant(
        self,
        tenant_id: str,
        skip: int = 0,
        limit: int = 100,
        event_type_id: str | None = None,
    ) -> list[EventResult]:
        """Return events, soonest start_date first."""

    async def get_upcoming_by_types(
        self, tenant_id: str, event_type_ids: Collection[str], from_date: date
    ) -> list[EventResult]:
        """Return events with start_date >= from_date whose type is in the set."""


# Workflow repository interface
class IWorkflowRepository(Protocol):
    async def get_by_id_and_tenant(
        self, workflow_id: str, tenant_id: str
    ) -> WorkflowResult | None:
        """Return workflow with actions ordered by execution_order."""

    async def get_by_name(self, tenant_id: str, name: str) -> WorkflowResult | None:
        """Return the tenant's workflow with this name."""

    async def list_by_tenant(
        self,
        tenant_id: str,
        is_active: bool | None = None,
        event_type_id: str | None = None,
    ) -> list[WorkflowResult]:
        """Return workflows newest first, optionally filtered."""

    async def get_matching(
        self, tenant_id: str, event_type_id: str
    ) -> list[WorkflowResult]:
        """Return active event_created workflows for the event type, oldest first."""

    async def create_workflow(
        self, tenant_id: str, data: WorkflowCreate, created_by: str | None
    ) -> WorkflowResult:
        """Insert a workflow row (without actions)."""

    async def add_actions(
        self, workflow_id: str, actions: list[WorkflowActionCreate]
    ) -> list[WorkflowActionResult]:
        """Insert actions; execution_order defaults to the list index."""

    async def replace_actions(
        self, workflow_id: str, actions: list[WorkflowActionCreate]
    ) -> list[WorkflowActionResult]:
        """Delete the workflow's actions and insert the given ones."""

    async def update_workflow(
        self, workflow_id: str, tenant_id: str, patch: WorkflowUpdate
    ) -> WorkflowResult | None:
        """Apply non-None fields of patch; return updated workflow or None."""

    async def delete_workflow(self, workflow_id: str, tenant_id: str) -> bool:
        """Hard delete (actions and executions cascade). Return False if missing."""


# Workflow execution repository interface
class IWorkflowExecutionRepository(Protocol):
    async def get_for_entity(
        self, tenant_id: str, entity_id: str
    ) -> list[WorkflowExecutionResult]:
        """Return executions triggered by the entity (event), newest first."""

    async def get_entity_ids_with_status(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_ids: Collection[str],
        statuses: Collection[str],
    ) -> set[str]:
        """Return the subset of entity_ids with an execution in one of the statuses."""

    async def start_execution(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_id: str,
        *,
        executed_by: str | None,
        condition_results: list[dict[str, Any]] | None = None,
    ) -> WorkflowExecutionResult:
        """Insert a running execution record."""

    async def record_skipped(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_id: str,
        *,
        executed_by: str | None,
        condition_results: list[dict[str, Any]],
    ) -> WorkflowExecutionResult:
        """Insert a finished skipped record (conditions did not pass)."""

    async def record_failed(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_id: str,
        *,
        executed_by: str | None,
        error_message: str,
        condition_results: list[dict[str, Any]] | None = None,
    ) -> WorkflowExecutionResult:
        """Insert a finished failed record for a run that errored unexpectedly."""

    async def finish_execution(
        self,
        execution_id: str,
        *,
        status: str,
        actions_executed: int = 0,
        actions_successful: int = 0,
        actions_failed: int = 0,
        created_task_ids: list[str] | None = None,
        created_design_item_ids: list[str] | None = None,
        error_message: str | None = None,
        error_details: list[dict[str, Any]] | None = None,
    ) -> WorkflowExecutionResult | None:
        """Set final status, counts and created ids; stamp completed_at."""

    async def list_by_workflow(
        self, tenant_id: str, workflow_id: str, skip: int = 0, limit: int = 50
    ) -> list[WorkflowExecutionResult]:
        """Return executions of the workflow, newest first."""

    async def get_stats(self, tenant_id: str, workflow_id: str) -> WorkflowStats:
        """Aggregate execution counts for the workflow."""


# Task template repository interface
class ITaskTemplateRepository(Protocol):
    async def get_by_id_and_tenant(
        self, template_id: str, tenant_id: str
    ) -> TaskTemplateResult | None:
        """Return task template if it belongs to tenant."""

    async def list_by_tenant(
        self, tenant_id: str, enabled_only: bool = False
    ) -> list[TaskTemplateResult]:
        """Return templates ordered by name."""

    async def create_template(
        self, tenant_id: str, fields: dict[str, Any]
    ) -> TaskTemplateResult:
        """Insert a template from column values."""

    async def update_template(
        self, template_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> TaskTemplateResult | None:
        """Update the given columns; None if the template is missing."""


# Task repository interface
class ITaskRepository(Protocol):
    async def create_task(
        self,
        tenant_id: str,
        *,
        title: str,
        description: str | None,
        priority: str,
        status: str,
        due_date: date | None,
        entity_type: str,
        entity_id: str,
        assigned_to: str | None,
        department: str | None,
        task_type: str | None,
        auto_created: bool,
        workflow_id: str | None,
        created_by: str | None,
    ) -> TaskResult:
        """Insert a task."""

    async def link_execution(self, task_ids: Collection[str], execution_id: str) -> None:
        """Set workflow_execution_id on the given tasks."""

    async def list_for_entity(
        self, tenant_id: str, entity_type: str, entity_id: str
    ) -> list[TaskResult]:
        """Return tasks attached to the entity, earliest due first."""


# Design item type repository interface
class IDesignItemTypeRepository(Protocol):
    async def get_by_id_and_tenant(
        self, type_id: str, tenant_id: str
    ) -> DesignItemTypeResult | None:
        """Return design item type if it belongs to tenant."""

    async def list_by_tenant(
        self, tenant_id: str, include_inactive: bool = False
    ) -> list[DesignItemTypeResult]:
        """Return types ordered by display_order, then name."""

    async def create_type(
        self, tenant_id: str, fields: dict[str, Any]
    ) -> DesignItemTypeResult:
        """Insert a design item type from column values."""

    async def update_type(
        self, type_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> DesignItemTypeResult | None:
        """Update the given columns; None if the type is missing."""


# Design item repository interface
class IDesignItemRepository(Protocol):
    async def create_design_item(
        self,
        tenant_id: str,
        *,
        event_id: str,
        design_item_type_id: str,
        item_name: str,
        description: str | None,
        quantity: int,
        status: str,
        assigned_designer_id: str | None,
        schedule: DesignSchedule,
        auto_created: bool,
        workflow_id: str | None,
    ) -> DesignItemResult:
        """Insert a design item with its computed schedule."""

    async def link_execution(self, item_ids: Collection[str], execution_id: str) -> None:
        """Set workflow_execution_id on the given design items."""

    async def list_for_event(
        self, tenant_id: str, event_id: str
    ) -> list[DesignItemResult]:
        """Return design items for the event, earliest deadline first."""
