"""Seed dev data from scripts/seed-data.json into Postgres.

Loads tenants (by code; creates if missing), users (with hashed password),
event types, task templates, design item types, workflows (validated through
WorkflowService) and events (via EventService, so matching workflows run).
Existing rows are matched by name and skipped.

Usage:
    python -m scripts.seed_dev_data [path/to/seed-data.json]

Requires: DATABASE_URL (Postgres) and a migrated database (alembic upgrade head).
"""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.api.v1.dependencies import build_workflow_engine, build_workflow_service
from eventops.application.dtos.event import EventCreate
from eventops.application.dtos.workflow import WorkflowActionCreate, WorkflowCreate
from eventops.application.use_cases.events.create_event import EventService
from eventops.core.tenant_context import set_tenant_id
from eventops.domain.exceptions import WorkflowValidationException
from eventops.infrastructure.persistence import database
from eventops.infrastructure.persistence.repositories import (
    DesignItemTypeRepository,
    EventRepository,
    EventTypeRepository,
    TaskTemplateRepository,
    TenantRepository,
    UserRepository,
)


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


def _for_tenant(rows: list[dict[str, Any]], code: str) -> list[dict[str, Any]]:
    return [r for r in rows if r.get("tenant_code") == code]


def _strip(row: dict[str, Any], *keys: str) -> dict[str, Any]:
    return {k: v for k, v in row.items() if k not in keys}


async def _seed_tenant(session: AsyncSession, tenant: dict[str, Any], data: dict) -> None:
    code = tenant["code"]
    tenant_repo = TenantRepository(session)
    existing = await tenant_repo.get_by_code(code)
    if existing:
        tenant_id = existing.id
        print(f"Tenant {code} exists -> {tenant_id}")
    else:
        created = await tenant_repo.create_tenant(
            code, tenant["name"], tenant.get("status", "active")
        )
        tenant_id = created.id
        print(f"Tenant {code} -> {tenant_id}")

    set_tenant_id(tenant_id)
    await database._set_tenant_context(session)

    user_repo = UserRepository(session)
    user_ids: dict[str, str] = {}
    for u in _for_tenant(data.get("users", []), code):
        found = await user_repo._get_by_username(tenant_id, u["username"])
        if found:
            user_ids[u["username"]] = found.id
            print(f"  User {u['username']} already exists, skip")
            continue
        user = await user_repo.create_user(
            tenant_id, u["username"], u["email"], u["password"], role=u.get("role", "staff")
        )
        user_ids[u["username"]] = user.id
        print(f"  User {u['username']} ({user.role}) -> {user.id}")

    event_type_repo = EventTypeRepository(session)
    event_type_ids: dict[str, str] = {}
    for et in _for_tenant(data.get("event_types", []), code):
        found = await event_type_repo.get_by_name(tenant_id, et["name"])
        if found is None:
            found = await event_type_repo.create_event_type(
                tenant_id, et["name"], description=et.get("description")
            )
            print(f"  Event type {et['name']} -> {found.id}")
        event_type_ids[et["name"]] = found.id

    template_repo = TaskTemplateRepository(session)
    template_ids = {t.name: t.id for t in await template_repo.list_by_tenant(tenant_id)}
    for tpl in _for_tenant(data.get("task_templates", []), code):
        if tpl["name"] in template_ids:
            continue
        created_tpl = await template_repo.create_template(tenant_id, _strip(tpl, "tenant_code"))
        template_ids[created_tpl.name] = created_tpl.id
        print(f"  Task template {created_tpl.name} -> {created_tpl.id}")

    item_type_repo = DesignItemTypeRepository(session)
    item_type_ids = {
        t.name: t.id
        for t in await item_type_repo.list_by_tenant(tenant_id, include_inactive=True)
    }
    for dit in _for_tenant(data.get("design_item_types", []), code):
        if dit["name"] in item_type_ids:
            continue
        created_dit = await item_type_repo.create_type(tenant_id, _strip(dit, "tenant_code"))
        item_type_ids[created_dit.name] = created_dit.id
        print(f"  Design item type {created_dit.name} ({created_dit.type}) -> {created_dit.id}")

    workflow_svc = build_workflow_service(session)
    for w in _for_tenant(data.get("workflows", []), code):
        if await workflow_svc.workflow_repo.get_by_name(tenant_id, w["name"]):
            print(f"  Workflow {w['name']} already exists, skip")
            continue
        actions = [
            WorkflowActionCreate(
                action_type=a["action_type"],
                task_template_id=template_ids.get(a.get("task_template", "")),
                design_item_type_id=item_type_ids.get(a.get("design_item_type", "")),
                assigned_to_user_id=user_ids.get(a.get("assigned_to", "")),
                config=a.get("config", {}),
            )
            for a in w["actions"]
        ]
        try:
            workflow = await workflow_svc.create_workflow(
                tenant_id,
                WorkflowCreate(
                    name=w["name"],
                    description=w.get("description"),
                    event_type_ids=[event_type_ids[name] for name in w["event_types"]],
                    is_active=w.get("is_active", True),
                    conditions=w.get("conditions", []),
                ),
                actions,
            )
        except WorkflowValidationException as e:
            print(f"  Skip workflow {w['name']}: {'; '.join(e.errors)}", file=sys.stderr)
            continue
        print(f"  Workflow {workflow.name} ({len(workflow.actions)} actions) -> {workflow.id}")

    engine = build_workflow_engine(session)
    event_svc = EventService(
        event_repo=EventRepository(session),
        event_type_repo=event_type_repo,
        workflow_engine_provider=lambda: engine,
    )
    for ev in _for_tenant(data.get("events", []), code):
        cmd = EventCreate(
            event_type_id=event_type_ids[ev["event_type"]],
            title=ev["title"],
            start_date=date.fromisoformat(ev["start_date"]) if ev.get("start_date") else None,
            status=ev.get("status", "scheduled"),
            location=ev.get("location"),
            details=ev.get("details", {}),
        )
        created_event, runs = await event_svc.create_event(
            tenant_id, cmd, user_id=user_ids.get(ev.get("created_by", ""))
        )
        summary = ", ".join(f"{r.workflow_name}={r.status}" for r in runs) or "no workflows"
        print(f"  Event {created_event.title} -> {created_event.id} ({summary})")


async def run(path: Path) -> None:
    _load_env()
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with path.open() as f:
        data = json.load(f)

    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print(
            "AsyncSessionLocal not configured. Set DATABASE_URL and run: alembic upgrade head",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        for tenant in data.get("tenants", []):
            async with database.AsyncSessionLocal() as session:
                async with session.begin():
                    await _seed_tenant(session, tenant, data)
    finally:
        set_tenant_id(None)
        await database.dispose_engine()

    print("Seed completed.")


def main() -> None:
    root = _project_root()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else root / "scripts" / "seed-data.json"
    if not path.is_absolute():
        path = (root / path).resolve()
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
