"""
Tenant-scoped content gateway.

One implementation serves every entity in the registry:

* reads take a resolved tenant id or None. None means "no tenant", which is
  answered with the entity's demo payload and ``demo: true``. A storage error
  on a public read degrades the same way; on a dashboard read it is raised.
* writes require a tenant id. Every update and delete is preceded by an
  ownership check and itself carries ``WHERE id = ? AND user_id = ?``, so a
  row owned by someone else is indistinguishable from a missing one.
"""

import asyncio
import json
import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from sqlalchemy import and_, select

from folio.database import QueryExecutor
from folio.errors import ErrorKind, StorageFailure
from folio.gateway.demo import demo_payload
from folio.gateway.entities import ENTITIES, EntitySpec, is_empty
from folio.models import Project, ProjectImage, Setting
from folio.schemas.content import ContentList, ReorderItem, WriteOutcome
from folio.storage.objects import ObjectLister
from folio.storage.repositories import (
    delete_owned,
    delete_scoped,
    insert_row,
    new_id,
    now_utc,
    select_owned,
    select_scoped,
    update_owned,
)

logger = logging.getLogger(__name__)

AUTH_REQUIRED = "Authentication required"


class WriteOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class UnknownEntity(KeyError):
    pass


def _coerce_limit(value: Any) -> int | None:
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return None
    return limit if limit > 0 else None


def _decode_setting(value: str | None) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except ValueError:
        return value


class ContentGateway:
    """Tenant-scoped reads and writes for every registered entity type."""

    def __init__(self, executor: QueryExecutor, registry: Mapping[str, EntitySpec] = ENTITIES):
        self._executor = executor
        self._registry = registry

    def spec(self, entity: str) -> EntitySpec:
        try:
            return self._registry[entity]
        except KeyError:
            raise UnknownEntity(entity) from None

    # Reads

    async def list_for_tenant(
        self,
        entity: str,
        tenant_id: str | None,
        filters: Mapping[str, Any] | None = None,
        public: bool = True,
    ) -> ContentList:
        """
        Rows owned by ``tenant_id``, or demo data when there is no tenant.

        A resolved tenant with no rows gets an empty list, never demo data.
        Raises StorageFailure only when ``public`` is False.
        """
        spec = self.spec(entity)
        if tenant_id is None:
            logger.info("No tenant resolved, returning demo %s", entity)
            return ContentList(data=demo_payload(entity), demo=True)
        try:
            rows = await self._fetch(spec, tenant_id, filters or {}, public)
        except StorageFailure as exc:
            if not public:
                raise
            logger.warning(
                "Failed to load %s for tenant %s, falling back to demo data: %s",
                entity,
                tenant_id,
                exc,
            )
            return ContentList(data=demo_payload(entity), demo=True)
        logger.debug("%d %s returned for tenant %s", len(rows), entity, tenant_id)
        return ContentList(data=rows, demo=False)

    async def get_for_tenant(self, entity: str, tenant_id: str | None, entity_id: str) -> WriteOutcome:
        spec = self.spec(entity)
        if tenant_id is None:
            return WriteOutcome.fail(ErrorKind.AUTH_REQUIRED, AUTH_REQUIRED)
        try:
            row = await self._owned(spec, tenant_id, entity_id)
        except StorageFailure:
            return WriteOutcome.fail(ErrorKind.STORAGE, f"Failed to fetch {spec.label.lower()}")
        if row is None:
            return WriteOutcome.fail(ErrorKind.NOT_FOUND, spec.not_found)
        return WriteOutcome.ok(row)

    async def _fetch(
        self, spec: EntitySpec, tenant_id: str, filters: Mapping[str, Any], public: bool
    ) -> list[dict]:
        table = spec.table
        where = list(spec.filters(table, filters)) if spec.filters else []
        if public and spec.public_filter is not None:
            where.extend(spec.public_filter(table))
        limit = _coerce_limit(filters.get("limit"))

        if spec.children is not None:
            result = await self._executor.execute(self._joined_select(spec, tenant_id, where))
            if not result.success:
                raise StorageFailure(result.error or f"{spec.name} query failed")
            rows = self._attach_children(spec, result.rows)
            return rows[:limit] if limit else rows

        statement = select_scoped(table, tenant_id, spec.order_by(table), where, limit)
        result = await self._executor.execute(statement)
        if not result.success:
            raise StorageFailure(result.error or f"{spec.name} query failed")
        return result.rows

    async def _owned(self, spec: EntitySpec, tenant_id: str, entity_id: str) -> dict | None:
        """The row if it exists and belongs to ``tenant_id``; both misses look the same."""
        if spec.children is not None:
            statement = self._joined_select(spec, tenant_id, [spec.table.c.id == entity_id])
            result = await self._executor.execute(statement)
            if not result.success:
                raise StorageFailure(result.error or f"{spec.name} query failed")
            rows = self._attach_children(spec, result.rows)
            return rows[0] if rows else None
        result = await self._executor.execute(select_owned(spec.table, entity_id, tenant_id))
        if not result.success:
            raise StorageFailure(result.error or f"{spec.name} query failed")
        return result.first

    @staticmethod
    def _joined_select(spec: EntitySpec, tenant_id: str, where: list):
        parent = spec.table
        child = spec.children.model.__table__
        key = spec.children.key
        condition = and_(
            child.c[spec.children.foreign_key] == parent.c.id,
            child.c.user_id == parent.c.user_id,
        )
        return (
            select(parent, *[column.label(f"{key}__{column.name}") for column in child.c])
            .select_from(parent.outerjoin(child, condition))
            .where(parent.c.user_id == tenant_id, *where)
            .order_by(*spec.order_by(parent))
        )

    @staticmethod
    def _attach_children(spec: EntitySpec, rows: list[dict]) -> list[dict]:
        # Join order is not the child order; children are re-sorted here.
        key = spec.children.key
        prefix = f"{key}__"
        parents: dict[str, dict] = {}
        for row in rows:
            parent = parents.get(row["id"])
            if parent is None:
                parent = {k: v for k, v in row.items() if not k.startswith(prefix)}
                parent[key] = []
                parents[row["id"]] = parent
            child = {k[len(prefix):]: v for k, v in row.items() if k.startswith(prefix)}
            if child.get("id") is not None:
                parent[key].append(child)
        for parent in parents.values():
            parent[key].sort(key=spec.children.sort_key)
        return list(parents.values())

    # Writes

    async def write_for_tenant(
        self,
        entity: str,
        tenant_id: str | None,
        operation: WriteOperation | str,
        payload: Mapping[str, Any] | None = None,
        entity_id: str | None = None,
    ) -> WriteOutcome:
        spec = self.spec(entity)
        if tenant_id is None:
            return WriteOutcome.fail(ErrorKind.AUTH_REQUIRED, AUTH_REQUIRED)
        operation = WriteOperation(operation)
        if operation is WriteOperation.CREATE:
            return await self._create(spec, tenant_id, payload or {})
        if not entity_id:
            return WriteOutcome.fail(ErrorKind.VALIDATION, f"{spec.label} ID is required")
        if operation is WriteOperation.UPDATE:
            return await self._update(spec, tenant_id, entity_id, payload or {})
        return await self._delete(spec, tenant_id, entity_id)

    async def _create(self, spec: EntitySpec, tenant_id: str, payload: Mapping[str, Any]) -> WriteOutcome:
        values = spec.clean(payload, partial=False)
        error = spec.validate(values, partial=False) or (spec.rules(values) if spec.rules else None)
        if error:
            return WriteOutcome.fail(ErrorKind.VALIDATION, error)
        refused = await self._check_references(spec, tenant_id, values)
        if refused is not None:
            return refused

        now = now_utc()
        row = spec.with_defaults(values)
        row.update(id=new_id(), user_id=tenant_id, created_at=now, updated_at=now)
        result = await self._executor.execute(insert_row(spec.table, row))
        if not result.success:
            return WriteOutcome.fail(ErrorKind.STORAGE, f"Failed to create {spec.label.lower()}")
        return await self._reload(spec, tenant_id, row["id"], f"{spec.label} created successfully")

    async def _update(
        self, spec: EntitySpec, tenant_id: str, entity_id: str, payload: Mapping[str, Any]
    ) -> WriteOutcome:
        values = spec.clean(payload, partial=True)
        error = spec.validate(values, partial=True)
        if error:
            return WriteOutcome.fail(ErrorKind.VALIDATION, error)
        try:
            existing = await self._owned(spec, tenant_id, entity_id)
        except StorageFailure:
            return WriteOutcome.fail(ErrorKind.STORAGE, f"Failed to update {spec.label.lower()}")
        if existing is None:
            return WriteOutcome.fail(ErrorKind.NOT_FOUND, spec.not_found)
        if spec.rules is not None:
            error = spec.rules({**existing, **values})
            if error:
                return WriteOutcome.fail(ErrorKind.VALIDATION, error)
        refused = await self._check_references(spec, tenant_id, values)
        if refused is not None:
            return refused

        values["updated_at"] = now_utc()
        result = await self._executor.execute(update_owned(spec.table, entity_id, tenant_id, values))
        if not result.success:
            return WriteOutcome.fail(ErrorKind.STORAGE, f"Failed to update {spec.label.lower()}")
        if result.data == 0:
            return WriteOutcome.fail(ErrorKind.NOT_FOUND, spec.not_found)
        return await self._reload(spec, tenant_id, entity_id, f"{spec.label} updated successfully")

    async def _delete(self, spec: EntitySpec, tenant_id: str, entity_id: str) -> WriteOutcome:
        try:
            existing = await self._owned(spec, tenant_id, entity_id)
        except StorageFailure:
            return WriteOutcome.fail(ErrorKind.STORAGE, f"Failed to delete {spec.label.lower()}")
        if existing is None:
            return WriteOutcome.fail(ErrorKind.NOT_FOUND, spec.not_found)
        result = await self._executor.execute(delete_owned(spec.table, entity_id, tenant_id))
        if not result.success:
            return WriteOutcome.fail(ErrorKind.STORAGE, f"Failed to delete {spec.label.lower()}")
        if result.data == 0:
            return WriteOutcome.fail(ErrorKind.NOT_FOUND, spec.not_found)
        logger.info("Deleted %s %s for tenant %s", spec.name, entity_id, tenant_id)
        return WriteOutcome.ok(message=f"{spec.label} deleted successfully")

    async def _check_references(
        self, spec: EntitySpec, tenant_id: str, values: Mapping[str, Any]
    ) -> WriteOutcome | None:
        for reference in spec.references:
            target_id = values.get(reference.column)
            if target_id is None:
                continue
            result = await self._executor.execute(
                select_owned(reference.model.__table__, target_id, tenant_id)
            )
            if not result.success:
                return WriteOutcome.fail(ErrorKind.STORAGE, f"Failed to save {spec.label.lower()}")
            if result.first is None:
                return WriteOutcome.fail(ErrorKind.NOT_FOUND, reference.not_found)
        return None

    async def _reload(self, spec: EntitySpec, tenant_id: str, entity_id: str, message: str) -> WriteOutcome:
        try:
            row = await self._owned(spec, tenant_id, entity_id)
        except StorageFailure:
            row = None
        return WriteOutcome.ok(row, message)

    async def reorder(
        self, entity: str, tenant_id: str | None, items: Sequence[ReorderItem]
    ) -> WriteOutcome:
        """
        Apply ``sort_order`` per row, one scoped UPDATE each, issued concurrently.

        Succeeds only if every update succeeds; there is no cross-row transaction.
        """
        spec = self.spec(entity)
        if tenant_id is None:
            return WriteOutcome.fail(ErrorKind.AUTH_REQUIRED, AUTH_REQUIRED)
        if not spec.sortable:
            return WriteOutcome.fail(ErrorKind.VALIDATION, f"{spec.name} cannot be reordered")
        if not items:
            return WriteOutcome.fail(ErrorKind.VALIDATION, f"{spec.label} list is required")

        now = now_utc()
        results = await asyncio.gather(
            *(
                self._executor.execute(
                    update_owned(
                        spec.table, item.id, tenant_id, {"sort_order": item.sort_order, "updated_at": now}
                    )
                )
                for item in items
            )
        )
        if not all(result.success for result in results):
            return WriteOutcome.fail(ErrorKind.STORAGE, f"Failed to reorder {spec.name}")
        return WriteOutcome.ok(message=f"{spec.name.capitalize()} reordered successfully")

    async def increment_views(self, tenant_id: str | None, project_id: str) -> WriteOutcome:
        if tenant_id is None:
            return WriteOutcome.fail(ErrorKind.AUTH_REQUIRED, AUTH_REQUIRED)
        table = Project.__table__
        statement = update_owned(table, project_id, tenant_id, {"views": table.c.views + 1})
        result = await self._executor.execute(statement)
        if not result.success:
            return WriteOutcome.fail(ErrorKind.STORAGE, "Failed to record view")
        if result.data == 0:
            return WriteOutcome.fail(ErrorKind.NOT_FOUND, "Project not found")
        return WriteOutcome.ok()

    # Project images

    async def add_project_image(
        self,
        tenant_id: str | None,
        project_id: str,
        values: Mapping[str, Any],
        default_bucket: str = "images",
    ) -> WriteOutcome:
        """Attach an uploaded file to a project the caller owns."""
        if tenant_id is None:
            return WriteOutcome.fail(ErrorKind.AUTH_REQUIRED, AUTH_REQUIRED)
        if any(is_empty(values.get(name)) for name in ("url", "path", "name")):
            return WriteOutcome.fail(ErrorKind.VALIDATION, "URL, path, and name are required")
        refused = await self._require_project(tenant_id, project_id)
        if refused is not None:
            return refused

        table = ProjectImage.__table__
        row = {
            "id": new_id(),
            "project_id": project_id,
            "user_id": tenant_id,
            "url": values["url"],
            "path": values["path"],
            "name": values["name"],
            "original_name": values.get("original_name") or values["name"],
            "size": values.get("size"),
            "type": values.get("type"),
            "bucket": values.get("bucket") or default_bucket,
            "order_index": values["order_index"] if values.get("order_index") is not None else 1,
            "created_at": now_utc(),
        }
        result = await self._executor.execute(insert_row(table, row))
        if not result.success:
            return WriteOutcome.fail(ErrorKind.STORAGE, "Failed to add project image")
        created = await self._executor.execute(select_owned(table, row["id"], tenant_id))
        return WriteOutcome.ok(created.first, "Project image added successfully")

    async def delete_project_images(self, tenant_id: str | None, project_id: str) -> WriteOutcome:
        """Remove every image of a project the caller owns."""
        if tenant_id is None:
            return WriteOutcome.fail(ErrorKind.AUTH_REQUIRED, AUTH_REQUIRED)
        refused = await self._require_project(tenant_id, project_id)
        if refused is not None:
            return refused
        table = ProjectImage.__table__
        result = await self._executor.execute(
            delete_scoped(table, tenant_id, table.c.project_id == project_id)
        )
        if not result.success:
            return WriteOutcome.fail(ErrorKind.STORAGE, "Failed to delete project images")
        logger.info("Deleted %s images of project %s", result.data, project_id)
        return WriteOutcome.ok(message="Project images deleted successfully")

    async def _require_project(self, tenant_id: str, project_id: str) -> WriteOutcome | None:
        result = await self._executor.execute(select_owned(Project.__table__, project_id, tenant_id))
        if not result.success:
            return WriteOutcome.fail(ErrorKind.STORAGE, "Failed to load project")
        if result.first is None:
            return WriteOutcome.fail(ErrorKind.NOT_FOUND, "Project not found")
        return None

    # Settings (key/value per tenant)

    async def get_settings(self, tenant_id: str | None, public: bool = True) -> ContentList:
        if tenant_id is None:
            logger.info("No tenant resolved, returning demo settings")
            return ContentList(data=demo_payload("settings"), demo=True)
        try:
            settings = await self._load_settings(tenant_id)
        except StorageFailure as exc:
            if not public:
                raise
            logger.warning("Failed to load settings for %s, falling back to demo data: %s", tenant_id, exc)
            return ContentList(data=demo_payload("settings"), demo=True)
        return ContentList(data=settings, demo=False)

    async def _load_settings(self, tenant_id: str) -> dict[str, Any]:
        table = Setting.__table__
        result = await self._executor.execute(select_scoped(table, tenant_id, [table.c.setting_key]))
        if not result.success:
            raise StorageFailure(result.error or "settings query failed")
        return {row["setting_key"]: _decode_setting(row["setting_value"]) for row in result.rows}

    async def update_settings(self, tenant_id: str | None, values: Any) -> WriteOutcome:
        """Upsert each key of ``values`` in one transaction."""
        if tenant_id is None:
            return WriteOutcome.fail(ErrorKind.AUTH_REQUIRED, AUTH_REQUIRED)
        if not isinstance(values, Mapping) or not values:
            return WriteOutcome.fail(ErrorKind.VALIDATION, "Settings object is required")

        table = Setting.__table__
        existing = await self._executor.execute(
            select(table.c.setting_key).where(table.c.user_id == tenant_id)
        )
        if not existing.success:
            return WriteOutcome.fail(ErrorKind.STORAGE, "Failed to update settings")
        known = {row["setting_key"] for row in existing.rows}

        now = now_utc()
        statements = []
        for key, value in values.items():
            encoded = json.dumps(value)
            if key in known:
                statements.append(
                    table.update()
                    .where(table.c.user_id == tenant_id, table.c.setting_key == key)
                    .values(setting_value=encoded, updated_at=now)
                )
            else:
                statements.append(
                    insert_row(
                        table,
                        {
                            "id": new_id(),
                            "user_id": tenant_id,
                            "setting_key": key,
                            "setting_value": encoded,
                            "created_at": now,
                            "updated_at": now,
                        },
                    )
                )
        result = await self._executor.execute_many(statements)
        if not result.success:
            return WriteOutcome.fail(ErrorKind.STORAGE, "Failed to update settings")
        try:
            settings = await self._load_settings(tenant_id)
        except StorageFailure:
            settings = None
        return WriteOutcome.ok(settings, "Settings updated successfully")

    # Gallery (object storage)

    async def list_gallery(
        self, tenant_id: str | None, lister: ObjectLister | None, public: bool = True
    ) -> ContentList:
        if tenant_id is None:
            return ContentList(data=demo_payload("gallery"), demo=True)
        if lister is None:
            logger.info("Object storage not configured, returning empty gallery")
            return ContentList(data=[], demo=False)
        try:
            images = await lister.list_images(tenant_id)
        except StorageFailure as exc:
            if not public:
                raise
            logger.warning("Failed to list gallery for %s: %s", tenant_id, exc)
            return ContentList(data=demo_payload("gallery"), demo=True)
        return ContentList(data=images, demo=False)
