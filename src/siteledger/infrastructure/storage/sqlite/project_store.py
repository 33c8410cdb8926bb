"""SQLite implementation of project storage."""

from datetime import UTC, datetime

import aiosqlite

from siteledger.config import get_logger
from siteledger.core.entities.project import Project, ProjectStatus
from siteledger.core.exceptions import DuplicateProjectError, ProjectNotFoundError
from siteledger.core.interfaces.project_store import IProjectStore
from siteledger.infrastructure.storage.sqlite.connection import ConnectionPool
from siteledger.infrastructure.storage.sqlite.timestamps import (
    from_storage_date,
    from_storage_time,
    to_storage_time,
)

logger = get_logger(__name__)


class SQLiteProjectStore(IProjectStore):
    """Projects and their lifecycle status."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def create_project(self, project: Project) -> Project:
        now = datetime.now(UTC)
        try:
            async with self._pool.transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO projects (
                        project_id, name, status, user_id, user_email,
                        start_date, end_date, confirmed_at, confirmed_by,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        project.project_id,
                        project.name,
                        project.status.value,
                        project.user_id,
                        project.user_email,
                        project.start_date.isoformat(),
                        project.end_date.isoformat() if project.end_date else None,
                        to_storage_time(project.confirmed_at) if project.confirmed_at else None,
                        project.confirmed_by,
                        to_storage_time(now),
                        to_storage_time(now),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateProjectError(project.project_id) from e

        logger.info("project_created", project_id=project.project_id, status=project.status.value)
        return project.model_copy(
            update={"id": cursor.lastrowid, "created_at": now, "updated_at": now}
        )

    async def get_project(self, project_id: str) -> Project | None:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM projects WHERE project_id = ?", (project_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_project(row)

    async def update_project(self, project: Project) -> Project:
        now = datetime.now(UTC)
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE projects SET
                    name = ?, status = ?, end_date = ?,
                    confirmed_at = ?, confirmed_by = ?, updated_at = ?
                WHERE project_id = ?
                """,
                (
                    project.name,
                    project.status.value,
                    project.end_date.isoformat() if project.end_date else None,
                    to_storage_time(project.confirmed_at) if project.confirmed_at else None,
                    project.confirmed_by,
                    to_storage_time(now),
                    project.project_id,
                ),
            )
            if cursor.rowcount == 0:
                raise ProjectNotFoundError(project.project_id)

        logger.info("project_updated", project_id=project.project_id, status=project.status.value)
        return project.model_copy(update={"updated_at": now})

    async def list_projects(
        self,
        status: ProjectStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Project]:
        async with self._pool.acquire() as conn:
            if status:
                cursor = await conn.execute(
                    """
                    SELECT * FROM projects
                    WHERE status = ?
                    ORDER BY created_at DESC
                    LIMIT ? OFFSET ?
                    """,
                    (status.value, limit, offset),
                )
            else:
                cursor = await conn.execute(
                    """
                    SELECT * FROM projects
                    ORDER BY created_at DESC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_project(row) for row in rows]

    @staticmethod
    def _row_to_project(row: aiosqlite.Row) -> Project:
        """Convert a database row to a Project entity."""
        return Project(
            id=row["id"],
            project_id=row["project_id"],
            name=row["name"],
            status=ProjectStatus(row["status"]),
            user_id=row["user_id"],
            user_email=row["user_email"],
            start_date=from_storage_date(row["start_date"]),
            end_date=from_storage_date(row["end_date"]),
            confirmed_at=from_storage_time(row["confirmed_at"]),
            confirmed_by=row["confirmed_by"],
            created_at=from_storage_time(row["created_at"]),
            updated_at=from_storage_time(row["updated_at"]),
        )
