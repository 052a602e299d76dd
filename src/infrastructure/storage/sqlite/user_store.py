"""SQLite implementation of application user storage."""

import aiosqlite

from src.core.entities.user import AppUser, Role
from src.core.exceptions import DuplicateResourceError
from src.core.interfaces.user_store import IUserStore
from src.infrastructure.storage.sqlite._codec import from_db_timestamp, to_db_timestamp


class SQLiteUserStore(IUserStore):
    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def get_by_email(self, email: str) -> AppUser | None:
        cursor = await self._conn.execute(
            "SELECT * FROM app_users WHERE email = ? COLLATE NOCASE", (email,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return AppUser(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            role=Role(row["role"]),
            created_at=from_db_timestamp(row["created_at"]),
        )

    async def add(self, user: AppUser) -> AppUser:
        try:
            await self._conn.execute(
                "INSERT INTO app_users (id, email, name, role, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    user.id,
                    user.email,
                    user.name,
                    user.role.value,
                    to_db_timestamp(user.created_at),
                ),
            )
        except aiosqlite.IntegrityError as e:
            raise DuplicateResourceError("User", user.email) from e
        return user
