"""Tests for DatabaseManager."""

from pathlib import Path

from sqlalchemy import inspect

from memopad.domain.entities.memo import MemoFormData
from memopad.infrastructure.persistence import DatabaseManager, SQLMemoRepository


class TestDatabaseManager:
    """DatabaseManager tests."""

    def test_get_engine_with_sqlite_url(self, tmp_path: Path) -> None:
        """Test engine creation with a SQLite URL."""
        db_path = tmp_path / "test.db"
        manager = DatabaseManager(f"sqlite+aiosqlite:///{db_path}")

        engine = manager.get_engine()

        assert engine is not None
        assert "sqlite" in str(engine.url)

    def test_get_engine_is_cached(self, tmp_path: Path) -> None:
        """Test that the engine is created once."""
        manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

        assert manager.get_engine() is manager.get_engine()

    def test_get_engine_creates_parent_directory(self, tmp_path: Path) -> None:
        """Test that parent directory is created if not exists."""
        db_path = tmp_path / "subdir" / "nested" / "test.db"
        manager = DatabaseManager(f"sqlite+aiosqlite:///{db_path}")

        manager.get_engine()

        assert db_path.parent.exists()

    def test_access_key_becomes_password(self) -> None:
        """Test that the access key is applied as the URL password."""
        manager = DatabaseManager(
            "postgresql+asyncpg://memopad@db.example.com/memos", "secret-key"
        )

        url = manager._build_url()

        assert url.password == "secret-key"
        assert url.username == "memopad"

    async def test_create_tables(self, tmp_path: Path) -> None:
        """Test that the memos table is created and creation is idempotent."""
        manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

        await manager.create_tables()
        await manager.create_tables()

        engine = manager.get_engine()
        async with engine.connect() as conn:
            tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )
        await manager.close()

        assert "memos" in tables

    async def test_is_healthy(self, tmp_path: Path) -> None:
        """Test health check against a reachable database."""
        manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

        assert await manager.is_healthy() is True
        await manager.close()

    async def test_session_persists_across_repository_calls(
        self, tmp_path: Path
    ) -> None:
        """Test that sessions from get_session share one database."""
        manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
        await manager.create_tables()
        repository = SQLMemoRepository(manager.get_session)

        memo = await repository.create(MemoFormData(title="t", content="c"))
        memos = await repository.list()
        await manager.close()

        assert [m.id for m in memos] == [memo.id]

    async def test_close_resets_engine(self, tmp_path: Path) -> None:
        """Test that close disposes the engine and allows re-creation."""
        manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
        first = manager.get_engine()

        await manager.close()

        assert manager.get_engine() is not first
        await manager.close()
