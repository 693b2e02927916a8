import pytest
from sqlalchemy import create_engine, inspect

from helpdesk.core.migrator import run_migrations


@pytest.mark.anyio("asyncio")
async def test_migrations_create_schema(tmp_path):
    db_path = tmp_path / "migrated.db"

    await run_migrations(f"sqlite+aiosqlite:///{db_path}")

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        ticket_fks = inspector.get_foreign_keys("tickets")
    finally:
        engine.dispose()

    assert {"users", "groups", "group_members", "group_send_mail_to", "tickets", "alembic_version"} <= tables
    assert ticket_fks[0]["referred_table"] == "groups"
