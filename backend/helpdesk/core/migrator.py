from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

from helpdesk.core.config import get_settings

ALEMBIC_INI_PATH = Path(__file__).resolve().parents[2] / "alembic.ini"
MIGRATIONS_PATH = Path(__file__).resolve().parents[2] / "migrations"


def _build_config(database_url: Optional[str] = None) -> Config:
    config = Config(str(ALEMBIC_INI_PATH))
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    config.set_main_option("sqlalchemy.url", database_url or get_settings().database_url)
    return config


async def run_migrations(database_url: Optional[str] = None) -> None:
    """Apply database migrations up to the latest revision."""

    config = _build_config(database_url)
    await asyncio.to_thread(command.upgrade, config, "head")
