from __future__ import annotations

from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Engine

from app.config import is_production_mode, settings
from app.db.base import Base

ALEMBIC_INI_PATH = Path(__file__).resolve().parents[2] / "alembic.ini"


class SchemaOutOfDateError(RuntimeError):
    def __init__(self, current: str | None, head: str) -> None:
        super().__init__(
            f"Database schema not up to date (at {current or 'empty'}, head {head}). "
            "Run: alembic upgrade head"
        )
        self.current = current
        self.head = head


def get_alembic_head_revision() -> str:
    script = ScriptDirectory.from_config(Config(str(ALEMBIC_INI_PATH)))
    return script.get_current_head()


def get_current_db_revision(engine: Engine) -> str | None:
    with engine.connect() as connection:
        return MigrationContext.configure(connection).get_current_revision()


def assert_db_is_up_to_date(engine: Engine) -> None:
    current = get_current_db_revision(engine)
    head = get_alembic_head_revision()
    if current != head:
        raise SchemaOutOfDateError(current, head)


def prepare_schema(engine: Engine) -> None:
    """Create the delivery tables in demo and test runs; elsewhere require the Alembic head."""
    if not settings.auto_create_schema:
        assert_db_is_up_to_date(engine)
        return
    if is_production_mode() and not settings.testing:
        raise RuntimeError("AUTO_CREATE_SCHEMA must be disabled in APP_MODE=production")

    Base.metadata.create_all(bind=engine)
