import os
from pathlib import Path
from unittest.mock import patch

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from resume_builder.app.core.config import get_settings
from resume_builder.app.database.database import create_db_engine
from resume_builder.app.models import Base
from resume_builder.app.storage import DatabaseStorage

ROOT = Path(__file__).resolve().parent.parent


def _upgrade_to_head(url: str) -> None:
    # No ini file, so env.py leaves the logging configuration alone.
    config = Config()
    config.set_main_option("script_location", str(ROOT / "alembic"))

    get_settings.cache_clear()
    try:
        with patch.dict(os.environ, {"DATABASE_URL": url}):
            command.upgrade(config, "head")
    finally:
        get_settings.cache_clear()


def test_initial_revision_matches_models(tmp_path):
    """Upgrading an empty database yields the tables the models declare."""
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    _upgrade_to_head(url)

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert set(inspector.get_table_names()) == set(Base.metadata.tables) | {"alembic_version"}
        for name, table in Base.metadata.tables.items():
            columns = {column["name"] for column in inspector.get_columns(name)}
            assert columns == set(table.columns.keys()), name

        foreign_keys = {
            (fk["constrained_columns"][0], fk["referred_table"])
            for fk in inspector.get_foreign_keys("resumes")
        }
        assert foreign_keys == {("user_id", "users"), ("template_id", "templates")}
    finally:
        engine.dispose()


def test_storage_seeds_a_migrated_database(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    _upgrade_to_head(url)

    storage = DatabaseStorage(create_db_engine(url))
    try:
        assert [t.name for t in storage.get_templates()] == ["Professional", "Creative"]
    finally:
        storage.close()
