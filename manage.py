import logging
import subprocess

import click
import uvicorn

from resume_builder.app.core.config import get_settings
from resume_builder.app.core.security import get_password_hash
from resume_builder.app.database.database import create_db_engine
from resume_builder.app.schemas.user import UserCreate
from resume_builder.app.storage import DatabaseStorage, UsernameTakenError

log = logging.getLogger(__name__)


@click.group()
def cli():
    """Management script for the Resume Builder application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command("run")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind.")
@click.option("--port", default=8000, show_default=True, help="Port to bind.")
@click.option("--reload", is_flag=True, help="Reload on code changes.")
def run(host: str, port: int, reload: bool):
    """
    Serve the API with uvicorn.

    Args:
        host (str): Interface to bind.
        port (int): Port to bind.
        reload (bool): Whether to reload on code changes.

    Notes:
        1. The application is built through the `create_app` factory, so the
           storage backend is chosen from the environment at startup.

    """
    _msg = f"Starting server on {host}:{port}"
    log.info(_msg)
    uvicorn.run(
        "resume_builder.app.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@cli.command("init-db")
def init_db():
    """
    Create missing tables and seed the default templates.

    Notes:
        1. Builds an engine from the configured database URL.
        2. Constructing `DatabaseStorage` with `create_all=True` creates the tables
           and seeds templates only if none exist.

    """
    _msg = "init_db starting"
    log.debug(_msg)
    settings = get_settings()
    storage = DatabaseStorage(create_db_engine(settings.database_url), create_all=True)
    try:
        templates = storage.get_templates()
        click.echo(f"Database ready with {len(templates)} templates.")
    finally:
        storage.close()
    _msg = "init_db returning"
    log.debug(_msg)


@cli.command("create-user")
@click.option("--username", required=True, help="Username for the new user.")
@click.option(
    "--password",
    required=True,
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password for the new user.",
)
def create_user(username: str, password: str):
    """
    Create a user account in the database backend.

    Args:
        username (str): The username for the new user.
        password (str): The password for the new user; stored as a bcrypt hash.

    """
    _msg = "create_user starting"
    log.debug(_msg)
    settings = get_settings()
    storage = DatabaseStorage(create_db_engine(settings.database_url))
    try:
        user = storage.create_user(
            UserCreate(username=username, password=get_password_hash(password)),
        )
        _success_msg = f"User '{user.username}' created with id {user.id}."
        click.echo(_success_msg)
        log.info(_success_msg)
    except UsernameTakenError as e:
        _error_msg = f"Error creating user: {e}"
        click.echo(_error_msg, err=True)
        log.error(_error_msg)
    finally:
        storage.close()
    _msg = "create_user returning"
    log.debug(_msg)


@cli.command("generate-migration")
@click.option(
    "-m",
    "--message",
    required=True,
    help="A short message describing the migration.",
)
def generate_migration(message: str):
    """
    Generate a new database migration script.

    This command wraps 'alembic revision --autogenerate'.

    Args:
        message (str): A short message describing the migration.

    """
    _msg = "generate_migration starting"
    log.debug(_msg)
    click.echo("Generating new migration...")
    try:
        command = ["alembic", "revision", "--autogenerate", "-m", message]
        subprocess.run(command, check=True)
        _success_msg = f"Successfully generated new migration: {message}"
        click.echo(_success_msg)
        log.info(_success_msg)
    except subprocess.CalledProcessError as e:
        _error_msg = f"An error occurred while generating migration: {e}"
        click.echo(_error_msg, err=True)
        log.exception(_error_msg)
    except FileNotFoundError:
        _error_msg = "Error: 'alembic' command not found. Make sure Alembic is installed and in your PATH."
        click.echo(_error_msg, err=True)
        log.exception(_error_msg)
    _msg = "generate_migration returning"
    log.debug(_msg)


@cli.command("apply-migrations")
def apply_migrations():
    """
    Apply all pending migrations to the database.

    This command wraps 'alembic upgrade head'.

    """
    _msg = "apply_migrations starting"
    log.debug(_msg)
    click.echo("Applying database migrations...")
    try:
        command = ["alembic", "upgrade", "head"]
        subprocess.run(command, check=True)
        _success_msg = "Successfully applied all migrations."
        click.echo(_success_msg)
        log.info(_success_msg)
    except subprocess.CalledProcessError as e:
        _error_msg = f"An error occurred while applying migrations: {e}"
        click.echo(_error_msg, err=True)
        log.exception(_error_msg)
    except FileNotFoundError:
        _error_msg = "Error: 'alembic' command not found. Make sure Alembic is installed and in your PATH."
        click.echo(_error_msg, err=True)
        log.exception(_error_msg)
    _msg = "apply_migrations returning"
    log.debug(_msg)


def main():
    """Run the command line interface."""
    cli()


if __name__ == "__main__":
    main()
