"""Flask CLI command creating the database schema for local runs."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from postboard.core.extensions import db

LOGGER = logging.getLogger(__name__)


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    if current_app.config.get("DEBUG") or current_app.config.get("TESTING"):
        return
    raise click.ClickException("Refusing to drop tables outside development or testing.")


@click.command("init-db")
@click.option("--drop", is_flag=True, help="Drop every table before creating it again.")
@with_appcontext
def init_db_command(drop: bool) -> None:
    """Create all tables known to the model metadata."""
    if drop:
        _ensure_non_production()
        db.drop_all()
        LOGGER.warning("init-db: dropped all tables")
    db.create_all()
    tables = sorted(db.metadata.tables)
    LOGGER.info("init-db: ensured tables %s", tables)
    click.echo(f"Tables ready: {', '.join(tables)}")
