"""Flask extension singletons shared by the app factory, models and CLI."""

from __future__ import annotations

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Names for the posts.sender and comments.post_id indexes and the comments ->
# posts foreign key. ``uq_users_email`` is named on the model.
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# Repositories flush explicitly.
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()


def init_app(app: Flask) -> None:
    """Bind the database, migrations and access-token manager to ``app``."""
    db.init_app(app)

    # Register User/Post/Comment on the metadata before Flask-Migrate reads it
    from postboard import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
