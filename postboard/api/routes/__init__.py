"""Route blueprints bundled for registration."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .auth import bp as auth_bp
from .comments import bp as comments_bp
from .health import bp as health_bp
from .posts import bp as posts_bp
from .users import bp as users_bp

# Each tuple: (blueprint, url_prefix_relative_to_API_BASE_PREFIX)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> / and /health
    (auth_bp, "/auth"),
    (users_bp, "/users"),
    (posts_bp, "/posts"),
    (comments_bp, "/comments"),
]
