"""
api.guards - Sign-in and role checks for API routes.

    @api_bp.route(...)
    @requires_role("admin")
    def view(ctx): ...

The wrapped view receives the caller's SessionContext as `ctx`.
"""

from __future__ import annotations

from functools import wraps

from flask import jsonify

from db import get_session
from services.session_context import current_context

EDITORS = ("admin", "editor")
ADMINS = ("admin",)


def requires_role(*roles: str):
    """No roles given → any signed-in user."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            session = get_session()
            try:
                ctx = current_context(session)
            finally:
                session.close()

            if ctx is None:
                return jsonify({"error": "authentication required"}), 401
            if roles and ctx.rol not in roles:
                return jsonify({"error": "insufficient role"}), 403
            return view(*args, ctx=ctx, **kwargs)

        return wrapper

    return decorator
