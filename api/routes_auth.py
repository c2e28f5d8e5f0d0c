"""
api.routes_auth - /api/v1/auth sign-in, sign-out, current identity.
"""

from flask import request, jsonify

from api import api_bp
from api.guards import requires_role
from db import get_session
from services.session_context import sign_in, sign_out
from services.usuarios_service import UsuariosService


@api_bp.route("/auth/login", methods=["POST"])
def login():
    """POST /api/v1/auth/login  JSON: {email, password}"""
    data = request.get_json(silent=True) or {}
    email = str(data.get("email") or "")
    password = str(data.get("password") or "")
    if not email or not password:
        return jsonify({"error": "email and password are required"}), 400

    session = get_session()
    try:
        user = UsuariosService.authenticate(session, email, password)
        if user is None:
            return jsonify({"error": "invalid credentials"}), 401
        ctx = sign_in(user)
        return jsonify(ctx.to_dict())
    finally:
        session.close()


@api_bp.route("/auth/logout", methods=["POST"])
def logout():
    sign_out()
    return jsonify({"signed_out": True})


@api_bp.route("/auth/me")
@requires_role()
def whoami(ctx):
    return jsonify(ctx.to_dict())
