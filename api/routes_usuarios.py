"""
api.routes_usuarios - /api/v1/usuarios user management (admin only).
"""

from flask import request, jsonify

from api import api_bp
from api.guards import ADMINS, requires_role
from db import get_session
from services.errors import ValidationError
from services.usuarios_service import UsuariosService


@api_bp.route("/usuarios")
@requires_role(*ADMINS)
def list_usuarios(ctx):
    """GET /api/v1/usuarios?q="""
    session = get_session()
    try:
        users = UsuariosService.search(session, request.args.get("q", ""))
        return jsonify({"usuarios": [u.to_dict() for u in users]})
    finally:
        session.close()


@api_bp.route("/usuarios", methods=["POST"])
@requires_role(*ADMINS)
def create_usuario(ctx):
    """POST /api/v1/usuarios  JSON: {nombre, email, password, rol}"""
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        user = UsuariosService.create(session, data)
        session.commit()
        return jsonify(user.to_dict()), 201
    except ValidationError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 400
    finally:
        session.close()


@api_bp.route("/usuarios/<int:user_id>", methods=["PUT"])
@requires_role(*ADMINS)
def update_usuario(user_id: int, ctx):
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        user = UsuariosService.get(session, user_id)
        if not user:
            return jsonify({"error": "not found"}), 404
        UsuariosService.update(session, user, data)
        session.commit()
        return jsonify(user.to_dict())
    except ValidationError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 400
    finally:
        session.close()


@api_bp.route("/usuarios/<int:user_id>", methods=["DELETE"])
@requires_role(*ADMINS)
def delete_usuario(user_id: int, ctx):
    if user_id == ctx.user_id:
        return jsonify({"error": "cannot delete the signed-in user"}), 400
    session = get_session()
    try:
        user = UsuariosService.get(session, user_id)
        if not user:
            return jsonify({"error": "not found"}), 404
        UsuariosService.delete(session, user)
        session.commit()
        return jsonify({"deleted": user_id})
    finally:
        session.close()
