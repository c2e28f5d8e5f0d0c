"""
api.routes_asociados - /api/v1/asociados CRUD endpoints.
"""

from flask import request, jsonify

import config
from api import api_bp
from api.guards import ADMINS, EDITORS, requires_role
from db import get_session
from services.asociados_service import AsociadosService
from services.errors import DuplicateError, ValidationError


@api_bp.route("/asociados")
@requires_role()
def list_asociados(ctx):
    """
    GET /api/v1/asociados?q=&limit=10&offset=0

    Filter by name / surname / national ID / sector, sorted by
    surname then name.
    """
    q      = request.args.get("q", "").strip()
    limit  = min(request.args.get("limit", config.DEFAULT_PAGE_SIZE, type=int),
                 config.API_MAX_LIMIT)
    offset = max(request.args.get("offset", 0, type=int), 0)

    session = get_session()
    try:
        members, total = AsociadosService.search(session, q=q, limit=limit, offset=offset)
        return jsonify({
            "total": total,
            "offset": offset,
            "limit": limit,
            "asociados": [m.to_dict() for m in members],
        })
    finally:
        session.close()


@api_bp.route("/asociados/<int:member_id>")
@requires_role()
def get_asociado(member_id: int, ctx):
    session = get_session()
    try:
        member = AsociadosService.get(session, member_id)
        if not member:
            return jsonify({"error": "not found"}), 404
        return jsonify(member.to_dict())
    finally:
        session.close()


@api_bp.route("/asociados", methods=["POST"])
@requires_role(*EDITORS)
def create_asociado(ctx):
    """
    POST /api/v1/asociados

    JSON body with canonical member fields.  409 if the national ID is
    already registered.
    """
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        member = AsociadosService.create(session, data)
        session.commit()
        return jsonify(member.to_dict()), 201
    except DuplicateError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 409
    except ValidationError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 400
    finally:
        session.close()


@api_bp.route("/asociados/<int:member_id>", methods=["PUT"])
@requires_role(*EDITORS)
def update_asociado(member_id: int, ctx):
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        member = AsociadosService.get(session, member_id)
        if not member:
            return jsonify({"error": "not found"}), 404
        AsociadosService.update(session, member, data)
        session.commit()
        return jsonify(member.to_dict())
    except ValidationError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 400
    finally:
        session.close()


@api_bp.route("/asociados/<int:member_id>", methods=["DELETE"])
@requires_role(*EDITORS)
def delete_asociado(member_id: int, ctx):
    session = get_session()
    try:
        member = AsociadosService.get(session, member_id)
        if not member:
            return jsonify({"error": "not found"}), 404
        AsociadosService.delete(session, member)
        session.commit()
        return jsonify({"deleted": member_id})
    finally:
        session.close()


@api_bp.route("/asociados", methods=["DELETE"])
@requires_role(*ADMINS)
def delete_all_asociados(ctx):
    """DELETE /api/v1/asociados - remove every member (admin only)."""
    session = get_session()
    try:
        deleted = AsociadosService.delete_all(session)
        session.commit()
        return jsonify({"deleted": deleted})
    finally:
        session.close()
