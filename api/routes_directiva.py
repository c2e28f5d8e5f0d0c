"""
api.routes_directiva - /api/v1/directiva board officer endpoints.
"""

from flask import request, jsonify

from api import api_bp
from api.guards import EDITORS, requires_role
from db import get_session
from services.errors import ValidationError
from services.directiva_service import CARGOS, DirectivaService, cargo_title


@api_bp.route("/directiva")
@requires_role()
def list_directiva(ctx):
    """GET /api/v1/directiva?activo=1"""
    only_active = request.args.get("activo", "0") == "1"
    session = get_session()
    try:
        members = DirectivaService.list_all(session, only_active=only_active)
        return jsonify({"directiva": [m.to_dict() for m in members]})
    finally:
        session.close()


@api_bp.route("/directiva/cargos")
@requires_role()
def list_cargos(ctx):
    return jsonify({"cargos": [{"id": slug, "nombre": title}
                               for slug, title in CARGOS.items()]})


@api_bp.route("/directiva/cargo/<slug>")
@requires_role()
def get_by_cargo(slug: str, ctx):
    """GET /api/v1/directiva/cargo/{slug} - active holder of a position."""
    session = get_session()
    try:
        member = DirectivaService.by_cargo(session, slug)
        title = cargo_title(slug)
        if not member:
            return jsonify({"error": f"no active {title} found", "cargo": title}), 404
        return jsonify(member.to_dict())
    finally:
        session.close()


@api_bp.route("/directiva/<int:member_id>")
@requires_role()
def get_directiva(member_id: int, ctx):
    session = get_session()
    try:
        member = DirectivaService.get(session, member_id)
        if not member:
            return jsonify({"error": "not found"}), 404
        return jsonify(member.to_dict())
    finally:
        session.close()


@api_bp.route("/directiva", methods=["POST"])
@requires_role(*EDITORS)
def create_directiva(ctx):
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        member = DirectivaService.create(session, data)
        session.commit()
        return jsonify(member.to_dict()), 201
    except ValidationError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 400
    finally:
        session.close()


@api_bp.route("/directiva/<int:member_id>", methods=["PUT"])
@requires_role(*EDITORS)
def update_directiva(member_id: int, ctx):
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        member = DirectivaService.get(session, member_id)
        if not member:
            return jsonify({"error": "not found"}), 404
        DirectivaService.update(session, member, data)
        session.commit()
        return jsonify(member.to_dict())
    except ValidationError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 400
    finally:
        session.close()


@api_bp.route("/directiva/<int:member_id>", methods=["DELETE"])
@requires_role(*EDITORS)
def delete_directiva(member_id: int, ctx):
    session = get_session()
    try:
        member = DirectivaService.get(session, member_id)
        if not member:
            return jsonify({"error": "not found"}), 404
        DirectivaService.delete(session, member)
        session.commit()
        return jsonify({"deleted": member_id})
    finally:
        session.close()
