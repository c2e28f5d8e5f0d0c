"""
api.routes_dashboard - /api/v1/dashboard summary counts.
"""

from flask import jsonify

from api import api_bp
from api.guards import requires_role
from db import get_session
from services.asociados_service import AsociadosService
from services.directiva_service import DirectivaService


@api_bp.route("/dashboard")
@requires_role()
def dashboard(ctx):
    session = get_session()
    try:
        return jsonify({
            "asociados": AsociadosService.count(session),
            "directiva_activa": len(DirectivaService.list_all(session, only_active=True)),
            "usuario": ctx.to_dict(),
        })
    finally:
        session.close()
