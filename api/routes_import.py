"""
api.routes_import - /api/v1/import endpoints.

CSV via multipart file upload or raw request body; JSON via raw body.
A run that fails before persisting (unreadable or unparseable input)
answers 422 with the report; a completed run answers 200 even when
every record failed (report.total_failure).
"""

import logging

from flask import request, jsonify

from api import api_bp
from api.guards import ADMINS, requires_role
from import_engine import run_import
from import_engine.report import ImportState

logger = logging.getLogger(__name__)


def _respond(report):
    status = 422 if report.state is ImportState.FAILED else 200
    return jsonify(report.to_dict()), status


@api_bp.route("/import", methods=["POST"])
@requires_role(*ADMINS)
def api_import_csv(ctx):
    """
    POST /api/v1/import

    Multipart: field name 'csv_file'
    Or: raw CSV as request body (Content-Type: text/csv).
    """
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        if not f:
            return jsonify({"error": "no csv_file in upload"}), 400
        content = f.read()
    else:
        content = request.get_data()

    logger.info(f"CSV import of {len(content)} bytes started by {ctx.email}")
    return _respond(run_import(content, source="csv"))


@api_bp.route("/import/json", methods=["POST"])
@requires_role(*ADMINS)
def api_import_json(ctx):
    """
    POST /api/v1/import/json

    Body: one JSON object or an array of objects, keyed by canonical
    field names or by the Spanish form labels.
    """
    content = request.get_data()
    logger.info(f"JSON import of {len(content)} bytes started by {ctx.email}")
    return _respond(run_import(content, source="json"))
