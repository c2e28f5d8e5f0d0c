#!/usr/bin/env python3
"""
ASOCDB - Association Members Database
=====================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify

import config
from db import init_db, get_session
from api import api_bp


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.secret_key = config.SECRET

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


def _seed_admin_if_empty():
    """Create the first administrator when there are no users yet."""
    from services.usuarios_service import UsuariosService
    from services.store import CollectionStore

    session = get_session()
    try:
        count = CollectionStore.count(session, "usuarios")
        if count > 0:
            print(f"\n  {count} users registered.")
            return

        if not (config.ADMIN_EMAIL and config.ADMIN_PASSWORD):
            print("\n  No users and no ASOCDB_ADMIN_EMAIL / ASOCDB_ADMIN_PASSWORD"
                  " - nobody can sign in yet.")
            return

        UsuariosService.create(session, {
            "nombre": config.ADMIN_NAME,
            "email": config.ADMIN_EMAIL,
            "password": config.ADMIN_PASSWORD,
            "rol": "admin",
        })
        session.commit()
        print(f"\n  Created administrator {config.ADMIN_EMAIL}")
    finally:
        session.close()


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    print("=" * 56)
    print("  ASOCDB - Association Members Database")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL}")
    _seed_admin_if_empty()

    print(f"\n  http://{config.HOST}:{config.PORT}/api/v1")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
