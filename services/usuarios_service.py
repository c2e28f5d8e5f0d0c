"""
services.usuarios_service - Users who may sign in, and their roles.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from db.models import Usuario
from services.errors import ValidationError
from services.store import CollectionStore

logger = logging.getLogger(__name__)

COLLECTION = "usuarios"

ROLES = ("admin", "editor", "lector")
DEFAULT_ROLE = "editor"


class UsuariosService:

    @staticmethod
    def create(session: Session, data: dict) -> Usuario:
        email = str(data.get("email") or "").strip().lower()
        password = str(data.get("password") or "")
        rol = str(data.get("rol") or DEFAULT_ROLE).strip().lower()

        if not email or not password:
            raise ValidationError("email and password are required")
        if rol not in ROLES:
            raise ValidationError(f"unknown role {rol!r}")
        if CollectionStore.find(session, COLLECTION, email=email):
            raise ValidationError(f"user {email} already exists")

        new_id = CollectionStore.insert(session, COLLECTION, {
            "nombre": str(data.get("nombre") or "").strip(),
            "email": email,
            "rol": rol,
            "password_hash": generate_password_hash(password),
        })
        logger.info(f"User {email} created with role {rol}")
        return CollectionStore.get(session, COLLECTION, new_id)

    @staticmethod
    def get(session: Session, user_id: int) -> Usuario | None:
        return CollectionStore.get(session, COLLECTION, user_id)

    @staticmethod
    def search(session: Session, q: str = "") -> list[Usuario]:
        """Users whose name, email or role contains *q* (case-insensitive)."""
        users = CollectionStore.all(session, COLLECTION)
        q = q.strip().lower()
        if not q:
            return users
        return [u for u in users
                if q in (u.nombre or "").lower()
                or q in u.email.lower()
                or q in u.rol.lower()]

    @staticmethod
    def update(session: Session, user: Usuario, data: dict) -> Usuario:
        """Only name, role and password can change; the email is the login."""
        if "nombre" in data:
            user.nombre = str(data["nombre"] or "").strip()
        if "rol" in data:
            rol = str(data["rol"] or "").strip().lower()
            if rol not in ROLES:
                raise ValidationError(f"unknown role {rol!r}")
            user.rol = rol
        if data.get("password"):
            user.password_hash = generate_password_hash(str(data["password"]))
        session.flush()
        return user

    @staticmethod
    def delete(session: Session, user: Usuario) -> None:
        CollectionStore.delete(session, COLLECTION, user.id)

    @staticmethod
    def authenticate(session: Session, email: str, password: str) -> Usuario | None:
        found = CollectionStore.find(session, COLLECTION, email=email.strip().lower())
        if found and check_password_hash(found[0].password_hash, password):
            return found[0]
        return None
