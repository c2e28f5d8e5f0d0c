"""
services.session_context - Who is signed in, passed explicitly.

The Flask session only stores the user id.  Each request builds a
SessionContext from it; route handlers receive the context instead of
looking up identity or role on their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask import session as flask_session
from sqlalchemy.orm import Session

from db.models import Usuario

_SESSION_KEY = "user_id"


@dataclass(frozen=True)
class SessionContext:
    user_id: int
    email: str
    nombre: str
    rol: str

    @property
    def is_admin(self) -> bool:
        return self.rol == "admin"

    @property
    def can_edit(self) -> bool:
        return self.rol in ("admin", "editor")

    def to_dict(self) -> dict:
        return {"id": self.user_id, "email": self.email,
                "nombre": self.nombre, "rol": self.rol}

    @classmethod
    def from_user(cls, user: Usuario) -> "SessionContext":
        return cls(user_id=user.id, email=user.email,
                   nombre=user.nombre or "", rol=user.rol)


def sign_in(user: Usuario) -> SessionContext:
    flask_session.clear()
    flask_session[_SESSION_KEY] = user.id
    return SessionContext.from_user(user)


def sign_out() -> None:
    flask_session.clear()


def current_context(session: Session) -> Optional[SessionContext]:
    """
    Context for the signed-in user, or None.  A user deleted after
    signing in loses the session here.
    """
    user_id = flask_session.get(_SESSION_KEY)
    if user_id is None:
        return None
    user = session.get(Usuario, user_id)
    if user is None:
        flask_session.clear()
        return None
    return SessionContext.from_user(user)
