import pytest

from db import get_session
from main import create_app
from services.usuarios_service import UsuariosService

PASSWORD = "secreto-123"


@pytest.fixture
def app(tmp_path):
    """Flask app bound to a fresh SQLite file for each test."""
    app = create_app(f"sqlite:///{tmp_path / 'asocdb-test.sqlite'}")
    app.config.update(TESTING=True, SECRET_KEY="test-secret-key")
    yield app


@pytest.fixture
def session(app):
    s = get_session()
    yield s
    s.close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(app):
    """
    login("editor") → a test client signed in as a new user with that role.
    """

    def _login(rol: str = "admin"):
        email = f"{rol}@asociacion.test"
        s = get_session()
        try:
            if not UsuariosService.search(s, email):
                UsuariosService.create(s, {
                    "nombre": rol.title(), "email": email,
                    "password": PASSWORD, "rol": rol,
                })
                s.commit()
        finally:
            s.close()

        c = app.test_client()
        resp = c.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
        assert resp.status_code == 200, resp.get_json()
        return c

    return _login
