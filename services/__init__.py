"""
services - Business-logic layer sitting between API and DB.
"""

from services.store import CollectionStore                              # noqa: F401
from services.asociados_service import AsociadosService                  # noqa: F401
from services.errors import DuplicateError, ValidationError               # noqa: F401
from services.directiva_service import DirectivaService                  # noqa: F401
from services.usuarios_service import UsuariosService                    # noqa: F401
