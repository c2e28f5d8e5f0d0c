"""
import_engine - CSV / JSON member import pipeline.

Public API:
    run_import(file_content, source="csv") → ImportReport
    ImportPipeline(session).run_csv(...) / .run_json(...)
"""

from import_engine.importer import ImportPipeline, run_import      # noqa: F401
from import_engine.report import ImportReport, ImportState         # noqa: F401
from import_engine.errors import (                                 # noqa: F401
    FormatError,
    PersistenceError,
    ReadError,
)
