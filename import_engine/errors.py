"""
import_engine.errors - Failure taxonomy of an import run.

FormatError and ReadError abort the whole run; PersistenceError only
fails the one record it was raised for.
"""


class ImportEngineError(Exception):
    """Base class for import failures."""
    pass


class ReadError(ImportEngineError):
    """Uploaded content could not be decoded to text."""
    pass


class FormatError(ImportEngineError):
    """Input is empty or no record could be extracted from it."""
    pass


class PersistenceError(ImportEngineError):
    """A single record could not be stored."""
    pass
