"""
Export Exceptions

Exception classes shared by the extractor, writer, translator and export
manager. Kept in one module to avoid circular imports between them.
"""


class DictExportError(Exception):
    """Base error with optional machine-readable code and details."""

    default_code = "dictexport_error"

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code or self.default_code
        self.details = details or {}


class ConfigError(DictExportError):
    """Invalid configuration value or unknown export target."""

    default_code = "config_invalid"


class RecordExtractionError(DictExportError):
    """Source content could not be scanned; no records were produced."""

    default_code = "parse_failed"


class SourceUnreadableError(DictExportError):
    """The source dictionary could not be read or decoded."""

    default_code = "source_unreadable"


class PersistenceError(DictExportError):
    """An output table entry or marker could not be written."""

    default_code = "persistence_failed"


class TranslationError(DictExportError):
    """Translation client misconfiguration (never raised per translate call)."""

    default_code = "translation_config_invalid"


class ExportInProgressError(DictExportError):
    """Another pending or running job already writes one of the requested targets."""

    default_code = "export_in_progress"
