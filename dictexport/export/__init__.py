"""
Export module - Per-target dictionary export

This module provides:
- ExportManager: Export workflow coordinator
- ExportTarget: Target language/artifact configuration
- ExportProgress / ExportSummary: Reporter payloads
"""

from dictexport.export.progress import ExportProgress, ExportSummary
from dictexport.export.targets import (
    IDENTITY_BY_WORD,
    IDENTITY_BY_ENGLISH_EQUIVALENT,
    TRANSLATE,
    KEYING_MODES,
    ExportTarget,
    get_target,
    get_targets,
)
from dictexport.export.manager import ExportManager, TranslatedRecord
