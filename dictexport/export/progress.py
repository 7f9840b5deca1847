"""
Export Progress Data Classes

Contains the ExportProgress and ExportSummary dataclasses passed to reporters.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass
class ExportProgress:
    """Progress information for an ongoing export."""
    target: str
    completed: int
    total: int
    phase: str = "exporting"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ExportSummary:
    """Terminal report for one finished export run."""
    target: str
    output: str
    mode: str
    exported_count: int
    translated_count: int = 0  # Records whose key came back translated
    fallback_count: int = 0  # Records where word or definition fell back
    elapsed_time: float = 0.0
    preview: str = ""

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["elapsed_time"] = round(float(self.elapsed_time), 3)
        return payload
