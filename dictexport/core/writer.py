"""
Lookup table writer.

Writes `const dictionary = { ... };` JavaScript tables one entry at a time.
The file is only consumable after close() appends the closing marker;
a writer that exits with an error leaves the artifact unterminated.
"""

import json
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional

from dictexport.config import DEFAULT_PREVIEW_LIMIT
from dictexport.exceptions import PersistenceError
from dictexport.logger import get_logger

logger = get_logger(__name__)

TABLE_OPENING = "const dictionary = {\n"
TABLE_CLOSING = "};\n"


class TableRow(NamedTuple):
    """One output entry: the key plus the values written under it."""
    key: str
    definition: str
    pronunciation: str
    englishEquivalent: str


def _quote(value: str) -> str:
    """JSON string escaping, keeping non-ASCII characters readable."""
    return json.dumps(value, ensure_ascii=False)


def format_entry(row: TableRow) -> str:
    """Render a row as a table entry including the trailing comma."""
    return (
        f"  {_quote(row.key)}: {{\n"
        f"    definition: {_quote(row.definition)},\n"
        f"    pronunciation: {_quote(row.pronunciation)},\n"
        f"    englishEquivalent: {_quote(row.englishEquivalent)}\n"
        f"  }},\n"
    )


class TableWriter:
    """
    Owns the output handle for one export run.

    open(), write_entry() and close() are the only mutation points. Keys are
    not deduplicated: a map-like consumer keeps the last duplicate.

    Usage:
        with TableWriter(path, target="fr") as writer:
            writer.write_entry(row)
    """

    def __init__(self, path: Path, target: str = ""):
        self.path = Path(path)
        self.target = target
        self.entries_written = 0
        self.closed = False
        self._handle = None

    def _fail(self, action: str, error: Exception) -> PersistenceError:
        logger.error(f"Failed to {action} {self.path} (target={self.target}, entry={self.entries_written}): {error}")
        return PersistenceError(
            f"Failed to {action} {self.path}: {error}",
            details={
                "target": self.target,
                "output": str(self.path),
                "record_index": self.entries_written,
            },
        )

    def open(self) -> "TableWriter":
        """Truncate the artifact and write the opening marker."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = open(self.path, "w", encoding="utf-8")
            self._handle.write(TABLE_OPENING)
            self._handle.flush()
        except OSError as e:
            self._release()
            raise self._fail("open", e)
        self.entries_written = 0
        self.closed = False
        logger.debug(f"Opened {self.path} for target {self.target}")
        return self

    def write_entry(self, row: TableRow) -> None:
        """Append one entry and flush it."""
        if self._handle is None:
            raise self._fail("write entry to", ValueError("writer is not open"))
        try:
            self._handle.write(format_entry(row))
            self._handle.flush()
        except OSError as e:
            raise self._fail("write entry to", e)
        self.entries_written += 1

    def close(self) -> None:
        """Append the closing marker and release the handle."""
        if self._handle is None:
            raise self._fail("close", ValueError("writer is not open"))
        try:
            self._handle.write(TABLE_CLOSING)
            self._handle.flush()
        except OSError as e:
            raise self._fail("close", e)
        finally:
            self._release()
        self.closed = True
        logger.debug(f"Closed {self.path} after {self.entries_written} entries")

    def _release(self) -> None:
        if self._handle is not None:
            try:
                self._handle.close()
            except OSError as e:
                logger.warning(f"Error releasing handle for {self.path}: {e}")
            self._handle = None

    def __enter__(self) -> "TableWriter":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.close()
        else:
            # Abort leaves the artifact unterminated
            self._release()
        return False


def write_table(rows: Iterable[TableRow], path: Path, target: str = "") -> int:
    """Write all rows to path in order. Returns the number of entries written."""
    with TableWriter(path, target=target) as writer:
        for row in rows:
            writer.write_entry(row)
        return writer.entries_written


def format_preview(
    rows: List[TableRow],
    total: Optional[int] = None,
    limit: int = DEFAULT_PREVIEW_LIMIT,
) -> str:
    """
    Render the first rows of an export for display.

    Args:
        rows: Rows to show (only the first `limit` are used)
        total: Total rows exported, defaults to len(rows)
        limit: Maximum rows shown

    Remaining rows are summarised as "...and N more.".
    """
    shown = rows[:limit]
    blocks = [
        f'"{row.key}": {{\n'
        f'  definition: "{row.definition}",\n'
        f'  pronunciation: "{row.pronunciation}",\n'
        f'  englishEquivalent: "{row.englishEquivalent}"\n'
        f'}},'
        for row in shown
    ]
    preview = "\n\n".join(blocks)
    remaining = (len(rows) if total is None else total) - len(shown)
    if remaining > 0:
        preview += f"\n...and {remaining} more."
    return preview
