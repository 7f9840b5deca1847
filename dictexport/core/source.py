"""Reading the source dictionary artifact."""

from pathlib import Path
from typing import List

from dictexport.core.records import DictionaryRecord, extract_records
from dictexport.exceptions import SourceUnreadableError
from dictexport.logger import get_logger

logger = get_logger(__name__)


def read_source(path: Path) -> str:
    """
    Read the source dictionary as UTF-8 text.

    Raises:
        SourceUnreadableError: If the file is missing, unreadable or not UTF-8
    """
    source_path = Path(path)
    try:
        return source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read source dictionary {source_path}: {e}")
        raise SourceUnreadableError(
            f"Cannot read source dictionary {source_path}: {e}",
            details={"source": str(source_path)},
        )


def load_records(path: Path) -> List[DictionaryRecord]:
    """Read and parse the source dictionary in one step."""
    records = extract_records(read_source(path))
    logger.info(f"Parsed {len(records)} entries from {path}")
    return records
