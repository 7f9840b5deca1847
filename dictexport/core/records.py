"""
Dictionary record extraction.

Source dictionaries are loosely formatted JavaScript-ish object literals:

    { word: "manzana", definition: "a fruit",
      pronunciation: "man-ZA-na", englishEquivalent: "apple" },

The extractor scans the text for `{`/`}` boundaries and `name: "value"`
fields. A block is closed by a brace or by the next `word` field, and it
yields a record only when word, definition, pronunciation and
englishEquivalent appear in that order.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from dictexport.exceptions import RecordExtractionError
from dictexport.logger import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("word", "definition", "pronunciation", "englishEquivalent")

# A quoted value ends at the first quote followed by `,`, `}` or end of line,
# so embedded quotes in definitions survive.
_TOKEN_PATTERN = re.compile(
    r'(?P<open>\{)'
    r'|(?P<close>\})'
    r'|(?P<name>[A-Za-z_]\w*)[ \t]*:\s*"(?P<value>[^\n]*?)"(?=[ \t]*(?:,|\}|\r?$))',
    re.MULTILINE,
)


@dataclass(frozen=True)
class DictionaryRecord:
    """One headword entry from the source dictionary."""
    word: str
    definition: str
    pronunciation: str
    englishEquivalent: str

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "definition": self.definition,
            "pronunciation": self.pronunciation,
            "englishEquivalent": self.englishEquivalent,
        }


def _scan_blocks(text: str) -> Iterator[List[Tuple[str, str]]]:
    """Yield the (name, value) fields of each block in source order."""
    block: List[Tuple[str, str]] = []
    for match in _TOKEN_PATTERN.finditer(text):
        if match.group("open") or match.group("close"):
            if block:
                yield block
            block = []
            continue

        name = match.group("name")
        if name == "word" and block:
            yield block
            block = []
        block.append((name, match.group("value")))

    if block:
        yield block


def _build_record(fields: List[Tuple[str, str]]):
    """Return a DictionaryRecord if the required fields appear in order, else None."""
    values = []
    position = 0
    for required in REQUIRED_FIELDS:
        while position < len(fields) and fields[position][0] != required:
            position += 1
        if position == len(fields):
            return None
        values.append(fields[position][1])
        position += 1
    if not values[0]:
        return None
    return DictionaryRecord(*values)


def extract_records(content: Union[str, bytes]) -> List[DictionaryRecord]:
    """
    Parse source dictionary text into records, preserving source order.

    Blocks missing any required field are skipped silently.

    Args:
        content: Full source text (bytes are decoded as UTF-8)

    Returns:
        List of DictionaryRecord

    Raises:
        RecordExtractionError: If content is not text
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RecordExtractionError(
                f"Source content is not valid UTF-8: {e}",
                details={"records": 0},
            )
    if not isinstance(content, str):
        raise RecordExtractionError(
            f"Cannot scan source content of type {type(content).__name__}",
            details={"records": 0},
        )

    records = []
    for fields in _scan_blocks(content):
        record = _build_record(fields)
        if record is not None:
            records.append(record)

    logger.debug(f"Extracted {len(records)} records from {len(content)} chars")
    return records
