"""
Core module - Source parsing and table output

This module provides:
- records: DictionaryRecord and the tolerant record extractor
- source: Reading the source dictionary
- writer: Incremental lookup table writer
"""

from dictexport.core.records import (
    REQUIRED_FIELDS,
    DictionaryRecord,
    extract_records,
)
from dictexport.core.source import read_source, load_records
from dictexport.core.writer import (
    TABLE_OPENING,
    TABLE_CLOSING,
    TableRow,
    TableWriter,
    format_entry,
    format_preview,
    write_table,
)
