from __future__ import annotations

import pytest

from dictexport.core.records import DictionaryRecord, extract_records
from dictexport.core.source import load_records, read_source
from dictexport.exceptions import RecordExtractionError, SourceUnreadableError

from conftest import SAMPLE_SOURCE


def test_extracts_one_record_per_block_in_source_order() -> None:
    records = extract_records(SAMPLE_SOURCE)

    assert records == [
        DictionaryRecord("manzana", "a fruit", "man-ZA-na", "apple"),
        DictionaryRecord("perro", "a loyal animal", "PEH-rro", "dog"),
    ]


def test_block_without_braces_is_accepted() -> None:
    text = 'word: "manzana", definition: "a fruit", pronunciation: "man-ZA-na", englishEquivalent: "apple"'

    assert extract_records(text) == [DictionaryRecord("manzana", "a fruit", "man-ZA-na", "apple")]


def test_irregular_whitespace_between_fields() -> None:
    text = '{\n\n  word:"casa" ,\n definition:\n   "a house",\r\n\tpronunciation:  "KA-sa",englishEquivalent: "house"}'

    assert extract_records(text) == [DictionaryRecord("casa", "a house", "KA-sa", "house")]


def test_malformed_block_does_not_affect_neighbours() -> None:
    text = """
    { word: "uno", definition: "one", pronunciation: "OO-no", englishEquivalent: "one" },
    { word: "dos", definition: "two", englishEquivalent: "two" },
    { word: "tres", definition: "three", pronunciation: "tres", englishEquivalent: "three" },
    """

    records = extract_records(text)

    assert [r.word for r in records] == ["uno", "tres"]


def test_missing_pronunciation_yields_no_records() -> None:
    text = '{ word: "manzana", definition: "a fruit", englishEquivalent: "apple" }'

    assert extract_records(text) == []


def test_fields_out_of_order_are_rejected() -> None:
    text = '{ definition: "a fruit", word: "manzana", pronunciation: "man-ZA-na", englishEquivalent: "apple" }'

    assert extract_records(text) == []


def test_unbraced_blocks_split_on_next_word() -> None:
    text = (
        'word: "gato", definition: "a cat",\n'
        'word: "sol", definition: "the sun", pronunciation: "sol", englishEquivalent: "sun"\n'
    )

    assert [r.word for r in extract_records(text)] == ["sol"]


def test_extra_fields_between_required_fields_are_ignored() -> None:
    text = '{ word: "gato", gender: "m", definition: "a cat", pronunciation: "GA-to", englishEquivalent: "cat" }'

    assert extract_records(text) == [DictionaryRecord("gato", "a cat", "GA-to", "cat")]


def test_values_are_taken_literally() -> None:
    text = r'''{ word: "perro", definition: "a \"loyal\" animal, man's friend", pronunciation: "PEH-rro", englishEquivalent: "dog" }'''

    record = extract_records(text)[0]

    assert record.definition == r'''a \"loyal\" animal, man's friend'''


def test_bytes_are_decoded_as_utf8() -> None:
    text = '{ word: "niño", definition: "a child", pronunciation: "NEE-nyo", englishEquivalent: "child" }'

    assert extract_records(text.encode("utf-8"))[0].word == "niño"


@pytest.mark.parametrize("content", [None, 42, b"\xff\xfe\x00word"])
def test_non_text_input_is_a_parse_failure(content) -> None:
    with pytest.raises(RecordExtractionError) as excinfo:
        extract_records(content)

    assert excinfo.value.code == "parse_failed"
    assert excinfo.value.details["records"] == 0


def test_records_are_immutable() -> None:
    record = DictionaryRecord("a", "b", "c", "d")

    with pytest.raises(AttributeError):
        record.word = "z"


def test_load_records_reads_source_file(source_file) -> None:
    records = load_records(source_file)

    assert [r.word for r in records] == ["manzana", "perro"]


def test_read_source_reports_unreadable_file(tmp_path) -> None:
    with pytest.raises(SourceUnreadableError) as excinfo:
        read_source(tmp_path / "missing.txt")

    assert excinfo.value.details["source"].endswith("missing.txt")
