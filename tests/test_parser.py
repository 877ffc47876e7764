import csv
import io
import pytest
import pandas as pd
from datetime import datetime

from data_examiner.exceptions import ParseError, UnsupportedFormatError
from data_examiner.ingestion import (
    MISSING, Boolean, InputFormat, Numeric, Temporal, Text,
    detect_delimiter, detect_format, format_from_filename,
    parse_content, parse_delimited, parse_file, parse_free_text, parse_json, parse_spreadsheet,
)


def test_parse_delimited_basic_example():
    dataset = parse_delimited("A,B\n1,2\n3,4\n5,6")
    assert dataset.fields == ["A", "B"]
    assert dataset.records == [
        {"A": Numeric(1.0), "B": Numeric(2.0)},
        {"A": Numeric(3.0), "B": Numeric(4.0)},
        {"A": Numeric(5.0), "B": Numeric(6.0)},
    ]


def test_detect_delimiter_picks_most_fields():
    assert detect_delimiter("a;b;c") == ";"
    assert detect_delimiter("a\tb\tc\td") == "\t"
    assert detect_delimiter("a|b") == "|"


def test_detect_delimiter_tie_prefers_comma_over_semicolon():
    assert detect_delimiter("a,b;c") == ","
    assert detect_delimiter("a;b|c") == ";"


def test_detect_delimiter_single_field_defaults_to_comma():
    assert detect_delimiter("value") == ","


def test_parse_delimited_skips_blank_lines_and_pads_short_rows():
    dataset = parse_delimited("name;score;passed\nann;9;true\n\nbob\n")
    assert len(dataset) == 2
    assert dataset.records[0] == {"name": Text("ann"), "score": Numeric(9.0), "passed": Boolean(True)}
    assert dataset.records[1] == {"name": Text("bob"), "score": MISSING, "passed": MISSING}


def test_parse_delimited_honours_quotes_and_names_blank_headers():
    dataset = parse_delimited('city,,city\n"Paris, FR",1,x\n')
    assert dataset.fields == ["city", "column_2", "city_2"]
    assert dataset.records[0]["city"] == Text("Paris, FR")


def test_parse_delimited_reads_dates():
    dataset = parse_delimited("day,amount\n2024-01-01,5\n2024-01-02,")
    assert dataset.records[0]["day"] == Temporal(datetime(2024, 1, 1))
    assert dataset.records[1]["amount"] is MISSING


def test_parse_json_array_of_objects():
    dataset = parse_json('[{"a": 1, "b": "x", "c": null, "d": true}, {"a": 2.5, "e": [1, 2]}]')
    assert dataset.fields == ["a", "b", "c", "d", "e"]
    assert dataset.records[0] == {"a": Numeric(1.0), "b": Text("x"), "c": MISSING, "d": Boolean(True)}
    assert dataset.records[1]["e"] == Text("[1,2]")


def test_parse_json_single_object_and_scalar_elements():
    assert len(parse_json('{"a": 1}')) == 1
    assert parse_json("[1, 2]").records == [{"value": Numeric(1.0)}, {"value": Numeric(2.0)}]


@pytest.mark.parametrize("text", ['{"a": ', '"just a string"', "42"])
def test_parse_json_rejects_invalid_documents(text):
    with pytest.raises(ParseError):
        parse_json(text)


def test_parse_free_text_one_record_per_line():
    dataset = parse_free_text("first line\n\n  second line  \n")
    assert dataset.records == [{"content": Text("first line")}, {"content": Text("second line")}]


@pytest.mark.parametrize("text", ["", "   ", "\n\n"])
def test_empty_input_is_a_parse_error(text):
    with pytest.raises(ParseError):
        parse_content(text)


def test_detect_format():
    assert detect_format('[{"a": 1}]') == InputFormat.JSON
    assert detect_format("a,b\n1,2") == InputFormat.DELIMITED
    assert detect_format("a,b") == InputFormat.TEXT
    assert detect_format("hello world\nsecond thought") == InputFormat.TEXT


def test_parse_content_auto_uses_detected_format():
    assert parse_content("x|y\n1|2").fields == ["x", "y"]
    assert parse_content("some notes").fields == ["content"]


def test_format_from_filename():
    assert format_from_filename("data.CSV") == InputFormat.DELIMITED
    assert format_from_filename("data.tsv") == InputFormat.DELIMITED
    assert format_from_filename("data.json") == InputFormat.JSON
    assert format_from_filename("book.xlsx") == InputFormat.SPREADSHEET
    assert format_from_filename("notes.txt") == InputFormat.AUTO
    with pytest.raises(UnsupportedFormatError):
        format_from_filename("image.png")


def test_parse_is_deterministic():
    text = "a,b\n1,x\n2,y"
    assert parse_content(text) == parse_content(text)


def test_parse_delimited_accepts_very_long_cells():
    long_cell = "x" * 200_000
    dataset = parse_content(f"a,b\n{long_cell},1\n", InputFormat.DELIMITED)
    assert dataset.records == [{"a": Text(long_cell), "b": Numeric(1.0)}]


def test_parse_delimited_quotes_only_is_rejected():
    with pytest.raises(ParseError, match="No data provided"):
        parse_content('""\n', InputFormat.DELIMITED)


def test_parse_delimited_reader_error_becomes_parse_error():
    previous = csv.field_size_limit(10)
    try:
        with pytest.raises(ParseError, match="Invalid delimited text"):
            parse_delimited("a,b\n" + "x" * 50 + ",1\n")
    finally:
        csv.field_size_limit(previous)


def _workbook_bytes() -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame({"region": ["north", "south"], "sales": [10, None]}).to_excel(writer, sheet_name="Sales", index=False)
        pd.DataFrame({"note": ["hello"]}).to_excel(writer, sheet_name="Notes", index=False)
    return buffer.getvalue()


def test_parse_spreadsheet_reads_every_sheet_in_order():
    workbook = parse_spreadsheet(_workbook_bytes())
    assert workbook.sheet_names == ["Sales", "Notes"]
    primary = workbook.primary
    assert primary.records[0] == {"region": Text("north"), "sales": Numeric(10.0)}
    assert primary.records[1]["sales"] is MISSING


def test_parse_content_selects_sheet():
    dataset = parse_content(_workbook_bytes(), InputFormat.SPREADSHEET, sheet="Notes")
    assert dataset.records == [{"note": Text("hello")}]
    with pytest.raises(ParseError):
        parse_content(_workbook_bytes(), InputFormat.SPREADSHEET, sheet="Missing")


def test_parse_spreadsheet_rejects_garbage():
    with pytest.raises(ParseError):
        parse_spreadsheet(b"not a workbook")


def test_parse_file_uses_extension(tmp_path):
    path = tmp_path / "upload.bin"
    path.write_bytes(b'[{"a": 1}]')
    assert parse_file(str(path), "data.json").records == [{"a": Numeric(1.0)}]

    empty = tmp_path / "empty.csv"
    empty.write_bytes(b"")
    with pytest.raises(ParseError):
        parse_file(str(empty), "empty.csv")
