from __future__ import annotations

from csv_import_base.services.row_handlers import (
    DEFAULT_FIELD_MAP,
    CallableRowHandler,
    ExampleRowHandler,
    RowHandler,
    extract_fields,
)


def test_extract_fields_default_map():
    columns = ("post_id", "title", "content")
    assert extract_fields(["5", "Hello", "World"], columns) == {
        "ID": "5",
        "post_title": "Hello",
        "post_content": "World",
    }


def test_extract_fields_ignores_unknown_columns_and_order():
    columns = ("content", "author", "post_id")
    assert extract_fields(["Body", "me", "9"], columns) == {"post_content": "Body", "ID": "9"}


def test_extract_fields_exact_name_match():
    # no trimming or case folding of header names
    assert extract_fields(["5", "x"], ("Post_ID", " title")) == {}


def test_extract_fields_short_row():
    assert extract_fields(["5"], ("post_id", "title")) == {"ID": "5", "post_title": ""}


def test_extract_fields_duplicate_column_last_wins():
    record = extract_fields(["1", "old", "new"], ("post_id", "title", "title"))
    assert record == {"ID": "1", "post_title": "new"}


def test_extract_fields_custom_map():
    assert extract_fields(["a@b.c"], ("email",), {"email": "user_email"}) == {"user_email": "a@b.c"}


def test_example_handler_builds_record_and_reports_not_imported():
    handler = ExampleRowHandler()
    result = handler.import_row(["5", "Hello", "World"], ("post_id", "title", "content"))
    assert result is False
    assert handler.last_record == {"ID": "5", "post_title": "Hello", "post_content": "World"}


def test_example_handler_does_not_mutate_row():
    row = ["5", "Hello", "World"]
    ExampleRowHandler().import_row(row, ("post_id", "title", "content"))
    assert row == ["5", "Hello", "World"]


def test_default_field_map_contents():
    assert DEFAULT_FIELD_MAP == {"post_id": "ID", "title": "post_title", "content": "post_content"}


def test_callable_row_handler_adapts_function():
    seen = []

    def handle(row, columns):
        seen.append((row, columns))
        return True

    handler = CallableRowHandler(handle)
    assert handler.import_row(["1"], ("a",)) is True
    assert seen == [(["1"], ("a",))]


def test_handlers_satisfy_protocol():
    assert isinstance(ExampleRowHandler(), RowHandler)
    assert isinstance(CallableRowHandler(lambda r, c: True), RowHandler)
