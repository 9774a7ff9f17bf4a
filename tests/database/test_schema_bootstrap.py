from __future__ import annotations

from src.attendly.attendly.database.bootstrap import SCHEMA_PATH, _iter_sql_statements, _strip_create_db_and_use
from src.attendly.attendly.database.mysql_base import dump_json_column, load_json_column


def test_schema_file_yields_create_table_statements_only():
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))
    statements = list(_iter_sql_statements(sql))
    assert len(statements) == 2
    assert all(s.upper().startswith("CREATE TABLE IF NOT EXISTS") for s in statements)


def test_semicolon_inside_quotes_does_not_split():
    sql = "INSERT INTO t VALUES('a;b'); SELECT 1"
    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES('a;b')", "SELECT 1"]


def test_json_column_helpers():
    assert load_json_column(None) is None
    assert load_json_column(b'{"a": 1}') == {"a": 1}
    assert load_json_column(bytearray(b"[1, 2]")) == [1, 2]
    assert load_json_column({"already": "decoded"}) == {"already": "decoded"}
    assert load_json_column(dump_json_column({"name": "Ünïcode"})) == {"name": "Ünïcode"}
