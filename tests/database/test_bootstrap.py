from datetime import time, timedelta
from pathlib import Path

import pytest

from src.rfid_attendance.rfid_attendance.database.bootstrap import iter_sql_statements
from src.rfid_attendance.rfid_attendance.database.mysql_base import normalize_mysql_time

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_splits_statements_and_skips_comments():
    sql = """
    -- teachers
    CREATE TABLE a (id INT);
    INSERT INTO a VALUES (1); -- trailing
    """

    assert list(iter_sql_statements(sql)) == ["CREATE TABLE a (id INT)", "INSERT INTO a VALUES (1)"]


def test_semicolons_inside_quotes_do_not_split():
    sql = "INSERT INTO n (message) VALUES ('late; again');INSERT INTO n (message) VALUES (\"x;y\")"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO n (message) VALUES ('late; again')",
        'INSERT INTO n (message) VALUES ("x;y")',
    ]


def test_schema_file_contains_every_table():
    statements = list(iter_sql_statements((REPO_ROOT / "scripts" / "schema.sql").read_text(encoding="utf-8")))
    created = " ".join(statements)

    for table in ("admins", "teachers", "classrooms", "schedules", "attendance_logs", "notifications"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in created


@pytest.mark.parametrize(
    "value, expected",
    [
        (time(8, 30), time(8, 30)),
        (timedelta(hours=13, minutes=5), time(13, 5)),
        ("09:15:00", time(9, 15)),
        ("09:15", time(9, 15)),
        (None, None),
    ],
)
def test_normalize_mysql_time(value, expected):
    assert normalize_mysql_time(value) == expected


def test_normalize_mysql_time_rejects_garbage():
    with pytest.raises(ValueError):
        normalize_mysql_time("0915")
    with pytest.raises(TypeError):
        normalize_mysql_time(915)
