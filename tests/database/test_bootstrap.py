from src.school_attendance.school_attendance.database.bootstrap import _strip_create_db_and_use, iter_sql_statements


def test_split_ignores_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\n"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'INSERT INTO t VALUES ("c;d")']


def test_split_skips_comment_only_chunks():
    sql = "CREATE TABLE a (id INT);\n-- trailing comment\n"

    assert list(iter_sql_statements(sql)) == ["CREATE TABLE a (id INT)"]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE a (id INT);"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE a (id INT)"]
