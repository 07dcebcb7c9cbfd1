from src.leisure_timesheet.leisure_timesheet.database.bootstrap import _strip_create_db_and_use, iter_sql_statements


def test_splitter_ignores_semicolons_in_quotes_and_comments():
    sql = """
    -- comment; with semicolon
    CREATE TABLE a (name VARCHAR(10) DEFAULT 'x;y');
    INSERT INTO a VALUES ("1;2");
    """

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (name VARCHAR(10) DEFAULT 'x;y')",
        'INSERT INTO a VALUES ("1;2")',
    ]


def test_strip_create_db_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\nCREATE TABLE t (id INT);"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]
