from school_timetable.database.bootstrap import SCHEMA_PATH, SEED_PATH, _script_statements, split_sql_statements
from school_timetable.database.connection import DBConfig


def test_split_keeps_semicolons_inside_literals():
    sql = """
    -- demo rooms
    INSERT INTO rooms (name, description) VALUES ('Lab; east wing', 'it''s \\'quoted\\'');
    INSERT INTO rooms (name) VALUES ("Hall");
    SELECT 1
    """

    statements = list(split_sql_statements(sql))

    assert len(statements) == 3
    assert "'Lab; east wing'" in statements[0]
    assert statements[1] == 'INSERT INTO rooms (name) VALUES ("Hall")'
    assert statements[2] == "SELECT 1"


def test_script_drops_database_selection(tmp_path):
    script = tmp_path / "schema.sql"
    script.write_text(
        "CREATE DATABASE IF NOT EXISTS other;\nUSE other;\nCREATE TABLE rooms (id INT);\n", encoding="utf-8"
    )

    assert _script_statements(script) == ["CREATE TABLE rooms (id INT)"]


def test_db_config_defaults_and_kwargs():
    config = DBConfig.from_mapping({"host": "db", "user": "app", "password": "pw", "database": "school"})

    assert config.port == 3306
    assert config.connect_kwargs(with_database=False) == {
        "host": "db",
        "port": 3306,
        "user": "app",
        "password": "pw",
        "connection_timeout": config.connect_timeout,
    }
    assert config.connect_kwargs()["database"] == "school"


def test_scripts_ship_inside_the_package():
    assert SCHEMA_PATH.parent == SEED_PATH.parent
    assert SCHEMA_PATH.parent.name == "database"
    assert "CREATE TABLE" in SCHEMA_PATH.read_text(encoding="utf-8").upper()
    assert SEED_PATH.is_file()
