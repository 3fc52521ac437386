import sqlite3

import pytest

from changeoverplan.data.db import Db
from changeoverplan.data.repository import ChangeoverRepository
from changeoverplan.qco import build_changeover, parse_ob_sheets
from workbooks import ob_sheet


@pytest.fixture
def repo(tmp_path):
    db = Db(tmp_path / "db" / "changeover.db")
    db.ensure_schema()
    return ChangeoverRepository(db)


def record(line="S-10"):
    data = parse_ob_sheets({"OB": ob_sheet()}, filename="s2554.xlsx")
    return build_changeover(data, data, line_number=line)


def test_ensure_schema_is_idempotent(tmp_path):
    db = Db(tmp_path / "x.db")
    db.ensure_schema()
    db.ensure_schema()

    with db.connect() as con:
        tables = {r[0] for r in con.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"app_config", "changeover"} <= tables


def test_save_and_get(repo):
    rec = record()

    result = repo.save(rec.qco_number, rec)

    assert result.success
    assert result.id == rec.qco_number
    assert result.message == f"Successfully saved QCO {rec.qco_number} to database."
    stored = repo.get(rec.qco_number)
    assert stored["qcoNumber"] == rec.qco_number
    assert stored["currentStyle"]["filename"] == "s2554.xlsx"
    assert repo.get("missing") is None


def test_save_replaces_same_id(repo):
    first = record("S-01")
    repo.save("QCO-1", first)
    repo.save("QCO-1", record("S-02"))

    rows = repo.list_recent()

    assert len(rows) == 1
    assert rows[0]["line_number"] == "S-02"


def test_list_recent_filters_by_line(repo):
    repo.save("A", record("S-01"))
    repo.save("B", record("S-02"))
    repo.save("C", record("S-01"))

    assert {r["qco_number"] for r in repo.list_recent(line_number="S-01")} == {"A", "C"}
    assert len(repo.list_recent(limit=2)) == 2


def test_save_failure_is_reported(tmp_path):
    repo = ChangeoverRepository(Db(tmp_path / "no_schema.db"))

    result = repo.save("QCO-1", record())

    assert not result.success
    assert result.message == "Failed to save data. Check the logs."
    assert result.id is None


def test_config_roundtrip(repo):
    assert repo.get_config(key="qco_line", default="S-10") == "S-10"

    repo.set_config(key="qco_line", value="S-05")
    repo.set_config(key="qco_line", value="S-07A")

    assert repo.get_config(key="qco_line") == "S-07A"


def test_config_rejects_empty_key(repo):
    with pytest.raises(ValueError):
        repo.get_config(key="  ")
    with pytest.raises(ValueError):
        repo.set_config(key="", value="x")


def test_connection_is_closed_after_use(tmp_path):
    db = Db(tmp_path / "x.db")
    db.ensure_schema()

    with db.connect() as con:
        con.execute("INSERT INTO app_config(key, value) VALUES('k', 'v')")

    with pytest.raises(sqlite3.ProgrammingError):
        con.execute("SELECT 1")
    assert ChangeoverRepository(db).get_config(key="k") == "v"


def test_failed_block_is_rolled_back(tmp_path):
    db = Db(tmp_path / "x.db")
    db.ensure_schema()

    with pytest.raises(RuntimeError):
        with db.connect() as con:
            con.execute("INSERT INTO app_config(key, value) VALUES('k', 'v')")
            raise RuntimeError("boom")

    assert ChangeoverRepository(db).get_config(key="k") is None
