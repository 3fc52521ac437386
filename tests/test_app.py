"""CLI smoke tests."""

import json
import logging

import pytest

from changeoverplan.app import build_arg_parser, main
from changeoverplan.data.db import Db
from changeoverplan.data.repository import ChangeoverRepository
from workbooks import ob_sheet, plan_with_calendar, sequence_sheet, set_block, workbook_bytes


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def write_plan(path):
    sheet = plan_with_calendar([(45000, "Thu"), (45001, "Fri")])
    set_block(sheet, 8, context="SOHRAB", styles={10: "STYLE-A"}, targets={10: 100}, manpower={10: 20})
    path.write_bytes(workbook_bytes({"Plan": sheet}))
    return path


def write_ob(path, style):
    sheet = ob_sheet()
    sheet[0][1] = style
    path.write_bytes(workbook_bytes({"OB": sheet, "Bi-Hourly": sequence_sheet([("Join yoke", "M-07")])}))
    return path


def test_arg_parser_defaults():
    args = build_arg_parser().parse_args(["plan", "x.xlsx"])

    assert args.command == "plan"
    assert args.query == ""
    assert args.group_by is None
    assert args.db is None


def test_plan_command(tmp_path, capsys):
    plan = write_plan(tmp_path / "plan.xlsx")

    code = main(["--db", str(tmp_path / "c.db"), "plan", str(plan)])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["summary"]["totalTarget"] == 100
    assert [s["styleName"] for s in out["styles"]] == ["STYLE-A"]
    assert out["styles"][0]["physicalLine"] == "S-02"


def test_plan_command_grouped(tmp_path, capsys):
    plan = write_plan(tmp_path / "plan.xlsx")

    code = main(["plan", str(plan), "--group-by", "supervisor", "--query", "style-a"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert list(out["groups"]) == ["SOHRAB"]


def test_qco_command_saves(tmp_path, capsys):
    current = write_ob(tmp_path / "cur.xlsx", "S2554MESS")
    upcoming = write_ob(tmp_path / "up.xlsx", "H2231")
    db_path = tmp_path / "c.db"

    code = main(["--db", str(db_path), "qco", str(current), str(upcoming), "--line", "S-05", "--save"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["qcoNumber"].startswith("S-05-S255-H223-")
    assert out["save"]["success"] is True
    assert ChangeoverRepository(Db(db_path)).get(out["qcoNumber"])["lineNumber"] == "S-05"


def test_qco_line_from_config(tmp_path, capsys):
    current = write_ob(tmp_path / "cur.xlsx", "AAAA")
    db_path = tmp_path / "c.db"
    db = Db(db_path)
    db.ensure_schema()
    ChangeoverRepository(db).set_config(key="qco_line", value="S-07A")

    code = main(["--db", str(db_path), "qco", str(current), str(current)])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["lineNumber"] == "S-07A"
    assert "save" not in out


def test_bad_workbook_exits_nonzero(tmp_path, capsys):
    bad = tmp_path / "bad.xlsx"
    bad.write_bytes(b"not a workbook")

    assert main(["plan", str(bad)]) == 1
    assert main(["--db", str(tmp_path / "c.db"), "qco", str(bad), str(tmp_path / "missing.xlsx"), "--line", "S-01"]) == 1
    assert capsys.readouterr().out == ""


def test_qco_without_database_uses_default_line(tmp_path, capsys):
    current = write_ob(tmp_path / "cur.xlsx", "AAAA")
    db_path = tmp_path / "db" / "c.db"

    code = main(["--db", str(db_path), "qco", str(current), str(current)])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["lineNumber"] == "S-10"
    assert not db_path.parent.exists()


def test_invalid_log_level_keeps_stdout_json(tmp_path, capsys):
    plan = write_plan(tmp_path / "plan.xlsx")

    code = main(["--log-level", "bogus", "plan", str(plan)])

    assert code == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out)["summary"]["totalTarget"] == 100
    assert "Invalid log level: bogus" in captured.err
    assert logging.getLogger().level == logging.INFO
