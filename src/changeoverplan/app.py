from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from changeoverplan.data.db import Db
from changeoverplan.data.excel_io import WorkbookError
from changeoverplan.data.repository import ChangeoverRepository
from changeoverplan.logging_conf import configure_logging
from changeoverplan.plan import group_styles, parse_plan_file, search_styles, summarize_plan
from changeoverplan.qco import build_changeover, parse_ob_file
from changeoverplan.settings import DEFAULT_LINE_NUMBER, Settings, default_db_path

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sewing line plan and changeover tools")
    parser.add_argument("--log-level", type=str, default="INFO")
    parser.add_argument("--db", type=Path, default=None, help="sqlite file (default: db/changeover.db)")
    sub = parser.add_subparsers(dest="command", required=True)

    plan = sub.add_parser("plan", help="Reconstruct style runs from a production plan workbook")
    plan.add_argument("file", type=Path)
    plan.add_argument("--query", type=str, default="", help="Filter by style, line or supervisor")
    plan.add_argument("--group-by", choices=["line", "supervisor"], default=None)

    qco = sub.add_parser("qco", help="Compare two OB workbooks for a changeover")
    qco.add_argument("current", type=Path)
    qco.add_argument("upcoming", type=Path)
    qco.add_argument("--line", type=str, default=None, help="Line code (default: config 'qco_line')")
    qco.add_argument("--save", action="store_true", help="Store the changeover record")
    return parser


def run_plan(args: argparse.Namespace) -> dict:
    styles = asyncio.run(parse_plan_file(args.file))
    selected = search_styles(styles, args.query)
    out: dict = {"summary": summarize_plan(selected).to_dict()}
    if args.group_by:
        out["groups"] = {
            key: [s.to_dict() for s in group]
            for key, group in group_styles(selected, by=args.group_by).items()
        }
    else:
        out["styles"] = [s.to_dict() for s in selected]
    return out


async def _parse_pair(current: Path, upcoming: Path, threshold: float):
    return await asyncio.gather(
        parse_ob_file(current, threshold=threshold),
        parse_ob_file(upcoming, threshold=threshold),
    )


def run_qco(args: argparse.Namespace, settings: Settings) -> dict:
    repo = None
    # Only an existing database is consulted for the default line.
    if args.save or (args.line is None and settings.db_path.exists()):
        db = Db(settings.db_path)
        db.ensure_schema()
        repo = ChangeoverRepository(db)

    line = args.line
    if line is None and repo is not None:
        line = repo.get_config(key="qco_line", default=settings.line_number)
    line = line or settings.line_number

    current, upcoming = asyncio.run(_parse_pair(args.current, args.upcoming, settings.match_threshold))
    record = build_changeover(current, upcoming, line_number=line)
    out = record.to_dict()

    if args.save:
        result = repo.save(record.qco_number, record)
        out["save"] = {"success": result.success, "message": result.message, "id": result.id}
    return out


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.log_level)
    settings = Settings(
        db_path=args.db or default_db_path(),
        log_level=args.log_level,
        line_number=DEFAULT_LINE_NUMBER,
    )

    try:
        if args.command == "plan":
            out = run_plan(args)
        else:
            out = run_qco(args, settings)
    except (WorkbookError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    json.dump(out, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ in {"__main__", "__mp_main__"}:
    sys.exit(main())
