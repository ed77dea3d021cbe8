from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv

from delivery_board.api.client import FetchError, extract_rows, fetch_rows, read_rows_file
from delivery_board.api.sample import SAMPLE_REPORT
from delivery_board.config.loader import DEFAULT_CONFIG_PATH, BoardConfig, ConfigError, apply_env_overrides, load_config
from delivery_board.logging.error_log import FetchFailureLog
from delivery_board.logging.init import log_summary, setup_logging
from delivery_board.models.access_scope import RouteParams, ScopeState
from delivery_board.models.filter_query import FilterQuery, VisibleGroup
from delivery_board.services.board import Board
from delivery_board.services.detail import TaskDetail, sort_for_display
from delivery_board.services.scope import parse_route, resolve_scope
from delivery_board.services.summary import render_summary_line

"""CLI entrypoint: load the report, scope it, filter it and print the board.

    python -m delivery_board.cli --route "?c=mastec-inc&m=Union"
    python -m delivery_board.cli --admin --format json
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_ACCESS_DENIED = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env (REPORT_API_URL) with python-dotenv; failures only warn."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Delivery board: customer scoped release report")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to board.yml")
    p.add_argument("--route", default="", help="Board URL or query string (?c=..&m=..#task=..)")
    p.add_argument("-c", "--customer-token", default=None, help="Customer scope token (number, slug or comma list)")
    p.add_argument("--admin", action="store_true", help="Unrestricted staff view")
    p.add_argument("-m", "--milestone", default=None, help="Milestone filter text")
    p.add_argument("--customer", default="", help="Customer filter text (ignored for scoped links)")
    p.add_argument("--task", default=None, help="Show the detail of a task number")
    p.add_argument("--input", type=Path, default=None, help="Read the report JSON from a file instead of fetching")
    p.add_argument("--format", choices=("text", "json", "csv"), default="text")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _route_params(args: argparse.Namespace) -> RouteParams:
    """Route string first, explicit options override it."""
    params = parse_route(args.route)
    token = params.customer_token
    if args.customer_token is not None:
        token = args.customer_token.strip().lower()
    return RouteParams(
        customer_token=token,
        is_admin=params.is_admin or args.admin,
        milestone=args.milestone.strip() if args.milestone else params.milestone,
        task_id=args.task.strip() if args.task else params.task_id,
    )


def _load_rows(cfg: BoardConfig, input_path: Path | None) -> tuple[str, list[dict]]:
    if input_path is not None:
        return str(input_path), read_rows_file(input_path)
    if cfg.uses_sample_data:
        return "sample", extract_rows(SAMPLE_REPORT)
    return cfg.report_url, fetch_rows(cfg.report_url, timeout=cfg.timeout_seconds)


def _print_text(board: Board, visible: list[VisibleGroup], cfg: BoardConfig) -> None:
    if board.viewing_as:
        print(f"Viewing as: {board.viewing_as}")
    for group in visible:
        print(f"== {group.customer} / {group.milestone} [{group.status.label}]")
        if group.address:
            print(f"   {group.address}")
        for record in sort_for_display(group.records, cfg.sort_field):
            due = record.formatted_date("DueDate") or "—"
            print(f"   #{record.task_id or '?'} {record.text('Name')} due={due} status={record.status or '—'}")
            for item in record.items:
                print(f"      - {item.name} x {item.display_qty}")


def _print_detail(detail: TaskDetail) -> None:
    print(f"Task #{detail.task_id}: {detail.title}")
    print(f"  customer:  {detail.customer}")
    print(f"  milestone: {detail.milestone}")
    print(f"  status:    {detail.status.label}")
    print(f"  due:       {detail.due_date or '—'}")
    print(f"  completed: {detail.completion_date or '—'}")
    print(f"  contract:  {detail.contract_date or '—'}")
    print(f"  ship to:   {detail.ship_to or '—'}")
    print(f"  tracking:  {detail.tracking or '—'}")
    for item in detail.items:
        print(f"  - {item.name} x {item.display_qty}")


def _print_csv(visible: list[VisibleGroup]) -> None:
    rows = []
    for group in visible:
        for record in group.records:
            row = dict(record.fields)
            row["GroupStatus"] = group.status.label
            row["Items"] = "; ".join(f"{i.name} x {i.display_qty}" for i in record.items)
            rows.append(row)
    pd.DataFrame(rows).to_csv(sys.stdout, index=False)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    # machine readable output keeps stdout clean; log lines go to stderr
    stream = sys.stdout if args.format == "text" else sys.stderr
    logger = setup_logging(debug=args.debug, stream=stream)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = apply_env_overrides(load_config(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    params = _route_params(args)
    scope = resolve_scope(params)
    board = Board(scope, cfg)

    failure_log = FetchFailureLog(Path(cfg.error_log_dir))
    try:
        source, rows = _load_rows(cfg, args.input)
    except FetchError as e:
        logger.error(f"fetch: {e.user_message} ({e})")
        try:
            failure_log.record(str(args.input or cfg.report_url), e)
        except OSError as log_e:
            logger.warning(f"error log write failed: {log_e}")
        return EXIT_FATAL

    logger.info(f"Loaded {len(rows)} rows from: {source}")
    state = board.load(rows)
    query = FilterQuery(customer=args.customer, milestone=params.milestone or "")
    visible = board.visible(query)
    message = board.message(visible)

    detail = None
    if params.task_id:
        detail = board.task_detail(params.task_id)
        if detail is None:
            logger.warning(f"task not found: {params.task_id}")

    if args.format == "json":
        print(json.dumps({
            "viewing_as": board.viewing_as,
            "scope": state.resolution.state.value,
            "message": message,
            "groups": [g.to_dict() for g in visible],
            "task": detail.to_dict() if detail else None,
        }, ensure_ascii=False, default=str))
    elif args.format == "csv":
        _print_csv(visible)
    else:
        _print_text(board, visible, cfg)
        if detail is not None:
            _print_detail(detail)

    if message:
        logger.info(message)

    log_summary(render_summary_line(state, visible)[len("SUMMARY "):])

    if state.resolution.state in (ScopeState.NO_ACCESS, ScopeState.UNRESOLVED):
        return EXIT_ACCESS_DENIED
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
