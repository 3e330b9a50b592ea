"""Ponto de entrada de linha de comando do machine_setup.

Uso:
    machine-setup [--config PATH] [--param KEY=VALUE ...] [--dry-run]
                  [--verbose] [--report PATH]

Status de saída:
    0 → nenhum aplicativo FAILED
    1 → ao menos um aplicativo FAILED (todos foram tentados)
    2 → documento ausente/inválido ou argumentos inválidos (nada aplicado)
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from machine_setup.core.config import (
    ConfigError,
    compute_document_hash,
    load_document_with_raw,
    parse_param_pairs,
)
from machine_setup.core.engine.engine import Engine, RunResult
from machine_setup.core.pipeline.context import RunContext
from machine_setup.core.pipeline.types import ExecutionMode
from machine_setup.core.traceability.report import build_run_report, save_run_report
from machine_setup.handlers import build_default_registry

DEFAULT_CONFIG_PATH = "setup.yaml"

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="machine-setup",
        description="Apply declarative application settings to this machine, idempotently.",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the YAML/JSON configuration document (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--param",
        "-p",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Placeholder value substituted into settings (repeatable)",
    )
    parser.add_argument(
        "--dry-run",
        "--what-if",
        action="store_true",
        dest="dry_run",
        help="Report what would change without changing anything",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Print one line per setting")
    parser.add_argument("--report", type=Path, help="Write a JSON run report to this path")
    return parser


def print_result(result: RunResult, *, verbose: bool, out: TextIO) -> None:
    for app in result.applications:
        print(f"[{app.status.value}] {app.name}: {app.summary}", file=out)
        if verbose:
            for setting in app.settings:
                print(f"    [{setting.status.value}] {setting.key}: {setting.summary}", file=out)
                for warning in setting.warnings:
                    print(f"        warning: {warning}", file=out)

    if result.ok:
        print("All applications applied successfully.", file=out)
    else:
        names = ", ".join(a.name for a in result.failed)
        print(f"{len(result.failed)} application(s) failed: {names}", file=out)


def main(argv: Optional[List[str]] = None, *, ctx: Optional[RunContext] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        params = parse_param_pairs(args.param)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        document, raw = load_document_with_raw(args.config, params=params)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    mode = ExecutionMode.DRY_RUN if args.dry_run else ExecutionMode.APPLY
    ctx = ctx or RunContext()
    ctx.meta["config_path"] = str(args.config)

    result = Engine(registry=build_default_registry(), ctx=ctx).run(document, mode)
    print_result(result, verbose=args.verbose, out=sys.stdout)

    if args.report is not None:
        report = build_run_report(result, ctx, document_hash=compute_document_hash(raw))
        try:
            save_run_report(report, args.report)
        except OSError as e:
            print(f"error: could not write report to {args.report}: {e}", file=sys.stderr)
            return EXIT_FAILURES

    return EXIT_OK if result.ok else EXIT_FAILURES


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
