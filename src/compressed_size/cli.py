"""Command-line entrypoint for CI runs and local directory comparisons."""

from __future__ import annotations

import argparse
import dataclasses
import json
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

from compressed_size.action import compare_directories, run_action
from compressed_size.build import CommandError, CommandRunner
from compressed_size.config import ActionOverrides, inputs_from_env, load_effective_config
from compressed_size.github import (
    API_URL,
    ContextError,
    GitHubApiError,
    GitHubClient,
    PullRequestContext,
    load_event,
)
from compressed_size.logging import ActionsConsole
from compressed_size.sizes import COMPRESSIONS


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for both subcommands."""
    parser = argparse.ArgumentParser(prog="compressed-size")
    subparsers = parser.add_subparsers(dest="command", required=True)

    action = subparsers.add_parser(
        "action", help="Build the pull request and its base, then publish a size report."
    )
    action.add_argument("--repo-root", default=None, help="Defaults to INPUT_CWD, then '.'.")
    action.add_argument("--event-path", default=None, help="Defaults to GITHUB_EVENT_PATH.")
    action.add_argument("--repository", default=None, help="Defaults to GITHUB_REPOSITORY.")
    action.add_argument("--data-dir", default=None)

    compare = subparsers.add_parser(
        "compare", help="Compare two already-built output directories."
    )
    compare.add_argument("old", help="Directory holding the base build.")
    compare.add_argument("new", help="Directory holding the changed build.")
    compare.add_argument("--config-root", default=".", help="Where to look for config.")
    compare.add_argument("--pattern", default=None)
    compare.add_argument("--exclude", default=None)
    compare.add_argument("--compression", choices=COMPRESSIONS, default=None)
    compare.add_argument("--strip-hash", default=None)
    compare.add_argument("--order-by", default=None)
    compare.add_argument("--minimum-change-threshold", type=int, default=None)
    compare.add_argument("--show-total", action=argparse.BooleanOptionalAction, default=None)
    compare.add_argument(
        "--collapse-unchanged", action=argparse.BooleanOptionalAction, default=None
    )
    compare.add_argument("--omit-unchanged", action=argparse.BooleanOptionalAction, default=None)
    compare.add_argument("--format", choices=("markdown", "console"), default="markdown")
    compare.add_argument("--output", default=None, help="Write the report here instead of stdout.")
    return parser


def main(
    argv: list[str] | None = None,
    environ: Mapping[str, str] | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Entrypoint for the compressed-size command."""
    env = os.environ if environ is None else environ
    out = stdout or sys.stdout
    console = ActionsConsole(out, debug_enabled=env.get("RUNNER_DEBUG") == "1")
    args = build_arg_parser().parse_args(argv)
    try:
        if args.command == "compare":
            return _run_compare(args, console, out)
        return _run_action(args, env, console)
    except (CommandError, ContextError, GitHubApiError, OSError, ValueError) as error:
        console.error(str(error))
        return 1


def _run_compare(args: argparse.Namespace, console: ActionsConsole, out: TextIO) -> int:
    overrides = ActionOverrides(
        pattern=args.pattern,
        exclude=args.exclude,
        compression=args.compression,
        strip_hash=args.strip_hash,
        order_by=args.order_by,
        minimum_change_threshold=args.minimum_change_threshold,
        show_total=args.show_total,
        collapse_unchanged=args.collapse_unchanged,
        omit_unchanged=args.omit_unchanged,
    )
    config = load_effective_config(Path(args.config_root), overrides)
    for warning in config.warnings:
        console.warning(warning)
    comparison = compare_directories(Path(args.old), Path(args.new), config)
    for warning in comparison.warnings:
        console.warning(warning)
    text = comparison.markdown if args.format == "markdown" else comparison.console
    if args.output:
        Path(args.output).write_text(f"{text}\n", encoding="utf-8")
    else:
        out.write(f"{text}\n")
    return 0


def _run_action(args: argparse.Namespace, env: Mapping[str, str], console: ActionsConsole) -> int:
    repo_root = Path(args.repo_root or env.get("INPUT_CWD") or ".")
    overrides = inputs_from_env(env)
    if args.data_dir:
        overrides = dataclasses.replace(overrides, data_dir=Path(args.data_dir).resolve())
    config = load_effective_config(repo_root, overrides)
    for warning in config.warnings:
        console.warning(warning)
    console.debug(f"config {json.dumps(config.to_public_dict(), sort_keys=True)}")

    event_path = args.event_path or env.get("GITHUB_EVENT_PATH")
    if not event_path:
        raise ContextError("GITHUB_EVENT_PATH is not set; pass --event-path.")
    repository = args.repository or env.get("GITHUB_REPOSITORY", "")
    context = PullRequestContext.from_event(load_event(Path(event_path)), repository)
    console.debug(f"pr {json.dumps(dataclasses.asdict(context), sort_keys=True)}")

    token = env.get("INPUT_REPO-TOKEN") or env.get("GITHUB_TOKEN")
    client = GitHubClient(token, api_url=env.get("GITHUB_API_URL", API_URL)) if token else None
    run_action(config, context, CommandRunner(console), client, console)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
