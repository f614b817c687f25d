"""Size-diff orchestration: build both revisions, compare, publish."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from compressed_size.build import CommandRunner, build_revision, checkout_base, clean_revision
from compressed_size.config import ActionConfig
from compressed_size.github import (
    PublishOutcome,
    PullRequestContext,
    ReportPublisher,
    manual_copy_message,
    publish_report,
)
from compressed_size.logging import ActionsConsole, JsonlRunLog
from compressed_size.report import FileSizeRecord, ReportConfig, render_console, render_report
from compressed_size.sizes import diff_sizes, read_sizes

RUN_LOG_NAME = "runs.jsonl"


@dataclass(slots=True, frozen=True)
class SizeComparison:
    """Records and both renderings of one old/new size comparison."""

    records: tuple[FileSizeRecord, ...]
    markdown: str
    console: str
    warnings: tuple[str, ...] = ()


def compare_sizes(
    old: Mapping[str, int],
    new: Mapping[str, int],
    report: ReportConfig,
    warnings: Sequence[str] = (),
) -> SizeComparison:
    """Join two size mappings and render the Markdown and console reports."""
    records = diff_sizes(old, new)
    return SizeComparison(
        records=tuple(records),
        markdown=render_report(records, report),
        console=render_console(records, report.sort_order),
        warnings=tuple(warnings),
    )


def compare_directories(old_root: Path, new_root: Path, config: ActionConfig) -> SizeComparison:
    """Compare two already-built output trees without touching git."""
    for root in (old_root, new_root):
        if not root.is_dir():
            raise ValueError(f"'{root}' is not a directory.")
    warnings: list[str] = []
    old = read_sizes(old_root, config.sizes, warnings)
    new = read_sizes(new_root, config.sizes, warnings)
    return compare_sizes(old, new, config.report, warnings)


def run_action(
    config: ActionConfig,
    context: PullRequestContext,
    runner: CommandRunner,
    client: ReportPublisher | None,
    console: ActionsConsole,
    run_log: JsonlRunLog | None = None,
) -> PublishOutcome:
    """Build the pull request and its base, compare sizes and publish the report."""
    cwd = config.repo_root
    log = run_log or JsonlRunLog(config.data_dir / RUN_LOG_NAME)
    if config.sizes.strip_hash:
        console.info(f"Stripping hash from build chunks using '{config.sizes.strip_hash}' pattern.")
    console.info(f"PR #{context.number} is targeted at {context.base_ref} ({context.base_sha})")

    warnings: list[str] = []
    with log.step("build", revision="current"):
        build_revision(runner, console, cwd, config.build, "current")
    with log.step("measure", revision="current") as details:
        new_sizes = read_sizes(cwd, config.sizes, warnings)
        details["file_count"] = len(new_sizes)
    with log.step("clean", revision="current"):
        clean_revision(runner, console, cwd, config.build, "current")

    with log.step("checkout", base_sha=context.base_sha) as details:
        details["target"] = checkout_base(
            runner, console, cwd, context.base_ref, context.base_sha
        )
    with log.step("build", revision="base"):
        build_revision(runner, console, cwd, config.build, "base")
    with log.step("measure", revision="base") as details:
        old_sizes = read_sizes(cwd, config.sizes, warnings)
        details["file_count"] = len(old_sizes)
    with log.step("clean", revision="base"):
        clean_revision(runner, console, cwd, config.build, "base")

    comparison = compare_sizes(old_sizes, new_sizes, config.report, warnings)
    for warning in comparison.warnings:
        console.warning(warning)
    with console.group("Size Differences:"):
        console.info(comparison.console)

    with log.step(
        "publish",
        use_check=config.comment.use_check,
        comment_key=config.comment.comment_key,
    ) as details:
        outcome = publish_report(
            client,
            context,
            comparison.markdown,
            console,
            comment_key=config.comment.comment_key,
            use_check=config.comment.use_check,
        )
        details["method"] = outcome.method
    if outcome.needs_manual_copy:
        console.info(manual_copy_message(outcome.body))
    console.info("All done!")
    return outcome
