"""Install, build, clean and checkout steps for one revision."""

from __future__ import annotations

from pathlib import Path

from compressed_size.build.packages import detect_package_manager
from compressed_size.build.runner import CommandError, CommandRunner, split_command
from compressed_size.config import BuildConfig
from compressed_size.logging import ActionsConsole


def build_revision(
    runner: CommandRunner,
    console: ActionsConsole,
    cwd: Path,
    build: BuildConfig,
    label: str,
) -> None:
    """Install dependencies and run the build script for the checked-out revision."""
    manager = detect_package_manager(cwd)
    install = split_command(build.install_script) if build.install_script else manager.install
    if install:
        with console.group(f"[{label}] Install Dependencies"):
            console.info(f"Installing using {' '.join(install)}")
            runner.run(install, cwd)

    with console.group(f"[{label}] Build using {manager.name}"):
        runner.run(manager.run_script(build.build_script), cwd)

    # Builds that rewrite tracked files would otherwise leak into the base checkout.
    runner.run(("git", "reset", "--hard"), cwd)


def clean_revision(
    runner: CommandRunner,
    console: ActionsConsole,
    cwd: Path,
    build: BuildConfig,
    label: str,
) -> None:
    """Run the optional clean script after a revision has been measured."""
    if not build.clean_script:
        return
    manager = detect_package_manager(cwd)
    with console.group(f"[{label}] Cleanup"):
        runner.run(manager.run_script(build.clean_script), cwd)


def checkout_base(
    runner: CommandRunner,
    console: ActionsConsole,
    cwd: Path,
    base_ref: str | None,
    base_sha: str,
) -> str:
    """Fetch and hard-reset to the merge target; return the ref that was checked out."""
    with console.group("[base] Checkout target branch"):
        fetches: list[tuple[str, ...]] = []
        if base_ref:
            fetches.append(("git", "fetch", "-n", "origin", base_ref))
        fetches.append(("git", "fetch", "-n", "origin", base_sha))
        fetches.append(("git", "fetch", "-n"))
        for command in fetches:
            try:
                runner.run(command, cwd, capture=True)
            except CommandError as error:
                console.info(f"Fetch failed: {error}")
                continue
            console.info(f"Fetched with: {' '.join(command)}")
            break

        if base_ref:
            try:
                runner.run(("git", "reset", "--hard", base_ref), cwd, capture=True)
                return base_ref
            except CommandError as error:
                console.info(f"Reset to {base_ref} failed, using {base_sha}: {error}")
        runner.run(("git", "reset", "--hard", base_sha), cwd, capture=True)
        return base_sha
