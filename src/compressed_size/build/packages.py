"""Package manager detection from lockfiles."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class PackageManager:
    """Install and script-run commands for one package manager."""

    name: str
    install: tuple[str, ...] | None
    run: tuple[str, ...]

    def run_script(self, script: str) -> tuple[str, ...]:
        """Return argv that runs a package.json script."""
        return (*self.run, script)


def is_yarn_berry(cwd: Path) -> bool:
    """Return True when the project vendors a Yarn 2+ release."""
    releases = cwd / ".yarn" / "releases"
    if not releases.is_dir():
        return False
    return any(releases.glob("yarn-*.cjs"))


def uses_plug_n_play(cwd: Path) -> bool:
    """Return True when dependencies resolve through Plug'n'Play."""
    return (cwd / ".pnp.js").exists() or (cwd / ".pnp.cjs").exists()


def detect_package_manager(cwd: Path) -> PackageManager:
    """Pick the package manager and frozen install command from lockfiles."""
    if is_yarn_berry(cwd):
        manager = PackageManager(
            name="yarn",
            install=("yarn", "install", "--immutable"),
            run=("yarn", "run"),
        )
    elif (cwd / "yarn.lock").exists():
        manager = PackageManager(
            name="yarn",
            install=("yarn", "--frozen-lockfile"),
            run=("yarn", "run"),
        )
    elif (cwd / "pnpm-lock.yaml").exists():
        manager = PackageManager(
            name="pnpm",
            install=("pnpm", "install", "--frozen-lockfile"),
            run=("pnpm", "run"),
        )
    elif (cwd / "package-lock.json").exists():
        manager = PackageManager(name="npm", install=("npm", "ci"), run=("npm", "run"))
    else:
        manager = PackageManager(name="npm", install=("npm", "install"), run=("npm", "run"))

    if uses_plug_n_play(cwd):
        return PackageManager(name=manager.name, install=None, run=manager.run)
    return manager
