"""
Release helper: bump the version, test, build, tag and publish.

Usage examples:
  python -m scripts.release patch
  python -m scripts.release minor --dry-run

The API host is no longer rewritten into the built package; released code
reads HYPOTHESIS_API_URL at runtime.
"""

from __future__ import annotations

import argparse
import logging
import re
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Sequence

logger = logging.getLogger(__name__)

RELEASE_TYPES = ("major", "minor", "patch")

_PYPROJECT_VERSION = re.compile(r'^(version\s*=\s*")([^"]+)(")', re.MULTILINE)
_MODULE_VERSION = re.compile(r'^(__version__\s*=\s*")([^"]+)(")', re.MULTILINE)

Runner = Callable[[Sequence[str]], None]


class ReleaseError(Exception):
    def __init__(self, step: str, detail: str):
        super().__init__(f"[release.{step}] {detail}")
        self.step = step
        self.detail = detail


def run_command(cmd: Sequence[str]) -> None:
    proc = subprocess.run(list(cmd), capture_output=True, text=True)
    if proc.returncode != 0:
        raise subprocess.CalledProcessError(proc.returncode, cmd, proc.stdout, proc.stderr)


def increment_version(current_version: str, release_type: str) -> str:
    major, minor, patch = (int(part) for part in current_version.split(".")[:3])
    if release_type == "major":
        return f"{major + 1}.0.0"
    if release_type == "minor":
        return f"{major}.{minor + 1}.0"
    if release_type == "patch":
        return f"{major}.{minor}.{patch + 1}"
    return current_version


def read_current_version(root: Path) -> str:
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        raise ReleaseError(
            "read_current_version",
            "Could not find a pyproject.toml for this project. "
            "Are you running this command in the right directory?",
        )
    match = _PYPROJECT_VERSION.search(pyproject.read_text(encoding="utf-8"))
    if not match:
        raise ReleaseError(
            "read_current_version",
            "Could not find a current version in pyproject.toml.",
        )
    return match.group(2)


def write_version(root: Path, version: str) -> None:
    targets = [
        (root / "pyproject.toml", _PYPROJECT_VERSION),
        (root / "hypothesis_api" / "__init__.py", _MODULE_VERSION),
    ]
    for path, pattern in targets:
        if not path.is_file():
            continue
        text = path.read_text(encoding="utf-8")
        path.write_text(pattern.sub(rf"\g<1>{version}\g<3>", text, count=1), encoding="utf-8")


def release_steps(version: str) -> List[tuple]:
    """(step name, command, success message) in execution order, after the version bump."""
    return [
        ("run_build", [sys.executable, "-m", "build"], "Build complete!"),
        ("stage_release", ["git", "add", "-A"], "Release staged!"),
        ("commit_release", ["git", "commit", "-m", f"release v{version}"], "Release committed to repo!"),
        ("push_release", ["git", "push", "origin", "master"], "Release pushed to repo!"),
        ("tag_release", ["git", "tag", "-a", version, "-m", f"release {version}"], "Version tagged!"),
        ("push_tag", ["git", "push", "origin", version], "Version tag pushed to remote repo!"),
        ("publish", ["twine", "upload", f"dist/*{version}*"], "Released to PyPI!"),
    ]


def _run_step(run: Runner, step: str, cmd: Sequence[str], dry_run: bool) -> None:
    if dry_run:
        logger.info("[dry-run] %s: %s", step, " ".join(cmd))
        return
    try:
        run(cmd)
    except subprocess.CalledProcessError as exc:
        raise ReleaseError(step, (exc.stderr or exc.stdout or str(exc)).strip()) from exc
    except OSError as exc:
        raise ReleaseError(step, str(exc)) from exc


def release(
    release_type: str,
    *,
    root: Path = Path("."),
    run: Runner = run_command,
    dry_run: bool = False,
) -> str:
    current_version = read_current_version(root)
    version = increment_version(current_version, release_type)
    logger.info("Releasing %s -> %s", current_version, version)

    try:
        _run_step(run, "run_tests", [sys.executable, "-m", "pytest"], dry_run)
    except ReleaseError as exc:
        raise ReleaseError(
            "run_tests",
            "Tests failed! Run pytest and correct errors before releasing.\n" + exc.detail,
        ) from exc
    logger.info("Tests passed!")

    if dry_run:
        logger.info("[dry-run] write_version: %s", version)
    else:
        write_version(root, version)
    logger.info("Version set to %s!", version)

    for step, cmd, message in release_steps(version):
        _run_step(run, step, cmd, dry_run)
        logger.info(message)

    return version


def main(argv: Sequence[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Cut a new hypothesis-api release")
    p.add_argument("release_type", choices=RELEASE_TYPES, help="Which part of the version to bump")
    p.add_argument("--root", default=".", help="Project root holding pyproject.toml")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        release(args.release_type, root=Path(args.root), dry_run=args.dry_run)
    except ReleaseError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
