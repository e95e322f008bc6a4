"""Run ``git checkout`` for the branch picked in the session."""

from __future__ import annotations

import logging as py_logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from branchhop.errors import CheckoutError
from branchhop.models import SessionOutcome

logger = py_logging.getLogger(__name__)


def build_checkout_command(branch: str, repo_path: str | Path | None = None) -> list[str]:
    if repo_path is None:
        return ["git", "checkout", branch]
    return ["git", "-C", str(repo_path), "checkout", branch]


def run_checkout(
    branch: str,
    *,
    repo_path: str | Path | None = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> None:
    """Check out ``branch`` with the child sharing our stdin/stdout/stderr.

    Blocks until git exits. There is no timeout and no retry.
    """
    cmd = build_checkout_command(branch, repo_path)
    logger.info("Checking out branch=%s", branch)
    try:
        completed = runner(cmd, check=False)
    except OSError as exc:
        logger.error("Failed to spawn git checkout branch=%s error=%s", branch, exc)
        raise CheckoutError(
            f"git checkout could not be started: {exc}",
            hint="Ensure git is installed and available on PATH.",
        ) from exc

    if completed.returncode != 0:
        logger.error("git checkout failed branch=%s status=%s", branch, completed.returncode)
        raise CheckoutError(
            f"git checkout failed, status was {completed.returncode}",
            hint="Commit or stash local changes, then try again.",
            returncode=completed.returncode,
        )
    logger.debug("Checked out branch=%s", branch)


def execute_outcome(
    outcome: SessionOutcome,
    *,
    repo_path: str | Path | None = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> bool:
    """Hand a finished session to git. Returns whether a checkout ran."""
    if not outcome.wants_checkout or outcome.selected_real_name is None:
        logger.debug("No branch confirmed; skipping checkout")
        return False
    run_checkout(outcome.selected_real_name, repo_path=repo_path, runner=runner)
    return True
