"""Local branch loader."""

from __future__ import annotations

import logging as py_logging
import os
import subprocess
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path

from branchhop.errors import RepositoryError
from branchhop.git.recency import sort_by_recency
from branchhop.git.relative_time import human_friendly_time_since
from branchhop.models import Branch, Commit, Repository

logger = py_logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]
NameReplacements = Sequence[tuple[str, str]]

DEFAULT_NAME_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("achalmers/", "ac/"),
    ("release/", "rel/"),
)

_HEADS_PREFIX = "refs/heads/"
_FIELD_SEP = b"\x1f"
_RECORD_END = b"\x00"
_FIELD_COUNT = 6
# Commit messages cannot hold NUL, so NUL ends a record and the message goes last.
# Annotated tag tips are peeled to the commit they point at.
_REF_FORMAT = (
    "%(refname)%1f%(objecttype)%1f%(committerdate:raw)%1f"
    "%(*objecttype)%1f%(*committerdate:raw)%1f"
    "%(if)%(*objecttype)%(then)%(*contents)%(else)%(contents)%(end)%00"
)


def _run_git(
    repo: Path | None, args: list[str], runner: Runner, *, text: bool = True
) -> subprocess.CompletedProcess:
    cmd = ["git", *args] if repo is None else ["git", "-C", str(repo), *args]
    try:
        return runner(cmd, capture_output=True, text=text, check=False)
    except OSError as exc:
        raise RepositoryError(
            f"Unable to run git: {exc}",
            hint="Ensure git is installed and available on PATH.",
        ) from exc


def _stderr_text(result: subprocess.CompletedProcess) -> str:
    stderr = result.stderr or ""
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", "replace")
    return stderr.strip()


def decode_ref_name(raw: bytes) -> str:
    """Decode a ref name so that encoding it again gives git back the same bytes."""
    return raw.decode("utf-8", "surrogateescape")


def printable_name(name: str) -> str:
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def decode_message(raw: bytes) -> str | None:
    """Return the message text, or None when it is missing or not valid UTF-8."""
    if not raw:
        return None
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


def shorten_name(name: str, replacements: NameReplacements = DEFAULT_NAME_REPLACEMENTS) -> str:
    """Rewrite the first matching leading prefix; the rest of the name is untouched."""
    for prefix, short in replacements:
        if prefix and name.startswith(prefix):
            return short + name[len(prefix) :]
    return name


def abbreviate_home(path: str, home: str | None = None) -> str:
    if home is None:
        home = os.environ.get("HOME")
    if not home:
        return path
    home = home.rstrip("/") or "/"
    if path == home:
        return "~"
    if home != "/" and path.startswith(home + "/"):
        return "~" + path[len(home) :]
    return path


def parse_raw_date(raw: str) -> tuple[int, int] | None:
    """Split git's ``<epoch> <+hhmm>`` date into seconds and offset minutes."""
    parts = raw.split()
    if not parts:
        return None
    try:
        seconds = int(parts[0])
    except ValueError:
        return None
    offset_minutes = 0
    if len(parts) > 1 and len(parts[1]) == 5 and parts[1][0] in "+-":
        try:
            hours = int(parts[1][1:3])
            minutes = int(parts[1][3:5])
        except ValueError:
            return None
        offset_minutes = hours * 60 + minutes
        if parts[1][0] == "-":
            offset_minutes = -offset_minutes
    return seconds, offset_minutes


def parse_branch_records(
    output: bytes,
    *,
    replacements: NameReplacements = DEFAULT_NAME_REPLACEMENTS,
    now: datetime | None = None,
) -> list[Branch]:
    """Parse NUL-terminated ``for-each-ref`` records into branches in listing order."""
    branches: list[Branch] = []
    for record in output.split(_RECORD_END):
        record = record.lstrip(b"\n")
        if not record.strip():
            continue
        fields = record.split(_FIELD_SEP, _FIELD_COUNT - 1)
        if len(fields) != _FIELD_COUNT:
            logger.warning("Skipping malformed ref record: %r", record[:80])
            continue
        raw_refname, raw_type, raw_date, raw_peeled_type, raw_peeled_date, contents = fields
        refname = decode_ref_name(raw_refname)
        if not refname.startswith(_HEADS_PREFIX):
            continue
        real_name = refname[len(_HEADS_PREFIX) :]

        objecttype = raw_type.decode("ascii", "replace")
        if objecttype == "tag" and raw_peeled_type == b"commit":
            objecttype, raw_date = "commit", raw_peeled_date

        last_commit: Commit | None = None
        committed_at: int | None = None
        parsed_date = (
            parse_raw_date(raw_date.decode("ascii", "replace")) if objecttype == "commit" else None
        )
        if parsed_date is not None:
            seconds, offset_minutes = parsed_date
            last_commit = Commit(
                message=Commit.first_line(decode_message(contents)),
                relative_time=human_friendly_time_since(seconds, offset_minutes, now=now),
            )
            committed_at = seconds
        else:
            logger.debug("Branch tip is not a readable commit branch=%s", printable_name(real_name))

        branches.append(
            Branch(
                display_name=shorten_name(printable_name(real_name), replacements),
                real_name=real_name,
                last_commit=last_commit,
                committed_at=committed_at,
            )
        )
    return branches


def resolve_repository_root(repo_path: str | Path | None, runner: Runner) -> str:
    repo = Path(repo_path) if repo_path is not None else None
    toplevel = _run_git(repo, ["rev-parse", "--show-toplevel"], runner)
    root = toplevel.stdout.strip() if toplevel.returncode == 0 else ""
    if not root:
        location = repo if repo is not None else Path.cwd()
        logger.error("No repository found path=%s stderr=%s", location, _stderr_text(toplevel))
        raise RepositoryError(
            f"No git repository found at {location}",
            hint="Run branchhop inside a git work tree or pass --repo.",
        )
    return root


def load_repository(
    repo_path: str | Path | None = None,
    *,
    replacements: NameReplacements = DEFAULT_NAME_REPLACEMENTS,
    runner: Runner = subprocess.run,
    now: datetime | None = None,
) -> Repository:
    root = resolve_repository_root(repo_path, runner)
    logger.debug("Listing local branches repo=%s", root)

    listing = _run_git(
        Path(root), ["for-each-ref", f"--format={_REF_FORMAT}", "refs/heads"], runner, text=False
    )
    if listing.returncode != 0:
        logger.error("Failed to read local branches repo=%s stderr=%s", root, _stderr_text(listing))
        raise RepositoryError(
            f"Failed to read local branches for {root}",
            hint="Run `git for-each-ref refs/heads` manually to inspect repository state.",
        )

    branches = sort_by_recency(
        parse_branch_records(listing.stdout or b"", replacements=replacements, now=now)
    )
    if not branches:
        logger.warning("No local branches found repo=%s", root)
    else:
        logger.debug("Discovered %s local branches repo=%s", len(branches), root)
    return Repository(branches=tuple(branches), root=abbreviate_home(root))
