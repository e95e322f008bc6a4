from __future__ import annotations

import subprocess

from branchhop.models import Branch, Commit


def make_branch(
    name: str,
    committed_at: int | None = None,
    *,
    real_name: str | None = None,
    message: str = "commit",
    relative_time: str = "1 hour ago",
) -> Branch:
    last_commit = None if committed_at is None else Commit(message=message, relative_time=relative_time)
    return Branch(
        display_name=name,
        real_name=real_name or name,
        last_commit=last_commit,
        committed_at=committed_at,
    )


def cp(
    returncode: int, stdout: str | bytes = "", stderr: str | bytes = ""
) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def ref_record(
    refname: str | bytes,
    objecttype: str = "commit",
    date: str = "",
    contents: str | bytes = "",
    *,
    peeled_type: str = "",
    peeled_date: str = "",
) -> bytes:
    """One ``for-each-ref`` record as git prints it in bytes mode."""
    if isinstance(refname, str):
        refname = refname.encode()
    if isinstance(contents, str):
        contents = contents.encode()
    fields = [refname, objecttype.encode(), date.encode(), peeled_type.encode(), peeled_date.encode()]
    return b"\x1f".join([*fields, contents]) + b"\x00\n"
