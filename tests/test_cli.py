from __future__ import annotations

import io
import subprocess
from contextlib import redirect_stderr
from pathlib import Path

from helpers import cp, ref_record

from branchhop import cli
from branchhop.errors import ExitCode
from branchhop.models import SessionOutcome
from branchhop.picker.dispatch import Key, KeyEvent, dispatch
from branchhop.picker.state import PickerState

# 2024-01-10 09:00:00 UTC
T_RECENT = 1704877200


class FakeGit:
    def __init__(self, listing: bytes, checkout_status: int = 0) -> None:
        self.listing = listing
        self.checkout_status = checkout_status
        self.checkouts: list[list[str]] = []

    def __call__(self, cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess:
        if "rev-parse" in cmd:
            return cp(0, "/work/app\n")
        if "for-each-ref" in cmd:
            return cp(0, self.listing)
        if "checkout" in cmd:
            self.checkouts.append(cmd)
            return subprocess.CompletedProcess(args=cmd, returncode=self.checkout_status)
        raise AssertionError(f"unexpected command: {cmd}")


def _listing() -> bytes:
    return (
        ref_record("refs/heads/main", date=f"{T_RECENT - 60} +0000", contents="merge\n")
        + ref_record("refs/heads/release/foo", date=f"{T_RECENT} +0000", contents="ship\n")
    )


def _keys_picker(*keys: Key | str, seen: dict[str, object] | None = None):
    def picker(state: PickerState, **kwargs: object) -> SessionOutcome:
        if seen is not None:
            seen.update(kwargs)
            seen["display_names"] = [branch.display_name for branch in state.branches]
        for key in keys:
            dispatch(state, KeyEvent(key))
        return state.finish()

    return picker


def test_cli_help_includes_public_flags() -> None:
    help_text = cli.build_parser().format_help()

    for flag in ("--repo", "--palette", "--config", "--log-level", "--log-file"):
        assert flag in help_text


def test_invalid_palette_returns_usage_error() -> None:
    assert cli.main(["--palette", "neon"]) == int(ExitCode.INVALID_ARGS)


def test_invalid_log_level_returns_usage_error() -> None:
    assert cli.main(["--log-level", "LOUD"]) == int(ExitCode.INVALID_ARGS)


def test_confirm_checks_out_real_name_of_shortened_branch() -> None:
    git = FakeGit(_listing())
    seen: dict[str, object] = {}

    code = cli.main([], picker=_keys_picker(Key.ENTER, seen=seen), runner=git)

    assert code == 0
    assert seen["display_names"] == ["rel/foo", "main"]
    assert git.checkouts == [["git", "checkout", "release/foo"]]


def test_non_utf8_commit_message_does_not_abort_the_session() -> None:
    git = FakeGit(
        ref_record("refs/heads/latin", date=f"{T_RECENT} +0000", contents=b"caf\xe9 fix\n")
        + _listing()
    )
    seen: dict[str, object] = {}

    code = cli.main([], picker=_keys_picker(Key.ENTER, seen=seen), runner=git)

    assert code == 0
    assert seen["display_names"] == ["latin", "rel/foo", "main"]
    assert git.checkouts == [["git", "checkout", "latin"]]


def test_navigation_then_confirm_picks_cursor_branch() -> None:
    git = FakeGit(_listing())

    code = cli.main(["--repo", "/work/app"], picker=_keys_picker("j", Key.ENTER), runner=git)

    assert code == 0
    assert git.checkouts == [["git", "-C", "/work/app", "checkout", "main"]]


def test_cancel_never_invokes_checkout() -> None:
    git = FakeGit(_listing())

    code = cli.main([], picker=_keys_picker("j", "q"), runner=git)

    assert code == 0
    assert git.checkouts == []


def test_failed_checkout_reports_status_and_exit_code() -> None:
    git = FakeGit(_listing(), checkout_status=1)
    stream = io.StringIO()

    with redirect_stderr(stream):
        code = cli.main([], picker=_keys_picker(Key.ENTER), runner=git)

    assert code == int(ExitCode.CHECKOUT_ERROR)
    assert "status was 1" in stream.getvalue()


def test_repository_error_is_reported_before_picker_runs() -> None:
    called = {"picker": False}

    def picker(state: PickerState, **_: object) -> SessionOutcome:
        called["picker"] = True
        return state.finish()

    def runner(cmd: list[str], **_: object) -> subprocess.CompletedProcess:
        return cp(128, "", "fatal: not a git repository")

    stream = io.StringIO()
    with redirect_stderr(stream):
        code = cli.main([], picker=picker, runner=runner)

    assert code == int(ExitCode.REPOSITORY_ERROR)
    assert not called["picker"]
    assert "No git repository found" in stream.getvalue()


def test_empty_repository_runs_picker_without_checkout() -> None:
    git = FakeGit(b"")

    code = cli.main([], picker=_keys_picker(Key.ENTER), runner=git)

    assert code == 0
    assert git.checkouts == []


def test_palette_flag_overrides_config(tmp_path: Path) -> None:
    config = tmp_path / "config.toml"
    config.write_text('palette = "red"\nspecial_branches = ["trunk"]\n', encoding="utf-8")
    seen: dict[str, object] = {}

    cli.main(
        ["--config", str(config), "--palette", "indigo"],
        picker=_keys_picker("q", seen=seen),
        runner=FakeGit(_listing()),
    )

    assert seen["palette"] == "indigo"
    assert seen["special_branches"] == ("trunk",)


def test_missing_explicit_config_is_a_config_error(tmp_path: Path) -> None:
    stream = io.StringIO()

    with redirect_stderr(stream):
        code = cli.main(
            ["--config", str(tmp_path / "absent.toml")],
            picker=_keys_picker("q"),
            runner=FakeGit(_listing()),
        )

    assert code == int(ExitCode.CONFIG_ERROR)
    assert "Config file not found" in stream.getvalue()


def test_unexpected_exception_maps_to_runtime_error() -> None:
    def picker(state: PickerState, **_: object) -> SessionOutcome:
        raise RuntimeError("renderer exploded")

    stream = io.StringIO()
    with redirect_stderr(stream):
        code = cli.main([], picker=picker, runner=FakeGit(_listing()))

    assert code == int(ExitCode.RUNTIME_ERROR)
    assert "Unexpected runtime failure" in stream.getvalue()
