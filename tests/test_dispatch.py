from __future__ import annotations

import pytest
from helpers import make_branch

from branchhop.picker.dispatch import (
    Action,
    InterruptEvent,
    Key,
    KeyEvent,
    KeyKind,
    ResizeEvent,
    action_for,
    dispatch,
)
from branchhop.picker.state import PickerState


def _state() -> PickerState:
    return PickerState.initial([make_branch(name, 10 - i) for i, name in enumerate("abc")])


@pytest.mark.parametrize("key", [Key.UP, Key.LEFT, "k", "h"])
def test_previous_keys(key: Key | str) -> None:
    assert action_for(KeyEvent(key)) is Action.PREV


@pytest.mark.parametrize("key", [Key.DOWN, Key.RIGHT, "j", "l"])
def test_next_keys(key: Key | str) -> None:
    assert action_for(KeyEvent(key)) is Action.NEXT


@pytest.mark.parametrize("key", ["q", Key.ESCAPE])
def test_cancel_keys(key: Key | str) -> None:
    assert action_for(KeyEvent(key)) is Action.CANCEL


def test_enter_confirms() -> None:
    assert action_for(KeyEvent(Key.ENTER)) is Action.CONFIRM


@pytest.mark.parametrize("key", ["x", "Q", "J", " ", "1"])
def test_unbound_keys_are_ignored(key: str) -> None:
    state = _state()

    assert dispatch(state, KeyEvent(key)) is None
    assert state.cursor == 0
    assert not state.finished


@pytest.mark.parametrize("kind", [KeyKind.RELEASE, KeyKind.REPEAT])
def test_release_and_repeat_events_do_not_move_cursor(kind: KeyKind) -> None:
    state = _state()

    assert dispatch(state, KeyEvent(Key.DOWN, kind)) is None
    assert state.cursor == 0


def test_press_then_release_steps_once() -> None:
    state = _state()

    dispatch(state, KeyEvent("j", KeyKind.PRESS))
    dispatch(state, KeyEvent("j", KeyKind.RELEASE))

    assert state.cursor == 1


def test_resize_is_ignored_and_interrupt_cancels() -> None:
    state = _state()

    assert dispatch(state, ResizeEvent(80, 24)) is None
    assert not state.finished

    assert dispatch(state, InterruptEvent()) is Action.CANCEL
    assert state.outcome is not None
    assert state.outcome.confirmed is False


def test_dispatch_applies_transitions() -> None:
    state = _state()

    dispatch(state, KeyEvent("k"))
    assert state.cursor == 2

    dispatch(state, KeyEvent(Key.ENTER))
    assert state.outcome is not None
    assert state.outcome.selected_real_name == "c"
