"""Input events and their mapping onto picker transitions."""

from __future__ import annotations

import logging as py_logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from branchhop.picker.state import PickerState

logger = py_logging.getLogger(__name__)


class Key(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESCAPE = "escape"


class KeyKind(str, Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


class Action(str, Enum):
    NEXT = "next"
    PREV = "prev"
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True)
class KeyEvent:
    key: Key | str
    kind: KeyKind = KeyKind.PRESS


@dataclass(frozen=True)
class ResizeEvent:
    columns: int = 0
    rows: int = 0


@dataclass(frozen=True)
class InterruptEvent:
    pass


InputEvent = Union[KeyEvent, ResizeEvent, InterruptEvent]

KEY_BINDINGS: dict[Key | str, Action] = {
    "q": Action.CANCEL,
    Key.ESCAPE: Action.CANCEL,
    Key.ENTER: Action.CONFIRM,
    Key.UP: Action.PREV,
    Key.LEFT: Action.PREV,
    "k": Action.PREV,
    "h": Action.PREV,
    Key.DOWN: Action.NEXT,
    Key.RIGHT: Action.NEXT,
    "j": Action.NEXT,
    "l": Action.NEXT,
}


def action_for(event: InputEvent) -> Action | None:
    if isinstance(event, InterruptEvent):
        return Action.CANCEL
    if not isinstance(event, KeyEvent):
        return None
    # release and repeat events would step the cursor twice
    if event.kind is not KeyKind.PRESS:
        return None
    return KEY_BINDINGS.get(event.key)


def dispatch(state: PickerState, event: InputEvent) -> Action | None:
    action = action_for(event)
    if action is None:
        return None
    logger.debug("Dispatching action=%s cursor=%s", action.value, state.cursor)
    if action is Action.NEXT:
        state.move_next()
    elif action is Action.PREV:
        state.move_prev()
    elif action is Action.CONFIRM:
        state.confirm()
    elif action is Action.CANCEL:
        state.cancel()
    return action
