"""Picker domain package: cursor state, input dispatch and view model."""

from .dispatch import Action, InputEvent, InterruptEvent, Key, KeyEvent, KeyKind, ResizeEvent, dispatch
from .state import PickerState
from .view_model import ColumnWidths, RowView, ViewModel, build_view_model, row_fields

__all__ = [
    "Action",
    "build_view_model",
    "ColumnWidths",
    "dispatch",
    "InputEvent",
    "InterruptEvent",
    "Key",
    "KeyEvent",
    "KeyKind",
    "PickerState",
    "ResizeEvent",
    "row_fields",
    "RowView",
    "ViewModel",
]
