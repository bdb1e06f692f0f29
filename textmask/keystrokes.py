"""Replays typing against a formatter the way a text field would drive it."""
from typing import List, Optional

from .edit_value import EditValue

BACKSPACE = "\b"


def insert_text(value: EditValue, chars: str) -> EditValue:
    """Replaces the selection with `chars`, leaving the caret after them."""
    value = value.clamped()
    start = min(value.selection_start, value.selection_end)
    end = max(value.selection_start, value.selection_end)
    text = value.text[:start] + chars + value.text[end:]
    return EditValue.collapsed(text, start + len(chars))


def backspace(value: EditValue) -> EditValue:
    """
    Deletes the selection, or the character before the caret when the
    selection is collapsed. Backspace at offset 0 changes nothing.
    """
    value = value.clamped()
    start = min(value.selection_start, value.selection_end)
    end = max(value.selection_start, value.selection_end)
    if start == end:
        if start == 0:
            return value
        start -= 1
    return EditValue.collapsed(value.text[:start] + value.text[end:], start)


def replay(formatter, keys: str, initial: Optional[EditValue] = None) -> List[EditValue]:
    """
    Feeds `keys` one at a time through `formatter.reformat` and returns the
    value shown after every key. BACKSPACE in `keys` deletes.
    """
    current = initial if initial is not None else EditValue()
    states = []
    for key in keys:
        if key == BACKSPACE:
            raw = backspace(current)
        else:
            raw = insert_text(current, key)
        current = formatter.reformat(current, raw)
        states.append(current)
    return states
