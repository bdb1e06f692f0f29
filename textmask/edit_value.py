from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class EditValue:
    """
    Snapshot of a text field: its text plus the selection range.

    Offsets are indices into `text`. A caret is a selection whose start
    and end are equal.
    """
    text: str = ""
    selection_start: int = 0
    selection_end: int = 0

    @classmethod
    def collapsed(cls, text: str, offset: Optional[int] = None) -> "EditValue":
        """Value with a caret at `offset` (end of text when omitted)."""
        if offset is None:
            offset = len(text)
        return cls(text, offset, offset)

    @property
    def is_collapsed(self) -> bool:
        return self.selection_start == self.selection_end

    def copy_with(self, **changes) -> "EditValue":
        return replace(self, **changes)

    def clamped(self) -> "EditValue":
        """
        Returns a copy with both offsets inside [0, len(text)].
        Toolkits report "no selection" as -1, which maps to 0 here.
        """
        limit = len(self.text)
        start = min(max(self.selection_start, 0), limit)
        end = min(max(self.selection_end, 0), limit)
        if start == self.selection_start and end == self.selection_end:
            return self
        return EditValue(self.text, start, end)
