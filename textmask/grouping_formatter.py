from typing import List

from .edit_value import EditValue
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_GROUP_SIZE = 4


class GroupingTextFormatter:
    """
    Splits the field text into fixed size groups separated by one space,
    e.g. `123456789` -> `1234 5678 9` for card numbers.

    Unlike TemplateTextFormatter there is no capacity and no digit
    filtering: any character is grouped.
    """

    def __init__(self, group_size: int = DEFAULT_GROUP_SIZE):
        if group_size < 1:
            raise ValueError(f"Group size must be positive, got {group_size}")
        self.group_size = group_size
        # Last formatted text, replaced on every edit
        self.formatted_string = ""

    def get_raw_string(self) -> str:
        """Last formatted text without the group separators."""
        return self.formatted_string.replace(" ", "").strip()

    def reformat(self, old_value: EditValue, new_value: EditValue) -> EditValue:
        formatted = self.group_text(new_value.text)
        self.formatted_string = formatted

        # Caret moves by however much the text grew or shrank
        position = new_value.selection_start - (len(new_value.text) - len(formatted))
        position = min(max(position, 0), len(formatted))
        logger.debug(f"Grouped {new_value.text!r} to {formatted!r}, caret {position}")

        return EditValue.collapsed(formatted, position)

    def group_text(self, text: str) -> str:
        chars = text.replace(" ", "")
        groups: List[str] = [
            chars[i:i + self.group_size]
            for i in range(0, len(chars), self.group_size)
        ]
        return " ".join(groups)
