import string
from typing import Optional

from .edit_value import EditValue
from .logger import get_logger

logger = get_logger(__name__)

# Marks one digit slot in a template
PLACEHOLDER = "?"

# ASCII only; str.isdigit() would also accept superscripts and other scripts
DIGITS = frozenset(string.digits)


class InvalidTemplateError(ValueError):
    """Raised when a formatter is built without a usable template."""


def count_digits(text: str) -> int:
    return sum(1 for ch in text if ch in DIGITS)


def last_digit_index(text: str, start: int) -> int:
    """Index of the last digit at or before `start`, or -1."""
    i = min(start, len(text) - 1)
    while i >= 0:
        if text[i] in DIGITS:
            return i
        i -= 1
    return -1


class TemplateTextFormatter:
    """
    Formats a text field value on every edit according to a template.

    Examples of templates:
    - `??/??` for credit card expiry input
    - `(???) ???-????` for US phone number input

    Each '?' stands for one digit; every other character is a literal that
    gets inserted between the digits. '?' cannot be used as a literal.
    A user cannot enter more digits than the template has placeholders.
    """

    def __init__(self, template: str):
        if template is None:
            raise InvalidTemplateError("Template is required")
        if not isinstance(template, str):
            raise InvalidTemplateError(
                f"Template must be a string, got {type(template).__name__}"
            )
        self._template = template
        # Maximum length of the text once all formatting has been removed
        self._capacity = template.count(PLACEHOLDER)

    @property
    def template(self) -> str:
        return self._template

    @property
    def capacity(self) -> int:
        return self._capacity

    def reformat(self, old_value: EditValue, new_value: EditValue) -> EditValue:
        """
        Called with the field value before and after an edit; returns the
        value the field should display instead of `new_value`.
        """
        new_value = new_value.clamped()
        if len(new_value.text) > len(old_value.text):
            logger.debug(f"Growth edit: {old_value.text!r} -> {new_value.text!r}")
            return self.format_text(new_value)
        if len(new_value.text) < len(old_value.text):
            logger.debug(f"Deletion edit: {old_value.text!r} -> {new_value.text!r}")
            return self._handle_deletion(old_value, new_value)
        # Equal length edits are passed through without reformatting
        return new_value

    def _handle_deletion(self, old_value: EditValue, new_value: EditValue) -> EditValue:
        """
        Handles cases where the new text is shorter than the old text.

        If only literals were deleted, the digit before them is removed too.
        With `(???) ???-????` and `(123)` displayed, backspacing the `)`
        deletes the 3 rather than leaving the field unchanged after
        reformatting.
        """
        if count_digits(new_value.text) != count_digits(old_value.text):
            # A digit was removed; a plain reformat also covers mid-string
            # and multi-character deletes
            return self.format_text(new_value)

        caret = new_value.selection_start
        digit_index = last_digit_index(new_value.text, caret - 1)
        if digit_index == -1:
            # No digit before the caret, nothing to cascade into
            return self.format_text(new_value)

        logger.debug(f"Literal-only deletion, also removing digit at {digit_index}")
        text = new_value.text[:digit_index] + new_value.text[caret:]

        def shift(offset: int) -> int:
            if offset > caret:
                return offset - (caret - digit_index)
            if offset >= digit_index:
                return digit_index
            return offset

        return self.format_text(EditValue(
            text,
            shift(new_value.selection_start),
            shift(new_value.selection_end),
        ))

    def format_text(self, value: EditValue) -> EditValue:
        """Formats a value and its selection according to the template."""
        # Collapse to digits only, then drop whatever the template cannot hold
        trimmed = self.trim(self.collapse(value))

        # No input means no template literals either, so the field can be
        # cleared completely and show its hint text.
        if not trimmed.text:
            return trimmed

        return self.expand(trimmed)

    def collapse(self, value: EditValue) -> EditValue:
        """
        Returns a value with all non-digits removed and selection offsets
        moved onto the digit stream.

        Example: `(123) 456-7890` with the caret between `5` and `6`
        (offset 8) becomes `1234567890` with the caret at 5.
        """
        start = value.selection_start
        end = value.selection_end

        digits = []
        last_offset = 0
        collapsed_start: Optional[int] = None
        collapsed_end: Optional[int] = None
        for i, ch in enumerate(value.text):
            if ch not in DIGITS:
                continue
            if last_offset <= start <= i:
                collapsed_start = len(digits)
            if last_offset <= end <= i:
                collapsed_end = len(digits)
            digits.append(ch)
            last_offset = i + 1

        if collapsed_start is None or start >= last_offset:
            collapsed_start = len(digits)
        if collapsed_end is None or end >= last_offset:
            collapsed_end = len(digits)

        return EditValue("".join(digits), collapsed_start, collapsed_end)

    def trim(self, value: EditValue) -> EditValue:
        """
        Trims a collapsed value to the number of digits the template holds.

        Example: `12345` becomes `1234` with a template of `??/??`.
        """
        if len(value.text) <= self._capacity:
            return value

        return EditValue(
            value.text[:self._capacity],
            min(value.selection_start, self._capacity),
            min(value.selection_end, self._capacity),
        )

    def expand(self, value: EditValue) -> EditValue:
        """
        Inserts the template literals around a collapsed value.

        Example: `123` becomes `12/3` with a template of `??/??`.
        The caret always ends up after the last written character.
        """
        digits = value.text
        collapsed_start = value.selection_start
        collapsed_end = value.selection_end

        parts = []
        length = 0
        last_offset = 0
        written = 0
        expanded_start: Optional[int] = None
        expanded_end: Optional[int] = None

        for pos, ch in enumerate(self._template):
            if ch != PLACEHOLDER:
                continue
            literal = self._template[last_offset:pos]
            parts.append(literal)
            length += len(literal)

            if collapsed_start == written:
                expanded_start = length
            if collapsed_end == written:
                expanded_end = length
            if written == len(digits):
                break

            parts.append(digits[written])
            length += 1
            last_offset = pos + 1
            written += 1

        text = "".join(parts).strip()
        if expanded_start is None:
            expanded_start = len(text)
        if expanded_end is None:
            expanded_end = len(text)
        logger.debug(
            f"Expanded {digits!r} to {text!r}, selection {expanded_start}..{expanded_end}"
        )

        return EditValue.collapsed(text)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, TemplateTextFormatter):
            return NotImplemented
        return self._template == other._template

    def __hash__(self) -> int:
        return hash(self._template)

    def __repr__(self) -> str:
        return f"TemplateTextFormatter(template={self._template!r})"
