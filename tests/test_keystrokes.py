import unittest

from textmask.edit_value import EditValue
from textmask.grouping_formatter import GroupingTextFormatter
from textmask.keystrokes import BACKSPACE, backspace, insert_text, replay
from textmask.template_formatter import TemplateTextFormatter


class TestEditHelpers(unittest.TestCase):
    def test_insert_at_caret(self):
        self.assertEqual(insert_text(EditValue.collapsed("12/"), "3"), EditValue("12/3", 4, 4))

    def test_insert_replaces_selection(self):
        self.assertEqual(insert_text(EditValue("12/34", 0, 2), "9"), EditValue("9/34", 1, 1))

    def test_backspace_before_caret(self):
        self.assertEqual(backspace(EditValue.collapsed("12/3", 2)), EditValue("1/3", 1, 1))

    def test_backspace_deletes_selection(self):
        self.assertEqual(backspace(EditValue("12/34", 4, 1)), EditValue("14", 1, 1))

    def test_backspace_at_start_is_noop(self):
        value = EditValue.collapsed("12", 0)
        self.assertEqual(backspace(value), value)


class TestReplay(unittest.TestCase):
    def test_typing_phone_number(self):
        states = replay(TemplateTextFormatter("(???) ???-????"), "5551234567")
        self.assertEqual(len(states), 10)
        self.assertEqual(states[2].text, "(555)")
        self.assertEqual(states[3].text, "(555) 1")
        self.assertEqual(states[-1], EditValue("(555) 123-4567", 14, 14))

    def test_typing_past_capacity(self):
        states = replay(TemplateTextFormatter("??/??"), "123456")
        self.assertEqual(states[-1].text, "12/34")

    def test_backspaces_remove_digits_and_separators(self):
        states = replay(TemplateTextFormatter("??/??"), "123" + BACKSPACE + BACKSPACE)
        self.assertEqual([s.text for s in states], ["1", "12/", "12/3", "12/", "1"])

    def test_backspace_after_closing_paren(self):
        states = replay(TemplateTextFormatter("(???) ???-????"), "123" + BACKSPACE)
        self.assertEqual(states[-1], EditValue("(12", 3, 3))

    def test_backspace_to_empty(self):
        states = replay(TemplateTextFormatter("??/??"), "1" + BACKSPACE)
        self.assertEqual(states[-1], EditValue("", 0, 0))

    def test_grouping_formatter(self):
        states = replay(GroupingTextFormatter(), "12345")
        self.assertEqual(states[-1], EditValue("1234 5", 6, 6))

    def test_starts_from_initial_value(self):
        states = replay(TemplateTextFormatter("??/??"), "4", initial=EditValue.collapsed("12/3"))
        self.assertEqual(states, [EditValue("12/34", 5, 5)])


if __name__ == "__main__":
    unittest.main()
