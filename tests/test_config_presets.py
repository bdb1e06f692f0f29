import unittest
from unittest.mock import patch


class _FakeQSettings:
    def __init__(self, *args, **kwargs):
        self._store = {}

    def value(self, key, default=None, type=None):
        if key not in self._store:
            return default
        v = self._store.get(key)
        if type is bool:
            return bool(v)
        if type is int:
            return int(v)
        return v

    def setValue(self, key, value):
        self._store[key] = value

    def sync(self):
        return None


class TestTemplatePresets(unittest.TestCase):
    def test_defaults(self):
        with patch("textmask.config.app_config.QSettings", _FakeQSettings):
            from textmask.config.app_config import AppConfig

            cfg = AppConfig()
            self.assertEqual(cfg.get_template("card_expiry"), "??/??")
            self.assertEqual(cfg.get_template("us_phone"), "(???) ???-????")
            self.assertIsNone(cfg.get_template("missing"))
            self.assertEqual(cfg.group_size, 4)
            self.assertFalse(cfg.diagnostic_mode)

    def test_add_preset_persists(self):
        with patch("textmask.config.app_config.QSettings", _FakeQSettings):
            from textmask.config.app_config import AppConfig

            cfg = AppConfig()
            cfg.add_preset("zip_plus4", "?????-????")
            self.assertEqual(cfg.get_template("zip_plus4"), "?????-????")
            # Defaults survive next to the new preset
            self.assertEqual(cfg.get_template("card_expiry"), "??/??")

    def test_add_preset_rejects_missing_template(self):
        with patch("textmask.config.app_config.QSettings", _FakeQSettings):
            from textmask.config.app_config import AppConfig
            from textmask.template_formatter import InvalidTemplateError

            cfg = AppConfig()
            with self.assertRaises(InvalidTemplateError):
                cfg.add_preset("broken", None)
            self.assertIsNone(cfg.get_template("broken"))

    def test_create_formatter(self):
        with patch("textmask.config.app_config.QSettings", _FakeQSettings):
            from textmask.config.app_config import AppConfig
            from textmask.template_formatter import InvalidTemplateError, TemplateTextFormatter

            cfg = AppConfig()
            self.assertEqual(cfg.create_formatter("card_expiry"), TemplateTextFormatter("??/??"))
            with self.assertRaises(InvalidTemplateError):
                cfg.create_formatter("missing")

    def test_corrupt_presets_fall_back_to_defaults(self):
        with patch("textmask.config.app_config.QSettings", _FakeQSettings):
            from textmask.config.app_config import AppConfig, DEFAULT_TEMPLATE_PRESETS

            cfg = AppConfig()
            cfg.settings.setValue("template_presets", "{not json")
            self.assertEqual(cfg.template_presets, DEFAULT_TEMPLATE_PRESETS)
            cfg.settings.setValue("template_presets", "[1, 2]")
            self.assertEqual(cfg.template_presets, DEFAULT_TEMPLATE_PRESETS)

    def test_options_round_trip(self):
        with patch("textmask.config.app_config.QSettings", _FakeQSettings):
            from textmask.config.app_config import AppConfig

            cfg = AppConfig()
            cfg.group_size = 5
            cfg.diagnostic_mode = True
            cfg.sync()
            self.assertEqual(cfg.group_size, 5)
            self.assertTrue(cfg.diagnostic_mode)


if __name__ == "__main__":
    unittest.main()
