import json

from PyQt6.QtCore import QSettings

from textmask.logger import get_logger
from textmask.template_formatter import InvalidTemplateError, TemplateTextFormatter

logger = get_logger(__name__)

DEFAULT_TEMPLATE_PRESETS = {
    "card_expiry": "??/??",
    "us_phone": "(???) ???-????",
    "date": "??/??/????",
}


class AppConfig:
    """
    Centralized configuration management.
    Wraps QSettings to provide type-safe access to formatter settings.
    """
    def __init__(self):
        self.settings = QSettings("textmask", "textmask")

    @property
    def group_size(self) -> int:
        return self.settings.value("group_size", 4, type=int)

    @group_size.setter
    def group_size(self, value: int):
        self.settings.setValue("group_size", value)

    @property
    def diagnostic_mode(self) -> bool:
        return self.settings.value("diagnostic_mode", False, type=bool)

    @diagnostic_mode.setter
    def diagnostic_mode(self, value: bool):
        self.settings.setValue("diagnostic_mode", value)

    # --- Template Presets ---

    @property
    def template_presets(self) -> dict:
        """
        Maps preset names to templates:
        {"card_expiry": "??/??", "us_phone": "(???) ???-????", ...}
        """
        raw = self.settings.value("template_presets")
        if raw is None:
            return dict(DEFAULT_TEMPLATE_PRESETS)
        try:
            presets = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Corrupt template presets, using defaults: {e}")
            return dict(DEFAULT_TEMPLATE_PRESETS)
        if not isinstance(presets, dict):
            logger.warning("Template presets are not a mapping, using defaults")
            return dict(DEFAULT_TEMPLATE_PRESETS)
        return presets

    @template_presets.setter
    def template_presets(self, presets: dict):
        self.settings.setValue("template_presets", json.dumps(presets))

    def get_template(self, name: str):
        """Template registered under `name`, or None."""
        return self.template_presets.get(name)

    def add_preset(self, name: str, template: str):
        # Building the formatter rejects unusable templates before saving
        TemplateTextFormatter(template)
        presets = self.template_presets
        presets[name] = template
        self.template_presets = presets
        logger.info(f"Saved template preset {name!r}: {template!r}")

    def create_formatter(self, name: str) -> TemplateTextFormatter:
        template = self.get_template(name)
        if template is None:
            raise InvalidTemplateError(f"Unknown template preset: {name}")
        return TemplateTextFormatter(template)

    def sync(self):
        self.settings.sync()
