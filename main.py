import argparse
import logging
import sys
from textmask.keystrokes import BACKSPACE, replay
from textmask.template_formatter import InvalidTemplateError, TemplateTextFormatter
from textmask.grouping_formatter import GroupingTextFormatter
from textmask.logger import get_logger, set_console_level, setup_exception_hook

logger = get_logger(__name__)


def render(value) -> str:
    """Shows the value with the caret (or selection bounds) drawn as `|`."""
    text = value.text
    start, end = sorted((value.selection_start, value.selection_end))
    if start == end:
        return text[:start] + "|" + text[start:]
    return text[:start] + "|" + text[start:end] + "|" + text[end:]


def load_config():
    # Imported lazily so plain template runs do not touch QSettings
    from textmask.config.app_config import AppConfig
    config = AppConfig()
    if config.diagnostic_mode:
        set_console_level(logging.DEBUG)
    return config


def build_formatter(args):
    if args.group:
        group_size = args.group_size
        if group_size is None:
            group_size = load_config().group_size
        return GroupingTextFormatter(group_size)

    if args.preset:
        return load_config().create_formatter(args.preset)

    if args.template is None:
        raise InvalidTemplateError("Pass a template or --preset NAME")
    return TemplateTextFormatter(args.template)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay keystrokes through a template formatter")
    parser.add_argument("template", nargs="?", help="Template such as '(???) ???-????'")
    parser.add_argument("keys", help="Keys to type; \\b is a backspace")
    parser.add_argument("--preset", help="Use a saved template preset (not combined with TEMPLATE)")
    parser.add_argument("--group", action="store_true", help="Use the fixed-size grouping formatter")
    parser.add_argument("--group-size", type=int, help="Characters per group with --group (default from settings)")
    parser.add_argument("--verbose", action="store_true", help="Log every edit classification")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    sources = [args.template is not None, args.preset is not None, args.group]
    if sum(sources) > 1:
        parser.error("pass only one of TEMPLATE, --preset or --group")
    if args.verbose:
        set_console_level(logging.DEBUG)

    try:
        formatter = build_formatter(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    keys = args.keys.replace("\\b", BACKSPACE)
    logger.debug(f"Replaying {len(keys)} keys through {formatter!r}")
    for key, value in zip(keys, replay(formatter, keys)):
        label = "<bs>" if key == BACKSPACE else key
        print(f"{label:>4}  {render(value)}")

    if isinstance(formatter, GroupingTextFormatter):
        print(f"raw: {formatter.get_raw_string()}")
    return 0


if __name__ == "__main__":
    setup_exception_hook()
    sys.exit(main())
