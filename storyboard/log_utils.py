# storyboard/log_utils.py

import logging

from storyboard.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

COLOR_CODES = {
    'black': '30', 'red': '31', 'green': '32', 'yellow': '33', 'blue': '34', 'magenta': '35',
    'cyan': '36', 'white': '37', 'bright_black': '90', 'bright_red': '91', 'bright_green': '92',
    'bright_yellow': '93', 'bright_blue': '94', 'bright_magenta': '95', 'bright_cyan': '96', 'bright_white': '97'
}


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )


def color_print(logger: logging.Logger, text, color=None) -> None:
    if color and color.lower() in COLOR_CODES:
        color_code = COLOR_CODES[color.lower()]
        text = f"\033[{color_code}m{text}\033[0m"
    logger.info(str(text))
