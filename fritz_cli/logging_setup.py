"""
Diagnostics for the FRITZ!Box CLI.

Everything goes to stderr; stdout is reserved for the rendered tables.
Normal runs print bare messages, with a coloured ``warning:``/``error:``
prefix where it matters.  ``--debug`` switches to timestamped lines that
name the emitting logger and also routes the urllib3 connection log
through the same handler.
"""

import logging

import colorlog

log = logging.getLogger("fritz-cli")

_LOG_COLORS = {
    "DEBUG":    "thin_white",
    "WARNING":  "yellow",
    "ERROR":    "red",
    "CRITICAL": "bold_red",
}

_PLAIN_FORMATS = {
    "DEBUG":    "%(message)s",
    "INFO":     "%(message)s",
    "WARNING":  "%(log_color)swarning:%(reset)s %(message)s",
    "ERROR":    "%(log_color)serror:%(reset)s %(message)s",
    "CRITICAL": "%(log_color)serror:%(reset)s %(message)s",
}

_DEBUG_FORMAT = (
    "%(log_color)s%(asctime)s.%(msecs)03d %(levelname)-7s%(reset)s "
    "%(name)s: %(message)s"
)

# loggers that share the handler in debug mode
_DEBUG_LOGGERS = ("urllib3",)


def _make_formatter(debug: bool):
    if debug:
        return colorlog.ColoredFormatter(
            _DEBUG_FORMAT, datefmt="%H:%M:%S", log_colors=_LOG_COLORS, reset=False,
        )
    return colorlog.LevelFormatter(_PLAIN_FORMATS, log_colors=_LOG_COLORS, reset=False)


def _setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    handler = colorlog.StreamHandler()
    handler.setFormatter(_make_formatter(debug))

    log.setLevel(level)
    log.handlers.clear()
    log.addHandler(handler)
    log.propagate = False

    for name in _DEBUG_LOGGERS:
        other = logging.getLogger(name)
        other.handlers.clear()
        if debug:
            other.setLevel(logging.DEBUG)
            other.addHandler(handler)
