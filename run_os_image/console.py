"""
User-facing status lines.

Messages are prefixed "Info:" or "Error:" and styled with prompt_toolkit;
when the stream is not a terminal prompt_toolkit writes them as plain text.
"""

import sys

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.styles import Style

_STYLE = Style.from_dict({
    "info": "#00aa00 bold",
    "error": "#aa0000 bold",
    "command": "#0000aa",
    "rule": "#888888",
})


def _emit(label, message, file):
    print_formatted_text(
        FormattedText([(f"class:{label}", f"{label.capitalize()}:"), ("", f" {message}")]),
        style=_STYLE,
        file=file,
    )


def info(message):
    _emit("info", message, sys.stdout)


def error(message):
    _emit("error", message, sys.stderr)


def show_command(formatted_command):
    """Prints the command about to be executed between banner lines."""
    print_formatted_text(FormattedText([("class:rule", "--- Starting QEMU with the following command ---")]), style=_STYLE, file=sys.stdout)
    print_formatted_text(FormattedText([("class:command", formatted_command)]), style=_STYLE, file=sys.stdout)
    print_formatted_text(FormattedText([("class:rule", "-" * 50)]), style=_STYLE, file=sys.stdout)
