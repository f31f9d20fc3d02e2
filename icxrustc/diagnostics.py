"""Re-formatting of rustc diagnostics in an Intel-compiler style."""

from __future__ import annotations

import functools
import os
import re
import sys

_RESET = "\x1b[0m"
_CODES = {
    "bold": "1",
    "bright_black": "90",
    "bright_red": "91",
    "bright_green": "92",
    "bright_yellow": "93",
    "bright_blue": "94",
    "bright_cyan": "96",
    "bright_white": "97",
    "yellow": "33",
    "dimmed": "2",
}

_ERROR_RE = re.compile(r"^error(\[E\d+\])?:")
_WARNING_RE = re.compile(r"^warning:")
_NOTE_RE = re.compile(r"^\s*= note:")
_HELP_RE = re.compile(r"^\s*= help:")
_LOCATION_RE = re.compile(r"^\s*--> (.+):(\d+):(\d+)")


def _color_default() -> bool:
    if os.environ.get("CLICOLOR_FORCE", "0") != "0":
        return True
    if "NO_COLOR" in os.environ:
        return False
    return os.environ.get("CLICOLOR") != "0"


def paint(text: str, *styles: str, color: bool = True) -> str:
    """Wrap text in ANSI escape codes for the given styles."""
    if not color or not styles:
        return text
    codes = ";".join(_CODES[style] for style in styles)
    return f"\x1b[{codes}m{text}{_RESET}"


class DiagnosticReporter:
    """Formats rustc diagnostic lines and counts errors and warnings."""

    def __init__(self, color: bool | None = None) -> None:
        self.color = _color_default() if color is None else color

    def _paint(self, text: str, *styles: str) -> str:
        return paint(text, *styles, color=self.color)

    def _classify(self, line: str) -> tuple[str, int, int]:
        location = _LOCATION_RE.match(line)
        if location:
            file, row, col = location.groups()
            text = "     {} {}:{}:{}".format(
                self._paint("-->", "bright_blue"),
                self._paint(file, "bright_cyan"),
                self._paint(row, "bright_yellow"),
                self._paint(col, "bright_yellow"),
            )
            return text, 0, 0
        if _ERROR_RE.match(line):
            return self._headline(_ERROR_RE.sub("", line, count=1), "error", "bright_red"), 0, 1
        if _WARNING_RE.match(line):
            return self._headline(_WARNING_RE.sub("", line, count=1), "warning", "bright_yellow"), 1, 0
        if _NOTE_RE.match(line):
            return self._annotation(line.replace("= note:", ""), "note:", "bright_blue"), 0, 0
        if _HELP_RE.match(line):
            return self._annotation(line.replace("= help:", ""), "help:", "bright_green"), 0, 0
        if line.lstrip().startswith("|"):
            if "^" in line:
                return "     " + self._paint(line, "bold", "bright_green"), 0, 0
            return "     " + self._paint(line, "bright_black"), 0, 0
        return "     " + self._paint(line, "bright_black"), 0, 0

    def _headline(self, message: str, label: str, label_color: str) -> str:
        return "{} {} {}".format(
            self._paint(label, "bold", label_color),
            self._paint("[ICX]", "bright_cyan"),
            self._paint(message, "bright_white"),
        )

    def _annotation(self, message: str, label: str, label_color: str) -> str:
        return "     {} {}".format(
            self._paint(label, label_color),
            self._paint(message.strip(), "bright_white"),
        )

    def format(self, line: str) -> str:
        """Return the re-formatted form of one diagnostic line."""
        return self._classify(line)[0]

    def report(self, line: str) -> tuple[int, int]:
        """Print one formatted line and return its (warnings, errors) counts."""
        text, warnings, errors = self._classify(line)
        print(text)
        return warnings, errors


@functools.lru_cache(maxsize=None)
def _default_reporter() -> DiagnosticReporter:
    return DiagnosticReporter()


def format_diagnostic(line: str) -> str:
    """Format one diagnostic line with the default reporter."""
    return _default_reporter().format(line)


def print_summary(warnings: int, errors: int, elapsed_ms: int) -> None:
    """Print the closing summary of a compilation to stderr."""
    color = _default_reporter().color
    print(
        "{} {} {}, {} {} ({} ms)".format(
            paint("[icx-rustc]", "bold", "bright_blue", color=color),
            paint(str(errors), "bright_red" if errors else "bright_green", color=color),
            "error" if errors == 1 else "errors",
            paint(str(warnings), "bright_yellow" if warnings else "bright_green", color=color),
            "warning" if warnings == 1 else "warnings",
            elapsed_ms,
        ),
        file=sys.stderr,
    )