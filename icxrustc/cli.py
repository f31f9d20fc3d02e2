"""Command-line parsing with support for MSVC-style slash options."""

from __future__ import annotations

import sys
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Sequence


class OptLevel(Enum):
    """Optimization level accepted by ``--O``."""

    O0 = "o0"
    O1 = "o1"
    O2 = "o2"
    O3 = "o3"
    Ox = "ox"

    @property
    def rustc_level(self) -> str:
        """The matching value for rustc's ``-Copt-level``."""
        return {"o0": "0", "o1": "1", "o2": "2", "o3": "3", "ox": "3"}[self.value]


@dataclass
class Args:
    """Parsed command-line options."""

    files: list[Path] = field(default_factory=list)
    opt_level: OptLevel | None = None
    msvc_opt: str | None = None
    compile_only: bool = False
    output: Path | None = None
    msvc_obj: Path | None = None
    msvc_exe: Path | None = None
    arch: str | None = None
    xhost: bool = False
    defines: list[str] = field(default_factory=list)
    undefines: list[str] = field(default_factory=list)
    includes: list[Path] = field(default_factory=list)
    warn_level: str | None = None
    wx: bool = False
    link_args: list[str] = field(default_factory=list)
    verbose: bool = False
    dry_run: bool = False
    version: bool = False
    help: bool = False
    edition: str | None = None
    crate_type: str | None = None
    target: str | None = None
    release: bool = False
    optimize_diagnostics: bool = True
    raw_args: list[str] = field(default_factory=list)


def _parse_opt_level(text: str) -> OptLevel:
    for level in OptLevel:
        if level.value == text:
            return level
    choices = ", ".join(level.value for level in OptLevel)
    raise ValueError(
        f"invalid value '{text}' for '--O <OPT_LEVEL>' [possible values: {choices}]"
    )


@dataclass(frozen=True)
class _Option:
    dest: str
    short: str | None
    long: str | None
    kind: str  # "flag", "value" or "multi"
    convert: Callable[[str], object] = str

    @property
    def display(self) -> str:
        return f"--{self.long}" if self.long else f"-{self.short}"


_OPTIONS = (
    _Option("opt_level", None, "O", "value", _parse_opt_level),
    _Option("msvc_opt", "O", None, "value"),
    _Option("compile_only", "c", "c", "flag"),
    _Option("output", "o", "o", "value", Path),
    _Option("msvc_obj", None, "Fo", "value", Path),
    _Option("msvc_exe", None, "Fe", "value", Path),
    _Option("arch", None, "arch", "value"),
    _Option("xhost", None, "xHost", "flag"),
    _Option("defines", "D", "D", "multi"),
    _Option("undefines", "U", "U", "multi"),
    _Option("includes", "I", "I", "multi", Path),
    _Option("warn_level", "W", "W", "value"),
    _Option("wx", None, "WX", "flag"),
    _Option("link_args", None, "link", "multi"),
    _Option("verbose", "v", "v", "flag"),
    _Option("dry_run", None, "###", "flag"),
    _Option("version", None, "version", "flag"),
    _Option("help", None, "help", "flag"),
    _Option("edition", None, "edition", "value"),
    _Option("crate_type", None, "crate-type", "value"),
    _Option("target", None, "target", "value"),
    _Option("release", None, "release", "flag"),
    _Option("optimize_diagnostics", None, "optimize-diagnostics", "flag"),
)

_BY_LONG = {option.long: option for option in _OPTIONS if option.long}
_BY_SHORT = {option.short: option for option in _OPTIONS if option.short}


def normalize_argv(argv: Sequence[str]) -> list[str]:
    """Rewrite ``/name:value`` as ``--name=value`` and ``/name`` as ``-name``."""
    normalized = []
    for arg in argv:
        if arg.startswith("/") and not arg.startswith("//"):
            body = arg[1:]
            if ":" in body:
                normalized.append("--" + body.replace(":", "="))
            else:
                normalized.append("-" + body)
        else:
            normalized.append(arg)
    return normalized


def _take_value(tokens: deque[str], option: _Option) -> str:
    if not tokens or (tokens[0].startswith("-") and tokens[0] != "-"):
        raise ValueError(
            f"a value is required for '{option.display} <{option.dest.upper()}>' "
            "but none was supplied"
        )
    return tokens.popleft()


def _apply(args: Args, option: _Option, value: str | None, seen: set[str]) -> None:
    if option.kind == "flag":
        setattr(args, option.dest, True)
        return
    converted = option.convert(value)
    if option.kind == "multi":
        getattr(args, option.dest).append(converted)
        return
    if option.dest in seen:
        raise ValueError(
            f"the argument '{option.display}' cannot be used multiple times"
        )
    seen.add(option.dest)
    setattr(args, option.dest, converted)


def parse_args(argv: Sequence[str] | None = None) -> Args:
    """Parse command-line arguments (without the program name).

    Raises ValueError on unknown options, missing values or repeated
    single-valued options.
    """
    tokens = deque(normalize_argv(sys.argv[1:] if argv is None else argv))
    args = Args()
    seen: set[str] = set()

    while tokens:
        token = tokens.popleft()
        if token == "--":
            args.raw_args.extend(tokens)
            break
        if token.startswith("--"):
            name, eq, inline = token[2:].partition("=")
            option = _BY_LONG.get(name)
            if option is None:
                raise ValueError(f"unexpected argument '{token}' found")
            if option.kind == "flag":
                if eq:
                    raise ValueError(
                        f"unexpected value '{inline}' for '{option.display}' found"
                    )
                _apply(args, option, None, seen)
            else:
                value = inline if eq else _take_value(tokens, option)
                _apply(args, option, value, seen)
        elif token.startswith("-") and len(token) > 1:
            rest = token[1:]
            while rest:
                char, rest = rest[0], rest[1:]
                option = _BY_SHORT.get(char)
                if option is None:
                    raise ValueError(f"unexpected argument '-{char}' found")
                if option.kind == "flag":
                    _apply(args, option, None, seen)
                    continue
                value = rest.removeprefix("=") if rest else _take_value(tokens, option)
                _apply(args, option, value, seen)
                break
        else:
            args.files.append(Path(token))

    return args