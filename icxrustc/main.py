"""Entry point of the icx-rustc command."""

from __future__ import annotations

import sys
from typing import Sequence

from .cli import parse_args
from .diagnostics import DiagnosticReporter, paint
from .executor import ExecutionError, run
from .translator import TranslationError, translate

_PRODUCT = "Intel(R) oneAPI Rust Compiler"
_VERSION = "2025.0.0"
_TARGETS = ("x86_64-pc-windows-msvc", "x86_64-unknown-linux-gnu")

_VERSION_BANNER = (
    f"{_PRODUCT} (icx-rustc)",
    f"Version {_VERSION} (Rust Edition)",
    "Target: " + " / ".join(_TARGETS),
    "Rustc wrapper with Intel-style command interface",
)

_HELP_SECTIONS = (
    (
        "Optimization Options:",
        (
            "  /O0, -O0          Disable optimization",
            "  /O1, -O1          Optimize for size",
            "  /O2, -O2          Optimize for speed (default)",
            "  /O3, -O3          Aggressive optimization",
            "  /Ox               Maximum optimization",
            "  -xHost            Optimize for host architecture",
            "  /arch:<feature>   Target specific architecture (AVX2, AVX512, etc.)",
        ),
    ),
    (
        "Code Generation:",
        (
            "  /c                Compile only, do not link",
            "  /o <file>         Specify output file name",
            "  -o <file>         Same as /o",
            "  /Fo<file>         Specify object file name (MSVC style)",
            "  /Fe<file>         Specify executable name (MSVC style)",
        ),
    ),
    (
        "Preprocessor:",
        (
            "  /D<name>          Define macro",
            "  /D<name>=<value>  Define macro with value",
            "  /U<name>          Undefine macro",
            "  /I<dir>           Add include directory",
        ),
    ),
    (
        "Linking:",
        (
            "  /link <options>   Pass options to linker",
            "  -C link-args=...  Raw linker arguments",
        ),
    ),
    (
        "Diagnostics:",
        (
            "  /W0, -w           Disable warnings",
            "  /W1, -W1          Basic warnings",
            "  /W3, -W           Default warnings",
            "  /Wall             All warnings",
            "  /WX               Warnings as errors",
            "  -v                Verbose mode",
            "  --###             Show commands without executing",
        ),
    ),
    (
        "Rust-specific:",
        (
            "  --edition <year>  Rust edition (2015/2018/2021/2024)",
            "  --crate-type      bin/lib/rlib/dylib/cdylib/staticlib",
            "  --target <triple> Cross-compilation target",
        ),
    ),
)

_EXAMPLES = (
    "  icx-rustc main.rs",
    "  icx-rustc /O3 /arch:AVX2 program.rs -o program.exe",
    "  icx-rustc /c /Fooutput.o lib.rs",
)


def _color() -> bool:
    return DiagnosticReporter().color


def print_version() -> None:
    """Print the version banner."""
    sys.stdout.write("".join(f"{line}\n" for line in _VERSION_BANNER))


def print_help() -> None:
    """Print the option summary."""
    color = _color()
    print(paint(_PRODUCT, "bold", "bright_blue", color=color))
    print("Usage: icx-rustc [options] <input files>")
    print()
    for title, lines in _HELP_SECTIONS:
        print(paint(title, "bold", "yellow", color=color))
        for line in lines:
            print(line)
        print()
    print("Examples:")
    for line in _EXAMPLES:
        print(line)


def _report_error(message: object) -> None:
    label = paint("icx-rustc error", "bold", "bright_red", color=_color())
    print(f"{label}: {message}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the wrapper and return the process exit code."""
    try:
        args = parse_args(argv)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.version:
        print_version()
        return 0
    if args.help:
        print_help()
        return 0

    try:
        cmd = translate(args)
        if args.verbose or args.dry_run:
            color = _color()
            print(
                "{} {}".format(
                    paint("[icx-rustc]", "bold", "bright_blue", color=color),
                    paint(cmd.display(), "dimmed", color=color),
                ),
                file=sys.stderr,
            )
        if args.dry_run:
            return 0
        return run(cmd)
    except (TranslationError, ExecutionError) as exc:
        _report_error(exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())