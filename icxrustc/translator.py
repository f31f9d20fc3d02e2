"""Translation of Intel/MSVC-style options into a rustc command line."""

from __future__ import annotations

import platform
import shlex
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .cli import Args

_ARCH_FEATURES = {
    "AVX": ["+avx"],
    "AVX2": ["+avx2"],
    "AVX512": ["+avx512f", "+avx512vl", "+avx512bw"],
    "CORE-AVX512": ["+avx512f", "+avx512vl", "+avx512bw"],
    "SSE4.2": ["+sse4.2"],
    "CORE-AVX": ["+sse4.2"],
    "SSE2": ["+sse2"],
}

_MSVC_OPT = {"0": "0", "d": "0", "1": "1", "2": "2", "3": "3", "x": "3"}


class TranslationError(Exception):
    """Raised when the options cannot be turned into a rustc command."""


@dataclass
class RustcCommand:
    """A rustc invocation assembled from wrapper options."""

    executable: str = "rustc"
    args: list[str] = field(default_factory=list)
    env_vars: list[tuple[str, str]] = field(default_factory=list)
    input_files: list[Path] = field(default_factory=list)
    output: Path | None = None

    def argv(self) -> list[str]:
        """The full argument vector, executable first."""
        parts = [self.executable, *self.args, *(str(f) for f in self.input_files)]
        if self.output is not None:
            parts += ["-o", str(self.output)]
        return parts

    def display(self) -> str:
        """The command as a single space-separated line."""
        return " ".join(self.argv())


def _warn(message: str) -> None:
    print(f"[icx-rustc] warning: {message}", file=sys.stderr)


def _optimization(args: Args) -> list[str]:
    if args.opt_level is not None:
        level = args.opt_level.rustc_level
    elif args.msvc_opt is not None:
        level = _MSVC_OPT.get(args.msvc_opt, "2")
    elif args.release:
        level = "3"
    else:
        level = "2"
    flags = [f"-Copt-level={level}"]
    if level == "3":
        flags.append("-Clto=fat")
    return flags


def _architecture(args: Args) -> list[str]:
    if args.xhost:
        flags = [f"--target={detect_host_target()}"]
        features = detect_host_features()
        if features:
            flags.append(f"-Ctarget-feature={','.join(features)}")
        return flags
    if args.arch is None:
        return []
    features = _ARCH_FEATURES.get(args.arch)
    if features is None:
        _warn(f"unknown arch '{args.arch}', using default")
        return []
    return [f"-Ctarget-feature={','.join(features)}"]


def _output(args: Args) -> Path | None:
    for candidate in (args.output, args.msvc_exe, args.msvc_obj):
        if candidate is not None:
            return candidate
    if args.compile_only and len(args.files) == 1:
        source = args.files[0]
        if source.name in ("", ".."):
            raise TranslationError("Invalid input filename")
        return Path(f"{source.stem}.o")
    return None


def _warnings(args: Args) -> list[str]:
    flags = ["-Dwarnings"] if args.wx else []
    if args.warn_level == "0":
        flags.append("-Awarnings")
    elif args.warn_level == "1":
        flags += ["-Wwarnings", "-Adead_code"]
    elif args.warn_level in ("3", "all"):
        flags.append("-Wwarnings")
    return flags


def _rust_specific(args: Args) -> list[str]:
    flags = []
    if args.edition is not None:
        flags.append(f"--edition={args.edition}")
    if args.crate_type is not None:
        flags.append(f"--crate-type={args.crate_type}")
    if args.target is not None:
        flags.append(f"--target={args.target}")
    flags += ["-Ccodegen-units=1", "-Cpanic=abort"]
    return flags


def translate(args: Args) -> RustcCommand:
    """Build the rustc command for the parsed wrapper options."""
    cmd = RustcCommand()
    cmd.args += _optimization(args)
    cmd.args += _architecture(args)
    if args.compile_only:
        cmd.args.append("--emit=obj")
    cmd.output = _output(args)

    cmd.args += [f"--cfg={define}" for define in args.defines]
    for undefine in args.undefines:
        _warn(f"/U{undefine} not fully supported in Rust")

    cmd.args += _warnings(args)
    if args.link_args:
        cmd.args.append(f"-Clink-args={shlex.quote(' '.join(args.link_args))}")
    cmd.args += _rust_specific(args)

    for file in args.files:
        if file.suffix == ".rs":
            cmd.input_files.append(file)
        else:
            cmd.args.append(str(file))

    if not cmd.input_files and not args.version and not args.help:
        raise TranslationError("No input files specified")

    cmd.args += args.raw_args
    return cmd


def detect_host_target() -> str:
    """The target triple for the host operating system."""
    system = platform.system()
    if system == "Windows":
        return "x86_64-pc-windows-msvc"
    if system == "Linux":
        return "x86_64-unknown-linux-gnu"
    raise TranslationError("Unsupported host platform")


def _cpu_flags() -> set[str]:
    try:
        text = Path("/proc/cpuinfo").read_text(encoding="utf-8", errors="replace")
    except OSError:
        return set()
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip() in ("flags", "Features"):
            return set(value.split())
    return set()


def detect_host_features() -> list[str]:
    """Target features to enable for the host CPU."""
    flags = _cpu_flags()
    features = ["+crt-static"]
    if "avx512f" in flags:
        features += ["+avx512f", "+avx512vl"]
    elif "avx2" in flags:
        features.append("+avx2")
    elif "sse4_2" in flags:
        features.append("+sse4.2")
    return features