import shlex
from pathlib import Path

import pytest

from icxrustc.cli import Args, OptLevel
from icxrustc.translator import (
    RustcCommand,
    TranslationError,
    detect_host_features,
    detect_host_target,
    translate,
)


def _args(**kwargs):
    kwargs.setdefault("files", [Path("main.rs")])
    return Args(**kwargs)


def test_default_translation():
    cmd = translate(_args())
    assert cmd.executable == "rustc"
    assert cmd.args == ["-Copt-level=2", "-Ccodegen-units=1", "-Cpanic=abort"]
    assert cmd.input_files == [Path("main.rs")]
    assert cmd.output is None


def test_release_enables_lto():
    cmd = translate(_args(release=True))
    assert cmd.args[:2] == ["-Copt-level=3", "-Clto=fat"]


def test_ox_maps_to_level_three():
    assert "-Copt-level=3" in translate(_args(opt_level=OptLevel.Ox)).args


def test_long_level_beats_msvc_level():
    cmd = translate(_args(opt_level=OptLevel.O0, msvc_opt="3", release=True))
    assert cmd.args[0] == "-Copt-level=0"
    assert "-Clto=fat" not in cmd.args


@pytest.mark.parametrize(
    ("value", "flag"),
    [("d", "-Copt-level=0"), ("1", "-Copt-level=1"), ("x", "-Copt-level=3"), ("s", "-Copt-level=2")],
)
def test_msvc_levels(value, flag):
    assert translate(_args(msvc_opt=value)).args[0] == flag


def test_known_arch():
    cmd = translate(_args(arch="AVX512"))
    assert "-Ctarget-feature=+avx512f,+avx512vl,+avx512bw" in cmd.args


def test_unknown_arch_warns(capsys):
    cmd = translate(_args(arch="NEON"))
    assert not any(a.startswith("-Ctarget-feature") for a in cmd.args)
    assert "unknown arch 'NEON'" in capsys.readouterr().err


def test_xhost_on_linux(monkeypatch):
    monkeypatch.setattr("platform.system", lambda: "Linux")
    cmd = translate(_args(xhost=True, arch="AVX2"))
    assert "--target=x86_64-unknown-linux-gnu" in cmd.args
    features = [a for a in cmd.args if a.startswith("-Ctarget-feature=")]
    assert len(features) == 1
    assert features[0].startswith("-Ctarget-feature=+crt-static")


def test_host_target_unsupported(monkeypatch):
    monkeypatch.setattr("platform.system", lambda: "Darwin")
    with pytest.raises(TranslationError):
        detect_host_target()


def test_host_target_windows(monkeypatch):
    monkeypatch.setattr("platform.system", lambda: "Windows")
    assert detect_host_target() == "x86_64-pc-windows-msvc"


def test_host_features_shape():
    features = detect_host_features()
    assert features[0] == "+crt-static"
    assert 1 <= len(features) <= 3


def test_compile_only_derives_object_name():
    cmd = translate(_args(files=[Path("src/lib.rs")], compile_only=True))
    assert "--emit=obj" in cmd.args
    assert cmd.output == Path("lib.o")


def test_compile_only_with_several_files_has_no_output():
    cmd = translate(_args(files=[Path("a.rs"), Path("b.rs")], compile_only=True))
    assert cmd.output is None


def test_invalid_input_filename():
    with pytest.raises(TranslationError):
        translate(_args(files=[Path("..")], compile_only=True))


def test_output_precedence():
    cmd = translate(
        _args(output=Path("a"), msvc_exe=Path("b"), msvc_obj=Path("c"))
    )
    assert cmd.output == Path("a")
    assert translate(_args(msvc_exe=Path("b"), msvc_obj=Path("c"))).output == Path("b")
    assert translate(_args(msvc_obj=Path("c"))).output == Path("c")


def test_defines_become_cfg(capsys):
    cmd = translate(_args(defines=["FOO", "BAR=1"], undefines=["BAZ"]))
    assert "--cfg=FOO" in cmd.args
    assert "--cfg=BAR=1" in cmd.args
    assert "/UBAZ not fully supported in Rust" in capsys.readouterr().err


def test_warning_level_one_with_wx():
    cmd = translate(_args(wx=True, warn_level="1"))
    assert {"-Dwarnings", "-Wwarnings", "-Adead_code"} <= set(cmd.args)


@pytest.mark.parametrize(
    ("level", "expected"),
    [("0", "-Awarnings"), ("3", "-Wwarnings"), ("all", "-Wwarnings")],
)
def test_warning_levels(level, expected):
    assert expected in translate(_args(warn_level=level)).args


def test_unknown_warning_level_adds_nothing():
    assert translate(_args(warn_level="2")).args == translate(_args()).args


def test_link_args_round_trip():
    cmd = translate(_args(link_args=["/DEBUG", "foo bar.lib"]))
    [link] = [a for a in cmd.args if a.startswith("-Clink-args=")]
    value = link.removeprefix("-Clink-args=")
    assert shlex.split(value) == ["/DEBUG foo bar.lib"]


def test_rust_specific_options():
    cmd = translate(_args(edition="2021", crate_type="lib", target="wasm32"))
    assert cmd.args[-5:] == [
        "--edition=2021",
        "--crate-type=lib",
        "--target=wasm32",
        "-Ccodegen-units=1",
        "-Cpanic=abort",
    ]


def test_non_rust_files_are_passed_as_args():
    cmd = translate(_args(files=[Path("main.rs"), Path("libfoo.a")]))
    assert cmd.input_files == [Path("main.rs")]
    assert "libfoo.a" in cmd.args


def test_no_input_files():
    with pytest.raises(TranslationError, match="No input files specified"):
        translate(_args(files=[]))
    with pytest.raises(TranslationError):
        translate(_args(files=[Path("libfoo.a")]))


def test_no_input_files_allowed_for_version():
    cmd = translate(_args(files=[], version=True))
    assert cmd.input_files == []


def test_raw_args_come_last():
    cmd = translate(_args(raw_args=["-Zunstable", "x"]))
    assert cmd.args[-2:] == ["-Zunstable", "x"]


def test_display_and_argv():
    cmd = RustcCommand(args=["-v"], input_files=[Path("a.rs")], output=Path("out"))
    assert cmd.argv()[0] == "rustc"
    assert cmd.argv()[-2:] == ["-o", "out"]
    assert cmd.display() == " ".join(cmd.argv())
    assert RustcCommand().display() == "rustc"