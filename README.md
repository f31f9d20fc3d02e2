# icxrustc

`icx-rustc` is a command-line front end to `rustc`. It accepts
Intel/MSVC-style compiler options such as `/O3`, `/arch:AVX2` and `/D`, and
turns them into the matching `rustc` flags. It then runs `rustc`, reformats
the diagnostics `rustc` writes to stderr, and prints a short summary line.

## Installation

```
pip install .
```

`rustc` must be on your `PATH` for compilation to work.

## Usage

```
icx-rustc [options] <input files>
```

Examples:

```
icx-rustc main.rs
icx-rustc /O3 /arch:AVX2 program.rs -o program.exe
icx-rustc /c /Fo:output.o lib.rs
```

Arguments that start with a single `/` are rewritten before they are parsed.
`/name:value` becomes `--name=value`, and `/name` becomes `-name`. So `/O3`
is read as the short option `-O` with the value `3`, and `/arch:AVX2` is read
as `--arch=AVX2`. Options with long names and no value, such as `WX`, `xHost`
and `link`, must be written with `--` (for example `--WX`, `--xHost`,
`--link <opt>`) or as `/link:<opt>`.

### Options

| Option | Effect on `rustc` |
| --- | --- |
| `/O0`, `/O1`, `/O2`, `/O3`, `/Ox`, `/Od` | `-Copt-level=N`. `x` gives 3 and `d` gives 0. Any other value gives 2. |
| `--O o0` … `--O o3`, `--O ox` | same as above. This form takes precedence over `-O`. |
| `--release` | opt-level 3 when no level is given. The default is 2. |
| `/arch:AVX`, `AVX2`, `AVX512`, `CORE-AVX512`, `SSE4.2`, `CORE-AVX`, `SSE2` | `-Ctarget-feature=...`. An unknown name prints a warning and is ignored. |
| `--xHost` | `--target=<host triple>`, plus `-Ctarget-feature=+crt-static` and the AVX-512, AVX2 or SSE4.2 features that `/proc/cpuinfo` reports |
| `/c`, `-c` | `--emit=obj`. With a single input and no output name, the output is `<stem>.o`. |
| `-o <file>`, `--Fe <file>`, `--Fo <file>` | output path. `-o` comes before `Fe`, which comes before `Fo`. |
| `/D<name>[=<value>]` | `--cfg=<name>[=<value>]` |
| `/W0` | `-Awarnings` |
| `/W1` | `-Wwarnings -Adead_code` |
| `/W3`, `/Wall` | `-Wwarnings` |
| `--WX` | `-Dwarnings` |
| `--link <opt>` (may repeat) | `-Clink-args=<quoted, space-joined options>` |
| `--edition`, `--crate-type`, `--target` | passed to `rustc` as `--edition=`, `--crate-type=`, `--target=` |
| `-v` | prints the `rustc` command to stderr before it runs |
| `--###` | prints the `rustc` command and does not run it |
| `-- <args>` | passes the remaining arguments to `rustc` unchanged |
| `--version`, `--help` | print version information or the option list |

Every build also gets `-Ccodegen-units=1` and `-Cpanic=abort`, and an opt-level
of 3 also adds `-Clto=fat`. Input files that end in `.rs` are passed as
sources. Other files are passed to `rustc` as plain arguments. If no `.rs`
file is given, the command exits with an error.

Exit status: the exit code from `rustc`, or 1 if `rustc` is killed by a
signal or cannot be started, or if translation fails. The status is 2 if the
command line cannot be parsed.

Colour output is on by default. Set `NO_COLOR` or `CLICOLOR=0` to turn it off,
or set `CLICOLOR_FORCE` to a value other than `0` to force it on.

### What it does not do

`/I<dir>` and `/U<name>` are accepted, but no `rustc` flag is produced for
them. `/U` also prints a warning. `--optimize-diagnostics` is accepted and has
no effect. `--xHost` works only on Linux and Windows hosts, and it reads CPU
features only from `/proc/cpuinfo`.

## Use from Python

```python
from icxrustc.cli import parse_args
from icxrustc.translator import translate

cmd = translate(parse_args(["/O3", "/arch:AVX2", "main.rs"]))
print(cmd.display())
print(cmd.argv())
```

- `parse_args` raises `ValueError` for unknown options, missing values, or a
  single-valued option that is given twice.
- `translate` raises `TranslationError`.
- `icxrustc.executor.run(cmd)` runs the command and returns its exit code. It
  raises `ExecutionError` if the process cannot be started.
- `icxrustc.diagnostics.DiagnosticReporter` formats single diagnostic lines.
  Use its `format` method to get the formatted line, or its `report` method to
  print the line and return the `(warnings, errors)` counts.