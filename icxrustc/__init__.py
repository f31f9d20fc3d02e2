"""Intel/MSVC-style command-line wrapper around the Rust compiler."""

__version__ = "0.1.0"