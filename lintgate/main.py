"""
lintgate main entry point.

Delegates to the CLI module for actual command handling.
"""
from __future__ import annotations

from .lintgate_cli.cli import app


def main() -> None:
    """Run the lintgate CLI application."""
    app(prog_name="lintgate")


if __name__ == "__main__":
    main()
