"""Main entry point for running lintgate as a module.

Examples
--------
$ python -m lintgate --help
$ python -m lintgate check
"""
from __future__ import annotations

from .main import main


if __name__ == "__main__":
    main()
