"""lintgate - multi-language lint, format and secret-scan orchestration.

lintgate detects which languages are present in a repository by file
extension and runs the matching third-party checkers (ShellCheck, shfmt,
pylint, flake8, black, tflint, terraform, Gitleaks, detect-secrets), each in
an isolated container, then reports one line per check and an overall
PASS/FAIL.

Examples
--------
Run every check on the current directory:
    $ lintgate check

Lint only Python files:
    $ python -m lintgate lint --language python

See Also
--------
lintgate.lintgate_cli.cli : Command-line interface
lintgate.application : Orchestration layer
lintgate.core : Models, profiles and exceptions
"""
from __future__ import annotations

__version__ = "1.0.0"
__author__ = "Anush Krishna"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
