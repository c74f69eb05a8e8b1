"""Declared language profiles.

The table below is the single place that maps file patterns to checks.
Profiles run in declaration order (shell, python, terraform, then the global
secret scan) so the cheaper checks report first.
"""
from __future__ import annotations

from typing import Optional, Tuple

from lintgate.core.exceptions import ConfigurationError
from lintgate.core.models import Check, LanguageProfile, Phase, Severity

SHELL = LanguageProfile(
    name="shell",
    include=("*.sh",),
    exclude=(".git",),
    checks=(
        Check(name="shellcheck", tool="shellcheck", phase=Phase.lint, args=("-e", "SC1090,SC1091")),
        Check(
            name="shfmt",
            tool="shfmt",
            phase=Phase.format,
            args=("-i", "2", "-bn", "-ci", "-sr"),
            fixable=True,
        ),
        Check(name="bash-syntax", tool="bash-syntax", phase=Phase.syntax),
    ),
)

PYTHON = LanguageProfile(
    name="python",
    include=("*.py",),
    exclude=(".git", ".venv", "venv", "__pycache__"),
    checks=(
        # pylint findings are informational only
        Check(
            name="pylint",
            tool="pylint",
            phase=Phase.lint,
            severity=Severity.advisory,
            args=("--disable=C0111,C0103", "--exit-zero", "--output-format=text"),
        ),
        Check(
            name="flake8",
            tool="flake8",
            phase=Phase.lint,
            args=("--max-line-length=100", "--extend-ignore=E203,W503"),
        ),
        Check(name="black", tool="black", phase=Phase.format, args=("--line-length=100",), fixable=True),
    ),
)

TERRAFORM = LanguageProfile(
    name="terraform",
    include=("*.tf",),
    exclude=(".git", ".terraform"),
    checks=(
        Check(name="tflint", tool="tflint", phase=Phase.lint),
        Check(name="terraform-validate", tool="terraform-validate", phase=Phase.lint),
        Check(name="terraform-fmt", tool="terraform-fmt", phase=Phase.format, fixable=True),
    ),
)

SECRETS = LanguageProfile(
    name="secrets",
    is_global=True,
    checks=(
        Check(name="gitleaks", tool="gitleaks", phase=Phase.security, args=("--verbose", "--no-banner")),
        Check(name="detect-secrets", tool="detect-secrets", phase=Phase.security, uses_baseline=True),
    ),
)

DEFAULT_PROFILES: Tuple[LanguageProfile, ...] = (SHELL, PYTHON, TERRAFORM, SECRETS)


def profile_names() -> Tuple[str, ...]:
    return tuple(p.name for p in DEFAULT_PROFILES)


def build_profiles(config=None, language: Optional[str] = None) -> Tuple[LanguageProfile, ...]:
    """Apply configuration overrides to the declared profiles.

    Parameters
    ----------
    config : Config, optional
        Loaded configuration. Include/exclude globs of each language section
        replace the defaults, disabled languages are dropped, and
        ``tools.args`` replaces the flags of the named checks.
    language : str, optional
        Restrict the result to one profile.

    Returns
    -------
    tuple of LanguageProfile
        Profiles in declaration order.

    Raises
    ------
    ConfigurationError
        If ``language`` does not name a declared profile.
    """
    if language is not None and language not in profile_names():
        raise ConfigurationError(
            "language",
            f"Unknown language '{language}'. Choose from: {', '.join(profile_names())}",
        )

    profiles = []
    for profile in DEFAULT_PROFILES:
        if language is not None and profile.name != language:
            continue
        if config is not None:
            profile = _apply_config(profile, config)
            if profile is None:
                continue
        profiles.append(profile)
    return tuple(profiles)


def _apply_config(profile: LanguageProfile, config) -> Optional[LanguageProfile]:
    update = {}
    if not profile.is_global:
        lang = config.language(profile.name)
        if not lang.enabled:
            return None
        update["include"] = tuple(lang.include)
        update["exclude"] = tuple(lang.exclude)

    overrides = config.tools.args
    if any(c.name in overrides for c in profile.checks):
        update["checks"] = tuple(
            c.model_copy(update={"args": tuple(overrides[c.name])}) if c.name in overrides else c
            for c in profile.checks
        )
    return profile.model_copy(update=update) if update else profile


__all__ = ["SHELL", "PYTHON", "TERRAFORM", "SECRETS", "DEFAULT_PROFILES", "build_profiles", "profile_names"]
