# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""
Configuration schema and validation for lintgate.

This module defines the configuration structure, default values, and
validation logic for all application settings.

Classes
-------
Config : Main configuration class
ProjectConfig : Scan root, shell-script override and baseline location
LanguageConfig : Include/exclude globs for one language profile
SandboxConfig : Container engine and images
ToolsConfig : Per-check option overrides
LoggingConfig : Logging configuration

See Also
--------
lintgate.config.config_loader : Configuration loading
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

LANGUAGES = ("shell", "python", "terraform")
SECTIONS = ("project", *LANGUAGES, "sandbox", "tools", "logging")

DEFAULT_IMAGES: Dict[str, str] = {
    "shellcheck": "koalaman/shellcheck:stable",
    "shfmt": "mvdan/shfmt:v3.7.0",
    "pylint": "python:3.11-slim",
    "flake8": "python:3.11-slim",
    "black": "python:3.11-slim",
    "tflint": "ghcr.io/terraform-linters/tflint:latest",
    "terraform": "hashicorp/terraform:latest",
    "gitleaks": "zricethezav/gitleaks:latest",
    "detect-secrets": "python:3.11-slim",
}



def _is_str_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class ProjectConfig:
    """Configuration for the scanned working tree."""

    root: str = "."
    script: Optional[str] = None
    baseline: str = ".secrets.baseline"

    def validate(self) -> List[str]:
        """
        Validate project configuration.

        The script override is checked by the orchestrator, only when the
        shell profile is part of the run.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        for key in ("root", "baseline"):
            if not isinstance(getattr(self, key), str):
                errors.append(f"project.{key} must be a string")
        if self.script is not None and not isinstance(self.script, str):
            errors.append("project.script must be a string")
        if errors:
            return errors

        root_path = Path(self.root)
        if not root_path.exists():
            errors.append(f"Project root does not exist: {self.root}")
        elif not root_path.is_dir():
            errors.append(f"Project root is not a directory: {self.root}")

        if not self.baseline:
            errors.append("Baseline path must not be empty")
        elif Path(self.baseline).is_absolute():
            errors.append(f"Baseline path must be relative to the root: {self.baseline}")

        return errors

    @property
    def root_path(self) -> Path:
        return Path(self.root).expanduser().resolve()


@dataclass
class LanguageConfig:
    """Include/exclude globs for one language profile."""

    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    enabled: bool = True

    def validate(self, name: str) -> List[str]:
        errors = []
        for key in ("include", "exclude"):
            if not _is_str_list(getattr(self, key)):
                errors.append(f"{name}.{key} must be a list of glob patterns")
        if not isinstance(self.enabled, bool):
            errors.append(f"{name}.enabled must be true or false")
        if not errors and self.enabled and not self.include:
            errors.append(f"{name}.include must list at least one pattern")
        return errors


def _shell_defaults() -> LanguageConfig:
    return LanguageConfig(include=["*.sh"], exclude=[".git"])


def _python_defaults() -> LanguageConfig:
    return LanguageConfig(
        include=["*.py"],
        exclude=[".git", ".venv", "venv", "__pycache__"],
    )


def _terraform_defaults() -> LanguageConfig:
    return LanguageConfig(include=["*.tf"], exclude=[".git", ".terraform"])


@dataclass
class SandboxConfig:
    """Configuration for the container engine that isolates each tool."""

    engine: str = "docker"
    mount_point: str = "/work"
    probe: bool = True
    images: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_IMAGES))

    def validate(self) -> List[str]:
        errors = []

        if self.engine not in {"docker", "podman"}:
            errors.append(f"Unsupported container engine: {self.engine}")

        if not isinstance(self.mount_point, str) or not self.mount_point.startswith("/"):
            errors.append(f"mount_point must be an absolute path, got {self.mount_point}")

        if not isinstance(self.probe, bool):
            errors.append("sandbox.probe must be true or false")

        if not isinstance(self.images, dict):
            errors.append("sandbox.images must be a mapping of tool name to image")
        else:
            for tool, image in self.images.items():
                if not image or not isinstance(image, str):
                    errors.append(f"Empty image for tool: {tool}")

        return errors


@dataclass
class ToolsConfig:
    """Per-check option overrides, keyed by check name."""

    args: Dict[str, List[str]] = field(default_factory=dict)

    def validate(self) -> List[str]:
        errors = []
        if not isinstance(self.args, dict):
            return ["tools.args must be a mapping of check name to a list of flags"]
        for name, value in self.args.items():
            if not _is_str_list(value):
                errors.append(f"tools.args.{name} must be a list of strings")
        return errors


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "WARNING"
    file: str = "logs/lintgate.log"
    console: bool = True
    file_output: bool = False
    max_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5

    def validate(self) -> List[str]:
        """
        Validate logging configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if not isinstance(self.level, str) or self.level.upper() not in valid_levels:
            errors.append(f"Invalid log level: {self.level}")

        if not isinstance(self.file, str):
            errors.append("logging.file must be a string")

        for key in ("console", "file_output"):
            if not isinstance(getattr(self, key), bool):
                errors.append(f"logging.{key} must be true or false")

        if not _is_int(self.max_bytes):
            errors.append(f"max_bytes must be an integer, got {self.max_bytes!r}")
        elif self.max_bytes < 1024:
            errors.append(f"max_bytes too small: {self.max_bytes}")

        if not _is_int(self.backup_count):
            errors.append(f"backup_count must be an integer, got {self.backup_count!r}")
        elif self.backup_count < 0:
            errors.append(f"backup_count must be >= 0, got {self.backup_count}")

        return errors


@dataclass
class Config:
    """
    Main configuration class for lintgate.

    This class aggregates all configuration sections and provides
    validation and loading functionality.
    """

    project: ProjectConfig = field(default_factory=ProjectConfig)
    shell: LanguageConfig = field(default_factory=_shell_defaults)
    python: LanguageConfig = field(default_factory=_python_defaults)
    terraform: LanguageConfig = field(default_factory=_terraform_defaults)
    sandbox: SandboxConfig = field(default_factory=SandboxConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> bool:
        """
        Validate entire configuration.

        Returns:
            True if valid, raises ConfigurationError if invalid

        Raises:
            ConfigurationError: If any validation fails
        """
        from lintgate.core.exceptions import ConfigurationError

        all_errors = []

        all_errors.extend(self.project.validate())
        for name in LANGUAGES:
            all_errors.extend(getattr(self, name).validate(name))
        all_errors.extend(self.sandbox.validate())
        all_errors.extend(self.tools.validate())
        all_errors.extend(self.logging.validate())

        if all_errors:
            error_msg = "\n".join(f"  - {err}" for err in all_errors)
            raise ConfigurationError(
                "configuration",
                f"Configuration validation failed:\n{error_msg}",
                {"errors": all_errors}
            )

        return True

    def language(self, name: str) -> LanguageConfig:
        return getattr(self, name)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """
        Create configuration from dictionary.

        Language sections only replace the keys they name, so a file that
        sets ``python.exclude`` keeps the default ``python.include``.

        Args:
            config_dict: Dictionary with configuration values

        Returns:
            Config instance

        Raises:
            ConfigurationError: If a section is not a mapping
            TypeError: If a section names an unknown option
        """
        from lintgate.core.exceptions import ConfigurationError

        sections: Dict[str, Dict[str, Any]] = {}
        for name in SECTIONS:
            values = config_dict.get(name)
            if values is None:
                values = {}
            if not isinstance(values, dict):
                raise ConfigurationError(
                    name,
                    f"Section '{name}' must be a mapping, got {type(values).__name__}"
                )
            sections[name] = dict(values)

        sandbox = sections["sandbox"]
        if "images" in sandbox and sandbox["images"] is None:
            sandbox["images"] = dict(DEFAULT_IMAGES)
        elif isinstance(sandbox.get("images"), dict):
            sandbox["images"] = {**DEFAULT_IMAGES, **sandbox["images"]}

        return cls(
            project=ProjectConfig(**sections["project"]),
            shell=_merge_language(_shell_defaults(), sections["shell"]),
            python=_merge_language(_python_defaults(), sections["python"]),
            terraform=_merge_language(_terraform_defaults(), sections["terraform"]),
            sandbox=SandboxConfig(**sandbox),
            tools=ToolsConfig(**sections["tools"]),
            logging=LoggingConfig(**sections["logging"]),
        )


def _merge_language(defaults: LanguageConfig, values: Dict[str, Any]) -> LanguageConfig:
    for key, value in values.items():
        if not hasattr(defaults, key):
            raise TypeError(f"LanguageConfig got an unexpected option '{key}'")
        setattr(defaults, key, value)
    return defaults
