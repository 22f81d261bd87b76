"""smart-codegen configuration.

A project declares its scaffolding templates in a ``codegen.config`` file next
to the code it generates.  Three formats are accepted:

- ``codegen.config.py``   -- a module exposing ``config`` (dict or
  ``GeneratorConfig``).  The only format that can declare hooks.
- ``codegen.config.json``
- ``codegen.config.yaml`` / ``codegen.config.yml``

All settings are Pydantic v2 models so a broken config is rejected with a
readable message before any file is touched.  Keys may be written in
snake_case or in the camelCase used by the JavaScript tooling
(``needsBody``, ``beforeFileGenerate``...).
"""

from __future__ import annotations

import importlib.util
import json
import os
from pathlib import Path
from typing import Any, Callable, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


CONFIG_FILENAMES: tuple[str, ...] = (
    "codegen.config.py",
    "codegen.config.json",
    "codegen.config.yaml",
    "codegen.config.yml",
)

CONFIG_ENV_VAR = "CODEGEN_CONFIG"


class ConfigError(Exception):
    """Raised when the config file is missing, unreadable or invalid."""


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class _ConfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TemplateHooks(_ConfigModel):
    """Per-file hooks.  Each may be a plain function or a coroutine function."""

    before_file_generate: Optional[Callable[..., Any]] = Field(
        default=None,
        alias="beforeFileGenerate",
        description="Called with (relative_path, content); returns the new content",
    )
    after_file_generate: Optional[Callable[..., Any]] = Field(
        default=None,
        alias="afterFileGenerate",
        description="Called with the written output path",
    )


class GeneratorHooks(_ConfigModel):
    """Run-level hooks."""

    before_generate: Optional[Callable[..., Any]] = Field(
        default=None,
        alias="beforeGenerate",
        description="Called with the GenerationContext before any file is read",
    )
    after_generate: Optional[Callable[..., Any]] = Field(
        default=None,
        alias="afterGenerate",
        description="Called with (GenerationContext, GenerationResult) at the end",
    )


class TemplateConfig(_ConfigModel):
    """One scaffolding template."""

    path: str = Field(..., description="Directory holding the template tree")
    description: str = Field(default="", description="Shown by `codegen list`")
    output: Optional[str] = Field(default=None, description="Default output directory")
    needs_body: bool = Field(
        default=False,
        alias="needsBody",
        description="Whether the template expects a body object",
    )
    variables: dict[str, str] = Field(
        default_factory=dict,
        description="Field type tag -> form snippet",
    )
    ignore: list[str] = Field(
        default_factory=list,
        description="Relative paths to skip; '*' matches any run of characters",
    )
    zod_schema: bool = Field(
        default=True,
        alias="zodSchema",
        description="Whether to fill the {{body:zodSchema}} buffer",
    )
    hooks: TemplateHooks = Field(default_factory=TemplateHooks)


class GeneratorConfig(_ConfigModel):
    """Top-level configuration: the set of available templates."""

    templates: dict[str, TemplateConfig]
    hooks: GeneratorHooks = Field(default_factory=GeneratorHooks)

    def template_names(self) -> list[str]:
        """Template names in declaration order."""
        return list(self.templates)

    def has_template(self, name: str) -> bool:
        return name in self.templates

    def get_template(self, name: str) -> TemplateConfig:
        """Return the named template.

        Raises:
            ConfigError: If no template with that name is declared.
        """
        if not self.has_template(name):
            raise ConfigError(
                f'Template "{name}" not found. '
                f"Available templates: {', '.join(self.template_names())}"
            )
        return self.templates[name]


class GenerationContext(BaseModel):
    """What a generation run was asked to do; handed to run-level hooks."""

    template_name: str
    module_name: str
    output_path: str
    body: Optional[dict[str, Any]] = None


# ---------------------------------------------------------------------------
# Discovery & loading
# ---------------------------------------------------------------------------


def find_config(config_path: str | Path | None = None, cwd: str | Path | None = None) -> Path:
    """Locate the config file.

    Args:
        config_path: Explicit file.  When given, no other location is tried.
        cwd: Directory searched for the default file names.  Defaults to the
            process working directory.

    Returns:
        Path to an existing config file.

    Raises:
        ConfigError: If nothing is found.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()

    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        candidates = [Path(explicit) if Path(explicit).is_absolute() else base / explicit]
    else:
        candidates = [base / name for name in CONFIG_FILENAMES]

    for candidate in candidates:
        if candidate.is_file():
            return candidate

    looking_for = ", ".join(str(c.name) for c in candidates)
    raise ConfigError(
        'Config file not found. Run "codegen init" first.\n'
        f"Looking for: {looking_for}"
    )


def load_config(config_path: str | Path | None = None, cwd: str | Path | None = None) -> GeneratorConfig:
    """Find, read and validate the config file.

    Raises:
        ConfigError: If the file is missing or cannot be turned into a
            ``GeneratorConfig``.
    """
    path = find_config(config_path, cwd)
    try:
        raw = _read_config_file(path)
        if isinstance(raw, GeneratorConfig):
            return raw
        if not isinstance(raw, dict) or not isinstance(raw.get("templates"), dict):
            raise ConfigError('Config must have a "templates" object')
        return GeneratorConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Failed to load config from {path}: {_format_validation_error(exc)}") from exc
    except Exception as exc:
        raise ConfigError(f"Failed to load config from {path}: {exc}") from exc


def _read_config_file(path: Path) -> Any:
    """Parse *path* according to its extension."""
    suffix = path.suffix.lower()
    if suffix == ".py":
        return _load_python_config(path)
    text = path.read_text(encoding="utf-8")
    if suffix == ".json":
        return json.loads(text)
    if suffix in (".yaml", ".yml"):
        return yaml.safe_load(text)
    raise ConfigError(f"Unsupported config format: {path.suffix}")


def _load_python_config(path: Path) -> Any:
    """Import a ``codegen.config.py`` and return its ``config`` attribute."""
    spec = importlib.util.spec_from_file_location("_codegen_config", path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for attr in ("config", "CONFIG"):
        if hasattr(module, attr):
            return getattr(module, attr)
    raise ConfigError(f"{path.name} must define a module-level `config`")


def _format_validation_error(exc: ValidationError) -> str:
    """Collapse a pydantic error into ``loc: msg; loc: msg``."""
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()))
        parts.append(f"{loc}: {error.get('msg', '')}" if loc else error.get("msg", ""))
    return "; ".join(parts)
