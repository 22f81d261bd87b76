"""Main scaffolding orchestrator.

Takes a ``GeneratorConfig`` and, for one template + module name (+ optional
body object), copies the template tree to the output directory:

1. file paths and contents get their ``{{name}}``-style placeholders replaced,
2. ``{{body:<key>}}`` placeholders are filled from the expanded body,
3. the result is optionally run through Prettier and written out.

Everything that goes wrong inside a run is reported through the returned
``GenerationResult`` rather than raised.
"""

from __future__ import annotations

import asyncio
import inspect
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from ..config import ConfigError, GenerationContext, GeneratorConfig, TemplateConfig, load_config
from ..utils import write_text_file
from .body import BodyReplacements, expand_body, replace_body_placeholders
from .formatter import FormatterError, PrettierFormatter
from .placeholders import replace_placeholders


DEFAULT_OUTPUT_DIR = "./src"


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class GenerationResult(BaseModel):
    """Outcome of one ``Generator.generate`` call."""

    success: bool = Field(default=True)
    files: list[str] = Field(
        default_factory=list,
        description="Relative paths written (or that would be written in a dry run)",
    )
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Skipped/ignored files and formatter failures",
    )


class TemplateCheck(BaseModel):
    """Result of ``Generator.check_template``."""

    name: str
    path: str
    exists: bool = False
    file_count: int = 0
    needs_body: bool = False
    variables: list[str] = Field(default_factory=list)

    @property
    def missing_variables(self) -> bool:
        """True when the template wants a body but declares no field types."""
        return self.needs_body and not self.variables


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class Generator:
    """Renders configured templates into the file system.

    Args:
        config: The loaded project configuration.
        formatter: Formatter applied to every emitted file.  Defaults to
            :class:`PrettierFormatter`.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        formatter: Optional[PrettierFormatter] = None,
    ) -> None:
        self.config = config
        self.formatter = formatter or PrettierFormatter()

    @classmethod
    def from_config_file(
        cls,
        config_path: str | Path | None = None,
        cwd: str | Path | None = None,
    ) -> "Generator":
        """Build a generator from a discovered ``codegen.config`` file.

        Raises:
            ConfigError: If the config cannot be found or loaded.
        """
        return cls(load_config(config_path, cwd))

    # -- Template lookup ---------------------------------------------------

    @property
    def templates(self) -> list[str]:
        return self.config.template_names()

    def has_template(self, name: str) -> bool:
        return self.config.has_template(name)

    def get_template(self, name: str) -> TemplateConfig:
        return self.config.get_template(name)

    def check_template(self, name: str) -> TemplateCheck:
        """Inspect a template directory without generating anything.

        Raises:
            ConfigError: If the template is not declared.
        """
        template = self.get_template(name)
        template_dir = Path(template.path)
        exists = template_dir.is_dir()
        return TemplateCheck(
            name=name,
            path=template.path,
            exists=exists,
            file_count=len(_list_template_files(template_dir)) if exists else 0,
            needs_body=template.needs_body,
            variables=list(template.variables),
        )

    # -- Generation --------------------------------------------------------

    async def generate(
        self,
        template_name: str,
        module_name: str,
        output_path: str | Path | None = None,
        body: Optional[Mapping[str, Any]] = None,
        *,
        dry_run: bool = False,
        format_output: bool = True,
    ) -> GenerationResult:
        """Generate one module from a template.

        Args:
            template_name: Name of a template declared in the config.
            module_name: Value bound to the ``{{name}}`` placeholder family.
            output_path: Output directory.  Falls back to the template's
                ``output`` and then to ``./src``.
            body: Nested field object for ``{{body:...}}`` placeholders.  Only
                expanded when the template declares ``variables``.
            dry_run: Compute everything but write nothing.
            format_output: Run Prettier on emitted files (ignored in dry runs).

        Returns:
            A ``GenerationResult``.  On failure ``success`` is ``False``,
            ``errors`` holds a single message and ``files`` is empty.
        """
        result = GenerationResult()

        try:
            await self._generate_into(
                result,
                template_name,
                module_name,
                output_path,
                body,
                dry_run=dry_run,
                format_output=format_output,
            )
        except Exception as exc:
            result.success = False
            result.files = []
            result.errors.append(str(exc))

        return result

    async def _generate_into(
        self,
        result: GenerationResult,
        template_name: str,
        module_name: str,
        output_path: str | Path | None,
        body: Optional[Mapping[str, Any]],
        *,
        dry_run: bool,
        format_output: bool,
    ) -> None:
        if not self.has_template(template_name):
            raise ConfigError(f'Template "{template_name}" not found')

        template = self.config.templates[template_name]
        template_dir = Path(template.path)
        final_output = Path(output_path or template.output or DEFAULT_OUTPUT_DIR)

        if not await asyncio.to_thread(template_dir.is_dir):
            raise ConfigError(f"Template path not found: {template.path}")
        if template.needs_body and not template.variables:
            raise ConfigError(
                f'Template "{template_name}" needs a body but declares no variables'
            )

        context = GenerationContext(
            template_name=template_name,
            module_name=module_name,
            output_path=str(final_output),
            body=dict(body) if isinstance(body, Mapping) else None,
        )
        await _call_hook(self.config.hooks.before_generate, context)

        replacements: Optional[BodyReplacements] = None
        if body is not None and template.variables:
            replacements = expand_body(
                body, template.variables, zod_schema=template.zod_schema
            )

        files = await asyncio.to_thread(_list_template_files, template_dir)

        for file in files:
            relative_path = file.relative_to(template_dir).as_posix()

            if template.ignore and should_ignore(relative_path, template.ignore):
                result.warnings.append(f"Skipped ignored file: {relative_path}")
                continue

            content = await asyncio.to_thread(file.read_text, encoding="utf-8")

            processed_path = replace_placeholders(relative_path, module_name)
            processed_content = replace_placeholders(content, module_name)

            if template.hooks.before_file_generate is not None:
                processed_content = await _call_hook(
                    template.hooks.before_file_generate, processed_path, processed_content
                )

            if replacements is not None:
                processed_content = replace_body_placeholders(processed_content, replacements)

            if format_output and not dry_run:
                try:
                    processed_content = await self.formatter.format(
                        processed_content, processed_path
                    )
                except FormatterError as exc:
                    result.warnings.append(f"Could not format {processed_path}: {exc}")

            output_file = final_output / processed_path

            if not dry_run:
                await asyncio.to_thread(write_text_file, output_file, processed_content)
                await _call_hook(template.hooks.after_file_generate, output_file)

            result.files.append(processed_path)

        await _call_hook(self.config.hooks.after_generate, context, result)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def should_ignore(relative_path: str, patterns: list[str]) -> bool:
    """Return ``True`` if any pattern matches anywhere in *relative_path*.

    Patterns are regular expressions in which ``*`` is widened to ``.*``, so
    both ``*.spec.ts`` and ``__tests__`` work as expected.
    """
    return any(
        re.search(pattern.replace("*", ".*"), relative_path) for pattern in patterns
    )


def _list_template_files(template_dir: Path) -> list[Path]:
    """All files under *template_dir* (dotfiles included), sorted by path."""
    return sorted(
        (p for p in template_dir.rglob("*") if p.is_file()),
        key=lambda p: p.relative_to(template_dir).as_posix(),
    )


async def _call_hook(hook: Optional[Callable[..., Any]], *args: Any) -> Any:
    """Invoke a sync or async hook; returns its (awaited) result."""
    if hook is None:
        return None
    value = hook(*args)
    if inspect.isawaitable(value):
        value = await value
    return value
