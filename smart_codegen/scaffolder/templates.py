"""Jinja2 rendering for ``codegen init``.

Provides the TemplateRenderer class, which loads the starter-config ``.j2``
templates bundled in ``smart_codegen/scaffolder/templates/``, and the helpers
that write a starter config and copy the bundled example template trees into
a project.

The bundled project templates themselves (``examples/``) are *not* Jinja2
templates: they use the flat ``{{name}}`` / ``{{body:...}}`` placeholders and
are copied verbatim.
"""

from __future__ import annotations

import asyncio
import json
import shutil
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..utils import write_text_file


# ---------------------------------------------------------------------------
# Bundled resources
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
_EXAMPLES_DIR = Path(__file__).parent / "examples"

CONFIG_FORMATS: dict[str, str] = {
    "yaml": "codegen.config.yaml",
    "json": "codegen.config.json",
    "py": "codegen.config.py",
}

# Form snippets for the ``vue-form`` starter template, in declaration order.
DEFAULT_FIELD_TYPES: dict[str, str] = {
    "input": (
        '<el-form-item label="{{Name}}" prop="{{fullPath}}">\n'
        '  <FormInput v-model="form.{{fullPath}}" />\n'
        "</el-form-item>"
    ),
    "select": (
        '<el-form-item label="{{Name}}" prop="{{fullPath}}">\n'
        '  <FormSelect v-model="form.{{fullPath}}" :options="{{name}}Options" />\n'
        "</el-form-item>"
    ),
    "textarea": (
        '<el-form-item label="{{Name}}" prop="{{fullPath}}">\n'
        '  <el-input v-model="form.{{fullPath}}" type="textarea" :rows="3" />\n'
        "</el-form-item>"
    ),
    "date": (
        '<el-form-item label="{{Name}}" prop="{{fullPath}}">\n'
        '  <el-date-picker v-model="form.{{fullPath}}" type="date" />\n'
        "</el-form-item>"
    ),
    "checkbox": (
        '<el-form-item label="{{Name}}" prop="{{fullPath}}">\n'
        '  <el-checkbox v-model="form.{{fullPath}}">{{Name}}</el-checkbox>\n'
        "</el-form-item>"
    ),
}

STARTER_TEMPLATES: list[dict[str, Any]] = [
    {
        "name": "vue-form",
        "path": "./templates/vue-form",
        "description": "Vue form with dynamic fields",
        "output": "./src/components/forms",
        "needs_body": True,
        "variables": DEFAULT_FIELD_TYPES,
    },
    {
        "name": "react-component",
        "path": "./templates/react-component",
        "description": "React functional component",
        "output": "./src/components",
        "needs_body": False,
        "variables": {},
    },
    {
        "name": "api-route",
        "path": "./templates/api-route",
        "description": "API route handler",
        "output": "./src/api/routes",
        "needs_body": False,
        "variables": {},
    },
]


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the bundled Jinja2 templates.

    Context values are inserted as-is, so field snippets containing
    ``{{Name}}`` survive rendering untouched.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["to_json"] = _to_json_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"codegen.config.yaml.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(write_text_file, out, content)
        return out


# ---------------------------------------------------------------------------
# init helpers
# ---------------------------------------------------------------------------


def config_filename(fmt: str) -> str:
    """File name written by ``codegen init`` for *fmt* (``yaml``/``json``/``py``)."""
    try:
        return CONFIG_FORMATS[fmt]
    except KeyError:
        raise ValueError(
            f"Unknown config format {fmt!r}; expected one of {', '.join(CONFIG_FORMATS)}"
        ) from None


async def write_starter_config(
    target_dir: str | Path,
    fmt: str = "yaml",
    renderer: TemplateRenderer | None = None,
) -> Path:
    """Write the starter ``codegen.config.<fmt>`` into *target_dir*.

    Existing files are overwritten; callers are expected to confirm first.
    """
    filename = config_filename(fmt)
    renderer = renderer or TemplateRenderer()
    return await renderer.render_to_file(
        f"{filename}.j2",
        Path(target_dir) / filename,
        {"templates": STARTER_TEMPLATES, "config": starter_config()},
    )


def starter_config() -> dict[str, Any]:
    """The starter templates as a plain config mapping (camelCase keys)."""
    templates: dict[str, Any] = {}
    for t in STARTER_TEMPLATES:
        entry: dict[str, Any] = {
            "path": t["path"],
            "description": t["description"],
            "output": t["output"],
        }
        if t["needs_body"]:
            entry["needsBody"] = True
        if t["variables"]:
            entry["variables"] = dict(t["variables"])
        templates[t["name"]] = entry
    return {"templates": templates}


def example_template_names() -> list[str]:
    """Names of the bundled example template trees."""
    if not _EXAMPLES_DIR.is_dir():
        return []
    return sorted(p.name for p in _EXAMPLES_DIR.iterdir() if p.is_dir())


def _to_json_filter(value: Any, indent: int | None = None) -> str:
    """JSON-encode *value*; also yields valid Python string literals."""
    return json.dumps(value, indent=indent, ensure_ascii=False)


async def copy_example_templates(target_dir: str | Path) -> list[Path]:
    """Copy every bundled example template into ``<target_dir>/templates/``.

    Existing files with the same name are overwritten; other files are kept.

    Returns:
        The template directories that were written.
    """
    written: list[Path] = []
    templates_root = Path(target_dir) / "templates"
    for name in example_template_names():
        destination = templates_root / name
        await asyncio.to_thread(
            shutil.copytree, _EXAMPLES_DIR / name, destination, dirs_exist_ok=True
        )
        written.append(destination)
    return written
