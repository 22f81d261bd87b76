"""Shared pytest fixtures for the smart-codegen test suite.

Provides reusable fixtures for:
- Field type maps and body objects (flat, nested, deeply nested)
- A throw-away project directory containing template trees
- Ready-made ``GeneratorConfig`` / ``Generator`` instances
- A formatter stub that never spawns Prettier
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any

import pytest

from smart_codegen.config import GeneratorConfig
from smart_codegen.scaffolder.formatter import PrettierFormatter
from smart_codegen.scaffolder.generator import Generator


# ---------------------------------------------------------------------------
# Body inputs
# ---------------------------------------------------------------------------

@pytest.fixture
def simple_field_types() -> dict[str, str]:
    """Single-line snippets that are easy to assert on."""
    return {
        "input": '<F label="{{Name}}" path="{{fullPath}}"/>',
        "select": '<S label="{{Name}}" path="{{fullPath}}" options="{{name}}Options"/>',
    }


@pytest.fixture
def vue_field_types() -> dict[str, str]:
    """The multi-line Element Plus snippets shipped with ``codegen init``."""
    from smart_codegen.scaffolder.templates import DEFAULT_FIELD_TYPES

    return dict(DEFAULT_FIELD_TYPES)


@pytest.fixture
def flat_body() -> dict[str, Any]:
    return {"name": "input", "email": "input"}


@pytest.fixture
def nested_body() -> dict[str, Any]:
    return {"name": "input", "address": {"city": "input", "country": "select"}}


@pytest.fixture
def deep_body() -> dict[str, Any]:
    """Three levels deep, with a leaf after the nested group."""
    return {
        "title": "input",
        "profile": {
            "bio": "textarea",
            "location": {"city": "input", "zip": "input"},
            "website": "input",
        },
        "agree": "checkbox",
    }


# ---------------------------------------------------------------------------
# Formatter stub
# ---------------------------------------------------------------------------

class RecordingFormatter(PrettierFormatter):
    """Formatter that records calls and returns content unchanged."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    async def format(self, content, file_path):
        self.calls.append(str(file_path))
        return content


@pytest.fixture
def recording_formatter() -> RecordingFormatter:
    return RecordingFormatter()


# ---------------------------------------------------------------------------
# Template project
# ---------------------------------------------------------------------------

def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture
def template_project(tmp_path: Path, simple_field_types: dict[str, str]) -> Path:
    """A project root with two template trees and a JSON config.

    Layout::

        templates/form/{{Name}}Form.vue
        templates/form/{{name-kebab}}.types.ts
        templates/form/__tests__/skip.spec.ts
        templates/form/.env.{{name_snake}}
        templates/plain/{{Name}}/index.ts
    """
    form_dir = tmp_path / "templates" / "form"
    _write(
        form_dir / "{{Name}}Form.vue",
        textwrap.dedent("""\
            <template>
            {{body:formItems}}</template>
            <script>
            const form = {
              {{ body: defaultValues }}
            };
            const fields = [{{body: fields}}];
            export default { name: '{{Name}}Form' };
            </script>
            """),
    )
    _write(
        form_dir / "{{name-kebab}}.types.ts",
        "{{body:interfaces}}export interface {{Name}}Form {\n{{ body:types }}}\n"
        "export const schema = z.object({\n{{body:zodSchema}}});\n",
    )
    _write(form_dir / "__tests__" / "skip.spec.ts", "never copied\n")
    _write(form_dir / ".env.{{name_snake}}", "MODULE={{NAME}}\n")

    plain_dir = tmp_path / "templates" / "plain"
    _write(plain_dir / "{{Name}}" / "index.ts", "export const {{name.camel}} = '{{name-kebab}}';\n")

    config = {
        "templates": {
            "form": {
                "path": str(form_dir),
                "description": "Form with dynamic fields",
                "output": str(tmp_path / "out" / "forms"),
                "needsBody": True,
                "variables": simple_field_types,
                "ignore": ["__tests__/*"],
            },
            "plain": {
                "path": str(plain_dir),
                "description": "Plain component",
            },
        }
    }
    (tmp_path / "codegen.config.json").write_text(json.dumps(config, indent=2), encoding="utf-8")
    return tmp_path


@pytest.fixture
def project_config(template_project: Path) -> GeneratorConfig:
    raw = json.loads((template_project / "codegen.config.json").read_text(encoding="utf-8"))
    return GeneratorConfig.model_validate(raw)


@pytest.fixture
def generator(project_config: GeneratorConfig, recording_formatter: RecordingFormatter) -> Generator:
    return Generator(project_config, formatter=recording_formatter)
