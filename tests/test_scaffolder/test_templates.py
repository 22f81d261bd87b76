"""Tests for ``codegen init`` rendering.

Covers:
- Starter config in YAML, JSON and Python formats loads back into a
  valid ``GeneratorConfig`` with the snippets intact
- Example template trees are copied with their placeholder names
"""

from __future__ import annotations

from pathlib import Path

import pytest

from smart_codegen.config import load_config
from smart_codegen.scaffolder.templates import (
    DEFAULT_FIELD_TYPES,
    TemplateRenderer,
    config_filename,
    copy_example_templates,
    example_template_names,
    starter_config,
    write_starter_config,
)


pytestmark = pytest.mark.unit


class TestStarterConfig:
    @pytest.mark.parametrize("fmt", ["yaml", "json", "py"])
    async def test_round_trips_through_loader(self, tmp_path: Path, fmt: str):
        path = await write_starter_config(tmp_path, fmt)
        assert path == tmp_path / config_filename(fmt)

        config = load_config(path)
        assert config.template_names() == ["vue-form", "react-component", "api-route"]

        form = config.get_template("vue-form")
        assert form.needs_body is True
        assert form.output == "./src/components/forms"
        assert form.variables == DEFAULT_FIELD_TYPES

        component = config.get_template("react-component")
        assert component.needs_body is False
        assert component.variables == {}

    async def test_yaml_keeps_snippet_placeholders(self, tmp_path: Path):
        path = await write_starter_config(tmp_path, "yaml")
        text = path.read_text(encoding="utf-8")
        assert 'label="{{Name}}" prop="{{fullPath}}"' in text
        assert "needsBody: true" in text

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown config format 'toml'"):
            config_filename("toml")

    def test_starter_config_camel_case(self):
        data = starter_config()
        assert data["templates"]["vue-form"]["needsBody"] is True
        assert "needsBody" not in data["templates"]["api-route"]


class TestTemplateRenderer:
    def test_to_json_filter(self, tmp_path: Path):
        (tmp_path / "t.j2").write_text("{{ value | to_json }}", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("t.j2", {"value": 'a "{{Name}}"\n'}) == '"a \\"{{Name}}\\"\\n"'

    async def test_render_to_file_creates_parents(self, tmp_path: Path):
        (tmp_path / "t.j2").write_text("hello {{ who }}\n", encoding="utf-8")
        out = await TemplateRenderer(tmp_path).render_to_file(
            "t.j2", tmp_path / "deep" / "out.txt", {"who": "world"}
        )
        assert out.read_text(encoding="utf-8") == "hello world\n"


class TestExampleTemplates:
    def test_bundled_examples(self):
        assert example_template_names() == ["api-route", "react-component", "vue-form"]

    async def test_copy(self, tmp_path: Path):
        written = await copy_example_templates(tmp_path)
        assert [p.name for p in written] == ["api-route", "react-component", "vue-form"]

        form_dir = tmp_path / "templates" / "vue-form"
        assert (form_dir / "{{Name}}Form.vue").is_file()
        assert "{{body:formItems}}" in (form_dir / "{{Name}}Form.vue").read_text(encoding="utf-8")
        assert (tmp_path / "templates" / "react-component" / "{{Name}}" / "index.ts").is_file()
