"""smart-codegen scaffolder -- renders configured templates into a project.

Quick usage::

    from smart_codegen.config import load_config
    from smart_codegen.scaffolder import Generator

    generator = Generator(load_config())
    result = await generator.generate(
        "vue-form",
        "userProfile",
        body={"name": "input", "address": {"city": "input"}},
    )

The body-expansion engine can also be used on its own::

    from smart_codegen.scaffolder import expand_body, replace_body_placeholders

    replacements = expand_body({"email": "input"}, {"input": "<F path=\\"{{fullPath}}\\"/>"})
    replace_body_placeholders("{{body:formItems}}", replacements)
"""

from smart_codegen.scaffolder.body import (
    BODY_KEYS,
    BodyReplacements,
    BodySpecError,
    Group,
    Leaf,
    expand_body,
    parse_body,
    replace_body_placeholders,
)
from smart_codegen.scaffolder.formatter import FormatterError, PrettierFormatter
from smart_codegen.scaffolder.generator import GenerationResult, Generator
from smart_codegen.scaffolder.placeholders import render_field_snippet, replace_placeholders
from smart_codegen.scaffolder.templates import TemplateRenderer

__all__ = [
    "BODY_KEYS",
    "BodyReplacements",
    "BodySpecError",
    "FormatterError",
    "GenerationResult",
    "Generator",
    "Group",
    "Leaf",
    "PrettierFormatter",
    "TemplateRenderer",
    "expand_body",
    "parse_body",
    "render_field_snippet",
    "replace_body_placeholders",
    "replace_placeholders",
]
