"""Body expansion: nested field specs -> form, type and default-value text.

Templates that declare ``needs_body`` receive a nested JSON object describing
their fields, e.g.::

    {"name": "input", "address": {"city": "input", "country": "select"}}

Every string value is a *type tag* naming one of the template's snippet
``variables``; every object value is a nested group.  A single depth-first
walk over that tree fills six parallel text buffers which template files
reference through ``{{body:<key>}}`` placeholders:

- ``formItems``     -- rendered snippets, one per leaf with a known tag
- ``types``         -- members of the top-level form type
- ``defaultValues`` -- top-level default-value object body
- ``fields``        -- flat, quoted list of dotted field paths
- ``interfaces``    -- one ``export interface`` per nested group
- ``zodSchema``     -- members of a top-level ``z.object({...})``

Root leaves are declared directly in ``types`` / ``defaultValues``; leaves
inside a group are only represented through their group's interface and
nested literal.  Existing templates rely on that layout, so keep it.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from typing import Any, Union

from .placeholders import capitalize, render_field_snippet


BODY_KEYS: tuple[str, ...] = (
    "formItems",
    "types",
    "defaultValues",
    "fields",
    "interfaces",
    "zodSchema",
)


class BodySpecError(ValueError):
    """Raised when a body object cannot be interpreted as a field tree."""


# ---------------------------------------------------------------------------
# Field tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Leaf:
    """A single field.  ``tag`` is normally a string naming a snippet."""

    tag: Any


@dataclass(frozen=True)
class Group:
    """A nested object of fields.  ``children`` keeps insertion order."""

    children: dict[str, "BodyNode"] = field(default_factory=dict)


BodyNode = Union[Leaf, Group]


def parse_body(data: Any) -> Group:
    """Convert JSON-like data into a :class:`Group` tree.

    Mappings become groups; every other value (strings, but also lists,
    numbers or ``None``) becomes a leaf.  Non-string leaves never match a
    snippet and therefore only show up in the ``fields`` list.

    Raises:
        BodySpecError: If *data* itself is not a mapping.
    """
    if isinstance(data, Group):
        return data
    if not isinstance(data, Mapping):
        raise BodySpecError(
            f"Body must be a JSON object, got {type(data).__name__}"
        )
    return _parse_group(data)


def _parse_group(data: Mapping[Any, Any]) -> Group:
    return Group(children={str(key): _parse_node(value) for key, value in data.items()})


def _parse_node(value: Any) -> BodyNode:
    if isinstance(value, Mapping):
        return _parse_group(value)
    return Leaf(tag=value)


def describe_body(group: Group) -> str:
    """One-line preview of a field tree: ``name, address { city, country }``."""
    parts: list[str] = []
    for key, node in group.children.items():
        if isinstance(node, Group):
            parts.append(f"{key} {{ {describe_body(node)} }}")
        else:
            parts.append(key)
    return ", ".join(parts)


# ---------------------------------------------------------------------------
# Accumulators
# ---------------------------------------------------------------------------


@dataclass
class BodyReplacements:
    """The six text buffers produced by one body expansion."""

    form_items: str = ""
    types: str = ""
    default_values: str = ""
    fields: str = ""
    interfaces: str = ""
    zod_schema: str = ""

    def as_dict(self) -> dict[str, str]:
        """Return the buffers keyed by their placeholder names."""
        values = [getattr(self, f.name) for f in dataclass_fields(self)]
        return dict(zip(BODY_KEYS, values))


# ---------------------------------------------------------------------------
# Walker
# ---------------------------------------------------------------------------


class _FieldWalker:
    """Single-use depth-first walker feeding a :class:`BodyReplacements`."""

    def __init__(self, field_types: Mapping[str, str], zod_schema: bool) -> None:
        self.field_types = field_types
        self.zod_schema = zod_schema
        self.out = BodyReplacements()
        self.paths: list[str] = []

    def walk(self, root: Group) -> BodyReplacements:
        for key, node in root.children.items():
            self._visit(key, node, "")

        self.out.fields = ", ".join(self.paths)
        self.out.default_values = _strip_trailing_comma(self.out.default_values.strip())
        return self.out

    def _visit(self, key: str, node: BodyNode, prefix: str) -> None:
        full_path = f"{prefix}.{key}" if prefix else key

        if isinstance(node, Group):
            self._visit_group(key, node, full_path)
        else:
            self._visit_leaf(key, node, full_path, at_root=not prefix)

    def _visit_group(self, key: str, group: Group, full_path: str) -> None:
        interface_name = capitalize(key)
        self.out.interfaces += _interface_declaration(interface_name, group)
        self.out.types += f"  {key}: {interface_name};\n"
        self.out.default_values += f"  {key}: {_nested_defaults(group)},\n"
        if self.zod_schema:
            self.out.zod_schema += f"  {key}: z.object({_nested_zod_schema(group)}),\n"

        for child_key, child in group.children.items():
            self._visit(child_key, child, full_path)

    def _visit_leaf(self, key: str, leaf: Leaf, full_path: str, *, at_root: bool) -> None:
        snippet = self.field_types.get(leaf.tag) if isinstance(leaf.tag, str) else None
        if snippet:
            self.out.form_items += render_field_snippet(snippet, key, full_path) + "\n"

        if at_root:
            self.out.types += f"  {key}: string;\n"
            self.out.default_values += f"  {key}: '',\n"

        self.paths.append(f"'{full_path}'")


def expand_body(
    body: Any,
    field_types: Mapping[str, str],
    *,
    zod_schema: bool = True,
) -> BodyReplacements:
    """Expand a body object into its six replacement buffers.

    Args:
        body: A parsed :class:`Group` or raw JSON-like mapping.
        field_types: The template's ``variables`` (type tag -> snippet).
        zod_schema: Whether to fill the ``zodSchema`` buffer.

    Returns:
        A fresh :class:`BodyReplacements`.  ``defaultValues`` has its
        surrounding whitespace and final trailing comma removed.

    Raises:
        BodySpecError: If *body* is not a mapping.
    """
    root = parse_body(body)
    return _FieldWalker(field_types, zod_schema).walk(root)


# ---------------------------------------------------------------------------
# Nested literals
# ---------------------------------------------------------------------------


def _interface_declaration(name: str, group: Group) -> str:
    lines = [f"export interface {name} {{\n"]
    for key, child in group.children.items():
        member_type = capitalize(key) if isinstance(child, Group) else "string"
        lines.append(f"  {key}: {member_type};\n")
    lines.append("}\n\n")
    return "".join(lines)


def _nested_defaults(group: Group) -> str:
    lines = ["{\n"]
    for key, child in group.children.items():
        if isinstance(child, Group):
            lines.append(f"    {key}: {_nested_defaults(child)},\n")
        else:
            lines.append(f"    {key}: '',\n")
    lines.append("  }")
    return "".join(lines)


def _nested_zod_schema(group: Group) -> str:
    lines = ["{\n"]
    for key, child in group.children.items():
        if isinstance(child, Group):
            lines.append(f"    {key}: z.object({_nested_zod_schema(child)}),\n")
        else:
            lines.append(f"    {key}: z.string(),\n")
    lines.append("  }")
    return "".join(lines)


def _strip_trailing_comma(text: str) -> str:
    return text[:-1] if text.endswith(",") else text


# ---------------------------------------------------------------------------
# Placeholder expansion
# ---------------------------------------------------------------------------


def body_placeholder_spellings(key: str) -> list[str]:
    """The accepted spellings of the placeholder for buffer *key*."""
    return [
        f"{{{{body:{key}}}}}",
        f"{{{{body: {key}}}}}",
        f"{{{{ body:{key} }}}}",
        f"{{{{ body: {key} }}}}",
    ]


def replace_body_placeholders(
    content: str,
    replacements: BodyReplacements | Mapping[str, str],
) -> str:
    """Substitute every ``{{body:<key>}}`` spelling in *content*.

    Replacement text is inserted verbatim.  Empty buffers still consume their
    placeholder.
    """
    if isinstance(replacements, BodyReplacements):
        replacements = replacements.as_dict()

    for key, value in replacements.items():
        for placeholder in body_placeholder_spellings(key):
            content = re.sub(re.escape(placeholder), lambda _match: value, content)
    return content
