"""Naming placeholder substitution.

Template files and file names refer to the generated module through a small,
closed vocabulary of ``{{...}}`` tokens.  Each token maps to one casing
transform of the module name::

    {{name}}         userProfile
    {{Name}}         UserProfile
    {{NAME}}         USERPROFILE
    {{name-kebab}}   user-profile
    {{name_snake}}   user_profile
    {{name.camel}}   userProfile
    {{name.pascal}}  UserProfile

Per-field snippets use a second, even smaller vocabulary (``{{name}}``,
``{{Name}}`` and ``{{fullPath}}``) bound to the current body field.

Tokens outside these vocabularies are left untouched.
"""

from __future__ import annotations

import re


# ---------------------------------------------------------------------------
# Casing helpers
# ---------------------------------------------------------------------------

_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def capitalize(value: str) -> str:
    """Upper-case the first character only (``userName`` -> ``UserName``)."""
    return value[:1].upper() + value[1:]


def to_camel_case(value: str) -> str:
    """Lower-case the first character only (``UserName`` -> ``userName``)."""
    return value[:1].lower() + value[1:]


def to_kebab_case(value: str) -> str:
    """Hyphenate lower/digit-to-upper boundaries, then lower-case everything."""
    return _WORD_BOUNDARY.sub(r"\1-\2", value).lower()


def to_snake_case(value: str) -> str:
    """Underscore lower/digit-to-upper boundaries, then lower-case everything."""
    return _WORD_BOUNDARY.sub(r"\1_\2", value).lower()


# ---------------------------------------------------------------------------
# Module-name placeholders
# ---------------------------------------------------------------------------


def module_name_variants(name: str) -> dict[str, str]:
    """Return the ``{placeholder: value}`` table for a module name.

    The order of the returned mapping is the order in which replacements are
    applied.  The tokens are disjoint, so the order never changes the result.
    """
    return {
        "{{name}}": name,
        "{{Name}}": capitalize(name),
        "{{NAME}}": name.upper(),
        "{{name-kebab}}": to_kebab_case(name),
        "{{name_snake}}": to_snake_case(name),
        "{{name.camel}}": to_camel_case(name),
        "{{name.pascal}}": capitalize(name),
    }


def replace_placeholders(text: str, name: str) -> str:
    """Replace every module-name placeholder in *text*.

    Args:
        text: File content or a relative file path.
        name: The module name supplied on the command line.

    Returns:
        *text* with all known placeholders substituted.  Unknown ``{{...}}``
        tokens are returned as-is.
    """
    for placeholder, value in module_name_variants(name).items():
        text = text.replace(placeholder, value)
    return text


# ---------------------------------------------------------------------------
# Field snippet placeholders
# ---------------------------------------------------------------------------


def render_field_snippet(snippet: str, key: str, full_path: str) -> str:
    """Render a per-type snippet for a single body field.

    ``{{name}}`` is bound to the field key, ``{{Name}}`` to the capitalised
    key and ``{{fullPath}}`` to the dotted path from the body root.
    """
    return (
        snippet.replace("{{name}}", key)
        .replace("{{Name}}", capitalize(key))
        .replace("{{fullPath}}", full_path)
    )
