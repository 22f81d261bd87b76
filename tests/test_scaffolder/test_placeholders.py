"""Tests for module-name and field snippet placeholder substitution.

Covers:
- Every module-name casing variant
- Global replacement and untouched unknown tokens
- Field snippet rendering ({{name}}, {{Name}}, {{fullPath}})
"""

from __future__ import annotations

import pytest

from smart_codegen.scaffolder.placeholders import (
    capitalize,
    module_name_variants,
    render_field_snippet,
    replace_placeholders,
    to_camel_case,
    to_kebab_case,
    to_snake_case,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Casing helpers
# ---------------------------------------------------------------------------


class TestCasing:
    def test_capitalize_only_first_char(self):
        assert capitalize("userProfile") == "UserProfile"
        assert capitalize("user_profile") == "User_profile"

    def test_capitalize_empty(self):
        assert capitalize("") == ""

    def test_camel_lowers_first_char(self):
        assert to_camel_case("UserProfile") == "userProfile"

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("userProfile", "user-profile"),
            ("UserProfile", "user-profile"),
            ("oauth2Client", "oauth2-client"),
            ("HTMLParser", "htmlparser"),
            ("already-kebab", "already-kebab"),
        ],
    )
    def test_kebab(self, value, expected):
        assert to_kebab_case(value) == expected

    def test_snake(self):
        assert to_snake_case("userProfileCard") == "user_profile_card"


# ---------------------------------------------------------------------------
# Module-name placeholders
# ---------------------------------------------------------------------------


class TestReplacePlaceholders:
    def test_all_variants(self):
        text = (
            "{{name}} {{Name}} {{NAME}} {{name-kebab}} "
            "{{name_snake}} {{name.camel}} {{name.pascal}}"
        )
        assert replace_placeholders(text, "userProfile") == (
            "userProfile UserProfile USERPROFILE user-profile "
            "user_profile userProfile UserProfile"
        )

    def test_replaces_every_occurrence(self):
        assert replace_placeholders("{{Name}}/{{Name}}.tsx", "button") == "Button/Button.tsx"

    def test_unknown_tokens_untouched(self):
        text = "{{name}} {{title}} {{ name }} {{body:formItems}}"
        assert replace_placeholders(text, "x") == "x {{title}} {{ name }} {{body:formItems}}"

    def test_case_sensitive_tokens(self):
        assert replace_placeholders("{{nAme}}", "x") == "{{nAme}}"

    def test_variant_table_keys(self):
        assert list(module_name_variants("a")) == [
            "{{name}}",
            "{{Name}}",
            "{{NAME}}",
            "{{name-kebab}}",
            "{{name_snake}}",
            "{{name.camel}}",
            "{{name.pascal}}",
        ]

    def test_backslashes_in_name_are_literal(self):
        assert replace_placeholders("{{name}}", r"a\1b") == r"a\1b"


# ---------------------------------------------------------------------------
# Field snippets
# ---------------------------------------------------------------------------


class TestRenderFieldSnippet:
    def test_binds_key_and_path(self):
        snippet = '<F label="{{Name}}" prop="{{fullPath}}" :options="{{name}}Options"/>'
        assert render_field_snippet(snippet, "country", "address.country") == (
            '<F label="Country" prop="address.country" :options="countryOptions"/>'
        )

    def test_module_variants_not_touched(self):
        assert render_field_snippet("{{name-kebab}} {{NAME}}", "city", "city") == (
            "{{name-kebab}} {{NAME}}"
        )
