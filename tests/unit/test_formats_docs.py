"""Tests for the documentation formats."""

from __future__ import annotations

import json

import pytest


@pytest.fixture
def doc_tokens(registry, token_tree):
    from tokensmith.transforms import transform_tokens

    return transform_tokens(token_tree.flatten(), registry.transforms.resolve_group("custom/js"))


def _working(make_token, *path, **kwargs):
    from tokensmith.core.ir import TransformedToken

    return TransformedToken.from_token(make_token(*path, **kwargs))


class TestGrouping:
    def test_first_seen_order(self, make_token):
        from tokensmith.core.ir import TokenType
        from tokensmith.formats.base import group_by_top_level

        tokens = [
            _working(make_token, "typography", "fontSize", "sm", value="14px"),
            _working(make_token, "colors", "red"),
            _working(make_token, "typography", "fontSize", "lg", value="18px"),
            _working(make_token, "spacing", "sm", value="4px", type=TokenType.DIMENSION),
        ]
        groups = group_by_top_level(tokens)

        assert list(groups) == ["typography", "colors", "spacing"]
        assert [t.path[-1] for t in groups["typography"]] == ["sm", "lg"]

    def test_capitalize(self):
        from tokensmith.formats.base import capitalize

        assert capitalize("borderRadius") == "BorderRadius"
        assert capitalize("") == ""


class TestJsonDocumentation:
    def test_document(self, doc_tokens, format_context):
        from tokensmith.formats.docs import DOCUMENTATION_SCHEMA, json_documentation

        doc = json.loads(json_documentation(doc_tokens, format_context))

        assert doc["$schema"] == DOCUMENTATION_SCHEMA
        assert doc["$metadata"]["tokenCount"] == 8
        assert doc["$metadata"]["generatedAt"] == "2024-01-15T12:00:00+00:00"
        assert doc["$metadata"]["version"] == "1.0.0"
        assert list(doc["tokens"]) == ["colors", "typography", "effects"]

    def test_records(self, doc_tokens, format_context):
        from tokensmith.formats.docs import json_documentation

        doc = json.loads(json_documentation(doc_tokens, format_context))
        colors = doc["tokens"]["colors"]
        record = colors["tokens"][0]

        assert colors["description"].startswith("Color tokens")
        assert record == {
            "name": "colorsPrimary500",
            "value": "#FF0000",
            "type": "color",
            "path": "colors.primary.500",
            "description": "Primary brand color",
            "category": "color",
            "subcategory": "primary",
            "provenance": {"key": "c1", "name": "primary/500"},
            "original": {"value": "#FF0000", "type": "color"},
        }

    def test_unknown_category_description(self, make_token, format_context):
        from tokensmith.formats.docs import json_documentation

        tokens = [_working(make_token, "motion", "fast", value="200ms")]
        doc = json.loads(json_documentation(tokens, format_context))

        motion = doc["tokens"]["motion"]
        assert motion["description"] == "motion tokens"
        assert motion["tokens"][0]["category"] == "motion"
        assert "provenance" not in motion["tokens"][0]

    def test_version_option(self, doc_tokens, generated_at):
        from tokensmith.formats import FormatContext
        from tokensmith.formats.docs import json_documentation

        context = FormatContext(options={"version": "2.1.0"}, generated_at=generated_at)
        doc = json.loads(json_documentation(doc_tokens, context))
        assert doc["$metadata"]["version"] == "2.1.0"


class TestMarkdownDocumentation:
    def test_sections_and_rows(self, doc_tokens, format_context):
        from tokensmith.formats.docs import markdown_documentation

        output = markdown_documentation(doc_tokens, format_context)

        assert output.startswith("# Design Tokens\n\nGenerated on 2024-01-15T12:00:00+00:00")
        assert "Total tokens: 8" in output
        assert output.index("## Colors") < output.index("## Typography")
        assert output.index("## Typography") < output.index("## Effects")
        assert "| `typographyFontSizeXl` | `24px` | fontSize | Font size: 24px |" in output

    def test_color_swatch(self, doc_tokens, format_context):
        from tokensmith.formats.docs import markdown_documentation

        output = markdown_documentation(doc_tokens, format_context)
        row = next(line for line in output.splitlines() if "`colorsPrimary500`" in line)

        assert "background:#FF0000;" in row
        assert row.endswith("`#FF0000` | color | Primary brand color |")

    def test_unsafe_color_has_no_swatch(self, make_token, format_context):
        from tokensmith.formats.docs import markdown_documentation

        tokens = [_working(make_token, "colors", "odd", value="red; x: y")]
        output = markdown_documentation(tokens, format_context)

        assert "<span" not in output
        assert "`red; x: y`" in output

    def test_missing_description_and_pipes(self, make_token, format_context):
        from tokensmith.formats.docs import markdown_documentation

        tokens = [
            _working(make_token, "colors", "a"),
            _working(make_token, "colors", "b", description="left | right"),
        ]
        output = markdown_documentation(tokens, format_context)

        assert "| color | - |" in output
        assert "left \\| right" in output

    def test_title(self, doc_tokens, generated_at):
        from tokensmith.formats import FormatContext
        from tokensmith.formats.docs import markdown_documentation

        context = FormatContext(options={"title": "Brand"}, generated_at=generated_at)
        assert markdown_documentation(doc_tokens, context).startswith("# Brand\n")


class TestHtmlDocumentation:
    def test_preview_width(self):
        from tokensmith.formats.docs import preview_width

        assert preview_width("24px") == 48
        assert preview_width("1.500rem") == 3
        assert preview_width("80px") == 100
        assert preview_width("wide") == 0
        assert preview_width("") == 0

    def test_page(self, doc_tokens, format_context):
        from tokensmith.formats.docs import html_documentation

        output = html_documentation(doc_tokens, format_context)

        assert output.startswith("<!DOCTYPE html>")
        assert "<title>Design Tokens</title>" in output
        assert '<div class="color-swatch" style="background: #FF0000;"></div>' in output
        assert '<div class="size-preview" style="width: 48px;"></div>' in output
        assert output.index("<h2>Colors</h2>") < output.index("<h2>Effects</h2>")
        assert output.endswith("</html>")

    def test_size_preview_capped(self, make_token, format_context):
        from tokensmith.core.ir import TokenType
        from tokensmith.formats.docs import html_documentation

        tokens = [_working(make_token, "spacing", "huge", value="400px", type=TokenType.DIMENSION)]
        output = html_documentation(tokens, format_context)

        assert 'style="width: 100px;"' in output

    def test_escapes_user_text(self, make_token, generated_at):
        from tokensmith.formats import FormatContext
        from tokensmith.formats.docs import html_documentation

        tokens = [
            _working(
                make_token,
                "colors",
                "x",
                value="#FF0000",
                description="<script>alert(\"it's\")</script> & more",
            )
        ]
        context = FormatContext(options={"title": "<b>Tokens</b>"}, generated_at=generated_at)
        output = html_documentation(tokens, context)

        assert "<script>" not in output
        assert "&lt;script&gt;alert(&quot;it&#039;s&quot;)&lt;/script&gt; &amp; more" in output
        assert "<title>&lt;b&gt;Tokens&lt;/b&gt;</title>" in output

    def test_bad_values_fall_back(self, make_token, format_context):
        from tokensmith.formats.docs import html_preview

        assert html_preview(_working(make_token, "c", value="javascript:alert(1)")) == ""

    def test_deterministic(self, doc_tokens, format_context):
        from tokensmith.formats.docs import html_documentation

        assert html_documentation(doc_tokens, format_context) == html_documentation(
            doc_tokens, format_context
        )
