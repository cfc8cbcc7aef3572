"""Tests for running transform pipelines over token lists."""

from __future__ import annotations

import pytest


def _run(registry, tokens, names, options=None):
    from tokensmith.transforms import transform_tokens

    return transform_tokens(tokens, registry.transforms.resolve(names), options)


class TestReferences:
    def test_is_reference(self):
        from tokensmith.transforms import is_reference

        assert is_reference("{colors.primary.500}")
        assert not is_reference("#FF0000")
        assert not is_reference("{colors primary}")
        assert not is_reference("prefix {colors.a}")
        assert not is_reference(None)

    def test_reference_path(self):
        from tokensmith.transforms import reference_path

        assert reference_path("{colors.primary.500}") == ("colors", "primary", "500")
        with pytest.raises(ValueError):
            reference_path("#FF0000")


class TestTransformTokens:
    def test_order_within_group(self, make_token):
        from tokensmith.transforms import TransformRegistry, transform_tokens

        registry = TransformRegistry()
        registry.register("name/a", "name", lambda t, o: t.name + "-a")
        registry.register("name/b", "name", lambda t, o: t.name + "-b")

        result = transform_tokens([make_token("x")], registry.resolve(["name/a", "name/b"]))
        assert result[0].name == "x-a-b"

    def test_input_order_preserved(self, registry, token_tree):
        result = _run(registry, token_tree.flatten(), ["name/kebab"])
        assert [t.path for t in result] == [t.path for t in token_tree.flatten()]

    def test_css_group(self, registry, token_tree):
        result = _run(registry, token_tree.flatten(), registry.transforms.group("css"))
        by_name = {t.name: t for t in result}

        assert by_name["colors-primary-500"].value == "#FF0000"
        assert by_name["colors-primary-overlay"].value == "rgba(0, 0, 255, 0.5)"
        assert by_name["typography-font-size-xl"].value == "1.500rem"
        assert by_name["typography-line-height-xl"].value == "1.33"
        assert by_name["colors-button-hover"].attributes["state"] == "hover"

    def test_options_reach_transforms(self, registry, token_tree):
        result = _run(registry, token_tree.flatten(), ["name/kebab"], {"prefix": "ds"})
        assert result[0].name == "ds-colors-primary-500"

    def test_inputs_are_not_modified(self, registry, token_tree):
        from tokensmith.core.ir import TransformedToken

        working = [TransformedToken.from_token(t) for t in token_tree.flatten()]
        result = _run(registry, working, ["name/kebab", "size/px-to-rem"], {"prefix": "ds"})

        assert result[0].name == "ds-colors-primary-500"
        assert working[0].name == "colors-primary-500"
        assert all(not t.applied for t in working)
        assert [t.value for t in working if t.path[-2:] == ("fontSize", "XL")] == ["24px"]

    def test_rerun_is_idempotent(self, registry, token_tree):
        group = registry.transforms.group("css")
        first = _run(registry, token_tree.flatten(), group)
        second = _run(registry, first, group)

        assert [(t.name, t.value, t.attributes) for t in second] == [
            (t.name, t.value, t.attributes) for t in first
        ]

    def test_unit_conversion_runs_once(self, registry, make_token):
        from tokensmith.core.ir import TokenType

        token = make_token("size", "md", value="32px", type=TokenType.DIMENSION)
        result = _run(registry, [token], ["size/px-to-rem", "size/px-to-rem"])

        assert result[0].value == "2.000rem"
        assert result[0].applied == ["size/px-to-rem"]


class TestAliases:
    def test_alias_takes_target_final_value(self, registry, make_token):
        from tokensmith.core.ir import TokenType

        tokens = [
            make_token("size", "md", value="24px", type=TokenType.DIMENSION),
            make_token("size", "heading", value="{size.md}", type=TokenType.DIMENSION),
        ]
        result = _run(registry, tokens, ["name/kebab", "size/px-to-rem"])

        assert result[1].value == "1.500rem"
        assert result[1].original_value == "{size.md}"

    def test_alias_declared_before_target(self, registry, make_token):
        tokens = [
            make_token("colors", "brand", value="{colors.primary.500}"),
            make_token("colors", "primary", "500", alpha=0.5),
        ]
        result = _run(registry, tokens, ["color/css-rgba"])

        assert result[0].value == "rgba(255, 0, 0, 0.5)"

    def test_alias_chain(self, registry, make_token):
        tokens = [
            make_token("a", value="{b}"),
            make_token("b", value="{c}"),
            make_token("c", value="#00FF00"),
        ]
        result = _run(registry, tokens, ["name/kebab"])
        assert [t.value for t in result] == ["#00FF00"] * 3

    def test_reference_transform(self, registry, make_token):
        tokens = [
            make_token("colors", "primary", "500"),
            make_token("colors", "brand", value="{colors.primary.500}"),
        ]
        result = _run(registry, tokens, ["name/kebab", "value/reference"])

        assert result[0].value == "#FF0000"
        assert result[1].value == "var(--colors-primary-500)"

    def test_dangling_reference(self, registry, make_token):
        from tokensmith.core.errors import ReferenceResolutionError
        from tokensmith.transforms import transform_tokens

        tokens = [make_token("colors", "brand", value="{colors.missing}")]
        with pytest.raises(ReferenceResolutionError, match="does not point") as exc:
            transform_tokens(tokens, [], platform="css")
        assert exc.value.context.platform == "css"
        assert exc.value.context.token_path == ("colors", "brand")

    def test_reference_to_group_is_dangling(self, registry, make_token):
        from tokensmith.core.errors import ReferenceResolutionError

        tokens = [
            make_token("colors", "primary", "500"),
            make_token("colors", "brand", value="{colors.primary}"),
        ]
        with pytest.raises(ReferenceResolutionError):
            _run(registry, tokens, [])

    def test_cycle(self, registry, make_token):
        from tokensmith.core.errors import ReferenceResolutionError

        tokens = [make_token("a", value="{b}"), make_token("b", value="{a}")]
        with pytest.raises(ReferenceResolutionError, match="Circular reference"):
            _run(registry, tokens, [])

    def test_self_reference(self, registry, make_token):
        from tokensmith.core.errors import ReferenceResolutionError

        with pytest.raises(ReferenceResolutionError, match="Circular reference"):
            _run(registry, [make_token("a", value="{a}")], [])
