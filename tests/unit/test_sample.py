"""Tests for the offline sample provider."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


class TestSamplePayload:
    def test_colors_become_unit_channels(self):
        from tokensmith.core.sample import payload_from_sample_tokens

        payload = payload_from_sample_tokens(
            {"colors": {"primary": {"500": {"value": "#FF0000", "type": "color"}}}}
        )
        record = payload["styles"]["colors"][0]

        assert record["name"] == "primary/500"
        assert record["key"] == "color-primary-500"
        assert record["color"] == {"r": 1.0, "g": 0.0, "b": 0.0, "a": 1}

    def test_non_hex_color_kept_literal(self):
        from tokensmith.core.sample import payload_from_sample_tokens

        payload = payload_from_sample_tokens(
            {"colors": {"brand": {"value": "rebeccapurple", "type": "color"}}}
        )
        record = payload["styles"]["colors"][0]

        assert "color" not in record
        assert record["value"] == "rebeccapurple"

    def test_typography_and_shadows(self):
        from tokensmith.core.sample import payload_from_sample_tokens

        payload = payload_from_sample_tokens(
            {
                "typography": {
                    "fontFamily": {"sans": {"value": "Inter", "type": "fontFamily"}},
                    "fontSize": {
                        "lg": {"value": "18px", "type": "dimension"},
                        "fluid": {"value": "clamp(1rem, 2vw, 2rem)", "type": "dimension"},
                    },
                    "fontWeight": {"bold": {"value": "700", "type": "fontWeight"}},
                },
                "shadows": {"sm": {"value": "0px 1px 2px 0px #000", "type": "shadow"}},
            }
        )
        text = payload["styles"]["text"]

        assert [r["name"] for r in text] == ["fontFamily/sans", "fontSize/lg", "fontWeight/bold"]
        assert text[1]["fontSize"] == 18.0
        assert payload["styles"]["effects"][0]["value"] == "0px 1px 2px 0px #000"

    def test_sample_file_adapts(self, sample_tokens_path: Path):
        from tokensmith.core.adapter import adapt_payload
        from tokensmith.core.sample import load_sample_payload

        tree = adapt_payload(load_sample_payload(sample_tokens_path))

        assert tree.get_token(("colors", "primary", "500")).value == "#2196F3"
        assert tree.get_token(("typography", "fontSize", "xl")).value == "24px"
        assert tree.get_token(("typography", "fontWeight", "bold")).value == "700"
        assert tree.get_token(("effects", "shadow", "md")).value == (
            "0px 4px 6px -1px rgba(0, 0, 0, 0.1)"
        )
        assert len(tree) == 28


class TestLoading:
    def test_invalid_json(self, tmp_path: Path):
        from tokensmith.core.errors import PayloadError
        from tokensmith.core.sample import load_sample_payload

        path = tmp_path / "tokens.json"
        path.write_text("{not json")
        with pytest.raises(PayloadError):
            load_sample_payload(path)

    def test_payload_must_be_object(self, tmp_path: Path):
        from tokensmith.core.errors import PayloadError
        from tokensmith.core.sample import load_payload

        path = tmp_path / "payload.json"
        path.write_text("[]")
        with pytest.raises(PayloadError, match="must be a JSON object"):
            load_payload(path)

    def test_load_payload(self, tmp_path: Path, raw_payload):
        from tokensmith.core.sample import load_payload

        path = tmp_path / "payload.json"
        path.write_text(json.dumps(raw_payload))
        assert load_payload(path) == raw_payload

    def test_missing_file(self, tmp_path: Path):
        from tokensmith.core.errors import PayloadError
        from tokensmith.core.sample import load_payload

        with pytest.raises(PayloadError, match="Cannot load payload"):
            load_payload(tmp_path / "nope.json")
