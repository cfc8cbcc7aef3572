"""
Provider style payload types.

A payload carries three style collections (color fills, text styles,
effect styles). Each record kind is its own model so that missing optional
fields surface as explicit ``None`` values at the adapter boundary.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

StyleT = TypeVar("StyleT", bound="StyleRecord")


def _first_error(error: ValidationError) -> Any:
    errors = error.errors()
    return errors[0]["msg"] if errors else error


class EffectType(StrEnum):
    """Effect layer kinds reported by the provider."""

    DROP_SHADOW = "DROP_SHADOW"
    INNER_SHADOW = "INNER_SHADOW"
    LAYER_BLUR = "LAYER_BLUR"
    BACKGROUND_BLUR = "BACKGROUND_BLUR"


class RGBA(BaseModel):
    """Channel intensities in the [0, 1] range."""

    model_config = ConfigDict(frozen=True)

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float | None = None

    @field_validator("r", "g", "b", mode="before")
    @classmethod
    def _missing_channel_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value


class Offset(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0


class StyleRecord(BaseModel):
    """Fields shared by every style record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    key: str | None = None
    name: str
    description: str | None = None


class ColorStyle(StyleRecord):
    """A color fill style."""

    color: RGBA | None = None
    value: str | None = Field(default=None, description="Literal hex value, if pre-converted")


class TextStyle(StyleRecord):
    """A text style; each property yields its own token."""

    font_family: str | None = Field(default=None, alias="fontFamily")
    font_size: float | None = Field(default=None, alias="fontSize")
    font_weight: float | str | None = Field(default=None, alias="fontWeight")
    line_height_px: float | None = Field(default=None, alias="lineHeightPx")
    line_height: float | str | None = Field(default=None, alias="lineHeight")


class EffectLayer(BaseModel):
    """One layer of an effect style."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = Field(description="One of EffectType; unknown kinds are ignored")
    offset: Offset | None = None
    radius: float | None = None
    spread: float | None = None
    color: RGBA | None = None


class EffectStyle(StyleRecord):
    """An effect style made of zero or more layers."""

    effects: list[EffectLayer] = Field(default_factory=list)
    value: str | None = Field(default=None, description="Literal CSS shadow, if pre-converted")

    @field_validator("effects", mode="before")
    @classmethod
    def _drop_malformed_layers(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        layers: list[EffectLayer] = []
        for index, raw in enumerate(value):
            try:
                layers.append(EffectLayer.model_validate(raw))
            except ValidationError as e:
                logger.warning("Dropping malformed effect layer #%d: %s", index, _first_error(e))
        return layers


class StylePayload(BaseModel):
    """Everything the adapter consumes from one provider file."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    version: str | None = None
    last_modified: str | None = None
    colors: list[ColorStyle] = Field(default_factory=list)
    text: list[TextStyle] = Field(default_factory=list)
    effects: list[EffectStyle] = Field(default_factory=list)
    skipped: int = Field(default=0, description="Records rejected during validation")

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> StylePayload:
        """Validate a raw JSON payload record by record.

        The three collections may sit at the top level or under ``styles``.
        A malformed field is logged and dropped while the rest of its record
        is kept. A record without a usable name is dropped; it never rejects
        the rest of the payload.
        """
        styles = data.get("styles") if isinstance(data.get("styles"), dict) else data
        skipped = 0

        def _collect(kind: str, model: type[StyleT]) -> list[StyleT]:
            nonlocal skipped
            raw_records = styles.get(kind) or []
            if not isinstance(raw_records, list):
                logger.warning("Ignoring %s collection: expected a list", kind)
                return []
            records: list[StyleT] = []
            for index, raw in enumerate(raw_records):
                try:
                    records.append(_validate_record(model, raw))
                except ValidationError as e:
                    skipped += 1
                    logger.warning(
                        "Skipping malformed %s record #%d: %s", kind, index, _first_error(e)
                    )
            return records

        colors = _collect("colors", ColorStyle)
        text = _collect("text", TextStyle)
        effects = _collect("effects", EffectStyle)

        version = data.get("version")
        return cls(
            name=data.get("name"),
            version=str(version) if version is not None else None,
            last_modified=data.get("lastModified"),
            colors=colors,
            text=text,
            effects=effects,
            skipped=skipped,
        )


def _validate_record(model: type[StyleT], raw: Any) -> StyleT:
    """Validate a style record, retrying without the fields that failed."""
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        if not isinstance(raw, dict):
            raise
        bad_fields = {err["loc"][0] for err in e.errors() if err["loc"]}
        if not bad_fields or "name" in bad_fields:
            raise
        logger.warning(
            "Dropping malformed field(s) %s of style %r",
            ", ".join(sorted(str(f) for f in bad_fields)),
            raw.get("name"),
        )
        return model.model_validate({k: v for k, v in raw.items() if k not in bad_fields})
