"""Ribbon definitions and the card style table they are looked up from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping

from ribbon.common import InvalidConfigurationError
from ribbon.consts import DEFAULT_MAX_CHARS
from ribbon.geom import CubicCurve


###############################################################################
# Ribbon
###############################################################################
@dataclass(frozen=True)
class Ribbon:
    """
    A curve to write text along, together with the maximum number of characters
    that are rendered on it.
    """

    curve: CubicCurve
    max_chars: int = DEFAULT_MAX_CHARS

    def validate(self) -> None:
        """
        Raises:
            InvalidConfigurationError: If the curve is not finite or max_chars is negative.
        """
        self.curve.validate()
        if self.max_chars < 0:
            raise InvalidConfigurationError(f"max_chars must not be negative, got {self.max_chars}")

    @classmethod
    def from_dict(cls, data: dict) -> Ribbon:
        """
        Create a Ribbon instance from a dictionary.

        Either {"curve": {...}, "max_chars": n} or a bare curve definition
        with an optional "maxChar" entry.

        Raises:
            InvalidConfigurationError: If _data_ or its curve is malformed.
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationError(f"Ribbon definition must be a dictionary, got {data!r}")
        curve_data = data.get("curve", data)
        max_chars = data.get("max_chars", data.get("maxChar", DEFAULT_MAX_CHARS))
        try:
            max_chars = int(max_chars)
        except (TypeError, ValueError) as err:
            raise InvalidConfigurationError(f"Invalid max_chars: {max_chars!r}") from err
        ribbon = cls(curve=CubicCurve.from_dict(curve_data), max_chars=max_chars)
        ribbon.validate()
        return ribbon

    def to_dict(self) -> dict:
        """Convert the Ribbon instance to a dictionary."""
        return {
            "curve": self.curve.to_dict(),
            "max_chars": self.max_chars,
        }


###############################################################################
# RibbonStyleTable
###############################################################################
class RibbonStyleTable:
    """
    Read-only mapping from a card type to the Ribbon its name is written on.

    Callers resolve the Ribbon here and pass it on; sampling and layout never
    look anything up by card type.
    """

    def __init__(self, styles: Mapping[str, Ribbon]) -> None:
        self._styles: Dict[str, Ribbon] = dict(styles)

    @property
    def card_types(self) -> List[str]:
        """All known card types, sorted."""
        return sorted(self._styles)

    def __contains__(self, card_type: object) -> bool:
        return card_type in self._styles

    def __len__(self) -> int:
        return len(self._styles)

    def get(self, card_type: str) -> Ribbon:
        """
        Returns the Ribbon for _card_type_.

        Raises:
            InvalidConfigurationError: If the card type is unknown.
        """
        try:
            return self._styles[card_type]
        except KeyError as err:
            raise InvalidConfigurationError(
                f"Unknown card type '{card_type}'. Known card types: {', '.join(self.card_types)}"
            ) from err

    @classmethod
    def from_dict(cls, data: dict) -> RibbonStyleTable:
        """
        Create a RibbonStyleTable from a card style dictionary.

        Each entry is either a Ribbon dictionary or a card style of the shape
        {"name": {"textCurve": {"start": .., "c1": .., "c2": .., "end": ..}, "maxChar": n}}.
        Other keys of a card style are ignored.
        """
        styles: Dict[str, Ribbon] = {}
        for card_type, style in data.items():
            if not isinstance(style, dict):
                raise InvalidConfigurationError(f"Style of card type '{card_type}' must be a dictionary")
            name_style = style.get("name")
            if isinstance(name_style, dict) and "textCurve" in name_style:
                text_curve = name_style["textCurve"]
                if not isinstance(text_curve, dict):
                    raise InvalidConfigurationError(
                        f"textCurve of card type '{card_type}' must be a dictionary, got {text_curve!r}"
                    )
                ribbon_data = dict(text_curve)
                if "maxChar" in name_style:
                    ribbon_data.setdefault("maxChar", name_style["maxChar"])
                styles[card_type] = Ribbon.from_dict(ribbon_data)
            else:
                styles[card_type] = Ribbon.from_dict(style)
        return cls(styles)

    def to_dict(self) -> dict:
        """Convert the RibbonStyleTable instance to a dictionary."""
        return {card_type: ribbon.to_dict() for card_type, ribbon in self._styles.items()}
