"""
Pieces - The four binary attributes and the 16-piece universe.

Attribute order in the text code is fixed: Color -> Height -> Shape -> Top.
Every encoder/decoder of board text depends on this order.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import InvalidAttributeCode, InvalidPieceCode


class _CodedEnum(Enum):
    """Enum whose value is its single-character text code."""

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: str):
        for member in cls:
            if member.value == code:
                return member
        raise InvalidAttributeCode(
            f"Invalid {cls.__name__.lower()} code: {code!r}"
        )


class Color(_CodedEnum):
    BROWN = "B"
    WHITE = "W"


class Height(_CodedEnum):
    SHORT = "S"
    TALL = "T"


class Shape(_CodedEnum):
    CIRCLE = "C"
    SQUARE = "S"


class Top(_CodedEnum):
    FLAT = "F"
    HOLE = "H"


AttributeValue = Union[Color, Height, Shape, Top]


class Attribute(Enum):
    """The four attribute categories, in text code order."""
    COLOR = "color"
    HEIGHT = "height"
    SHAPE = "shape"
    TOP = "top"


@dataclass(frozen=True)
class Piece:
    """
    One of the 16 Quarto pieces.

    Immutable; equality and hashing are structural.
    """
    color: Color
    height: Height
    shape: Shape
    top: Top

    @property
    def code(self) -> str:
        """Canonical 4-character code, e.g. 'BSCF'."""
        return self.color.code + self.height.code + self.shape.code + self.top.code

    def attribute(self, kind: Attribute) -> AttributeValue:
        """Get the value of one attribute."""
        return getattr(self, kind.value)

    @classmethod
    def from_code(cls, text: str) -> Piece:
        """
        Decode a 4-character piece code.

        Raises InvalidPieceCode on wrong length or any bad character.
        """
        if not isinstance(text, str) or len(text) != 4:
            raise InvalidPieceCode(f"Piece code must be 4 characters: {text!r}")
        try:
            return cls(
                color=Color.from_code(text[0]),
                height=Height.from_code(text[1]),
                shape=Shape.from_code(text[2]),
                top=Top.from_code(text[3]),
            )
        except InvalidAttributeCode as e:
            raise InvalidPieceCode(f"Invalid piece code {text!r}: {e.message}") from e

    def __str__(self) -> str:
        return self.code


def all_pieces() -> list[Piece]:
    """The full 16-piece universe in a fixed order."""
    return [
        Piece(color=color, height=height, shape=shape, top=top)
        for color in Color
        for height in Height
        for shape in Shape
        for top in Top
    ]
