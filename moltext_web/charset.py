"""
Glyph tables for the character-grid renderer.

Two immutable presets exist: Unicode box-drawing characters and a 7-bit
ASCII fallback. Renderers ask ``Charset.table`` for the active preset and
never mutate it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet


@dataclass(frozen=True)
class GlyphTable:
    """Glyphs for each logical bond role plus the junction glyph."""
    horizontal: str
    vertical: str
    diagonal_a: str  # rising: "/"
    diagonal_b: str  # falling: "\"
    double_horizontal: str
    double_vertical: str
    triple_horizontal: str
    junction: str

    @property
    def line_glyphs(self) -> FrozenSet[str]:
        return frozenset((
            self.horizontal, self.vertical, self.diagonal_a, self.diagonal_b,
            self.double_horizontal, self.double_vertical, self.triple_horizontal,
            self.junction,
        ))

    def is_line(self, ch: str) -> bool:
        return ch in self.line_glyphs


UNICODE_GLYPHS = GlyphTable(
    horizontal="─",
    vertical="│",
    diagonal_a="╱",
    diagonal_b="╲",
    double_horizontal="═",
    double_vertical="║",
    triple_horizontal="≡",
    junction="┼",
)

ASCII_GLYPHS = GlyphTable(
    horizontal="-",
    vertical="|",
    diagonal_a="/",
    diagonal_b="\\",
    double_horizontal="=",
    double_vertical="|",
    triple_horizontal="#",
    junction="+",
)


class Charset(Enum):
    """Output vocabulary of the grid renderer."""
    UNICODE = "unicode"
    ASCII = "ascii"

    @property
    def table(self) -> GlyphTable:
        return UNICODE_GLYPHS if self is Charset.UNICODE else ASCII_GLYPHS

    @classmethod
    def select(cls, use_unicode: bool) -> "Charset":
        return cls.UNICODE if use_unicode else cls.ASCII
