"""
Character grid compositing.

Bonds are drawn first with ``write_line`` and labels second with
``write_atom``. A line never replaces a label character, while a label
always replaces whatever is under it, so atom identity stays readable.
"""

from typing import List, Sequence, Tuple

from .charset import GlyphTable
from .layout import PlacedAtom, label_span
from .molfile import Bond

BLANK = " "


class CharGrid:
    """Bounded character buffer addressed in layout coordinates."""

    def __init__(self, min_x: int, min_y: int, max_x: int, max_y: int,
                 glyphs: GlyphTable, padding: int = 2):
        self.glyphs = glyphs
        self.width = max_x - min_x + 1 + 2 * padding
        self.height = max_y - min_y + 1 + 2 * padding
        self.offset_x = padding - min_x
        self.offset_y = padding - min_y
        self.cells = [[BLANK] * self.width for _ in range(self.height)]

    def _cell(self, x: int, y: int):
        row, col = y + self.offset_y, x + self.offset_x
        if 0 <= row < self.height and 0 <= col < self.width:
            return row, col
        return None

    def get(self, x: int, y: int) -> str:
        cell = self._cell(x, y)
        if cell is None:
            return BLANK
        return self.cells[cell[0]][cell[1]]

    def write_line(self, x: int, y: int, ch: str):
        """Draw a bond glyph; crossing lines become a junction, labels are kept."""
        cell = self._cell(x, y)
        if cell is None:
            return
        row, col = cell
        existing = self.cells[row][col]
        if existing == BLANK:
            self.cells[row][col] = ch
        elif self.glyphs.is_line(existing) and self.glyphs.is_line(ch):
            self.cells[row][col] = self.glyphs.junction

    def write_atom(self, x: int, y: int, ch: str):
        """Draw a label character over anything already in the cell."""
        cell = self._cell(x, y)
        if cell is None:
            return
        self.cells[cell[0]][cell[1]] = ch

    def write_label(self, placed: PlacedAtom, label: str):
        start, _ = label_span(placed.x, label)
        for k, ch in enumerate(label):
            self.write_atom(start + k, placed.y, ch)

    def to_text(self) -> str:
        lines = ["".join(row).rstrip() for row in self.cells]
        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()
        return "\n".join(lines)


# ==============================================================================
# Bond glyphs
# ==============================================================================

def midpoint(p1: PlacedAtom, p2: PlacedAtom) -> Tuple[int, int]:
    return (p1.x + p2.x) // 2, (p1.y + p2.y) // 2


def is_diagonal(p1: PlacedAtom, p2: PlacedAtom) -> bool:
    return p1.x != p2.x and p1.y != p2.y


def bond_strokes(p1: PlacedAtom, p2: PlacedAtom, order: int,
                 glyphs: GlyphTable) -> List[Tuple[int, str]]:
    """
    Glyphs for one bond as (column offset from the midpoint, glyph) pairs.

    Horizontal and vertical bonds have dedicated multi-bond glyphs. A diagonal
    cell cannot show multiplicity, so double and triple diagonals get extra
    parallel strokes in the neighbouring columns.
    """
    if order == 4:
        order = 2

    if p1.y == p2.y:
        if order == 2:
            return [(0, glyphs.double_horizontal)]
        if order == 3:
            return [(0, glyphs.triple_horizontal)]
        return [(0, glyphs.horizontal)]

    if p1.x == p2.x:
        if order in (2, 3):
            return [(0, glyphs.double_vertical)]
        return [(0, glyphs.vertical)]

    rising = (p2.x - p1.x) * (p2.y - p1.y) < 0
    glyph = glyphs.diagonal_a if rising else glyphs.diagonal_b
    strokes = [(0, glyph)]
    if order == 2:
        strokes.append((1 if rising else -1, glyph))
    elif order == 3:
        strokes.extend([(-1, glyph), (1, glyph)])
    return strokes


def extents(placements: Sequence[PlacedAtom], labels: Sequence[str],
            bonds: Sequence[Bond]) -> Tuple[int, int, int, int]:
    """Bounding box (min_x, min_y, max_x, max_y) of labels and bond glyphs."""
    xs: List[int] = []
    ys: List[int] = []
    for placed, label in zip(placements, labels):
        start, end = label_span(placed.x, label)
        xs.extend((start, end))
        ys.append(placed.y)
    for bond in bonds:
        p1, p2 = placements[bond.i], placements[bond.j]
        mx, my = midpoint(p1, p2)
        margin = 1 if is_diagonal(p1, p2) and bond.display_order >= 2 else 0
        xs.extend((mx - margin, mx + margin))
        ys.append(my)
    return min(xs), min(ys), max(xs), max(ys)


def compose(placements: Sequence[PlacedAtom], labels: Sequence[str], bonds: Sequence[Bond],
            glyphs: GlyphTable, padding: int = 2) -> str:
    """Draw bonds, then labels, and serialize the trimmed grid."""
    if not placements:
        return ""

    grid = CharGrid(*extents(placements, labels, bonds), glyphs=glyphs, padding=padding)

    for bond in bonds:
        p1, p2 = placements[bond.i], placements[bond.j]
        mx, my = midpoint(p1, p2)
        for dx, glyph in bond_strokes(p1, p2, bond.order, glyphs):
            grid.write_line(mx + dx, my, glyph)

    for placed, label in zip(placements, labels):
        grid.write_label(placed, label)

    return grid.to_text()
