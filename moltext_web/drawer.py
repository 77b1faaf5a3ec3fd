"""
MolText Drawer

Renders a V2000 molblock as a character-grid diagram:

    molblock -> parse_molblock -> LayoutEngine -> compose -> text

The drawer holds only immutable configuration, so one instance can serve
any number of concurrent renders.
"""

import math
import logging
from dataclasses import dataclass
from typing import List, Optional

from .charset import Charset
from .grid import compose
from .layout import LayoutEngine
from .molfile import Molecule, parse_molblock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawerConfig:
    """Render options for the character-grid drawer."""
    target_bond_chars: float = 1.0
    padding: int = 2
    scale_bump_factor: float = 1.12
    max_scale_attempts: int = 8
    show_formal_charge: bool = True
    use_unicode: bool = True

    def __post_init__(self):
        if not math.isfinite(self.target_bond_chars) or self.target_bond_chars <= 0:
            raise ValueError(
                f"target_bond_chars must be a positive finite number, got {self.target_bond_chars}"
            )
        if self.padding < 0:
            raise ValueError(f"padding must be >= 0, got {self.padding}")
        if not math.isfinite(self.scale_bump_factor) or self.scale_bump_factor <= 1:
            raise ValueError(
                f"scale_bump_factor must be finite and > 1, got {self.scale_bump_factor}"
            )
        if self.max_scale_attempts < 0:
            raise ValueError(f"max_scale_attempts must be >= 0, got {self.max_scale_attempts}")

    @property
    def charset(self) -> Charset:
        return Charset.select(self.use_unicode)


def format_charge(charge: int) -> str:
    """'+'/'-' for unit charges, sign and magnitude otherwise, '' for zero."""
    if not charge:
        return ""
    sign = "+" if charge > 0 else "-"
    return sign if abs(charge) == 1 else f"{sign}{abs(charge)}"


def atom_label(symbol: str, charge: int = 0, show_formal_charge: bool = True) -> str:
    label = "C" if symbol.lower() == "c" else symbol
    if show_formal_charge:
        label += format_charge(charge)
    return label


class AsciiMolDrawer:
    """Character-grid renderer for molblocks."""

    def __init__(self, config: Optional[DrawerConfig] = None):
        self.config = config or DrawerConfig()
        self.layout_engine = LayoutEngine(
            target_bond_chars=self.config.target_bond_chars,
            scale_bump_factor=self.config.scale_bump_factor,
            max_scale_attempts=self.config.max_scale_attempts,
        )

    def labels(self, molecule: Molecule) -> List[str]:
        return [atom_label(atom.symbol, atom.charge, self.config.show_formal_charge)
                for atom in molecule.atoms]

    def draw_molecule(self, molecule: Molecule) -> str:
        labels = self.labels(molecule)
        layout = self.layout_engine.layout(molecule.coords, molecule.bonds, labels)
        logger.debug(f"Layout: scale={layout.scale:.3f} attempts={layout.attempts} "
                     f"overlapping={layout.overlapping}")
        return compose(layout.placements, labels, molecule.bonds,
                       glyphs=self.config.charset.table, padding=self.config.padding)

    def draw_molblock(self, molblock: str) -> str:
        """
        Render molblock text as a diagram.

        Returns:
            Rows joined by newlines, without a trailing newline

        Raises:
            InputFormatError: the molblock cannot be decoded
        """
        return self.draw_molecule(parse_molblock(molblock))


def draw_molblock(molblock: str, config: Optional[DrawerConfig] = None) -> str:
    """Convenience wrapper around AsciiMolDrawer.draw_molblock."""
    return AsciiMolDrawer(config).draw_molblock(molblock)
