"""
MolText - molecules as character-grid diagrams

This package renders 2D molecular structures (V2000 molblocks) as compact
text diagrams using Unicode box-drawing or plain ASCII characters, with
RDKit-backed SMILES input and SVG/PNG depiction.
"""

__version__ = "1.0.0"

from .charset import Charset, GlyphTable, UNICODE_GLYPHS, ASCII_GLYPHS
from .drawer import AsciiMolDrawer, DrawerConfig, atom_label, draw_molblock
from .errors import (
    InputFormatError,
    TooShortError,
    UnsupportedVersionError,
    InvalidCountsError,
    StructureGenerationError,
    NameResolutionError,
)
from .layout import LayoutEngine, PlacedAtom
from .molfile import Atom, Bond, Molecule, parse_molblock

__all__ = [
    '__version__',
    # Rendering
    'AsciiMolDrawer',
    'DrawerConfig',
    'atom_label',
    'draw_molblock',
    'LayoutEngine',
    'PlacedAtom',
    'Charset',
    'GlyphTable',
    'UNICODE_GLYPHS',
    'ASCII_GLYPHS',
    # Parsing
    'Atom',
    'Bond',
    'Molecule',
    'parse_molblock',
    # Errors
    'InputFormatError',
    'TooShortError',
    'UnsupportedVersionError',
    'InvalidCountsError',
    'StructureGenerationError',
    'NameResolutionError',
]
