"""
Vector depiction: RDKit SVG output forced to a single ink color, with PNG
rasterization through CairoSVG.
"""

import re
import logging
from typing import Tuple

from rdkit import Chem
from rdkit.Chem.Draw import rdMolDraw2D

logger = logging.getLogger(__name__)

DEFAULT_INK = "#000000"
DEFAULT_SIZE: Tuple[int, int] = (300, 300)

# Values that carry no color and must survive normalization.
KEEP_VALUES = {"none", "transparent", "inherit", "currentcolor"}

_COLOR_PROPS = r"(?:fill|stroke|stop-color|color)"
_ATTR_RE = re.compile(r"(?<![\w-])(" + _COLOR_PROPS + r"\s*=\s*)([\"'])(.*?)\2", re.IGNORECASE)
_STYLE_RE = re.compile(r"(?<![\w-])(" + _COLOR_PROPS + r"\s*:\s*)([^;\"'}>]+)", re.IGNORECASE)


def _is_kept(value: str) -> bool:
    value = value.strip()
    return value.lower() in KEEP_VALUES or value.lower().startswith("url(")


def normalize_ink(svg: str, ink: str = DEFAULT_INK) -> str:
    """
    Force every color-bearing attribute and style declaration to ``ink``.

    Handles ``fill``/``stroke``/``stop-color``/``color`` both as XML
    attributes and as declarations inside ``style`` attributes or ``<style>``
    blocks. ``none``, ``transparent``, ``inherit``, ``currentColor`` and
    ``url(...)`` references are left alone.
    """
    def replace_attr(match):
        if _is_kept(match.group(3)):
            return match.group(0)
        quote = match.group(2)
        return f"{match.group(1)}{quote}{ink}{quote}"

    def replace_style(match):
        value = match.group(2)
        if _is_kept(value):
            return match.group(0)
        trailing = value[len(value.rstrip()):]
        return f"{match.group(1)}{ink}{trailing}"

    svg = _ATTR_RE.sub(replace_attr, svg)
    return _STYLE_RE.sub(replace_style, svg)


def render_svg(mol: Chem.Mol, size: Tuple[int, int] = DEFAULT_SIZE, ink: str = DEFAULT_INK) -> str:
    """Draw a molecule to SVG with a transparent background and a single ink color."""
    drawer = rdMolDraw2D.MolDraw2DSVG(size[0], size[1])
    opts = drawer.drawOptions()
    opts.clearBackground = False
    opts.useBWAtomPalette()
    opts.addStereoAnnotation = False
    drawer.DrawMolecule(mol)
    drawer.FinishDrawing()
    return normalize_ink(drawer.GetDrawingText(), ink)


def rasterize_png(svg: str) -> bytes:
    """Rasterize SVG markup to PNG bytes."""
    import cairosvg

    return cairosvg.svg2png(bytestring=svg.encode("utf-8"))
