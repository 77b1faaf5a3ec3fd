"""
MolText V2000 Molfile Parser

Decodes the fixed-width V2000 connection table produced by structure
toolkits (RDKit ``MolToMolBlock``) into a small molecule record:

1. Header (3 lines, ignored)
2. Counts line (atom and bond counts)
3. Atom block (coordinates and element symbols)
4. Bond block (1-based endpoints and bond order)
5. Property block (only ``M  CHG`` formal charges are read)

The parser is lenient: a malformed coordinate, index or order falls back to
a default instead of aborting. Only a structurally unreadable table raises
an ``InputFormatError``.
"""

import math
import re
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import TooShortError, UnsupportedVersionError, InvalidCountsError

logger = logging.getLogger(__name__)

# ==============================================================================
# Column layout
# ==============================================================================

COUNTS_ATOMS = slice(0, 3)
COUNTS_BONDS = slice(3, 6)
ATOM_X = slice(0, 10)
ATOM_Y = slice(10, 20)
ATOM_SYMBOL = slice(31, 34)
BOND_FIRST = slice(0, 3)
BOND_SECOND = slice(3, 6)
BOND_ORDER = slice(6, 9)
CHARGE_COUNT = slice(6, 9)
CHARGE_FIRST_COLUMN = 9
CHARGE_PAIR_WIDTH = 8

CHARGE_MARKER = "M  CHG"
V3000_MARKER = "M  V30"

COUNTS_FALLBACK = re.compile(r"^\s*(\d{1,3})\s+(\d{1,3})\b")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


# ==============================================================================
# Data Classes
# ==============================================================================

@dataclass
class Atom:
    """An atom from the atom block."""
    index: int
    x: float
    y: float
    symbol: str = "C"
    charge: int = 0


@dataclass
class Bond:
    """A bond between two 0-based atom indices."""
    i: int
    j: int
    order: int = 1  # 1=single, 2=double, 3=triple, 4=aromatic

    @property
    def display_order(self) -> int:
        """Order used for drawing; aromatic bonds draw as double."""
        return 2 if self.order == 4 else self.order


@dataclass
class Molecule:
    """Atoms, bonds and the formal charge map of one connection table."""
    atoms: List[Atom] = field(default_factory=list)
    bonds: List[Bond] = field(default_factory=list)
    charges: Dict[int, int] = field(default_factory=dict)

    @property
    def coords(self) -> List[tuple]:
        return [(atom.x, atom.y) for atom in self.atoms]

    @property
    def symbols(self) -> List[str]:
        return [atom.symbol for atom in self.atoms]


# ==============================================================================
# Field readers
# ==============================================================================

def parse_int(text: str) -> Optional[int]:
    """Read the leading integer of a field, ignoring trailing characters."""
    match = _INT_PREFIX.match(text)
    if not match:
        return None
    return int(match.group(1))


def parse_float(text: str) -> Optional[float]:
    """Read the leading decimal number of a field."""
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None
    value = float(match.group(1))
    if not math.isfinite(value):
        return None
    return value


def _read_counts(line: str):
    atom_count = bond_count = None
    if len(line) >= 6:
        atom_count = parse_int(line[COUNTS_ATOMS])
        bond_count = parse_int(line[COUNTS_BONDS])

    if atom_count is None or bond_count is None:
        match = COUNTS_FALLBACK.match(line)
        if not match:
            raise InvalidCountsError(f"Invalid counts line: {line!r}")
        atom_count, bond_count = int(match.group(1)), int(match.group(2))

    return max(atom_count, 0), max(bond_count, 0)


def _read_charges(line: str, charges: Dict[int, int], atom_count: int):
    count = parse_int(line[CHARGE_COUNT]) or 0
    pos = CHARGE_FIRST_COLUMN
    for _ in range(count):
        index = (parse_int(line[pos:pos + 4]) or 0) - 1
        charge = parse_int(line[pos + 4:pos + 8]) or 0
        if 0 <= index < atom_count:
            charges[index] = charge
        pos += CHARGE_PAIR_WIDTH


# ==============================================================================
# Parser
# ==============================================================================

def parse_molblock(molblock: str) -> Molecule:
    """
    Parse a V2000 molblock into a Molecule.

    Args:
        molblock: Molfile text; ``\\r\\n`` and ``\\r`` line endings are accepted

    Returns:
        Molecule with charges applied to its atoms

    Raises:
        TooShortError: fewer than 4 lines
        UnsupportedVersionError: V3000 connection table
        InvalidCountsError: counts line cannot be read
    """
    lines = molblock.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if len(lines) < 4:
        raise TooShortError("Molblock too short")

    if "V3000" in lines[3].upper() or any(line.startswith(V3000_MARKER) for line in lines):
        raise UnsupportedVersionError("V3000 molblock not supported")

    atom_count, bond_count = _read_counts(lines[3])

    def line_at(k: int) -> str:
        return lines[k] if k < len(lines) else ""

    molecule = Molecule()
    base = 4
    for k in range(base, base + atom_count):
        line = line_at(k)
        x = parse_float(line[ATOM_X]) or 0.0
        y = parse_float(line[ATOM_Y]) or 0.0
        symbol = line[ATOM_SYMBOL].strip() or "C"
        molecule.atoms.append(Atom(index=k - base, x=x, y=y, symbol=symbol))

    bond_base = base + atom_count
    for k in range(bond_base, bond_base + bond_count):
        line = line_at(k)
        i = (parse_int(line[BOND_FIRST]) or 1) - 1
        j = (parse_int(line[BOND_SECOND]) or 1) - 1
        order = parse_int(line[BOND_ORDER]) or 1
        if not (0 <= i < atom_count and 0 <= j < atom_count):
            logger.warning(f"Dropping bond {k - bond_base + 1}: endpoints {i + 1}-{j + 1} "
                           f"outside 1..{atom_count}")
            continue
        molecule.bonds.append(Bond(i=i, j=j, order=order))

    for line in lines[bond_base + bond_count:]:
        if line.startswith(CHARGE_MARKER):
            _read_charges(line, molecule.charges, atom_count)

    for atom in molecule.atoms:
        atom.charge = molecule.charges.get(atom.index, 0)

    logger.debug(f"Parsed molblock: {len(molecule.atoms)} atoms, {len(molecule.bonds)} bonds")
    return molecule
