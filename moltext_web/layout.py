"""
Grid layout for atom labels.

Atom coordinates are scaled so that an average bond spans about two grid
columns, then snapped to even integers. Snapping to even cells keeps every
bond midpoint on an integer cell, where its glyph is drawn. When two labels
on one row touch or intersect, the scale is bumped and the placement is
recomputed, up to a fixed number of attempts.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .molfile import Bond

logger = logging.getLogger(__name__)

DEFAULT_BOND_LENGTH = 1.5  # used when the molecule has no bonds
MIN_BOND_LENGTH = 1e-6


@dataclass(frozen=True)
class PlacedAtom:
    """Integer grid cell of an atom's label center."""
    x: int
    y: int


@dataclass
class Layout:
    """Result of a layout run."""
    placements: List[PlacedAtom]
    scale: float
    attempts: int
    overlapping: bool = False


# ==============================================================================
# Geometry helpers
# ==============================================================================

def nearest_even(values) -> np.ndarray:
    """Round half up to the nearest integer, then to even parity."""
    return (np.floor(np.asarray(values, dtype=float) / 2.0 + 0.5) * 2).astype(int)


def average_bond_length(coords: Sequence[Tuple[float, float]], bonds: Sequence[Bond]) -> float:
    if not bonds:
        return DEFAULT_BOND_LENGTH
    points = np.asarray(coords, dtype=float).reshape(-1, 2)
    first = np.array([bond.i for bond in bonds])
    second = np.array([bond.j for bond in bonds])
    delta = points[first] - points[second]
    return float(np.hypot(delta[:, 0], delta[:, 1]).mean())


def place_atoms(coords: Sequence[Tuple[float, float]], scale: float) -> List[PlacedAtom]:
    """Project coordinates onto the grid; y is flipped so rows grow downward."""
    points = np.asarray(coords, dtype=float).reshape(-1, 2)
    xs = nearest_even(points[:, 0] * scale)
    ys = nearest_even(-points[:, 1] * scale)
    return [PlacedAtom(int(x), int(y)) for x, y in zip(xs, ys)]


def label_span(x: int, label: str) -> Tuple[int, int]:
    """First and last column covered by a label centered on column x."""
    start = x - len(label) // 2
    return start, start + len(label) - 1


def labels_overlap(placements: Sequence[PlacedAtom], labels: Sequence[str]) -> bool:
    """
    True when two labels on the same row touch or intersect.

    Adjacent spans count as a conflict: at least one blank column must
    separate labels.
    """
    rows: Dict[int, List[Tuple[int, int]]] = {}
    for placed, label in zip(placements, labels):
        start, end = label_span(placed.x, label)
        spans = rows.setdefault(placed.y, [])
        for other_start, other_end in spans:
            if end + 1 >= other_start and start <= other_end + 1:
                return True
        spans.append((start, end))
    return False


# ==============================================================================
# Engine
# ==============================================================================

class LayoutEngine:
    """Places atoms on the character grid with bounded scale retries."""

    def __init__(self, target_bond_chars: float = 1.0, scale_bump_factor: float = 1.12,
                 max_scale_attempts: int = 8):
        self.target_bond_chars = target_bond_chars
        self.scale_bump_factor = scale_bump_factor
        self.max_scale_attempts = max_scale_attempts

    def initial_scale(self, coords, bonds) -> float:
        average = average_bond_length(coords, bonds)
        # Zero-length bonds hit the MIN_BOND_LENGTH floor, giving a scale of
        # ~2e6 per unit: any atoms not stacked on each other end up thousands
        # of columns apart.
        return (2.0 * self.target_bond_chars) / max(average, MIN_BOND_LENGTH)

    def layout(self, coords: Sequence[Tuple[float, float]], bonds: Sequence[Bond],
               labels: Sequence[str]) -> Layout:
        scale = self.initial_scale(coords, bonds)
        placements: List[PlacedAtom] = []
        overlapping = False
        attempt = 0

        for attempt in range(self.max_scale_attempts + 1):
            placements = place_atoms(coords, scale)
            overlapping = labels_overlap(placements, labels)
            if not overlapping or attempt == self.max_scale_attempts:
                break
            scale *= self.scale_bump_factor

        if overlapping:
            logger.debug(f"Labels still overlap after {attempt + 1} attempts (scale={scale:.3f})")

        return Layout(placements=placements, scale=scale, attempts=attempt + 1,
                      overlapping=overlapping)
