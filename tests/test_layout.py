"""
Tests for grid placement and the overlap retry loop.
"""

import sys
import os

import numpy as np

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from moltext_web.layout import (
    DEFAULT_BOND_LENGTH,
    LayoutEngine,
    PlacedAtom,
    average_bond_length,
    label_span,
    labels_overlap,
    nearest_even,
    place_atoms,
)
from moltext_web.molfile import Bond


class TestNearestEven:
    """Round half up, then force even parity."""

    def test_values(self):
        values = [0.0, 0.9, 1.0, 1.2, 2.0, 2.9, 3.1, -0.9, -1.2, -3.1]
        assert nearest_even(values).tolist() == [0, 0, 2, 2, 2, 2, 4, 0, -2, -4]

    def test_always_even(self):
        values = np.linspace(-17.3, 17.3, 211)
        assert all(v % 2 == 0 for v in nearest_even(values).tolist())


class TestScale:
    """Initial scale from the average bond length."""

    def test_average_bond_length(self):
        coords = [(0.0, 0.0), (3.0, 4.0), (3.0, 0.0)]
        bonds = [Bond(0, 1), Bond(1, 2)]
        assert average_bond_length(coords, bonds) == 4.5

    def test_no_bonds_uses_default(self):
        assert average_bond_length([(0.0, 0.0)], []) == DEFAULT_BOND_LENGTH

    def test_initial_scale(self):
        engine = LayoutEngine(target_bond_chars=1.0)
        scale = engine.initial_scale([(0.0, 0.0), (2.0, 0.0)], [Bond(0, 1)])
        assert scale == 1.0

    def test_zero_length_bonds_do_not_divide_by_zero(self):
        engine = LayoutEngine()
        scale = engine.initial_scale([(0.0, 0.0), (0.0, 0.0)], [Bond(0, 1)])
        assert np.isfinite(scale)
        assert scale == 2.0 / 1e-6


class TestPlacement:
    """Coordinate projection onto the grid."""

    def test_y_axis_is_flipped(self):
        placed = place_atoms([(0.0, 0.0), (0.0, 2.0)], 1.0)
        assert placed == [PlacedAtom(0, 0), PlacedAtom(0, -2)]

    def test_bonded_atoms_are_two_cells_apart(self):
        coords = [(0.0, 0.0), (1.5, 0.0), (2.25, 1.3), (3.75, 1.3), (4.5, 0.0)]
        bonds = [Bond(k, k + 1) for k in range(4)]
        engine = LayoutEngine()
        layout = engine.layout(coords, bonds, ["C"] * 5)
        for bond in bonds:
            p1, p2 = layout.placements[bond.i], layout.placements[bond.j]
            assert max(abs(p1.x - p2.x), abs(p1.y - p2.y)) >= 2


class TestOverlap:
    """Label collision rule."""

    def test_label_span_centering(self):
        assert label_span(4, "C") == (4, 4)
        assert label_span(4, "Cl") == (3, 4)
        assert label_span(4, "NH+") == (3, 5)

    def test_one_cell_gap_is_fine(self):
        assert not labels_overlap([PlacedAtom(0, 0), PlacedAtom(2, 0)], ["C", "C"])

    def test_touching_labels_conflict(self):
        assert labels_overlap([PlacedAtom(0, 0), PlacedAtom(2, 0)], ["Cl", "Br"])

    def test_different_rows_never_conflict(self):
        assert not labels_overlap([PlacedAtom(0, 0), PlacedAtom(0, 2)], ["Cl", "Br"])


class TestRetryLoop:
    """Scale bumps on overlap."""

    COORDS = [(0.0, 0.0), (1.5, 0.0)]
    BONDS = [Bond(0, 1)]
    LABELS = ["Cl", "Br"]

    def test_no_overlap_first_try(self):
        layout = LayoutEngine().layout(self.COORDS, self.BONDS, ["C", "C"])
        assert layout.attempts == 1
        assert layout.placements == [PlacedAtom(0, 0), PlacedAtom(2, 0)]

    def test_bumps_until_labels_separate(self):
        layout = LayoutEngine().layout(self.COORDS, self.BONDS, self.LABELS)
        assert layout.attempts == 5
        assert not layout.overlapping
        assert layout.placements[1] == PlacedAtom(4, 0)

    def test_gives_up_after_cap(self):
        engine = LayoutEngine(max_scale_attempts=2)
        layout = engine.layout(self.COORDS, self.BONDS, self.LABELS)
        assert layout.attempts == 3
        assert layout.overlapping
        assert layout.placements == [PlacedAtom(0, 0), PlacedAtom(2, 0)]

    def test_zero_attempts_keeps_initial_layout(self):
        layout = LayoutEngine(max_scale_attempts=0).layout(self.COORDS, self.BONDS, self.LABELS)
        assert layout.attempts == 1
        assert layout.overlapping

    def test_empty_molecule(self):
        layout = LayoutEngine().layout([], [], [])
        assert layout.placements == []
        assert not layout.overlapping
