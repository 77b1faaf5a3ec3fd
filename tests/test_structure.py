"""
Tests for SMILES -> molblock generation and the full SMILES rendering path.
"""

import pytest
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from moltext_web.drawer import AsciiMolDrawer, DrawerConfig
from moltext_web.errors import StructureGenerationError
from moltext_web.layout import LayoutEngine
from moltext_web.molfile import parse_molblock
from moltext_web.structure import mol_from_smiles, smiles_to_molblock


class TestSmilesToMolblock:
    """RDKit structure generation."""

    def test_v2000_output(self):
        block = smiles_to_molblock("CCO")
        assert "V2000" in block.split("\n")[3]
        mol = parse_molblock(block)
        assert sorted(mol.symbols) == ["C", "C", "O"]
        assert len(mol.bonds) == 2

    def test_has_2d_coordinates(self):
        mol = parse_molblock(smiles_to_molblock("CCCC"))
        assert any(x != 0.0 or y != 0.0 for x, y in mol.coords)

    def test_charges_survive(self):
        mol = parse_molblock(smiles_to_molblock("C[N+](C)(C)C.[Cl-]"))
        assert sorted(atom.charge for atom in mol.atoms if atom.charge) == [-1, 1]

    @pytest.mark.parametrize("smiles", ["", "   ", "C1CC", "not-a-smiles(("])
    def test_invalid(self, smiles):
        with pytest.raises(StructureGenerationError):
            smiles_to_molblock(smiles)

    def test_mol_from_smiles_has_conformer(self):
        assert mol_from_smiles("c1ccccc1").GetNumConformers() == 1


class TestSmilesRendering:
    """Generated structures through the text drawer."""

    def test_benzene(self):
        mol = parse_molblock(smiles_to_molblock("c1ccccc1"))
        text = AsciiMolDrawer().draw_molecule(mol)
        assert text.count("C") == 6

        labels = ["C"] * len(mol.atoms)
        layout = LayoutEngine().layout(mol.coords, mol.bonds, labels)
        for bond in mol.bonds:
            p1, p2 = layout.placements[bond.i], layout.placements[bond.j]
            assert max(abs(p1.x - p2.x), abs(p1.y - p2.y)) >= 2

    def test_charged_labels(self):
        text = AsciiMolDrawer().draw_molblock(smiles_to_molblock("CC(=O)[O-]"))
        assert "O-" in text

    def test_ascii_mode(self):
        drawer = AsciiMolDrawer(DrawerConfig(use_unicode=False))
        text = drawer.draw_molblock(smiles_to_molblock("CC(C)C(=O)N"))
        assert text.isascii()
        assert "N" in text
