"""
SMILES to 2D structure conversion with RDKit.

The renderer consumes V2000 molblocks; this module produces them from
SMILES strings, generating 2D depiction coordinates when needed.
"""

import logging

from rdkit import Chem
from rdkit.Chem import rdDepictor

from .errors import StructureGenerationError

logger = logging.getLogger(__name__)

rdDepictor.SetPreferCoordGen(True)


def mol_from_smiles(smiles: str) -> Chem.Mol:
    """
    Parse SMILES and give the molecule a 2D conformer.

    Raises:
        StructureGenerationError: RDKit rejects the SMILES
    """
    smiles = (smiles or "").strip()
    if not smiles:
        raise StructureGenerationError("Empty SMILES")

    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise StructureGenerationError(f"Invalid SMILES: {smiles}")

    if mol.GetNumConformers() == 0:
        rdDepictor.Compute2DCoords(mol)
    return mol


def smiles_to_molblock(smiles: str) -> str:
    """SMILES -> V2000 molblock with 2D coordinates."""
    mol = mol_from_smiles(smiles)
    molblock = Chem.MolToMolBlock(mol)
    logger.debug(f"Generated molblock for {smiles}: {mol.GetNumAtoms()} atoms")
    return molblock


def mol_from_molblock(molblock: str) -> Chem.Mol:
    """Load a caller-supplied molblock for vector depiction."""
    mol = Chem.MolFromMolBlock(molblock)
    if mol is None:
        raise StructureGenerationError("Invalid molblock")
    return mol
