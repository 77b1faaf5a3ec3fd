"""
Error types raised by the MolText renderer and its collaborators.

Only structural problems with the input are fatal to a render; malformed
individual fields are recovered by the parser with documented defaults.
"""

from typing import Optional


class InputFormatError(ValueError):
    """The molfile text cannot be decoded at all."""


class TooShortError(InputFormatError):
    """Fewer than the four header/counts lines are present."""


class UnsupportedVersionError(InputFormatError):
    """The text uses the extended V3000 table layout."""


class InvalidCountsError(InputFormatError):
    """The counts line yields no atom/bond counts."""


class StructureGenerationError(ValueError):
    """A SMILES string could not be turned into a structure."""


class NameResolutionError(RuntimeError):
    """A chemical name could not be converted to SMILES."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
