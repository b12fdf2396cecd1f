from __future__ import annotations
import operator
from enum import Enum
from typing import Any, Dict, Optional

from packed_dna.errors import InvalidCode, InvalidNucleotide

__all__ = ["Nucleotide", "ALPHABET", "CODE_BITS", "CODE_MASK"]

# Canonical uppercase letters, indexed by 2-bit code.
ALPHABET = b"ACGT"

CODE_BITS = 2
CODE_MASK = 0b11


class Nucleotide(Enum):
    """
    One of the four DNA bases.

    Each member's value is its 2-bit code, which is also the value written into
    a `PackedDna` buffer. The mapping is fixed:

    A : 0b00
    C : 0b01
    G : 0b10
    T : 0b11
    """
    A = 0b00
    C = 0b01
    G = 0b10
    T = 0b11

    @classmethod
    def from_char(cls, char: Any, position: Optional[int] = None) -> Nucleotide:
        """
        Parse a single character, case-insensitively.

        Parameters
        ----------
        char : str
            One of ``A a C c G g T t``.
        position : Optional[int]
            Position of `char` in a larger text, reported in the error if
            parsing fails.

        Returns
        -------
        Nucleotide
            The matching base.

        Raises
        ------
        InvalidNucleotide
            If `char` is anything other than the eight accepted characters.
        """
        if isinstance(char, str):
            nucleotide = _BY_CHAR.get(char)
            if nucleotide is not None:
                return nucleotide
        raise InvalidNucleotide(char, position)

    @classmethod
    def from_code(cls, code: Any) -> Nucleotide:
        """
        Decode a 2-bit code (0 to 3) back into a nucleotide.

        Raises
        ------
        InvalidCode
            If `code` is not an integer in the range 0..3.
        """
        try:
            index = operator.index(code)
        except TypeError:
            raise InvalidCode(code) from None
        if isinstance(code, bool) or not 0 <= index <= CODE_MASK:
            raise InvalidCode(code)
        return _BY_CODE[index]

    def to_char(self) -> str:
        """Return the canonical uppercase letter."""
        return self.name

    def to_code(self) -> int:
        """Return the 2-bit code."""
        return self.value

    def __str__(self) -> str:
        return self.name


_BY_CODE = tuple(Nucleotide(code) for code in range(4))

_BY_CHAR: Dict[str, Nucleotide] = {}
for _nucleotide in Nucleotide:
    _BY_CHAR[_nucleotide.name] = _nucleotide
    _BY_CHAR[_nucleotide.name.lower()] = _nucleotide
del _nucleotide
