from __future__ import annotations
from typing import Any, Optional

__all__ = [
    "ParseError",
    "InvalidNucleotide",
    "InvalidCode",
]


class ParseError(ValueError):
    """Base class for every failure to turn raw input into nucleotides."""


class InvalidNucleotide(ParseError):
    """
    Raised when a character outside the A/C/G/T alphabet (either case) is parsed.

    Attributes
    ----------
    character : Any
        The offending input, exactly as it was received.
    position : Optional[int]
        0-based position of `character` in the parsed text, or `None` when a
        lone character was parsed.
    """

    def __init__(self, character: Any, position: Optional[int] = None):
        self.character = character
        self.position = position
        if position is None:
            message = f"Invalid nucleotide {character!r}. Only A, C, G and T are allowed."
        else:
            message = (f"Invalid nucleotide {character!r} at position {position}. "
                       f"Only A, C, G and T are allowed.")
        super().__init__(message)

    def __reduce__(self):
        return type(self), (self.character, self.position)


class InvalidCode(ParseError):
    """
    Raised when a packed 2-bit code does not map to a nucleotide.

    Only valid codes are ever written into a `PackedDna` buffer, so seeing this
    through the public API means the buffer was corrupted.
    """

    def __init__(self, code: Any):
        self.code = code
        super().__init__(f"Invalid 2-bit nucleotide code {code!r}; expected 0, 1, 2 or 3.")

    def __reduce__(self):
        return type(self), (self.code,)
