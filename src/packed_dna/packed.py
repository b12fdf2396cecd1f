from __future__ import annotations
import logging
import math
import operator
from typing import Dict, Iterable, Iterator, Optional, Union

import numpy as np

from packed_dna.config import DEFAULT_PACKING_CONFIG, PackingConfig
from packed_dna.errors import InvalidNucleotide
from packed_dna.nucleotide import ALPHABET, CODE_BITS, CODE_MASK, Nucleotide

__all__ = ["PackedDna", "NUCLEOTIDES_PER_UNIT"]

logger = logging.getLogger(__name__)

NUCLEOTIDES_PER_UNIT = 8 // CODE_BITS

# Bit offset of each slot inside a byte; slot 0 (lowest index) sits in the low bits.
_SLOT_SHIFTS = np.arange(0, 8, CODE_BITS, dtype=np.uint8)
_ALPHABET_BYTES = np.frombuffer(ALPHABET, dtype=np.uint8)


def _units_for(length: int) -> int:
    """Number of bytes needed to hold `length` nucleotides."""
    return -(-length // NUCLEOTIDES_PER_UNIT)


def _code_of(item: object) -> int:
    if not isinstance(item, Nucleotide):
        raise TypeError(f"PackedDna only holds Nucleotide values, got {type(item).__name__}.")
    return item.to_code()


def _pack_codes(codes: np.ndarray) -> np.ndarray:
    """
    Pack an array of 2-bit codes into bytes, four codes per byte.

    Code `k` of the input lands in byte `k // 4` at bit offset `(k % 4) * 2`.
    The unused high bits of a partial final byte are zero.
    """
    n_codes = codes.size
    # Pad to a whole number of bytes; the zero fill keeps the trailing slots clear.
    padded = np.zeros(_units_for(n_codes) * NUCLEOTIDES_PER_UNIT, dtype=np.uint8)
    padded[:n_codes] = codes
    # One row per byte, each column shifted into its slot, then OR-ed together.
    slots = padded.reshape(-1, NUCLEOTIDES_PER_UNIT) << _SLOT_SHIFTS
    return np.bitwise_or.reduce(slots, axis=1).astype(np.uint8)


def _unpack_codes(units: np.ndarray, length: int) -> np.ndarray:
    """Inverse of `_pack_codes`: the first `length` codes held in `units`."""
    codes = (units[:, np.newaxis] >> _SLOT_SHIFTS) & CODE_MASK
    return codes.reshape(-1)[:length]


class PackedDna:
    """
    A growable DNA sequence stored at two bits per nucleotide.

    Nucleotides are packed four to a byte in a private numpy ``uint8`` buffer.
    Element `i` lives in byte ``i // 4`` at bit offset ``(i % 4) * 2``, so the
    first element of each byte occupies its lowest-order bits. Bits past the
    logical length are always kept at zero.

    The buffer grows geometrically (see `PackingConfig.growth_factor`), making
    a run of `push` calls amortised O(1) each.

    Parameters
    ----------
    items : Optional[Iterable[Nucleotide]]
        Nucleotides to append on construction, in order.
    config : Optional[PackingConfig]
        Buffer sizing policy. Defaults to `DEFAULT_PACKING_CONFIG`.

    Examples
    --------
    >>> dna = PackedDna.from_str("acgT")
    >>> len(dna), str(dna)
    (4, 'ACGT')
    >>> dna.get(0), dna.get(4)
    (<Nucleotide.A: 0>, None)
    """
    __slots__ = ("_buffer", "_length", "_config")

    def __init__(self, items: Optional[Iterable[Nucleotide]] = None, *,
                 config: Optional[PackingConfig] = None):
        self._config = config if config is not None else DEFAULT_PACKING_CONFIG
        self._buffer = np.zeros(_units_for(self._config.initial_capacity), dtype=np.uint8)
        self._length = 0
        if items is not None:
            self.extend(items)

    # --------------------------
    # Construction
    # --------------------------
    @classmethod
    def new(cls, *, config: Optional[PackingConfig] = None) -> PackedDna:
        """Return an empty sequence."""
        return cls(config=config)

    @classmethod
    def from_iter(cls, items: Iterable[Nucleotide], *,
                  config: Optional[PackingConfig] = None) -> PackedDna:
        """Build a sequence by appending every item of `items` in order."""
        return cls(items, config=config)

    @classmethod
    def from_str(cls, text: str, *, config: Optional[PackingConfig] = None) -> PackedDna:
        """
        Parse a DNA string, case-insensitively.

        Parameters
        ----------
        text : str
            Characters drawn from ``A a C c G g T t``. The empty string gives an
            empty sequence.
        config : Optional[PackingConfig]
            Buffer sizing policy for the new sequence.

        Returns
        -------
        PackedDna
            The packed sequence.

        Raises
        ------
        InvalidNucleotide
            On the first character outside the alphabet, carrying that character
            and its 0-based position. Nothing is constructed in that case.
        """
        if not isinstance(text, str):
            raise TypeError(f"from_str expects a str, got {type(text).__name__}.")

        try:
            codes = np.fromiter(
                (Nucleotide.from_char(char, position).to_code() for position, char in enumerate(text)),
                dtype=np.uint8,
                count=len(text),
            )
        except InvalidNucleotide as e:
            logger.debug(f"Rejected DNA text of length {len(text)}: {e}")
            raise

        packed_dna = cls(config=config)
        packed_dna._load_codes(codes)
        return packed_dna

    def copy(self) -> PackedDna:
        """Return an independent copy sharing the same config."""
        duplicate = type(self)(config=self._config)
        duplicate._buffer = self._buffer.copy()
        duplicate._length = self._length
        return duplicate

    # --------------------------
    # Access
    # --------------------------
    def len(self) -> int:
        """Logical length: the number of nucleotides stored."""
        return self._length

    def is_empty(self) -> bool:
        return self._length == 0

    @property
    def capacity(self) -> int:
        """Number of nucleotides the current buffer can hold without growing."""
        return self._buffer.size * NUCLEOTIDES_PER_UNIT

    @property
    def nbytes(self) -> int:
        """Bytes of packed storage occupied by the logical sequence."""
        return _units_for(self._length)

    @property
    def config(self) -> PackingConfig:
        return self._config

    def get(self, index: int) -> Optional[Nucleotide]:
        """
        Bounds-checked access.

        Parameters
        ----------
        index : int
            0-based position.

        Returns
        -------
        Optional[Nucleotide]
            The nucleotide at `index`, or `None` if `index` is negative or not
            below `len(self)`.
        """
        index = operator.index(index)
        if index < 0 or index >= self._length:
            return None
        return Nucleotide.from_code(self._code_at(index))

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index: Union[int, slice]) -> Union[Nucleotide, PackedDna]:
        if isinstance(index, slice):
            sliced = type(self)(config=self._config)
            sliced._load_codes(self._codes()[index])
            return sliced

        position = operator.index(index)
        if position < 0:
            position += self._length
        if position < 0 or position >= self._length:
            raise IndexError(f"PackedDna index {index} out of range for length {self._length}")
        return Nucleotide.from_code(self._code_at(position))

    def __iter__(self) -> Iterator[Nucleotide]:
        for code in self._codes():
            yield Nucleotide.from_code(code)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, Nucleotide):
            return False
        return self.count(item) > 0

    def count(self, nucleotide: Nucleotide) -> int:
        """Number of occurrences of `nucleotide`."""
        return int(np.count_nonzero(self._codes() == _code_of(nucleotide)))

    def counts(self) -> Dict[Nucleotide, int]:
        """
        Occurrences of every nucleotide, in A, C, G, T order.

        All four bases are present in the result, with zero for absent ones.
        """
        tally = np.bincount(self._codes(), minlength=len(Nucleotide))
        return {nucleotide: int(tally[nucleotide.to_code()]) for nucleotide in Nucleotide}

    # --------------------------
    # Mutation
    # --------------------------
    def push(self, nucleotide: Nucleotide) -> None:
        """Append one nucleotide, growing the buffer if it is full."""
        code = _code_of(nucleotide)
        self._reserve(self._length + 1)

        unit, slot = divmod(self._length, NUCLEOTIDES_PER_UNIT)
        self._buffer[unit] |= np.uint8(code << (slot * CODE_BITS))
        self._length += 1

    def extend(self, items: Iterable[Nucleotide]) -> None:
        """
        Append every nucleotide of `items` in order.

        The result is the same as calling `push` for each item. Items are all
        checked before any is written, so a non-`Nucleotide` item leaves the
        sequence untouched.
        """
        if isinstance(items, PackedDna):
            codes = items._codes().copy()
        else:
            codes = np.fromiter((_code_of(item) for item in items), dtype=np.uint8)
        self._append_codes(codes)

    def pop(self) -> Nucleotide:
        """
        Remove and return the last nucleotide.

        The freed slot is zeroed so the padding bits of the final byte stay clear.

        Raises
        ------
        IndexError
            If the sequence is empty.
        """
        if self._length == 0:
            raise IndexError("pop from empty PackedDna")

        last = self._length - 1
        code = self._code_at(last)
        unit, slot = divmod(last, NUCLEOTIDES_PER_UNIT)
        self._buffer[unit] &= np.uint8(~(CODE_MASK << (slot * CODE_BITS)) & 0xFF)
        self._length = last
        return Nucleotide.from_code(code)

    def clear(self) -> None:
        """Drop every nucleotide. Capacity is kept."""
        self._buffer[:] = 0
        self._length = 0

    # --------------------------
    # Conversion
    # --------------------------
    def to_string(self) -> str:
        """Canonical uppercase text, one letter per nucleotide."""
        return _ALPHABET_BYTES[self._codes()].tobytes().decode("ascii")

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackedDna):
            return NotImplemented
        if self._length != other._length:
            return False
        return bool(np.array_equal(self._masked_units(), other._masked_units()))

    __hash__ = None  # mutable

    # --------------------------
    # Internals
    # --------------------------
    def _code_at(self, index: int) -> int:
        unit, slot = divmod(index, NUCLEOTIDES_PER_UNIT)
        return (int(self._buffer[unit]) >> (slot * CODE_BITS)) & CODE_MASK

    def _codes(self) -> np.ndarray:
        """Every stored code, unpacked into one ``uint8`` per nucleotide."""
        return _unpack_codes(self._buffer[:self.nbytes], self._length)

    def _masked_units(self) -> np.ndarray:
        """Occupied bytes with any bits past the logical length cleared."""
        units = self._buffer[:self.nbytes].copy()
        used_slots = self._length % NUCLEOTIDES_PER_UNIT
        if used_slots:
            units[-1] &= np.uint8((1 << (used_slots * CODE_BITS)) - 1)
        return units

    def _reserve(self, length: int) -> None:
        """Make sure the buffer can hold `length` nucleotides."""
        needed = _units_for(length)
        current = self._buffer.size
        if needed <= current:
            return

        # Geometric growth, but never less than the pending append needs or one extra byte.
        grown = max(needed, math.ceil(current * self._config.growth_factor), current + 1)
        buffer = np.zeros(grown, dtype=np.uint8)
        buffer[:current] = self._buffer
        # Fresh bytes are zero, so the padding invariant carries over.
        self._buffer = buffer
        logger.debug(f"PackedDna buffer grown from {current} to {grown} bytes (length={self._length})")

    def _load_codes(self, codes: np.ndarray) -> None:
        """Replace the contents of an empty sequence with `codes`."""
        packed = _pack_codes(codes)
        units = max(packed.size, self._buffer.size)
        self._buffer = np.zeros(units, dtype=np.uint8)
        self._buffer[:packed.size] = packed
        self._length = int(codes.size)

    def _append_codes(self, codes: np.ndarray) -> None:
        if codes.size == 0:
            return

        start = self._length
        self._reserve(start + codes.size)

        # Target byte and bit offset of every new code, low bits first.

        positions = np.arange(start, start + codes.size)
        shifts = (positions % NUCLEOTIDES_PER_UNIT) * CODE_BITS
        # Widen before shifting so no code is truncated; each slot fits a byte afterwards.
        slots = (codes.astype(np.int64) << shifts).astype(np.uint8)
        # Several codes can land in the same byte; `at` applies each OR unbuffered.
        np.bitwise_or.at(self._buffer, positions // NUCLEOTIDES_PER_UNIT, slots)
        self._length = start + int(codes.size)
