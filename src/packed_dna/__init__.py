from packed_dna.config import DEFAULT_PACKING_CONFIG, PackingConfig, load_packing_config
from packed_dna.errors import InvalidCode, InvalidNucleotide, ParseError
from packed_dna.nucleotide import Nucleotide
from packed_dna.packed import PackedDna

__all__ = [
    "DEFAULT_PACKING_CONFIG",
    "InvalidCode",
    "InvalidNucleotide",
    "Nucleotide",
    "PackedDna",
    "PackingConfig",
    "ParseError",
    "load_packing_config",
]
