from __future__ import annotations
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from packed_dna.data.yaml_io import read_yaml

__all__ = [
    "PackingConfig",
    "DEFAULT_PACKING_CONFIG",
    "load_packing_config",
    "packing_config_from_mapping",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PackingConfig:
    """
    Buffer sizing policy for `PackedDna`.

    Attributes
    ----------
    initial_capacity : int
        Number of nucleotides to reserve up front. Rounded up to whole bytes
        (four nucleotides per byte). Default 0: nothing is allocated until the
        first push.
    growth_factor : float
        Multiplier applied to the byte capacity when a full buffer must grow.
        Must be strictly greater than 1 so that repeated pushes stay amortised
        O(1). Default 2.0.
    """
    initial_capacity: int = 0
    growth_factor: float = 2.0

    def __post_init__(self) -> None:
        if isinstance(self.initial_capacity, bool) or not isinstance(self.initial_capacity, int):
            raise ValueError(f"initial_capacity must be an integer, got {self.initial_capacity!r}.")
        if self.initial_capacity < 0:
            raise ValueError(f"initial_capacity must be >= 0, got {self.initial_capacity}.")
        if isinstance(self.growth_factor, bool) or not isinstance(self.growth_factor, (int, float)):
            raise ValueError(f"growth_factor must be a number, got {self.growth_factor!r}.")
        if not self.growth_factor > 1:
            raise ValueError(f"growth_factor must be > 1, got {self.growth_factor}.")


DEFAULT_PACKING_CONFIG = PackingConfig()


def packing_config_from_mapping(data: Mapping[str, Any]) -> PackingConfig:
    """
    Build a `PackingConfig` from a plain mapping, e.g. a parsed YAML section.

    Missing keys fall back to the dataclass defaults.

    Raises
    ------
    ValueError
        If the mapping carries keys that `PackingConfig` does not define, or a
        value fails validation.
    """
    known = {f.name for f in fields(PackingConfig)}
    # Keys may be ints or other scalars in YAML; compare them as text.
    unknown = sorted(map(str, set(data) - known))
    if unknown:
        raise ValueError(f"Unknown packing option(s): {', '.join(unknown)}.")
    return PackingConfig(**dict(data))


def load_packing_config(yaml_path: str | Path) -> PackingConfig:
    """
    Load the ``packing:`` section of a YAML file.

    Example file::

        packing:
          initial_capacity: 1024
          growth_factor: 1.5

    A file without a ``packing:`` section yields the defaults.
    """
    data = read_yaml(yaml_path)
    section = data.get("packing") or {}
    if not isinstance(section, Mapping):
        raise ValueError("'packing' section must be a mapping.")

    config = packing_config_from_mapping(section)
    logger.debug(f"Loaded packing config from {yaml_path}: {config}")
    return config
