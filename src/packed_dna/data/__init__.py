from packed_dna.data.yaml_io import read_yaml

__all__ = ["read_yaml"]
