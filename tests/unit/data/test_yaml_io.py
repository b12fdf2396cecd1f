"""
Unit tests for the YAML reading helper.
"""
import pytest

from packed_dna.data.yaml_io import read_yaml


def test_read_yaml_parses_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("packing:\n  growth_factor: 3\n", encoding="utf-8")

    assert read_yaml(path) == {"packing": {"growth_factor": 3}}


def test_read_yaml_empty_file_is_empty_mapping(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    assert read_yaml(str(path)) == {}


def test_read_yaml_rejects_other_suffixes(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ValueError, match="Only YAML"):
        read_yaml(path)


def test_read_yaml_rejects_non_mapping_top_level(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        read_yaml(path)


def test_read_yaml_reports_malformed_yaml_as_value_error(tmp_path):
    """
    Syntax errors from the YAML parser are re-raised as `ValueError`.
    """
    path = tmp_path / "broken.yaml"
    path.write_text("packing: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Malformed YAML"):
        read_yaml(path)
