"""
Unit tests for the `nuccount` command-line script.

These run `main()` in-process with an explicit argv and inspect what is
printed to stdout/stderr and the returned exit status.
"""
import json
import logging

import pytest

from packed_dna.scripts.nuccount import count_nucleotides, format_counts, main


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop the handlers `main()` attaches so they don't outlive the captured streams."""
    yield
    package_logger = logging.getLogger("packed_dna")
    for handler in list(package_logger.handlers):
        handler.close()
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


def test_count_nucleotides():
    assert count_nucleotides("ACGTTT") == {"A": 1, "C": 1, "G": 1, "T": 3}
    assert count_nucleotides("") == {"A": 0, "C": 0, "G": 0, "T": 0}


def test_format_counts_layout():
    report = format_counts("ACGTTT", {"A": 1, "C": 1, "G": 1, "T": 3})

    assert report == "Input: ACGTTT\n\nA: 1\nC: 1\nG: 1\nT: 3"


def test_main_prints_counts(capsys):
    assert main(["--dna", "ACGTTT"]) == 0

    out = capsys.readouterr().out
    assert out == "Input: ACGTTT\n\nA: 1\nC: 1\nG: 1\nT: 3\n"


def test_main_is_case_insensitive(capsys):
    assert main(["-d", "acgtA"]) == 0

    out = capsys.readouterr().out
    assert "A: 2" in out
    assert "T: 1" in out


def test_main_json_output(capsys):
    assert main(["--dna", "GATTACA", "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "input": "GATTACA",
        "length": 7,
        "counts": {"A": 3, "C": 1, "G": 1, "T": 2},
    }


def test_main_rejects_invalid_dna(capsys):
    """
    Invalid input exits with status 2 and an error naming the character and position.
    """
    assert main(["--dna", "ACGU"]) == 2

    err = capsys.readouterr().err
    assert "Error:" in err
    assert "'U'" in err
    assert "position 3" in err


def test_main_requires_dna(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 2


def test_main_with_config(tmp_path, capsys):
    config_path = tmp_path / "packing.yaml"
    config_path.write_text("packing:\n  initial_capacity: 64\n", encoding="utf-8")

    assert main(["--dna", "ACGT", "--config", str(config_path), "--quiet"]) == 0
    assert "A: 1" in capsys.readouterr().out


def test_main_with_bad_config(tmp_path, capsys):
    config_path = tmp_path / "packing.yaml"
    config_path.write_text("packing:\n  growth_factor: 0.5\n", encoding="utf-8")

    assert main(["--dna", "ACGT", "--config", str(config_path)]) == 2
    assert "Failed to load packing config" in capsys.readouterr().err


def test_main_verbose_writes_log_file(tmp_path, capsys):
    log_file = tmp_path / "nuccount.log"

    assert main(["--dna", "ACGT", "-vv", "--log-file", str(log_file)]) == 0
    assert "Packed 4 nucleotides into 1 bytes" in log_file.read_text(encoding="utf-8")


def test_main_with_malformed_config_exits_cleanly(tmp_path, capsys):
    """
    A YAML syntax error in the config file is reported, not raised.
    """
    config_path = tmp_path / "packing.yaml"
    config_path.write_text("packing: [unclosed\n", encoding="utf-8")

    assert main(["--dna", "ACGT", "--config", str(config_path)]) == 2
    assert "Malformed YAML" in capsys.readouterr().err


def test_main_with_integer_config_keys_exits_cleanly(tmp_path, capsys):
    config_path = tmp_path / "packing.yaml"
    config_path.write_text("packing:\n  1: 2\n  foo: 3\n", encoding="utf-8")

    assert main(["--dna", "ACGT", "--config", str(config_path)]) == 2
    assert "Unknown packing option" in capsys.readouterr().err


def test_main_invalid_dna_keeps_stdout_clean(capsys):
    """
    Errors go to stderr only; no log line leaks onto stdout.
    """
    assert main(["--dna", "ACGX"]) == 2

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "position 3" in captured.err


def test_main_quiet_prints_only_result(tmp_path, capsys):
    log_file = tmp_path / "quiet.log"

    assert main(["--dna", "ACGT", "--quiet", "--log-file", str(log_file)]) == 0
    assert capsys.readouterr().out == "Input: ACGT\n\nA: 1\nC: 1\nG: 1\nT: 1\n"
