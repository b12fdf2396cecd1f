#!/usr/bin/env python3
"""
Count the occurrences of each nucleotide in a DNA sequence.

The sequence is parsed into a `PackedDna` (case-insensitive, A/C/G/T only) and
the per-base counts are printed, either as text or as JSON.

Examples:
  - nuccount --dna ACGTTT
  - nuccount -d acgtacgt --json
  - python -m packed_dna -vv --config packing.yaml --dna GATTACA
"""

# --- Standard Library Imports ---
from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Dict, Optional

# --- Local Application Imports ---
from packed_dna.config import DEFAULT_PACKING_CONFIG, PackingConfig, load_packing_config
from packed_dna.errors import ParseError
from packed_dna.packed import PackedDna
from packed_dna.utils.logging_utils import setup_logger, DEFAULT_LOG_DIR, SILENT

# Set up module logger
logger = logging.getLogger(__name__)


# --------------------------
# Logging Configuration
# --------------------------
def setup_cli_logging(verbose_level: int, log_file: Optional[str] = None, quiet: bool = False) -> None:
    """
    Configure logging for this script and the `packed_dna` library.

    Parameters
    ----------
    verbose_level : int
        0 for WARNING, 1 for INFO, 2 for DEBUG.
    log_file : Optional[str]
        Explicit log file path. Without it, a timestamped file under `var/log/`
        is written only when `verbose_level` is above 0.
    quiet : bool
        Keep log lines off stdout entirely. A log file, if any, is still written.
    """
    level_map = {
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG,
    }
    log_level = level_map.get(verbose_level, logging.DEBUG)

    should_log_to_file = (verbose_level > 0) or (log_file is not None)

    # The package logger covers packed_dna.packed, packed_dna.config and this script.
    setup_logger(
        "packed_dna",
        level=log_level,
        log_file=log_file,
        enable_file_logging=should_log_to_file,
        console_level=SILENT if quiet else None,
    )

    if should_log_to_file and log_file is None:
        logger.info(f"Logs will be saved to: {DEFAULT_LOG_DIR.resolve()}")


# --------------------------
# Helpers
# --------------------------
def count_nucleotides(dna: str, config: PackingConfig = DEFAULT_PACKING_CONFIG) -> Dict[str, int]:
    """
    Parse `dna` and count every base.

    Parameters
    ----------
    dna : str
        DNA text, case-insensitive.
    config : PackingConfig
        Buffer sizing policy for the parsed sequence.

    Returns
    -------
    Dict[str, int]
        Counts keyed by canonical letter, always in A, C, G, T order.

    Raises
    ------
    InvalidNucleotide
        If `dna` holds a character outside the alphabet.
    """
    packed_dna = PackedDna.from_str(dna, config=config)
    logger.info(f"Packed {len(packed_dna)} nucleotides into {packed_dna.nbytes} bytes")
    return {nucleotide.to_char(): count for nucleotide, count in packed_dna.counts().items()}


def format_counts(dna: str, counts: Dict[str, int]) -> str:
    """Human-readable report: the input, a blank line, then one ``X: n`` line per base."""
    lines = [f"Input: {dna}", ""]
    lines.extend(f"{base}: {count}" for base, count in counts.items())
    return "\n".join(lines)


# --------------------------
# Command-Line Interface
# --------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nuccount",
        description="Count the number of occurrences of each nucleotide in the provided DNA.",
    )
    parser.add_argument("-d", "--dna", required=True,
                        help="DNA sequence to count. Case-insensitive; only A, C, G and T are supported.")
    parser.add_argument("--json", action="store_true",
                        help="Emit JSON instead of human-readable text.")
    parser.add_argument("--config", default=None,
                        help="YAML file with a 'packing' section (initial_capacity, growth_factor).")

    # Logging arguments
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("--log-file", default=None,
                        help="Path to log file (default: var/log/packed_dna_TIMESTAMP.log if verbose)")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress all output except final result")
    return parser


def main(argv=None) -> int:
    """
    Parse command-line arguments, count nucleotides and print the report.

    Returns
    -------
    int
        0 on success, 2 for invalid input or configuration, 1 for anything unexpected.
    """
    cli_args = build_parser().parse_args(argv)

    verbose_level = 0 if cli_args.quiet else cli_args.verbose
    setup_cli_logging(verbose_level, cli_args.log_file, quiet=cli_args.quiet)

    config = DEFAULT_PACKING_CONFIG
    if cli_args.config is not None:
        try:
            config = load_packing_config(cli_args.config)
        except (OSError, ValueError) as e:
            # Already reported on stderr; keep stdout for the result.
            logger.debug(f"Failed to load packing config: {e}")
            print(f"Failed to load packing config: {e}", file=sys.stderr)
            return 2

    try:
        counts = count_nucleotides(cli_args.dna, config)
    except ParseError as e:
        logger.debug(f"DNA validation failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        logger.error(f"Counting failed: {e}", exc_info=True)
        print(f"Counting failed: {e}", file=sys.stderr)
        return 1

    if cli_args.json:
        print(json.dumps({
            "input": cli_args.dna,
            "length": sum(counts.values()),
            "counts": counts,
        }, indent=2))
    else:
        print(format_counts(cli_args.dna, counts))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
