import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Default log directory
DEFAULT_LOG_DIR = Path("var/log")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Console level that lets no record through; used for --quiet runs.
SILENT = logging.CRITICAL + 1


def get_log_file_path(logger_name: str, log_dir: Optional[Path] = None) -> Path:
    """
    Build a timestamped log file path for a named logger, creating its directory.

    ``packed_dna.scripts.nuccount`` becomes
    ``var/log/packed_dna_scripts_nuccount_YYYYmmdd_HHMMSS.log``.
    """
    log_dir = DEFAULT_LOG_DIR if log_dir is None else log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return log_dir / f"{logger_name.replace('.', '_')}_{stamp}.log"


def _file_handler(path: Path) -> logging.FileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode='a')


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
    console_level: Optional[int] = None,
) -> logging.Logger:
    """
    Attach a stdout handler and an optional file handler to the logger `name`.

    Handlers left by an earlier call are closed and removed first, so a
    second call reconfigures the logger rather than duplicating output.

    Parameters
    ----------
    name : str
        Logger name; "packed_dna" covers every module of the package.
    level : int, optional
        Level of the logger and of the file handler, by default `logging.INFO`.
    log_file : Optional[str], optional
        Explicit log file path. Takes precedence over `enable_file_logging`.
    log_dir : Optional[Path], optional
        Directory for the timestamped file used when `log_file` is not given.
    enable_file_logging : bool, optional
        Write a timestamped file under `log_dir` when `log_file` is not given.
    console_level : Optional[int], optional
        Level of the stdout handler. Defaults to `level`; pass `SILENT` to keep
        stdout free of log lines.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level if console_level is None else console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # An explicit path wins; otherwise fall back to a timestamped default if enabled.
    log_path = None
    if log_file:
        log_path = Path(log_file)
    elif enable_file_logging:
        log_path = get_log_file_path(name, log_dir=log_dir)

    if log_path is not None:
        file_handler = _file_handler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.debug(f"Logging to file: {log_path}")

    return logger
