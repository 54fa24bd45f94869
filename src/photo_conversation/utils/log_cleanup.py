"""
Logging setup and log file retention for the front-ends.

Console logging always; optionally one timestamped file per run under a logs
directory, keeping only the most recent `max_files` of them.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def cleanup_logs(logs_dir: str, max_files: int = 10, pattern: str = "*.log") -> int:
    """
    Delete the oldest log files beyond `max_files`.

    :param logs_dir: Directory containing log files
    :param max_files: Maximum number of log files to keep (keeps most recent)
    :param pattern: Glob pattern for log files
    :return: Number of files deleted
    """
    logs_path = Path(logs_dir)
    if not logs_path.exists():
        return 0

    log_files = sorted(logs_path.glob(pattern), key=lambda f: f.stat().st_mtime, reverse=True)

    deleted_count = 0
    for log_file in log_files[max_files:]:
        try:
            log_file.unlink()
            deleted_count += 1
        except OSError as e:
            logger.warning(f"Failed to delete log file {log_file.name}: {e}")

    if deleted_count > 0:
        logger.info(f"Log cleanup: Deleted {deleted_count} log file(s) from {logs_dir}")

    return deleted_count


def configure_logging(
    level: str = "INFO",
    logs_dir: Optional[str] = None,
    prefix: str = "photo_conversation",
    max_files: int = 10,
) -> Optional[Path]:
    """
    Configure root logging for an entry point.

    :param level: Log level name
    :param logs_dir: If set, also log to a new file in this directory
    :param prefix: File name prefix for the run's log file
    :param max_files: Number of run log files to retain
    :return: Path of the run's log file, or None if file logging is off
    """
    handlers = [logging.StreamHandler()]
    log_file = None

    if logs_dir:
        Path(logs_dir).mkdir(parents=True, exist_ok=True)
        log_file = Path(logs_dir) / f"{prefix}_{datetime.now():%Y%m%d_%H%M%S}.log"
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    if logs_dir:
        # The file just opened is the newest, so it always survives
        cleanup_logs(logs_dir, max_files=max_files)

    return log_file
