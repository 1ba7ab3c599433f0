"""
Shared utilities for StarFest Score System.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from starfest.config import EXPORT_FOLDER


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- File Operations ---
def write_temp_json(data, folder: Path, suffix: str = '.json') -> Path:
    """
    Serialize data as indented JSON into a new temporary file inside folder.

    The caller owns the returned file and is expected to either move it into
    place or delete it.

    Args:
        data: JSON-serializable object
        folder: Directory for the temporary file (same filesystem as the target)
        suffix: Temporary file suffix

    Returns:
        Path to the fully written, fsynced temporary file
    """
    folder.mkdir(parents=True, exist_ok=True)
    text = json.dumps(data, indent=2, ensure_ascii=False)

    fd, name = tempfile.mkstemp(suffix=suffix, prefix='.tmp-', dir=folder)
    tmp_path = Path(name)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
    return tmp_path


def atomic_write_json(data, path: Path) -> None:
    """
    Write a JSON document atomically using a temporary file.

    Args:
        data: JSON-serializable object
        path: Destination path for the JSON file
    """
    tmp_path = write_temp_json(data, path.parent)
    try:
        os.replace(tmp_path, path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


def atomic_write_csv(df, path: Path, **kwargs) -> None:
    """
    Write a DataFrame to CSV atomically using a temporary file.

    This prevents data corruption if the write is interrupted.

    Args:
        df: pandas DataFrame to write
        path: Destination path for the CSV file
        **kwargs: Additional arguments to pass to df.to_csv()
    """
    logger = setup_logging(__name__)

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file first
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            newline='',
            delete=False,
            suffix='.csv',
            dir=path.parent  # Same filesystem for atomic move
        ) as tmp:
            tmp_path = Path(tmp.name)
            df.to_csv(tmp, **kwargs)

        shutil.move(str(tmp_path), str(path))
        logger.debug(f"Atomically wrote {len(df)} rows to {path}")

    except Exception:
        if 'tmp_path' in locals() and tmp_path.exists():
            tmp_path.unlink()
        raise


def default_export_folder(folder: Path | None = None) -> Path:
    """Return the folder standings exports go to."""
    return folder or EXPORT_FOLDER


# --- Validation ---
def validate_collection_size(items: list, max_size: int, label: str) -> None:
    """
    Validate that a reported collection does not exceed its maximum size.

    Args:
        items: Collection to check
        max_size: Maximum allowed number of items
        label: Name used in the error message

    Raises:
        ValueError: If the collection is too large
    """
    if len(items) > max_size:
        raise ValueError(
            f"Too many {label}: {len(items):,}. "
            f"Maximum allowed: {max_size:,}"
        )


__all__ = [
    # Logging
    'setup_logging',
    # File operations
    'write_temp_json',
    'atomic_write_json',
    'atomic_write_csv',
    'default_export_folder',
    # Validation
    'validate_collection_size',
]
