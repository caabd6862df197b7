"""
Saving converted CSV files to disk.

LEGAL NOTICE:
Files written by this module contain passwords in PLAIN TEXT. They are
restricted to the current user, but should still be deleted once imported.
"""

import os
import shutil
import logging
import datetime
from typing import Optional

from . import config
from .utils import set_owner_only_permissions, get_config_dir

logger = logging.getLogger(__name__)


def default_output_dir() -> str:
    """The user's Downloads folder if there is one, else the working directory."""
    downloads = os.path.join(os.path.expanduser("~"), config.DEFAULT_OUTPUT_DIR_NAME)
    if os.path.isdir(downloads):
        return downloads
    return os.getcwd()


def save_csv(text: str, filename: str = config.DEFAULT_OUTPUT_FILENAME, output_dir: Optional[str] = None) -> str:
    """
    Write CSV text to a file that only the current user can read.

    Args:
        text: CSV content
        filename: File name, or a full path (then output_dir is ignored)
        output_dir: Target directory, defaults to default_output_dir()

    Returns:
        Path of the written file
    """
    if os.path.dirname(filename):
        filepath = filename
    else:
        filepath = os.path.join(output_dir or default_output_dir(), filename)

    tmp_path = filepath + '.tmp'
    try:
        with open(tmp_path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)

        # Restrict before the move so the plaintext is never world readable
        if not set_owner_only_permissions(tmp_path):
            logger.warning(f"Failed to set secure file permissions for {filepath}. Other users may be able to read it.")

        shutil.move(tmp_path, filepath)
    except OSError as e:
        logger.error(f"Error saving CSV file {filepath}: {e}", exc_info=True)
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

    logger.info(f"Saved converted CSV to {filepath}")
    return filepath


def log_action(action: str, details: str) -> None:
    """Append an audit line. Never pass passwords or record contents here."""
    log_dir = os.path.join(get_config_dir(), "logs")
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, config.AUDIT_LOG_FILE)
    timestamp = datetime.datetime.now().isoformat()

    with open(log_file, 'a', encoding='utf-8') as f:
        f.write(f"{timestamp} | {action} | {details}\n")
