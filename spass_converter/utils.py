import platform
import os
import stat
import logging

from . import config

logger = logging.getLogger(__name__)

if platform.system() == "Windows":
    try:
        import win32security
        import win32api
        import win32con
        import win32file
        WINDOWS_SECURITY_AVAILABLE = True
    except ImportError:
        logger.warning("pywin32 not fully installed, cannot restrict Windows file permissions on exported CSV files.")
        WINDOWS_SECURITY_AVAILABLE = False
else:
    WINDOWS_SECURITY_AVAILABLE = False


def _owner_only_dacl():
    """DACL holding a single read/write entry for the account running the converter."""
    owner_sid, _, _ = win32security.LookupAccountName(None, win32api.GetUserName())
    dacl = win32security.ACL()
    dacl.AddAccessAllowedAce(win32security.ACL_REVISION, win32con.GENERIC_READ | win32con.GENERIC_WRITE, owner_sid)
    return dacl


def _set_windows_file_permissions(filepath: str) -> bool:
    """
    Lock an exported CSV down to the current user.

    The DACL is marked protected so the Downloads folder's inherited entries
    no longer apply to the plaintext passwords.
    """
    if not WINDOWS_SECURITY_AVAILABLE:
        logger.warning(f"Leaving default permissions on {filepath}: pywin32 not available.")
        return False

    share_all = win32file.FILE_SHARE_READ | win32file.FILE_SHARE_WRITE | win32file.FILE_SHARE_DELETE
    security_info = win32security.DACL_SECURITY_INFORMATION | win32security.PROTECTED_DACL_SECURITY_INFORMATION
    try:
        dacl = _owner_only_dacl()
        handle = win32file.CreateFile(filepath, win32con.WRITE_DAC, share_all, None,
                                      win32con.OPEN_EXISTING, win32con.FILE_ATTRIBUTE_NORMAL, None)
        try:
            win32security.SetSecurityInfo(handle, win32security.SE_FILE_OBJECT, security_info,
                                          None, None, dacl, None)
        finally:
            win32file.CloseHandle(handle)
    except win32api.error as e:
        # 5 is ERROR_ACCESS_DENIED
        level = logging.WARNING if e.winerror == 5 else logging.ERROR
        logger.log(level, f"Exported CSV {filepath} keeps its inherited permissions: {e.strerror}")
        return False

    logger.info(f"Restricted {filepath} to the current user.")
    return True


def set_owner_only_permissions(filepath: str) -> bool:
    """Make a file readable/writable by its owner only."""
    if platform.system() == 'Windows':
        return _set_windows_file_permissions(filepath)
    try:
        os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)  # 600
    except OSError as e:
        logger.error(f"Failed to set file permissions for {filepath}: {e}")
        return False
    return True


def get_config_dir() -> str:
    """Per-user directory for logs, created on demand."""
    config_dir = os.path.join(os.path.expanduser("~"), config.CONFIG_DIR_NAME)
    os.makedirs(config_dir, exist_ok=True)
    return config_dir


def setup_logging() -> None:
    """Configure the root logger for the front ends."""
    level = getattr(logging, config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(level=level, format=config.LOG_FORMAT)
