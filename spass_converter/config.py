"""
Configuration constants for the SPASS Converter application.
"""

import os

# Application Metadata
APP_VERSION = "1.0"  # Use: Current version of the application. Type: str. Range: Semantic versioning string (e.g., "1.0.0")
APP_NAME = "SPASS Converter"  # Use: Full name of the application. Type: str. Range: Any valid string.
APP_TITLE_PREFIX = f"{APP_NAME} v{APP_VERSION}"  # Use: Prefix for the application window titles, combining name and version. Type: str (f-string). Range: Derived from APP_NAME and APP_VERSION.

# SPASS Container Format (fixed by the Samsung Pass encoder, not configurable)
SPASS_ITERATION_COUNT = 70000  # Use: PBKDF2-HMAC-SHA256 iteration count used by Samsung Pass exports. Type: int. Range: Must be exactly 70000 to match the encoder.
SPASS_KEY_LENGTH = 32  # Use: Length in bytes of the derived AES key. Type: int. Range: 32 (AES-256).
SPASS_SALT_BYTES = 20  # Use: Length in bytes of the salt at the start of the container. Type: int. Range: 20.
SPASS_BLOCK_SIZE = 16  # Use: AES block size and IV length in bytes. Type: int. Range: 16.
SPASS_HEADER_BYTES = SPASS_SALT_BYTES + SPASS_BLOCK_SIZE  # Use: Minimum container length (salt + IV). Type: int. Range: Derived value.

# SPASS Document Layout (inferred from the encoder, opaque protocol constants)
SPASS_SENTINEL = "next_table"  # Use: Marker line that starts each table in the decrypted document. Type: str. Range: "next_table".
SPASS_SENTINEL_LINE_INDEX = 2  # Use: Zero-based line index where the first sentinel must appear. Type: int. Range: 2.
SPASS_FIELD_DELIMITER = ";"  # Use: Column delimiter of data rows in the decrypted document. Type: str. Range: ";".
SPASS_MIN_COLUMNS = 33  # Use: Minimum number of columns for a row to be treated as a login record. Type: int. Range: 33.
SPASS_COLUMN_MAP = {  # Use: Output field name to source column index, in output order. Type: dict[str, int]. Range: Fixed indices 17/1/4/7/31.
    'name': 17,
    'url': 1,
    'username': 4,
    'password': 7,
    'note': 31,
}

# Output Settings
CHROME_CSV_HEADERS = tuple(SPASS_COLUMN_MAP)  # Use: Header row of the Chrome password CSV. Type: tuple[str]. Range: ("name", "url", "username", "password", "note").
CSV_DELIMITER = ","  # Use: Field delimiter of the output CSV. Type: str. Range: ",".
CSV_LINE_SEPARATOR = "\n"  # Use: Row separator of the output CSV. Type: str. Range: "\n".
DEFAULT_OUTPUT_FILENAME = "chrome_passwords.csv"  # Use: Suggested filename for the converted CSV when no override is given. Type: str. Range: Any valid filename.
DEFAULT_OUTPUT_DIR_NAME = "Downloads"  # Use: Folder under the user's home directory where converted files are saved by default. Type: str. Range: Any valid directory name.

# Input Detection
SPASS_FILE_EXTENSION = ".spass"  # Use: File extension of Samsung Pass exports. Type: str. Range: ".spass".
SPASS_ACCEPTED_MIME_TYPES = ("", "application/octet-stream")  # Use: MIME types under which a SPASS file is usually reported. Type: tuple[str]. Range: Tuple of MIME strings.
SPASS_FILE_DIALOG_FILTER = "Samsung Pass Export (*.spass);;All Files (*)"  # Use: Filter string for the open-file dialog. Type: str. Range: Qt file dialog filter syntax.
CSV_FILE_DIALOG_FILTER = "CSV Files (*.csv)"  # Use: Filter string for the save-file dialog. Type: str. Range: Qt file dialog filter syntax.

# UI Settings
APP_STYLE = 'Fusion'  # Use: PyQt5 application style. Type: str. Range: Valid PyQt5 style names (e.g., 'Fusion', 'Windows', 'Macintosh').
WINDOW_MIN_WIDTH = 450  # Use: Minimum width of the converter window in pixels. Type: int. Range: Positive integer.
SECURITY_NOTICE_TEXT = (  # Use: Text of the security information dialog. Type: str (multi-line). Range: Any descriptive string.
    "Offline Processing:\n"
    "• All data is processed exclusively on this device\n"
    "• No files or passwords are transmitted anywhere\n\n"
    "Important notice about the decrypted file:\n"
    "• The CSV file contains your passwords in PLAIN TEXT\n"
    "• Keep this file secure and do not share it with others\n"
    "• Delete the file after importing it into your password manager"
)

# Logging
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'  # Use: Format string passed to logging.basicConfig. Type: str. Range: Valid logging format string.
LOG_LEVEL = os.environ.get("SPASS_CONVERTER_LOG_LEVEL", "INFO").upper()  # Use: Root log level, overridable via the SPASS_CONVERTER_LOG_LEVEL environment variable. Type: str. Range: DEBUG, INFO, WARNING, ERROR, CRITICAL.

# File and Directory Names
CONFIG_DIR_NAME = ".spass_converter"  # Use: Name of the hidden directory within the user's home directory where the converter keeps its logs. Type: str. Range: Any valid directory name.
AUDIT_LOG_FILE = "audit.log"  # Use: Filename for the application's audit log. Type: str. Range: Any valid filename.
