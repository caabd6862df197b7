"""
Conversion of Samsung Pass exports to Chrome password CSV.

This is the surface the front ends call: it ties the crypto unwrapper to the
record extractor and optionally hands the result to the file saver.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional, Union, IO

from . import config
from .crypto import CryptoManager
from .errors import ConversionError
from .records import RecordExtractor, to_csv
from .storage import save_csv

logger = logging.getLogger(__name__)

Source = Union[str, bytes, os.PathLike, IO]


@dataclass(frozen=True)
class ConversionOptions:
    """Options accepted by convert()."""
    auto_persist: bool = False
    filename_override: Optional[str] = None
    include_empty_fields: bool = False
    output_dir: Optional[str] = None


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a successful conversion."""
    text: str
    suggested_filename: str
    record_count: int
    succeeded: bool = True
    saved_path: Optional[str] = None


def _read_source(source: Source) -> Union[str, bytes]:
    if isinstance(source, (str, bytes)):
        return source
    if isinstance(source, bytearray):
        return bytes(source)
    if isinstance(source, os.PathLike):
        try:
            with open(source, 'rb') as f:
                return f.read()
        except OSError as e:
            raise ConversionError(f"Could not read {os.fspath(source)}: {e.strerror or e}", stage="read") from e
    if hasattr(source, 'read'):
        try:
            return source.read()
        except OSError as e:
            raise ConversionError(f"Could not read the export file: {e.strerror or e}", stage="read") from e
    raise TypeError(f"Unsupported source type: {type(source).__name__}")


def convert(source: Source, password: str, options: Optional[ConversionOptions] = None) -> ConversionResult:
    """
    Convert a SPASS file to Chrome Password CSV format.

    Args:
        source: File content (base64 text or bytes), a path, or an open file
        password: Password the export was protected with
        options: Optional configuration

    Returns:
        ConversionResult with the CSV text and metadata

    Raises:
        ConversionError: If any stage fails. The subclass (FormatError,
            DecryptionError, CapabilityError) and the ``stage`` attribute
            identify where; nothing is written when this is raised.
    """
    options = options or ConversionOptions()
    filename = options.filename_override or config.DEFAULT_OUTPUT_FILENAME

    try:
        content = _read_source(source)

        decrypted = CryptoManager().unwrap(content, password)
        text = decrypted.decode('utf-8', errors='replace')

        records = RecordExtractor(options.include_empty_fields).extract(text)
        csv_text = to_csv(records)

        saved_path = None
        if options.auto_persist:
            try:
                saved_path = save_csv(csv_text, filename, options.output_dir)
            except OSError as e:
                raise ConversionError(f"Could not save {filename}: {e.strerror or e}", stage="persist") from e
    except ConversionError as e:
        logger.warning(f"Conversion failed during {e.stage}: {e}")
        raise type(e)(f"Conversion failed: {e}", stage=e.stage) from e

    logger.info(f"Converted {len(records)} records")
    return ConversionResult(
        text=csv_text,
        suggested_filename=filename,
        record_count=len(records),
        succeeded=True,
        saved_path=saved_path,
    )


def convert_and_save(source: Source, password: str, filename: str = config.DEFAULT_OUTPUT_FILENAME,
                     output_dir: Optional[str] = None) -> int:
    """Convert and write the CSV in one go. Returns the number of records saved."""
    result = convert(source, password, ConversionOptions(
        auto_persist=True,
        filename_override=filename,
        output_dir=output_dir,
    ))
    return result.record_count


def convert_to_csv_text(source: Source, password: str) -> str:
    """Convert a SPASS file and return only the CSV string."""
    return convert(source, password).text


def is_likely_source_file(filename: str, mime_type: Optional[str] = None) -> bool:
    """
    Guess whether a file is a Samsung Pass export.

    Advisory only: exports usually carry the .spass extension, and browsers
    and file managers report them with no or a generic binary MIME type.
    """
    if filename and filename.lower().endswith(config.SPASS_FILE_EXTENSION):
        return True
    return mime_type is not None and mime_type in config.SPASS_ACCEPTED_MIME_TYPES


def capability_available() -> bool:
    """Check whether the host can decrypt SPASS files at all."""
    return CryptoManager().is_available()
