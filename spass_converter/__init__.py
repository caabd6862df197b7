"""
SPASS Converter
Copyright (c) 2025

LEGAL NOTICE AND THREAT MODEL:
This tool is for personal use only. It decrypts Samsung Pass export files that
belong to the person running it, entirely on the local device. It must never be
used to open export files of people who have not given their explicit consent.
No data is transmitted off the device; the resulting CSV holds passwords in
plain text and should be deleted after it has been imported.
"""

from spass_converter.converter import (
    ConversionOptions,
    ConversionResult,
    capability_available,
    convert,
    convert_and_save,
    convert_to_csv_text,
    is_likely_source_file,
)
from spass_converter.errors import (
    CapabilityError,
    ConversionError,
    DecryptionError,
    FormatError,
)

__all__ = [
    "CapabilityError",
    "ConversionError",
    "ConversionOptions",
    "ConversionResult",
    "DecryptionError",
    "FormatError",
    "capability_available",
    "convert",
    "convert_and_save",
    "convert_to_csv_text",
    "is_likely_source_file",
]
