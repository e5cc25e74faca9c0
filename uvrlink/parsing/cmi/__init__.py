"""
CMI JSON API decoding.

This sub-package turns documents from ``/INCLUDE/api.cgi`` into the same
``SensorRecord`` shape produced by the binary decoder.
"""
from uvrlink.parsing.cmi.decode import (
    check_status,
    CmiHeader,
    decode_document,
    decode_entry,
    entry_key,
    parse_header,
    SECTION_CODES,
    STATUS_MEANINGS,
    status_meaning,
)

__all__ = [
    "check_status",
    "CmiHeader",
    "decode_document",
    "decode_entry",
    "entry_key",
    "parse_header",
    "SECTION_CODES",
    "STATUS_MEANINGS",
    "status_meaning",
]
