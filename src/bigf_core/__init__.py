"""BIGF Core - Archive parsing and payload decipher."""
from .header import ArchiveHeader, EntryDescriptor, decode_name, parse
from .payload import ExtractedEntry, decipher, extract_all, extract_entry, load_key, payload_window

__all__ = [
    "ArchiveHeader",
    "EntryDescriptor",
    "ExtractedEntry",
    "decode_name",
    "decipher",
    "extract_all",
    "extract_entry",
    "load_key",
    "parse",
    "payload_window",
]
