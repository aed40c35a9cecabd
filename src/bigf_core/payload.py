"""Payload slicing and repeating-key XOR decipher."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from bigf_core.errors import KeyFileError, PayloadOutOfRange
from bigf_core.header import ArchiveHeader, EntryDescriptor, parse


@dataclass(frozen=True)
class ExtractedEntry:
    entry: EntryDescriptor
    data: bytes
    # Absolute position of the payload in the archive buffer.
    offset: int = 0

    @property
    def name(self) -> str:
        return self.entry.name


def payload_window(header: ArchiveHeader, entry: EntryDescriptor, length: int) -> tuple[int, int]:
    """Absolute [start, end) of an entry's payload, checked against the buffer length."""
    # Python ints do not wrap, so a malformed u32 sum past 4 GiB simply fails the check.
    start = header.table_offset + entry.payload_offset
    end = start + entry.payload_size
    if end > length:
        raise PayloadOutOfRange(
            f"entry {entry.index} {entry.name!r}: [{start}, {end}) exceeds {length} bytes"
        )
    return start, end


def decipher(payload: bytes, key: bytes | None) -> bytes:
    """XOR payload with a repeating key. ``key=None`` returns the bytes unchanged."""
    if key is None:
        return bytes(payload)
    n = len(key)
    if n == 0:
        raise ValueError("cipher key must not be empty")
    size = len(payload)
    if size == 0:
        return b""
    # One big-int XOR against the key repeated to the payload length.
    stream = (bytes(key) * (size // n + 1))[:size]
    out = int.from_bytes(payload, "little") ^ int.from_bytes(stream, "little")
    return out.to_bytes(size, "little")


def extract_entry(
    data: bytes,
    header: ArchiveHeader,
    entry: EntryDescriptor,
    key: bytes | None = None,
) -> ExtractedEntry:
    start, end = payload_window(header, entry, len(data))
    return ExtractedEntry(entry, decipher(data[start:end], key), start)


def extract_all(data: bytes, key: bytes | None = None) -> tuple[ArchiveHeader, list[ExtractedEntry]]:
    """Parse an archive and extract every entry.

    A single bad entry fails the whole archive; nothing partial is returned.
    """
    header, entries = parse(data)
    return header, [extract_entry(data, header, e, key) for e in entries]


def load_key(path: Path) -> bytes:
    path = Path(path)
    if not path.is_file():
        raise KeyFileError(f"{path} not found")
    try:
        key = path.read_bytes()
    except OSError as e:
        raise KeyFileError(f"{path}: {e.strerror or e}") from e
    if not key:
        raise KeyFileError(f"{path} is empty")
    return key
