"""BIGF archive header and entry table parser."""
from __future__ import annotations

import struct
from dataclasses import dataclass

from bigf_core.errors import InvalidMagic, TruncatedHeader, TruncatedTable
from bigf_core.protocol import (
    MAGIC_BIGF,
    HEADER_FMT,
    HEADER_LEN,
    ENTRY_TABLE_OFFSET,
    ENTRY_STRIDE,
    ENTRY_NAME_LEN,
    ENTRY_FMT,
)


@dataclass(frozen=True)
class ArchiveHeader:
    magic: bytes
    entry_count: int
    # Base for every per-entry payload offset, not the archive start.
    table_offset: int

    def encode(self) -> bytes:
        """Pack the fixed header back to its 0x24-byte form, reserved bytes zeroed."""
        head = struct.pack(HEADER_FMT, self.magic, self.entry_count, self.table_offset)
        return head.ljust(HEADER_LEN, b"\x00")


@dataclass(frozen=True)
class EntryDescriptor:
    index: int
    name: str
    payload_size: int
    payload_offset: int


def decode_name(raw: bytes) -> str:
    """Decode a 16-byte name field.

    Every NUL byte is dropped, including embedded ones: b"a\\x00b" -> "ab".
    """
    return bytes(b for b in raw if b != 0).decode("utf-8", errors="replace")


def parse(data: bytes) -> tuple[ArchiveHeader, list[EntryDescriptor]]:
    """Decode the header and entry table of a BIGF archive.

    Only the header and the table are bounds-checked here. Payload windows are
    checked by the extractor.
    """
    if bytes(data[:4]) != MAGIC_BIGF:
        raise InvalidMagic(f"found {bytes(data[:4])!r}")
    if len(data) < HEADER_LEN:
        raise TruncatedHeader(f"{len(data)} < {HEADER_LEN} bytes")

    magic, entry_count, table_offset = struct.unpack_from(HEADER_FMT, data, 0)
    header = ArchiveHeader(magic, entry_count, table_offset)

    table_end = ENTRY_TABLE_OFFSET + entry_count * ENTRY_STRIDE
    if table_end > len(data):
        raise TruncatedTable(f"{entry_count} entries need {table_end} bytes, have {len(data)}")

    entries: list[EntryDescriptor] = []
    for i in range(entry_count):
        base = ENTRY_TABLE_OFFSET + i * ENTRY_STRIDE
        name = decode_name(data[base:base + ENTRY_NAME_LEN])
        size, offset = struct.unpack_from(ENTRY_FMT, data, base + ENTRY_NAME_LEN)
        entries.append(EntryDescriptor(i, name, size, offset))

    return header, entries
