import struct

import pytest


def pack_archive(entries, table_offset=None, pad=b""):
    """entries: list of (raw_name_bytes, payload). Payloads are laid out back to back."""
    if table_offset is None:
        table_offset = 0x24 + len(entries) * 0x18
    head = struct.pack("<4sII", b"BIGF", len(entries), table_offset).ljust(0x24, b"\x00")
    table = b""
    blob = b""
    for raw_name, payload in entries:
        table += raw_name.ljust(0x10, b"\x00") + struct.pack("<II", len(payload), len(blob))
        blob += payload
    return head + table + pad + blob


@pytest.fixture
def make_archive():
    return pack_archive


@pytest.fixture
def test_wav_archive():
    # Payload offsets are relative to table_offset, so the payload area starts after the one descriptor.
    head = struct.pack("<4sII", b"BIGF", 1, 0x24 + 0x18).ljust(0x24, b"\x00")
    desc = b"test.wav".ljust(0x10, b"\x00") + struct.pack("<II", 4, 0)
    return head + desc + bytes([0x01, 0x02, 0x03, 0x04])
