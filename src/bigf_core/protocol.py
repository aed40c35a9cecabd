"""BIGF archive protocol constants.

Single source of truth for on-disk magic values and record layouts.
All integers are little-endian.
"""

# File magic
MAGIC_BIGF = b"BIGF"

# Header: [Magic(4) | EntryCount(4) | TableOffset(4) | Reserved(0x18)] = 0x24 bytes
HEADER_FMT = "<4sII"
HEADER_LEN = 0x24

# Entry descriptor: [Name(0x10) | PayloadSize(4) | PayloadOffset(4)] = 0x18 bytes
ENTRY_TABLE_OFFSET = 0x24
ENTRY_STRIDE = 0x18
ENTRY_NAME_LEN = 0x10
ENTRY_FMT = "<II"

# Cipher key shipped next to the game's audio data
DEFAULT_KEY_FILE = "wav-key.bin"
