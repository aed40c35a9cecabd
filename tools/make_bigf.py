import random
import struct
from pathlib import Path

MAGIC = b"BIGF"
HEADER_LEN = 0x24
ENTRY_STRIDE = 0x18
NAME_LEN = 0x10


def wav_bytes(n_samples: int, rate: int = 22050) -> bytes:
    """Minimal mono 16-bit PCM WAV with random samples."""
    samples = b"".join(
        struct.pack("<h", random.randint(-2000, 2000)) for _ in range(n_samples)
    )
    fmt = struct.pack("<4sIHHIIHH", b"fmt ", 16, 1, 1, rate, rate * 2, 2, 16)
    data = struct.pack("<4sI", b"data", len(samples)) + samples
    return struct.pack("<4sI4s", b"RIFF", 4 + len(fmt) + len(data), b"WAVE") + fmt + data


def xor(payload: bytes, key: bytes) -> bytes:
    return bytes(b ^ key[i % len(key)] for i, b in enumerate(payload))


def build_archive(files: list[tuple[str, bytes]], key: bytes | None = None) -> bytes:
    table_offset = HEADER_LEN + len(files) * ENTRY_STRIDE
    head = struct.pack("<4sII", MAGIC, len(files), table_offset).ljust(HEADER_LEN, b"\x00")

    table = b""
    blob = b""
    for name, payload in files:
        if key is not None:
            payload = xor(payload, key)
        table += name.encode("utf-8")[:NAME_LEN].ljust(NAME_LEN, b"\x00")
        table += struct.pack("<II", len(payload), len(blob))
        blob += payload

    return head + table + blob


def generate_archive(output_dir: str, stem: str, entries: int, key: bytes | None = None) -> Path:
    files = [
        (f"sfx_{i:03d}.wav", wav_bytes(random.randint(16, 256)))
        for i in range(entries)
    ]

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / f"{stem}.big"
    path.write_bytes(build_archive(files, key))

    # Plaintext copies let tests compare deciphered output.
    plain = out.parent / f"{out.name}_plain" / stem
    plain.mkdir(parents=True, exist_ok=True)
    for name, payload in files:
        (plain / f"{stem}_{name}").write_bytes(payload)

    print(f"GENERATED: {path}")
    return path


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/make_bigf.py OUT_DIR [--archives N] [--entries N] [--key KEY_FILE]

    args = [a for a in sys.argv[1:] if a]

    def pop_value(arg_list: list[str], flag: str, default: str | None) -> tuple[str | None, list[str]]:
        """Remove an option and its value from an argv-style list."""
        if flag not in arg_list:
            return default, arg_list
        i = arg_list.index(flag)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{flag} requires a value")
        return arg_list[i + 1], arg_list[:i] + arg_list[i + 2:]

    archives, args = pop_value(args, "--archives", "1")
    entries, args = pop_value(args, "--entries", "3")
    key_file, args = pop_value(args, "--key", None)

    out = args[0] if len(args) > 0 else "big_files"

    key = None
    if key_file is not None:
        key = bytes(random.randint(0, 255) for _ in range(64))
        Path(key_file).write_bytes(key)
        print(f"KEY: {key_file}")

    for n in range(int(archives)):
        generate_archive(out, f"AUDIO{n:02d}", int(entries), key)
