import sys
from pathlib import Path

def main():
    if len(sys.argv) != 3:
        print("Usage: truncate_archive.py <file> <length>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    n = int(sys.argv[2], 0)
    b = p.read_bytes()
    if n >= len(b):
        print(f"File is only {len(b)} bytes, nothing to cut.")
        raise SystemExit(2)

    # Cutting inside the entry table gives TruncatedTable,
    # cutting inside the payload area gives PayloadOutOfRange.
    p.write_bytes(b[:n])
    print(f"Truncated {p} from {len(b)} to {n} bytes")

if __name__ == "__main__":
    main()
