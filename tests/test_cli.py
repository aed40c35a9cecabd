import json
from pathlib import Path

from click.testing import CliRunner

from bigf_extract.cli import main


def test_extract_missing_key_is_fatal(tmp_path, test_wav_archive):
    src = tmp_path / "in"
    src.mkdir()
    (src / "T.BIG").write_bytes(test_wav_archive)
    out = tmp_path / "out"

    r = CliRunner().invoke(main, ["extract", str(src), str(out), "--key", str(tmp_path / "wav-key.bin")])

    assert r.exit_code == 1
    assert r.output.startswith("FATAL: Cannot load cipher key file")
    assert not out.exists()


def test_extract_with_key(tmp_path, test_wav_archive):
    src = tmp_path / "in"
    src.mkdir()
    (src / "T.BIG").write_bytes(test_wav_archive)
    key = tmp_path / "wav-key.bin"
    key.write_bytes(b"\x01\x02")
    out = tmp_path / "out"

    r = CliRunner().invoke(main, ["extract", str(src), str(out), "--key", str(key)])

    assert r.exit_code == 0, r.output
    assert r.output == "T.BIG: extracted\n"
    assert (out / "T" / "T_test.wav").read_bytes() == bytes([0x00, 0x00, 0x02, 0x06])
    assert (out / "index.parquet").exists()


def test_extract_no_deciphering_no_index(tmp_path, test_wav_archive):
    src = tmp_path / "in"
    src.mkdir()
    (src / "T.BIG").write_bytes(test_wav_archive)
    out = tmp_path / "out"

    r = CliRunner().invoke(main, ["extract", "--no-deciphering", "--no-index", str(src), str(out)])

    assert r.exit_code == 0, r.output
    assert (out / "T" / "T_test.wav").read_bytes() == bytes([1, 2, 3, 4])
    assert not (out / "index.parquet").exists()


def test_extract_skips_and_exits_zero(tmp_path):
    src = tmp_path / "in"
    src.mkdir()
    (src / "junk.bin").write_bytes(b"\x00\x01")
    out = tmp_path / "out"

    r = CliRunner().invoke(main, ["extract", "--no-deciphering", str(src), str(out)])

    assert r.exit_code == 0
    assert r.output.endswith(", skipping\n")
    assert not (out / "index.parquet").exists()


def test_info(tmp_path, test_wav_archive):
    p = tmp_path / "T.BIG"
    p.write_bytes(test_wav_archive)

    r = CliRunner().invoke(main, ["info", str(p)])

    assert r.exit_code == 0
    out = json.loads(r.output)
    assert out["entry_count"] == 1
    assert out["table_offset"] == 0x3C
    assert out["entries"] == [{"index": 0, "name": "test.wav", "payload_offset": 0, "payload_size": 4}]


def test_info_bad_archive(tmp_path):
    p = tmp_path / "T.BIG"
    p.write_bytes(b"BIGF\x00")

    r = CliRunner().invoke(main, ["info", str(p)])

    assert r.exit_code == 1
    assert r.output.startswith("FATAL: Archive shorter than the fixed header")


def test_extract_unreadable_key_is_fatal(tmp_path, test_wav_archive, monkeypatch):
    src = tmp_path / "in"
    src.mkdir()
    (src / "T.BIG").write_bytes(test_wav_archive)
    key = tmp_path / "wav-key.bin"
    key.write_bytes(b"\x01")
    out = tmp_path / "out"

    real_read = Path.read_bytes

    def read_bytes(self):
        if self == key:
            raise PermissionError(13, "Permission denied", str(self))
        return real_read(self)

    monkeypatch.setattr(Path, "read_bytes", read_bytes)

    r = CliRunner().invoke(main, ["extract", str(src), str(out), "--key", str(key)])

    assert r.exit_code == 1
    assert r.output.startswith("FATAL: Cannot load cipher key file")
    assert "Permission denied" in r.output
    assert not out.exists()
