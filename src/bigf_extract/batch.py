from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from warnings import warn

import click

from bigf_core.errors import BigfError
from bigf_core.header import EntryDescriptor
from bigf_core.payload import extract_all


@dataclass
class ArchiveResult:
    archive: Path
    status: str
    reason: str | None = None
    rows: list[dict] = field(default_factory=list)

    def summary(self) -> str:
        if self.status == "extracted":
            return f"{self.archive.name}: extracted"
        return f"{self.archive.name}: {self.reason}, skipping"


def find_archives(directory: Path) -> list[Path]:
    """Every regular file in the directory; non-archives are rejected later by magic."""
    return sorted(p for p in Path(directory).iterdir() if p.is_file())


def _safe_name(name: str) -> str:
    # Entry names are archive-controlled and must stay inside the archive directory.
    for sep in ("/", "\\"):
        name = name.replace(sep, "_")
    if name in ("", ".", ".."):
        name = name.replace(".", "_") or "_"
    return name


def output_names(stem: str, entries: list[EntryDescriptor]) -> list[str]:
    """``<stem>_<name>`` per entry, index-qualified when a name repeats."""
    seen: set[str] = set()
    names: list[str] = []
    for e in entries:
        out = f"{stem}_{_safe_name(e.name)}"
        if out in seen:
            warn(f"Duplicate entry name {e.name!r} at index {e.index} in {stem}")
            out = f"{stem}_{e.index}_{_safe_name(e.name)}"
            # A qualified name can still clash with a literal entry name like "2_x".
            n = 1
            while out in seen:
                out = f"{stem}_{e.index}_{n}_{_safe_name(e.name)}"
                n += 1
        seen.add(out)
        names.append(out)
    return names


def _unique_stems(archives: list[Path]) -> dict[Path, str]:
    """Output directory name per archive; clashing stems fall back to the full file name."""
    counts: dict[str, int] = {}
    for a in archives:
        counts[a.stem] = counts.get(a.stem, 0) + 1
    return {a: a.stem if counts[a.stem] == 1 else a.name for a in archives}


def extract_archive(
    archive: Path,
    out_dir: Path,
    key: bytes | None = None,
    stem: str | None = None,
) -> ArchiveResult:
    archive = Path(archive)
    try:
        data = archive.read_bytes()
        _, extracted = extract_all(data, key)
    except (BigfError, OSError) as e:
        return ArchiveResult(archive, "skipped", str(e))

    # Every entry decoded; only now touch the filesystem.
    stem = stem or archive.stem
    out_dir = Path(out_dir)
    dest = out_dir / stem

    result = ArchiveResult(archive, "extracted")
    names = output_names(stem, [x.entry for x in extracted])
    written: list[Path] = []
    try:
        dest.mkdir(parents=True, exist_ok=True)
        for item, fname in zip(extracted, names):
            path = dest / fname
            written.append(path)
            path.write_bytes(item.data)
    except OSError as e:
        # No partial archive output: drop what was written, keep going with the batch.
        for path in written:
            path.unlink(missing_ok=True)
        return ArchiveResult(archive, "skipped", str(e))

    for item, path in zip(extracted, written):
        result.rows.append({
            "archive": archive.name,
            "entry_index": item.entry.index,
            "name": item.name,
            "offset": int(item.offset),
            "size": int(item.entry.payload_size),
            "deciphered": key is not None,
            "path": path.relative_to(out_dir).as_posix(),
        })
    return result


def run_batch(
    big_dir: Path,
    out_dir: Path,
    key: bytes | None = None,
    jobs: int = 1,
) -> list[ArchiveResult]:
    """Extract every archive in big_dir. Bad archives are reported and skipped."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    archives = find_archives(big_dir)
    stems = _unique_stems(archives)

    results: list[ArchiveResult] = []
    if jobs > 1:
        # Each archive writes only under its own <out>/<stem>/ directory.
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            for res in pool.map(lambda a: extract_archive(a, out_dir, key, stems[a]), archives):
                click.echo(res.summary())
                results.append(res)
    else:
        for a in archives:
            res = extract_archive(a, out_dir, key, stems[a])
            click.echo(res.summary())
            results.append(res)
    return results
