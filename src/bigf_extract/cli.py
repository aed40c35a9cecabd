"""BIGF Extract - Colin McRae Rally 04 BIG audio archive extractor."""
from __future__ import annotations

import json
from pathlib import Path

import click

from bigf_core.errors import BigfError
from bigf_core.header import parse
from bigf_core.payload import load_key
from bigf_core.protocol import DEFAULT_KEY_FILE
from bigf_extract.batch import run_batch
from bigf_extract.index import write_index


@click.group()
def main():
    """Extract BIG files and decipher the extracted WAV files."""


@main.command("extract")
@click.argument("big_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("out_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--no-deciphering", is_flag=True, help="Do not decipher the extracted WAV files")
@click.option(
    "--key",
    "key_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_KEY_FILE,
    show_default=True,
    help="Cipher key file",
)
@click.option("--jobs", type=click.IntRange(min=1), default=1, show_default=True, help="Archives processed in parallel")
@click.option("--no-index", is_flag=True, help="Do not write index.parquet")
def extract_cmd(
    big_dir: Path,
    out_dir: Path,
    no_deciphering: bool,
    key_path: Path,
    jobs: int,
    no_index: bool,
) -> None:
    """Extract every BIG file in BIG_DIR into OUT_DIR."""
    # Key problems are fatal and must surface before any archive is touched.
    key = None
    if not no_deciphering:
        try:
            key = load_key(key_path)
        except BigfError as e:
            click.echo(f"FATAL: {e}")
            raise SystemExit(1)

    results = run_batch(big_dir, out_dir, key=key, jobs=jobs)

    if not no_index:
        write_index(results, out_dir)


@main.command("info")
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def info_cmd(archive: Path) -> None:
    """Print the header and entry table of one archive as JSON."""
    try:
        header, entries = parse(archive.read_bytes())
    except BigfError as e:
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)

    out = {
        "entry_count": header.entry_count,
        "table_offset": header.table_offset,
        "entries": [
            {
                "index": e.index,
                "name": e.name,
                "payload_offset": e.payload_offset,
                "payload_size": e.payload_size,
            }
            for e in entries
        ],
    }
    click.echo(json.dumps(out, sort_keys=True, separators=(",", ":"), ensure_ascii=False))


if __name__ == "__main__":
    main()
