from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from bigf_extract.batch import ArchiveResult

INDEX_FILE = "index.parquet"

INDEX_SCHEMA = pa.schema(
    [
        ("archive", pa.string()),
        ("entry_index", pa.int32()),
        ("name", pa.string()),
        ("offset", pa.int64()),
        ("size", pa.int64()),
        ("deciphered", pa.bool_()),
        ("path", pa.string()),
    ]
)


def write_index(results: list[ArchiveResult], out_dir: Path) -> Path | None:
    """Write <out_dir>/index.parquet for every entry written to disk."""
    rows = [row for res in results for row in res.rows]
    df = pd.DataFrame(rows)
    if df.empty:
        return None

    df = df.sort_values(["archive", "entry_index"])
    table = pa.Table.from_pandas(df, schema=INDEX_SCHEMA, preserve_index=False)
    path = Path(out_dir) / INDEX_FILE
    pq.write_table(table, path)
    return path
