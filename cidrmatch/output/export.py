# cidrmatch/output/export.py

from __future__ import annotations
import gzip
import json
from pathlib import Path
from typing import List, Literal, Sequence, Tuple, Union

import pandas as pd

from cidrmatch.datasources.base import RECORD_COLUMNS, records_to_dataframe
from cidrmatch.models import CidrRecord
from cidrmatch.utils.logging import get_logger

log = get_logger(__name__)


PathLike = Union[str, Path]
OutputFormat = Literal["table", "json", "csv"]

MATCH_COLUMNS = ["rank"] + RECORD_COLUMNS
LARGE_EXPORT_MB = 100

# (ip, matches) pairs in query order
Results = Sequence[Tuple[str, Sequence[CidrRecord]]]


def matches_to_dataframe(matches: Sequence[CidrRecord]) -> pd.DataFrame:
    """
    One row per match, least specific first.

    `rank` is 1-based and follows the order returned by the trie.
    """
    df = records_to_dataframe(matches)
    df.insert(0, "rank", range(1, len(df) + 1))
    return df


def format_matches(ip: str, matches: Sequence[CidrRecord], fmt: OutputFormat = "table") -> str:
    """Render the matches for one address as text."""
    if fmt == "json":
        return json.dumps(
            {"ip": ip, "matches": [m.as_dict() for m in matches]},
            indent=2,
        )

    if fmt == "csv":
        df = matches_to_dataframe(matches)
        df.insert(0, "ip", ip)
        return df.to_csv(index=False).rstrip("\n")

    if fmt != "table":
        raise ValueError(f"Unsupported format: {fmt}")

    if not matches:
        return "IP address not found in any range."

    lines: List[str] = [f"IP Address {ip} Found in {len(matches)} Range(s):"]
    for i, m in enumerate(matches, start=1):
        lines.append(
            f"{i}. {m.ip_range}  {m.description!r}  "
            f"number={m.number or '-'}  country={m.country or '-'}  status={m.status}"
        )
    return "\n".join(lines)


def _write_with_compression(
    text: str,
    path: Path,
    compress: bool = False,
) -> tuple[int, int]:
    """
    Write text to file, optionally with a gzip copy next to it.

    Returns:
        tuple of (original_size_bytes, written_size_bytes)
    """
    data = text.encode("utf-8")
    original_size = len(data)

    path.write_bytes(data)
    if not compress:
        log.info("Wrote %s (%.1f KB)", path, original_size / 1024)
        return original_size, original_size

    gz_path = path.with_suffix(path.suffix + ".gz")
    with gzip.open(gz_path, "wb", compresslevel=9) as f:
        f.write(data)
    compressed_size = gz_path.stat().st_size

    log.info(
        "Wrote %s (%.1f KB) and %s (%.1f KB)",
        path,
        original_size / 1024,
        gz_path.name,
        compressed_size / 1024,
    )
    return original_size, compressed_size


def save_matches(df: pd.DataFrame, path: PathLike, compress: bool = False) -> Path:
    """
    Save a matches DataFrame; the format follows the file suffix.

    Parameters
    ----------
    df : pandas.DataFrame
        Usually built with matches_to_dataframe(), optionally with an `ip` column.
    path : str | Path
        `.csv`, `.json` or `.html`/`.htm`.
    compress : bool, default False
        Also write a gzipped copy with a `.gz` suffix appended.
    """
    out_path = Path(path)
    suffix = out_path.suffix.lower()
    log.info("Saving %d match row(s) to %s", len(df), out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    if suffix == ".csv":
        text = df.to_csv(index=False)
    elif suffix == ".json":
        text = df.to_json(orient="records", indent=2)
    elif suffix in (".html", ".htm"):
        text = df.to_html(index=False, border=0)
    else:
        raise ValueError(f"Unsupported output suffix: {out_path.suffix or '(none)'}")

    original_size, final_size = _write_with_compression(text, out_path, compress=compress)
    log.debug("Matches written successfully to %s", out_path)

    # Warn when the export is too large to open comfortably
    final_mb = final_size / (1024 * 1024)
    if final_mb > LARGE_EXPORT_MB:
        log.warning(
            "Export %s is %.1f MB (%.1f MB uncompressed), which exceeds %d MB.",
            out_path,
            final_mb,
            original_size / (1024 * 1024),
            LARGE_EXPORT_MB,
        )
    return out_path


def results_to_dataframe(results: Results) -> pd.DataFrame:
    """Matches for several addresses stacked into one frame with an `ip` column."""
    frames = []
    for ip, matches in results:
        df = matches_to_dataframe(matches)
        df.insert(0, "ip", ip)
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=["ip"] + MATCH_COLUMNS)
    return pd.concat(frames, ignore_index=True)


def format_results(results: Results, fmt: OutputFormat = "table") -> str:
    """Render the matches for several addresses as one document."""
    if fmt == "json":
        return json.dumps(
            [{"ip": ip, "matches": [m.as_dict() for m in matches]} for ip, matches in results],
            indent=2,
        )
    if fmt == "csv":
        return results_to_dataframe(results).to_csv(index=False).rstrip("\n")
    return "\n\n".join(format_matches(ip, matches, fmt) for ip, matches in results)
