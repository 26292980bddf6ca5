# cidrmatch/datasources/base.py

from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator, List, Literal, Optional, Union

import pandas as pd

from cidrmatch.models import CidrRecord

PathLike = Union[str, Path]
KindType = Literal["cfg", "csv"]

RECORD_COLUMNS = ["ipRange", "description", "number", "country", "status"]


class RangeSource:
    """
    Base class for anything that yields CidrRecords.

    Subclasses implement iter_records(); load() materializes it.
    """

    def __init__(self, path: PathLike):
        self.path = Path(path)

    def iter_records(self) -> Iterator[CidrRecord]:
        raise NotImplementedError

    def load(self) -> List[CidrRecord]:
        return list(self.iter_records())


def records_to_dataframe(records: Iterable[CidrRecord]) -> pd.DataFrame:
    """Records as a DataFrame with the range-file column names."""
    rows = [r.as_dict() for r in records]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def open_source(path: PathLike, kind: Optional[KindType] = None) -> RangeSource:
    """
    Pick the reader for `path`.

    With no `kind`, a `.csv` suffix selects the CSV reader and anything
    else is read as a `.cfg` range file.
    """
    from cidrmatch.datasources.cfg_file import CfgFileSource
    from cidrmatch.datasources.csv_source import CsvRangeSource

    path = Path(path)
    if kind is None:
        kind = "csv" if path.suffix.lower() == ".csv" else "cfg"

    if kind == "cfg":
        return CfgFileSource(path)
    if kind == "csv":
        return CsvRangeSource(path)
    raise ValueError(f"Unsupported kind: {kind}")
