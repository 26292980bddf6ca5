# cidrmatch/datasources/csv_source.py

from __future__ import annotations
from typing import Iterator

import pandas as pd

from cidrmatch.core.errors import RangeFileError
from cidrmatch.datasources.base import RangeSource
from cidrmatch.models import CidrRecord
from cidrmatch.utils.logging import get_logger

log = get_logger(__name__)

RANGE_COLUMN_ALIASES = ("ipRange", "ip_range", "cidr")


class CsvRangeSource(RangeSource):
    """
    Reader for CSV range files.

    The range column may be named ipRange, ip_range or cidr. The
    description, number, country and status columns are optional.
    """

    def read_dataframe(self) -> pd.DataFrame:
        try:
            df = pd.read_csv(self.path, dtype=str, keep_default_na=False, encoding="utf-8")
        except FileNotFoundError as e:
            raise RangeFileError(self.path, "file not found") from e
        except pd.errors.EmptyDataError as e:
            raise RangeFileError(self.path, "file is empty") from e
        except pd.errors.ParserError as e:
            raise RangeFileError(self.path, f"malformed CSV: {e}") from e
        except UnicodeDecodeError as e:
            raise RangeFileError(self.path, "not valid UTF-8") from e
        except OSError as e:
            raise RangeFileError(self.path, f"cannot read file: {e.strerror or e}") from e

        df.columns = [str(c).strip() for c in df.columns]
        range_col = next((c for c in RANGE_COLUMN_ALIASES if c in df.columns), None)
        if range_col is None:
            raise RangeFileError(
                self.path,
                f"missing range column (one of {', '.join(RANGE_COLUMN_ALIASES)})",
            )
        if range_col != "ipRange":
            df = df.rename(columns={range_col: "ipRange"})

        log.info("Loaded %d rows from %s", len(df), self.path)
        return df

    def iter_records(self) -> Iterator[CidrRecord]:
        df = self.read_dataframe()
        for row in df.to_dict(orient="records"):
            if not str(row.get("ipRange", "")).strip():
                log.warning("Skipping row without a range: %s", row)
                continue
            yield CidrRecord.from_mapping(row)
