from cidrmatch.datasources.base import RangeSource, open_source, records_to_dataframe
from cidrmatch.datasources.cfg_file import CfgFileSource
from cidrmatch.datasources.csv_source import CsvRangeSource

__all__ = [
    "CfgFileSource",
    "CsvRangeSource",
    "RangeSource",
    "open_source",
    "records_to_dataframe",
]
