"""
tests/conftest.py - shared pytest fixtures

Range files and record sets used across the test modules.

Usage:
    def test_something(cfg_file, sample_records):
        # cfg_file: path to a .cfg range file with a private section
        # sample_records: CidrRecords for the 1.11.0.0/16 scenario
        pass
"""

import logging
from pathlib import Path
from typing import List

import pytest

from cidrmatch.models import CidrRecord
from cidrmatch.utils import logging as cidrmatch_logging

# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def reset_package_logging(monkeypatch):
    """Drop the CLI log handler and env overrides between tests"""
    monkeypatch.delenv("CIDR_MATCH_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CIDR_MATCH_RANGES", raising=False)

    yield

    root = logging.getLogger(cidrmatch_logging.ROOT_LOGGER_NAME)
    if cidrmatch_logging._handler is not None:
        root.removeHandler(cidrmatch_logging._handler)
        cidrmatch_logging._handler = None
    root.setLevel(logging.NOTSET)


# =============================================================================
# Records
# =============================================================================


@pytest.fixture
def isp_record() -> CidrRecord:
    return CidrRecord("1.11.0.0/16", "ISP-A", "9457", "KR", "ALLOCATED PA")


@pytest.fixture
def lg_record() -> CidrRecord:
    return CidrRecord("1.11.40.0/21", "LG", "3786", "KR", "ASSIGNED")


@pytest.fixture
def sample_records(isp_record, lg_record) -> List[CidrRecord]:
    return [isp_record, lg_record]


# =============================================================================
# Range files
# =============================================================================

CFG_TEXT = """\
10.0.0.0/8, "Private-A", 0, "ZZ", RESERVED
192.168.0.0/16, "Private-C", 0, "ZZ", RESERVED
##########################
1.11.0.0/16, "ISP-A", 9457, "KR", ALLOCATED PA
1.11.40.0/21, "LG", 3786, "KR", ASSIGNED

this line is not a range
1.11.0.0/33, "Broken", 1, "KR", ASSIGNED
8.8.8.0/24, "Google", 15169, "US", ASSIGNED
##########################
"""

CSV_TEXT = """\
ipRange,description,number,country,status
1.11.0.0/16,ISP-A,9457,KR,ALLOCATED PA
1.11.40.0/21,LG,3786,KR,
8.8.8.0/24,Google,,US,ASSIGNED
"""


@pytest.fixture
def cfg_file(tmp_path) -> Path:
    path = tmp_path / "ranges.cfg"
    path.write_text(CFG_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def csv_file(tmp_path) -> Path:
    path = tmp_path / "ranges.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def clean_cfg_file(tmp_path) -> Path:
    """Range file whose public section only holds valid ranges."""
    path = tmp_path / "clean.cfg"
    path.write_text(
        "##########################\n"
        '1.11.0.0/16, "ISP-A", 9457, "KR", ALLOCATED PA\n'
        '1.11.40.0/21, "LG", 3786, "KR", ASSIGNED\n',
        encoding="utf-8",
    )
    return path
