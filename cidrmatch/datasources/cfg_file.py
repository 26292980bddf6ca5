# cidrmatch/datasources/cfg_file.py

from __future__ import annotations
import re
from typing import Iterable, Iterator, Optional

from cidrmatch.core.errors import RangeFileError
from cidrmatch.datasources.base import RangeSource
from cidrmatch.models import CidrRecord
from cidrmatch.utils.logging import get_logger

log = get_logger(__name__)

# Everything above the first separator is private and never loaded.
SEPARATOR = "##########################"

# <CIDR>, "<Description>", <Number>, "<Country>", <Status>
LINE_PATTERN = re.compile(r'^(\S+),\s+"([^"]+)",\s+(\d+),\s+"([^"]+)",\s+(.*)$')


def parse_line(line: str) -> Optional[CidrRecord]:
    """Parse one range line, or return None if it does not match the format."""
    match = LINE_PATTERN.match(line.rstrip("\r\n"))
    if not match:
        return None
    ip_range, description, number, country, status = match.groups()
    return CidrRecord.from_mapping(
        {
            "ipRange": ip_range,
            "description": description,
            "number": number,
            "country": country,
            "status": status.strip(),
        }
    )


def parse_lines(lines: Iterable[str]) -> Iterator[CidrRecord]:
    """
    Yield the public records from the lines of a range file.

    Only lines after the separator are considered. CIDR validity is left
    to the trie; malformed lines are logged and skipped here.
    """
    lines = iter(lines)
    for line in lines:
        if line.strip() == SEPARATOR:
            break
    else:
        log.warning('Separator "%s" not found; no public ranges loaded.', SEPARATOR)
        return

    for lineno, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(SEPARATOR):
            continue
        record = parse_line(stripped)
        if record is None:
            log.warning("Skipping invalid line %d after separator: %s", lineno, stripped)
            continue
        yield record


class CfgFileSource(RangeSource):
    """Reader for `.cfg` range files with a private/public separator."""

    def iter_records(self) -> Iterator[CidrRecord]:
        log.info("Reading range file %s", self.path)
        try:
            with self.path.open("r", encoding="utf-8") as f:
                yield from parse_lines(f)
        except OSError as e:
            raise RangeFileError(self.path, f"cannot read file: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise RangeFileError(self.path, "not valid UTF-8") from e
