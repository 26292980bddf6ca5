# cidrmatch/models.py
from dataclasses import dataclass
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class CidrRecord:
    ip_range: str           # "a.b.c.d/len", kept as written for display
    description: str        # owner / allocation name
    number: str = ""        # AS number, empty when unknown
    country: str = ""       # country label or code
    status: str = "none"    # e.g. "ALLOCATED PA", "ASSIGNED"

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "CidrRecord":
        """
        Build a record from a parsed line or CSV row.

        Accepts the `ipRange` key used by range files as well as `ip_range`.
        Falsy number/country become "" and a falsy status becomes "none".
        """
        ip_range = row.get("ipRange") or row.get("ip_range") or ""
        return cls(
            ip_range=str(ip_range).strip(),
            description=str(row.get("description") or ""),
            number=str(row.get("number") or ""),
            country=str(row.get("country") or ""),
            status=str(row.get("status") or "none"),
        )

    def as_dict(self) -> Dict[str, str]:
        return {
            "ipRange": self.ip_range,
            "description": self.description,
            "number": self.number,
            "country": self.country,
            "status": self.status,
        }
