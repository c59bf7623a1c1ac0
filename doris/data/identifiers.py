"""Identifiers used in DORIS RINEX headers

Description:
------------

Two structured identifiers appear in DORIS files:

- COSPAR designator of the satellite, `YYYY-NNNP`: launch year, launch number of that year and piece letter(s), e.g.
  `2010-013A` for CRYOSAT-2.
- DOMES number of a ground station, `AAAAASNNN`: five digit area and site code, the point type (`M` for monument,
  `S` for instrument) and a three digit sequential number, e.g. `10003S005` for Toulouse.

Both parse strictly, raising FormatError on anything else, and str() gives back the canonical text.

"""

# Standard library imports
from dataclasses import dataclass
import re

# Doris imports
from doris.lib.exceptions import FormatError

_COSPAR_RE = re.compile(r"^(?P<year>\d{4})-(?P<launch>\d{3})(?P<piece>[A-Z]{1,3})$")
_DOMES_RE = re.compile(r"^(?P<area>\d{3})(?P<site>\d{2})(?P<point>[MS])(?P<sequential>\d{3})$")


@dataclass(frozen=True)
class Cospar:
    """COSPAR international designator of a satellite"""

    year: int
    launch: int
    piece: str

    @classmethod
    def parse(cls, text: str) -> "Cospar":
        match = _COSPAR_RE.match(text.strip())
        if not match:
            raise FormatError(f"Invalid COSPAR designator {text!r}, expected YYYY-NNNP")
        return cls(year=int(match["year"]), launch=int(match["launch"]), piece=match["piece"])

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.launch:03d}{self.piece}"


@dataclass(frozen=True)
class Domes:
    """IERS DOMES number of a ground station"""

    area: int
    site: int
    point: str
    sequential: int

    @classmethod
    def parse(cls, text: str) -> "Domes":
        match = _DOMES_RE.match(text.strip())
        if not match:
            raise FormatError(f"Invalid DOMES number {text!r}, expected 9 characters like 10003S005")
        return cls(
            area=int(match["area"]),
            site=int(match["site"]),
            point=match["point"],
            sequential=int(match["sequential"]),
        )

    @property
    def is_instrument(self) -> bool:
        return self.point == "S"

    def __str__(self) -> str:
        return f"{self.area:03d}{self.site:02d}{self.point}{self.sequential:03d}"
