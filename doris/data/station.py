"""Ground stations (beacons) of the DORIS network

Description:
------------

Every DORIS RINEX header declares the beacons observed in the file, one STATION REFERENCE line each. Inside the file a
beacon is referenced by its file-local key `Dnn`, outside the file it is better known by its four letter label, its
site name or its DOMES number. The StationCatalog keeps the beacons in declaration order and resolves any of these
identifications through a Matcher.

Example:
--------

    >>> station = catalog.lookup(ByLabel("TLSB"))
    >>> station.unique_id, str(station.domes)
    (13, '10003S005')

"""

# Standard library imports
from dataclasses import dataclass
from typing import Iterator, List, Optional

# Doris imports
from doris.data.identifiers import Domes

# Nominal frequency of the ultra stable oscillator of the beacons [Hz]
USO_FREQUENCY = 5e6


@dataclass(frozen=True)
class GroundStation:
    """A DORIS beacon as declared in the header

    Args:
        label:            Four letter mnemonic of the beacon, e.g. TLSB.
        site:             Name of the site, e.g. TOULOUSE.
        domes:            DOMES number, None if not given or not readable.
        unique_id:        File-local key, the number in Dnn.
        beacon_revision:  Beacon generation.
        frequency_shift:  Frequency shift factor k of the beacon.
    """

    label: str
    site: str
    domes: Optional[Domes]
    unique_id: int
    beacon_revision: int = 3
    frequency_shift: int = 0

    def __post_init__(self):
        if not 0 <= self.unique_id <= 99:
            raise ValueError(f"Station key must be in 0..99, got {self.unique_id}")

    @property
    def key(self) -> str:
        return f"D{self.unique_id:02d}"

    @property
    def s1_frequency(self) -> float:
        """Emitted S1 frequency [Hz] of the beacon, including the frequency shift"""
        return 543 * USO_FREQUENCY * (3 / 4 + 87 * self.frequency_shift / (5 * 2 ** 26))

    @property
    def u2_frequency(self) -> float:
        """Emitted U2 frequency [Hz] of the beacon, including the frequency shift"""
        return 107 * USO_FREQUENCY * (3 / 4 + 87 * self.frequency_shift / (5 * 2 ** 26))

    def matches(self, matcher: "Matcher") -> bool:
        return matcher.matches(self)


#
# Matchers
#
class Matcher:
    """Identification of a ground station by one of its attributes"""

    attribute = None

    def __init__(self, value):
        self.value = value

    def matches(self, station: GroundStation) -> bool:
        return getattr(station, self.attribute) == self.value

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class ByDomes(Matcher):
    attribute = "domes"

    def __init__(self, domes):
        super().__init__(Domes.parse(domes) if isinstance(domes, str) else domes)


class ByLabel(Matcher):
    attribute = "label"


class BySiteName(Matcher):
    attribute = "site"


class ByUniqueId(Matcher):
    attribute = "unique_id"


#
# Catalog
#
class StationCatalog:
    """Ordered collection of the ground stations declared in one file"""

    def __init__(self, stations=None):
        self._stations: List[GroundStation] = list()
        for station in stations or ():
            self.insert(station)

    def insert(self, station: GroundStation) -> None:
        self._stations.append(station)

    def lookup(self, matcher: Matcher) -> Optional[GroundStation]:
        """Find the first declared station matching, None if no station matches"""
        return next((s for s in self._stations if matcher.matches(s)), None)

    def __iter__(self) -> Iterator[GroundStation]:
        return iter(self._stations)

    def __len__(self) -> int:
        return len(self._stations)

    def __getitem__(self, idx):
        return self._stations[idx]

    def __eq__(self, other):
        if not isinstance(other, StationCatalog):
            return NotImplemented
        return self._stations == other._stations

    def __repr__(self):
        return f"{type(self).__name__}({self._stations!r})"
