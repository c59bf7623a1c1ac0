"""Header of a DORIS RINEX file

Description:
------------

The Header holds everything given before END OF HEADER. Free text fields (program, run by, date, observer, agency and
comments) are kept verbatim. Optional typed fields are None when absent and are then left out when writing.

"""

# Standard library imports
from collections import namedtuple
import dataclasses
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# Doris imports
from doris.data.identifiers import Cospar
from doris.data.observable import Observable
from doris.data.station import StationCatalog
from doris.data.time import Epoch
from doris.lib.exceptions import FormatError


class Version(namedtuple("Version", ["major", "minor"])):
    """Format version of a DORIS RINEX file, e.g. 3.00"""

    __slots__ = ()

    @classmethod
    def parse(cls, text):
        major, _, minor = text.strip().partition(".")
        try:
            return cls(int(major), int(minor.ljust(2, "0")[:2]) if minor else 0)
        except ValueError:
            raise FormatError(f"Invalid format version {text!r}") from None

    def __str__(self):
        return f"{self.major}.{self.minor:02d}"


@dataclass
class Receiver:
    serial_number: str = ""
    model: str = ""
    firmware: str = ""


@dataclass
class Antenna:
    serial_number: str = ""
    model: str = ""


@dataclass
class Header:
    """Content of the header section of a DORIS RINEX file

    Args:
        version:                    Format version, selects the layout of the file.
        satellite:                  Name of the satellite, e.g. CRYOSAT-2.
        cospar:                     COSPAR designator of the satellite, None if not given.
        program:                    Name of the program that created the file.
        run_by:                     Agency that ran the program.
        date:                       Date of file creation, kept as given.
        observer:                   Name of the observer.
        agency:                     Name of the observing agency.
        comments:                   Header comment lines, in order.
        receiver:                   On-board receiver.
        antenna:                    On-board antenna.
        center_of_mass:             Satellite center of mass X, Y, Z [m], None if not given.
        observables:                Declared observables. Their order is the order of the values of every station.
        time_of_first_observation:  First epoch of the file, None if not given.
        time_of_last_observation:   Last epoch of the file, None if not given.
        time_system:                Time system of the first/last observation, e.g. TAI.
        l2_l1_date_offset:          Offset between the L2 and L1 measurement dates [microseconds].
        ground_stations:            Catalog of the beacons observed in the file.
        doi:                        Digital object identifier of the file, None if not given.
        license:                    License of use, None if not given.
        scale_factors:              SYS / SCALE FACTOR lines without label, kept as given. The factors are not applied.
    """

    version: Version = Version(3, 0)
    satellite: str = ""
    cospar: Optional[Cospar] = None
    program: str = ""
    run_by: str = ""
    date: str = ""
    observer: str = ""
    agency: str = ""
    comments: List[str] = field(default_factory=list)
    receiver: Receiver = field(default_factory=Receiver)
    antenna: Antenna = field(default_factory=Antenna)
    center_of_mass: Optional[Tuple[float, float, float]] = None
    observables: List[Observable] = field(default_factory=list)
    time_of_first_observation: Optional[Epoch] = None
    time_of_last_observation: Optional[Epoch] = None
    time_system: str = ""
    l2_l1_date_offset: float = 0.0
    ground_stations: StationCatalog = field(default_factory=StationCatalog)
    doi: Optional[str] = None
    license: Optional[str] = None
    scale_factors: List[str] = field(default_factory=list)

    @property
    def num_observables(self) -> int:
        return len(self.observables)

    def with_comment(self, comment: str) -> "Header":
        """Copy of the header with one comment line added, sharing no mutable parts with the original"""
        return dataclasses.replace(
            self,
            comments=self.comments + [comment],
            observables=list(self.observables),
            scale_factors=list(self.scale_factors),
            ground_stations=StationCatalog(self.ground_stations),
            receiver=dataclasses.replace(self.receiver),
            antenna=dataclasses.replace(self.antenna),
        )
