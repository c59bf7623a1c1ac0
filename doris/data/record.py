"""Epoch records of a DORIS RINEX file

Description:
------------

The body of a DORIS RINEX file is a sequence of epoch blocks. Each block is turned into one EpochRecord holding the
epoch, the epoch flag, the satellite clock offset and, for every observed ground station, one Observation per declared
observable. A value of None means "not measured", which is different from a measured zero.

"""

# Standard library imports
from collections import namedtuple
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

# Doris imports
from doris.data.station import GroundStation
from doris.data.time import Epoch
from doris.lib import enums


class Observation(namedtuple("Observation", ["value", "lli", "snr"])):
    """One observed value with its loss of lock indicator and signal strength digits"""

    __slots__ = ()

    def __new__(cls, value=None, lli=None, snr=None):
        return super().__new__(cls, value, lli, snr)

    @property
    def is_measured(self):
        return self.value is not None


NOT_MEASURED = Observation()

ClockOffset = namedtuple("ClockOffset", ["offset", "extrapolated"])
ClockOffset.__new__.__defaults__ = (False,)
ClockOffset.__doc__ = """Offset of the on-board receiver clock [s], with a flag telling if it was extrapolated"""


@dataclass
class EpochRecord:
    """Observations of all stations at one epoch

    Args:
        epoch:         Epoch of the observations.
        flag:          Epoch flag, as given in the file.
        clock_offset:  Receiver clock offset, None if not given.
        observations:  Observations of each station, one per header observable in header order.
        event_lines:   Lines following an event epoch (flag above 1), kept verbatim.
        event_count:   Number given on the epoch line of an event, None to use the number of event lines.
        comments:      COMMENT lines found among the station lines, without label.
    """

    epoch: Epoch
    flag: int = 0
    clock_offset: Optional[ClockOffset] = None
    observations: Dict[GroundStation, Tuple[Observation, ...]] = field(default_factory=dict)
    event_lines: List[str] = field(default_factory=list)
    event_count: Optional[int] = None
    comments: List[str] = field(default_factory=list)

    @property
    def is_event(self) -> bool:
        return self.flag > 1

    @property
    def flag_name(self) -> str:
        """Name of the epoch flag, or the number itself for unknown flags"""
        try:
            return enums.get_enum("epoch_flag")(self.flag).name
        except ValueError:
            return str(self.flag)

    @property
    def stations(self) -> List[GroundStation]:
        return list(self.observations)

    def station_by_label(self, label: str) -> Optional[GroundStation]:
        return next((s for s in self.observations if s.label == label), None)
