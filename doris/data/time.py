"""Timestamps of DORIS observations

Description:
------------

DORIS RINEX files give epochs as calendar fields with up to nine fractional second digits. The Epoch class keeps those
fields exactly, as integers, so that writing a parsed epoch back reproduces it to the nanosecond. Conversions to
datetime (microsecond resolution) are available for display and calendar arithmetic.

"""

# Standard library imports
from collections import namedtuple
from datetime import datetime, timedelta

# Doris imports
from doris.lib.exceptions import FormatError

_J2000 = datetime(2000, 1, 1, 12, 0, 0)
_NS_PER_SECOND = 1_000_000_000


class Epoch(namedtuple("Epoch", ["year", "month", "day", "hour", "minute", "second", "nanosecond"])):
    """Nanosecond exact calendar timestamp

    Epochs compare and sort chronologically since the fields are ordered from most to least significant.
    """

    __slots__ = ()

    def __new__(cls, year, month, day, hour=0, minute=0, second=0, nanosecond=0):
        try:
            datetime(year, month, day, hour, minute, second)
        except (TypeError, ValueError) as err:
            raise FormatError(f"Invalid epoch {year}-{month}-{day} {hour}:{minute}:{second}: {err}") from None
        if not 0 <= nanosecond < _NS_PER_SECOND:
            raise FormatError(f"Invalid fraction of second {nanosecond} ns")
        return super().__new__(cls, year, month, day, hour, minute, second, nanosecond)

    @property
    def datetime(self):
        """Epoch as datetime, truncated to microseconds"""
        return datetime(self.year, self.month, self.day, self.hour, self.minute, self.second, self.nanosecond // 1000)

    @property
    def day_of_year(self):
        return self.datetime.timetuple().tm_yday

    @property
    def seconds(self):
        """Seconds of the minute including the fraction"""
        return self.second + self.nanosecond / _NS_PER_SECOND

    @property
    def j2000_nanoseconds(self):
        """Integer number of nanoseconds since 2000-01-01 12:00:00 on the same time scale"""
        whole = self.datetime.replace(microsecond=0) - _J2000
        return (whole.days * 86400 + whole.seconds) * _NS_PER_SECOND + self.nanosecond

    def shifted(self, nanoseconds):
        """Return a new epoch moved by an integer number of nanoseconds"""
        whole, nanosecond = divmod(self.nanosecond + nanoseconds, _NS_PER_SECOND)
        dt = self.datetime.replace(microsecond=0) + timedelta(seconds=whole)
        return self.__class__(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second, nanosecond)

    def truncated(self, resolution_ns):
        """Return the epoch with the fraction of second truncated to a multiple of resolution_ns"""
        return self._replace(nanosecond=self.nanosecond - self.nanosecond % resolution_ns)

    def __sub__(self, other):
        """Difference between two epochs in seconds"""
        if not isinstance(other, Epoch):
            return NotImplemented
        return (self.j2000_nanoseconds - other.j2000_nanoseconds) / _NS_PER_SECOND

    def __str__(self):
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}.{self.nanosecond:09d}"
        )
