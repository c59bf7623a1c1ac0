"""Generation specific layouts of DORIS RINEX files

Description:
------------

Two generations of the DORIS RINEX format are in use. They share most header lines and the layout of the station
lines, but differ in how the satellite is named, how the observables are declared, which optional lines exist and how
epoch lines look:

    ================  ====================================  ===================================
    Item              Generation 3 (3.xx)                   Generation 2 (2.xx)
    ================  ====================================  ===================================
    Satellite         SATELLITE NAME                        MARKER NAME
    COSPAR            COSPAR NUMBER                         -
    Observables       SYS / # / OBS TYPES, 13 per line      # / TYPES OF OBSERV, 9 per line
    L2/L1 offset      L2 / L1 DATE OFFSET                   -
    Epoch line        > YYYY MM DD hh mm ss.nnnnnnnnn       _YY MM DD hh mm ss.sssssss
    Clock offset      F13.9 in columns 44-56                F12.9 in columns 69-80
    File name         upper case                            lower case
    ================  ====================================  ===================================

A layout is selected from the version read on the first line of a file, see :func:`layout_for`. Parsers and writers
ask the layout at every generation sensitive decision.

"""

# Standard library imports
import math

# Doris imports
from doris.data.record import ClockOffset, Observation
from doris.data.time import Epoch
from doris.lib.exceptions import FormatError, LayoutError, UnsupportedVersionError

# Observations are written F14.3 followed by the loss of lock indicator and the signal strength, five on each line
OBS_WIDTH = 14
FIELD_WIDTH = 16
FIELDS_PER_LINE = 5
STATION_KEY_WIDTH = 3


class Layout:
    """Common part of the layouts, the station lines are the same for both generations"""

    generation = None
    satellite_label = None
    observables_label = None
    observables_per_line = None
    has_cospar = False
    has_date_offset = False
    resolution_ns = 1

    #
    # Observables
    #
    def observable_count(self, line):
        try:
            return int(line[self._count_slice])
        except ValueError:
            raise FormatError(f"Invalid number of observables in {line.rstrip()!r}") from None

    def observable_tokens(self, line):
        return line[6:60].split()

    def format_observables(self, observables):
        """Lines declaring the observables, without header labels"""
        tokens = [o.token for o in observables]
        lines = list()
        for idx in range(0, max(len(tokens), 1), self.observables_per_line):
            chunk = tokens[idx : idx + self.observables_per_line]
            prefix = self._format_count(len(tokens)) if idx == 0 else " " * 6
            lines.append(prefix + "".join(self._format_token(t) for t in chunk))
        return lines

    #
    # Station lines
    #
    @staticmethod
    def lines_per_station(num_observables):
        return max(1, math.ceil(num_observables / FIELDS_PER_LINE))

    @staticmethod
    def is_station_line(line):
        return line[:1] == "D" and line[1:3].strip().isdigit()

    @staticmethod
    def is_continuation_line(line):
        return line[:STATION_KEY_WIDTH] == " " * STATION_KEY_WIDTH

    @staticmethod
    def station_id(line):
        return int(line[1:3])

    @staticmethod
    def parse_observations(line, warn=None):
        """Parse the up to five observations on one station line

        Values that can not be read are returned as not measured, and reported through the warn function.

        Args:
            line (String):  Station or continuation line.
            warn:           Function called with a message for each value that can not be read.

        Returns:
            List of Observation, one for each field present on the line.
        """
        if len(line) > STATION_KEY_WIDTH + FIELDS_PER_LINE * FIELD_WIDTH:
            raise LayoutError(f"Too many columns on station line {line!r}")

        observations = list()
        num_fields = math.ceil((len(line) - STATION_KEY_WIDTH) / FIELD_WIDTH)
        for idx in range(num_fields):
            start = STATION_KEY_WIDTH + idx * FIELD_WIDTH
            text = line[start : start + OBS_WIDTH].strip()
            value = None
            if text:
                try:
                    value = float(text)
                except ValueError:
                    if warn is not None:
                        key = line[:STATION_KEY_WIDTH]
                        warn(f"Unreadable observation {text!r} in {key!r}, treated as not measured")
            lli, snr = (_digit(line[start + OBS_WIDTH + n : start + OBS_WIDTH + n + 1]) for n in (0, 1))
            observations.append(Observation(value, lli, snr))
        return observations

    @staticmethod
    def format_observations(key, observations):
        """Station line and continuation lines for one station

        Trailing lines where nothing was measured are left out, a reader fills them in as not measured.
        """
        lines = list()
        for idx in range(0, len(observations), FIELDS_PER_LINE):
            prefix = key if idx == 0 else " " * STATION_KEY_WIDTH
            fields = "".join(_format_observation(o) for o in observations[idx : idx + FIELDS_PER_LINE])
            lines.append((prefix + fields).rstrip())
        while len(lines) > 1 and not lines[-1].strip():
            lines.pop()
        return lines

    #
    # Epoch lines, implemented by each generation
    #
    def is_epoch_line(self, line):
        raise NotImplementedError

    def parse_epoch_line(self, line):
        raise NotImplementedError

    def format_epoch_line(self, epoch, flag, num_records, clock_offset=None):
        raise NotImplementedError

    def format_filename(self, name):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}()"


class Rinex3Layout(Layout):
    """Layout of DORIS RINEX 3.xx files"""

    generation = 3
    satellite_label = "SATELLITE NAME"
    observables_label = "SYS / # / OBS TYPES"
    observables_per_line = 13
    has_cospar = True
    has_date_offset = True
    _count_slice = slice(3, 6)

    @staticmethod
    def _format_count(num):
        return f"D  {num:3d}"

    @staticmethod
    def _format_token(token):
        return f" {token:<3s}"

    def is_epoch_line(self, line):
        return line[:1] == ">"

    def parse_epoch_line(self, line):
        # ----+----1----+----2----+----3----+----4----+----5----+---
        # > 2018 06 13 00 00 28.000000000  0 37       -4.326631150 0
        try:
            fraction = line[21:31]
            if fraction[:1] != ".":
                raise ValueError(fraction)
            epoch = Epoch(
                int(line[2:6]),
                int(line[7:9]),
                int(line[10:12]),
                int(line[13:15]),
                int(line[16:18]),
                int(line[19:21]),
                int(fraction[1:].strip().ljust(9, "0")),
            )
            flag = int(line[33:34])
            num_records = int(line[34:37])
        except (ValueError, FormatError):
            raise LayoutError(f"Unreadable epoch line {line!r}") from None

        return epoch, flag, num_records, _parse_clock(line[43:56], line[57:58], line)

    def format_epoch_line(self, epoch, flag, num_records, clock_offset=None):
        line = (
            f"> {epoch.year:4d} {epoch.month:02d} {epoch.day:02d} {epoch.hour:02d} {epoch.minute:02d} "
            f"{epoch.second:02d}.{epoch.nanosecond:09d}  {flag:1d}{num_records:3d}"
        )
        if clock_offset is not None:
            line += f"{'':6s}{clock_offset.offset:13.9f} {int(clock_offset.extrapolated):1d}"
        return line

    def format_filename(self, name):
        return name.upper()


class Rinex2Layout(Layout):
    """Layout of the legacy DORIS RINEX 2.xx files"""

    generation = 2
    satellite_label = "MARKER NAME"
    observables_label = "# / TYPES OF OBSERV"
    observables_per_line = 9
    has_cospar = False
    has_date_offset = False
    resolution_ns = 100
    _count_slice = slice(0, 6)

    @staticmethod
    def _format_count(num):
        return f"{num:6d}"

    @staticmethod
    def _format_token(token):
        return f"    {token:>2s}"

    def is_epoch_line(self, line):
        return line[:1] == " " and line[1:3].isdigit() and line[3:4] == " "

    def parse_epoch_line(self, line):
        # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8-
        #  18  6 13  0  0 28.0000000  0 37                                   -4.326631150 0
        try:
            whole, _, fraction = line[15:26].partition(".")
            epoch = Epoch(
                expand_year(int(line[1:3])),
                int(line[4:6]),
                int(line[7:9]),
                int(line[10:12]),
                int(line[13:15]),
                int(whole),
                int(fraction.strip().ljust(7, "0")) * 100,
            )
            flag = int(line[28:29])
            num_records = int(line[29:32])
        except (ValueError, FormatError):
            raise LayoutError(f"Unreadable epoch line {line!r}") from None

        return epoch, flag, num_records, _parse_clock(line[68:80], line[81:82], line)

    def format_epoch_line(self, epoch, flag, num_records, clock_offset=None):
        line = (
            f" {epoch.year % 100:02d} {epoch.month:2d} {epoch.day:2d} {epoch.hour:2d} {epoch.minute:2d}"
            f"{epoch.second:3d}.{epoch.nanosecond // self.resolution_ns:07d}  {flag:1d}{num_records:3d}"
        )
        if clock_offset is not None:
            line = f"{line:<68s}{clock_offset.offset:12.9f} {int(clock_offset.extrapolated):1d}"
        return line

    def format_filename(self, name):
        return name.lower()


_LAYOUTS = {2: Rinex2Layout(), 3: Rinex3Layout()}


def layout_for(version):
    """Layout to use for the given format version

    Args:
        version (Version):  Format version of a file.

    Returns:
        Layout:  Layout of the generation of the version.
    """
    try:
        return _LAYOUTS[version.major]
    except KeyError:
        raise UnsupportedVersionError(f"DORIS RINEX version {version} is not supported") from None


def expand_year(two_digit_year):
    """Four digit year from a two digit year, 80-99 are taken to be in the 1900s"""
    return two_digit_year + (1900 if two_digit_year >= 80 else 2000)


def _digit(text):
    return int(text) if text.isdigit() else None


def _format_observation(observation):
    if observation.value is None:
        text = " " * OBS_WIDTH
    else:
        text = f"{observation.value:{OBS_WIDTH}.3f}"
        if len(text) > OBS_WIDTH:
            raise LayoutError(f"Observation {observation.value} does not fit in F14.3")
    lli = " " if observation.lli is None else f"{observation.lli:1d}"
    snr = " " if observation.snr is None else f"{observation.snr:1d}"
    return f"{text}{lli}{snr}"


def _parse_clock(offset_text, flag_text, line):
    if not offset_text.strip():
        return None
    try:
        return ClockOffset(float(offset_text), flag_text.strip() == "1")
    except ValueError:
        raise LayoutError(f"Unreadable clock offset in epoch line {line!r}") from None
