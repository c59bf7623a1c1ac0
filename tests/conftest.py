"""Common functions for all tests

"""

# System library imports
import pathlib

# Third party imports
import pytest

# Doris imports
from doris.data.dataset import Dataset

EXAMPLE_DIR = pathlib.Path(__file__).parent / "parsers" / "example_files"


def _header_line(content, label):
    return f"{content:<60s}{label}"


def _small_v3_header():
    """Header of a small generation 3 file with 7 observables and 3 stations"""
    return [
        _header_line(f"{'3.00':>9s}{'':11s}{'O':20s}{'D':20s}", "RINEX VERSION / TYPE"),
        _header_line("SARAL", "SATELLITE NAME"),
        _header_line("2013-009B", "COSPAR NUMBER"),
        _header_line(f"{'Expert':20s}{'CNES':20s}{'20130226 000000 UTC':20s}", "PGM / RUN BY / DATE"),
        _header_line(f"{'SPA_BN1':20s}{'CNES':40s}", "OBSERVER / AGENCY"),
        _header_line(f"{'CHAIN1':20s}{'DGXX':20s}{'1.00':20s}", "REC # / TYPE / VERS"),
        _header_line(f"{'DORIS':20s}{'STAREC':20s}", "ANT # / TYPE"),
        _header_line("D    7 L1  L2  C1  C2  W1  W2  F", "SYS / # / OBS TYPES"),
        _header_line("D           0.000", "L2 / L1 DATE OFFSET"),
        _header_line("     3", "# OF STATIONS"),
        _header_line("D01  TLSB TOULOUSE                      10003S005  3   0", "STATION REFERENCE"),
        _header_line("D02  GRFB GREENBELT                     40451S178  3   0", "STATION REFERENCE"),
        _header_line("D03  YASB YARRAGADEE                    50107S011  3   0", "STATION REFERENCE"),
        _header_line("", "END OF HEADER"),
    ]


def _station_lines(key, values):
    """Station line and continuation lines with the given values, None is written as blanks"""
    fields = [" " * 16 if v is None else f"{v:14.3f}  " for v in values]
    return [(key if idx == 0 else "   ") + "".join(fields[idx : idx + 5]) for idx in range(0, len(fields), 5)]


@pytest.fixture
def example_path():
    """Path to an example file"""
    return lambda name: EXAMPLE_DIR / name


@pytest.fixture
def cryosat_dset():
    """Dataset of the 53 station CRYOSAT-2 example file"""
    return Dataset.read(EXAMPLE_DIR / "cs2rx18164")


@pytest.fixture
def jason_dset():
    """Dataset of the generation 2 JASON-3 example file"""
    return Dataset.read(EXAMPLE_DIR / "ja3rx20001")


@pytest.fixture
def small_v3_header():
    """Lines of a small generation 3 header with 7 observables and stations D01, D02 and D03"""
    return _small_v3_header()


@pytest.fixture
def station_lines():
    """Function creating the lines of one station"""
    return _station_lines
