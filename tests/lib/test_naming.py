""" Test :mod:`doris.lib.naming`

"""
# Standard library imports
import pathlib

# External library imports
import pytest

# Doris imports
from doris.data.header import Header, Version
from doris.data.time import Epoch
from doris.lib.exceptions import FormatError
from doris.lib.naming import ProductionAttributes, satellite_code, standard_filename


@pytest.mark.parametrize(
    "satellite, code", [("CRYOSAT-2", "CRYOS"), ("JASON-3", "JASON"), ("SARAL", "SARAL"), ("H-2A", "H2AXX")]
)
def test_satellite_code(satellite, code):
    assert satellite_code(satellite) == code


def test_standard_filename():
    header = Header(satellite="Sentinel-3A", time_of_first_observation=Epoch(2019, 2, 1))

    assert standard_filename(header) == "SENTI19032"
    assert standard_filename(header, compressed=True) == "SENTI19032.gz"


def test_standard_filename_legacy():
    header = Header(version=Version(2, 20), satellite="SPOT-5", time_of_first_observation=Epoch(1999, 12, 31))

    assert standard_filename(header) == "spot599365"


def test_standard_filename_needs_epoch():
    with pytest.raises(FormatError):
        standard_filename(Header(satellite="SARAL"))
    assert standard_filename(Header(satellite="SARAL"), first_epoch=Epoch(2013, 2, 26)) == "SARAL13057"


def test_production_attributes():
    attrs = ProductionAttributes.parse(pathlib.Path("/data/doris/cs2rx18164.gz"))

    assert attrs == ProductionAttributes("CS2RX", 2018, 164, True)
    assert attrs.filename(Version(3, 0)) == "CS2RX18164.gz"
    assert attrs.filename(Version(2, 20), compressed=False) == "cs2rx18164"
    assert ProductionAttributes.parse("ja3rx98001").year == 1998


@pytest.mark.parametrize("file_name", ["cs2rx18367", "cs2rx18000", "cs2rx1816", "cs2rx18164.Z", "CS2RX18164.RNX"])
def test_invalid_production_attributes(file_name):
    with pytest.raises(FormatError):
        ProductionAttributes.parse(file_name)
