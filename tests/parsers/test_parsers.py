"""Tests for the parsers-package

Tests for the policies of the DORIS RINEX parser are in test_doris_rinex_parser.py

Example:
--------
    python -m pytest -s test_parsers.py
"""

# Standard library imports
import pathlib

# Third party imports
import numpy as np

# Doris imports
from doris import parsers
from doris.data.dataset import Dataset
from doris.data.header import Version
from doris.data.observable import Observable
from doris.data.station import ByDomes, ByLabel, BySiteName, ByUniqueId
from doris.data.time import Epoch
from doris.lib.naming import standard_filename


def get_parser(parser_name, example_path=None):
    """Get a parser that has parsed an example file"""
    if not example_path:
        example_path = pathlib.Path(__file__).parent / "example_files" / parser_name
    return parsers.parse_file(parser_name, example_path)


#
# Tests
#
def test_list_of_parsers():
    """Test that names of parsers can be listed"""
    assert "doris_rinex" in parsers.names()


def test_parser_doris_rinex_cryosat(example_path):
    """Test that the 53 station CRYOSAT-2 file gives the expected header"""
    parser = get_parser("doris_rinex", example_path=example_path("cs2rx18164"))
    header = parser.as_dict()["header"]

    assert parser.meta["version"] == "3.00"
    assert header.version == Version(3, 0)
    assert header.satellite == "CRYOSAT-2"
    assert len(header.ground_stations) == 53
    assert len(header.observables) == 10
    assert standard_filename(header) == "CRYOS18164"


def test_parser_doris_rinex_cryosat_header_fields(cryosat_dset):
    """Test the optional and free text header fields of the CRYOSAT-2 file"""
    header = cryosat_dset.header

    assert str(header.cospar) == "2010-013A"
    assert (header.program, header.run_by, header.date) == ("Expert", "CNES", "20180614 090016 UTC")
    assert (header.observer, header.agency) == ("SPA_BN1_4.7P1", "CNES")
    assert header.comments == ["SPA_BN1_4.7P1"]
    receiver = header.receiver
    assert (receiver.serial_number, receiver.model, receiver.firmware) == ("CHAIN1", "DGXX", "1.00")
    assert (header.antenna.serial_number, header.antenna.model) == ("DORIS", "STAREC")
    assert header.center_of_mass == (1.4, 0.0, 0.0)
    assert header.l2_l1_date_offset == 2.0
    assert header.time_of_first_observation == Epoch(2018, 6, 13, 0, 0, 28)
    assert header.time_of_last_observation == Epoch(2018, 6, 13, 0, 1, 18)
    assert header.time_system == "TAI"
    assert header.doi is None
    assert header.license is None
    assert [o.token for o in header.observables] == ["L1", "L2", "C1", "C2", "W1", "W2", "F", "P", "T", "H"]


def test_parser_doris_rinex_cryosat_stations(cryosat_dset):
    """Test that stations of the CRYOSAT-2 file can be looked up in several ways"""
    toulouse = cryosat_dset.ground_station(ByLabel("TLSB"))

    assert toulouse.unique_id == 13
    assert toulouse.site == "TOULOUSE"
    assert str(toulouse.domes) == "10003S005"
    assert toulouse.beacon_revision == 3
    assert toulouse.frequency_shift == 0
    assert cryosat_dset.ground_station(ByUniqueId(13)) is toulouse
    assert cryosat_dset.ground_station(BySiteName("TOULOUSE")) is toulouse
    assert cryosat_dset.ground_station(ByDomes("10003S005")) is toulouse
    assert cryosat_dset.ground_station(ByLabel("AMVB")).frequency_shift == -1
    assert cryosat_dset.ground_station(ByLabel("XXXX")) is None


def test_parser_doris_rinex_cryosat_records(cryosat_dset):
    """Test the epoch records of the CRYOSAT-2 file"""
    records = cryosat_dset.records
    first = records[0]

    assert len(records) == 5
    assert first.epoch == Epoch(2018, 6, 13, 0, 0, 28)
    assert first.flag == 0
    assert first.clock_offset.offset == -4.32663115
    assert not first.clock_offset.extrapolated
    assert records[2].clock_offset.extrapolated
    assert [s.label for s in first.stations] == ["OWFC", "TLSB", "GRFB"]

    owenga = cryosat_dset.ground_station(ByLabel("OWFC"))
    values = [o.value for o in first.observations[owenga]]
    expected = [-1012244.428, -212571.092, 1001.623, 1002.206, -110.6, -115.35, 0.001, 1013.3, 15.6, 74.8]
    np.testing.assert_allclose(values, expected)
    assert first.observations[owenga][0].snr == 7
    assert first.observations[owenga][0].lli is None
    assert first.observations[owenga][5].snr is None


def test_parser_doris_rinex_not_measured_and_flags(cryosat_dset):
    """Test that blank values are not measured and that loss of lock indicators are kept"""
    record = cryosat_dset.records[1]
    station = record.station_by_label("KRWB")

    assert record.observations[station][3].value is None
    assert not record.observations[station][3].is_measured
    assert all(o.is_measured for i, o in enumerate(record.observations[station]) if i != 3)
    assert record.observations[cryosat_dset.ground_station(ByLabel("GRFB"))][0].lli == 1


def test_parser_doris_rinex_lazy_records(example_path):
    """Test that records can be read one at a time"""
    parser = parsers.setup_parser("doris_rinex", file_path=example_path("cs2rx18164"))
    records = parser.iter_records()

    first = next(records)
    assert first.epoch == Epoch(2018, 6, 13, 0, 0, 28)
    assert len(parser.data["header"].ground_stations) == 53
    assert "records" not in parser.data

    assert len(list(records)) == 4


def test_parser_doris_rinex_stream(example_path, cryosat_dset):
    """Test that parsing a stream of lines gives the same dataset as parsing the file"""
    lines = example_path("cs2rx18164").read_text().splitlines()

    assert Dataset.read_stream(lines) == cryosat_dset


def test_parser_doris_rinex_legacy(jason_dset):
    """Test that the generation 2 JASON-3 file is read"""
    header = jason_dset.header

    assert header.version == Version(2, 20)
    assert header.satellite == "JASON-3"
    assert header.cospar is None
    assert header.l2_l1_date_offset == 0.0
    assert header.observables[-1] == Observable.parse("H")
    assert len(header.observables) == 10
    assert header.time_of_first_observation == Epoch(2020, 1, 1, 0, 0, 5, 123456700)
    assert header.time_of_last_observation is None
    assert len(jason_dset.records) == 3
    assert jason_dset.records[0].epoch == Epoch(2020, 1, 1, 0, 0, 5, 123456700)
    assert jason_dset.records[0].clock_offset.offset == -0.003456789
    assert [s.label for s in jason_dset.records[1].stations] == ["TLSB", "GRFB", "YASB"]
    assert jason_dset.ground_station(ByLabel("YASB")).frequency_shift == -3


def test_standard_filenames(cryosat_dset, jason_dset):
    """Test file names from the header and from the production attributes"""
    assert standard_filename(cryosat_dset.header) == "CRYOS18164"
    assert standard_filename(cryosat_dset.header, compressed=True) == "CRYOS18164.gz"
    assert cryosat_dset.standard_filename() == "CS2RX18164"
    assert standard_filename(jason_dset.header) == "jason20001"
    assert jason_dset.standard_filename() == "ja3rx20001"


def test_as_dataframe(cryosat_dset):
    """Test conversion of observations to a DataFrame"""
    df = cryosat_dset.as_dataframe()

    assert len(df) == 12
    assert list(df.columns[:4]) == ["time", "station", "flag", "clock_offset"]
    assert list(df.columns[4:]) == ["L1", "L2", "C1", "C2", "W1", "W2", "F", "P", "T", "H"]
    assert np.isnan(df[df.station == "KRWB"]["C2"].iloc[0])
    assert (df.station == "TLSB").sum() == 5


def test_parser_as_dataframe(example_path):
    """Test that the parser gives the observations as a DataFrame indexed by time and station"""
    df = get_parser("doris_rinex", example_path=example_path("ja3rx20001")).as_dataframe(index=["time", "station"])

    assert len(df) == 6
    assert list(df.index.names) == ["time", "station"]
    assert df["clock_offset"].iloc[0] == -0.003456789
