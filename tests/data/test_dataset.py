""" Test :mod:`doris.data.dataset`

"""
# External library imports
import pytest

# Doris imports
from doris.data.dataset import Dataset
from doris.data.header import Header
from doris.data.observable import L1, L2
from doris.data.record import ClockOffset, EpochRecord
from doris.data.station import ByLabel
from doris.data.time import Epoch
from doris.lib.exceptions import FormatError


def _dset_at(*seconds):
    return Dataset(Header(satellite="SARAL"), [EpochRecord(Epoch(2013, 2, 26, 0, 0, s)) for s in seconds])


def test_sampling_histogram(cryosat_dset):
    assert cryosat_dset.sampling_histogram() == {10.0: 3, 20.0: 1}
    assert cryosat_dset.dominant_sampling_period() == 10.0


def test_dominant_sampling_period_tie_is_shortest():
    assert _dset_at(0, 30, 40).dominant_sampling_period() == 10.0


def test_sampling_ignores_repeated_epochs():
    assert _dset_at(0, 10, 10, 20).sampling_histogram() == {10.0: 2}


def test_sampling_of_single_epoch():
    dset = _dset_at(0)

    assert dset.sampling_histogram() == {}
    assert dset.dominant_sampling_period() is None


def test_epochs(cryosat_dset):
    epochs = cryosat_dset.epochs()

    assert len(epochs) == 5
    assert epochs[0] == Epoch(2018, 6, 13, 0, 0, 28)
    assert epochs[-1] == Epoch(2018, 6, 13, 0, 1, 18)


def test_satellite_clock_offsets(cryosat_dset):
    offsets = cryosat_dset.satellite_clock_offsets()

    assert len(offsets) == 5
    assert offsets[0] == (Epoch(2018, 6, 13, 0, 0, 28), ClockOffset(-4.32663115, False))
    assert offsets[2][1].extrapolated


def test_station_observables(cryosat_dset):
    observables = cryosat_dset.station_observables(ByLabel("TLSB"))

    assert len(observables) == 5
    epoch, values = observables[0]
    assert epoch == Epoch(2018, 6, 13, 0, 0, 28)
    assert values[L1].value == -1160392.564
    assert L2 in values
    assert cryosat_dset.station_observables(ByLabel("XXXX")) == []


def test_is_merged(cryosat_dset):
    assert not cryosat_dset.is_merged()

    merged = Dataset(cryosat_dset.header.with_comment("FILE MERGE 2 FILES"), cryosat_dset.records)
    assert merged.is_merged()


def test_standard_filename_from_first_record():
    dset = _dset_at(0)

    assert dset.standard_filename() == "SARAL13057"
    assert dset.standard_filename(compressed=True) == "SARAL13057.gz"


def test_standard_filename_without_epochs():
    with pytest.raises(FormatError):
        Dataset(Header(satellite="SARAL")).standard_filename()


def test_repr(cryosat_dset):
    assert repr(cryosat_dset) == "Dataset(satellite='CRYOSAT-2', version='3.00', num_records=5)"
