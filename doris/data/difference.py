"""Differencing of two DORIS datasets

Description:
------------

The difference A - B of two datasets keeps the epochs and stations present in both (an inner join on epoch and
station label), and for each aligned pair the difference of every observable measured in both. Observables measured in
only one of the datasets are not measured in the result, they are never differenced against zero. Stations of B are
matched to stations of A by label, since the file-local station keys of two files need not agree.

When an epoch is repeated, the n-th occurrence in A is paired with the n-th occurrence in B.

The result is a new dataset with the header of A, marked by an extra comment line. Neither input is changed.

"""

# Standard library imports
import collections

# Doris imports
from doris.data.record import EpochRecord, NOT_MEASURED, Observation
from doris.lib import config
from doris.lib import log


def difference(dset_a, dset_b):
    """Difference A - B of two datasets

    Args:
        dset_a (Dataset):  Dataset that is subtracted from.
        dset_b (Dataset):  Dataset that is subtracted.

    Returns:
        Dataset:  Records of the epochs and stations present in both datasets, with the differenced values.
    """
    from doris.data.dataset import Dataset

    # Index B by epoch and station label, repeated epochs are paired in file order
    index_b = collections.defaultdict(collections.deque)
    for record in dset_b.records:
        if record.is_event:
            continue
        for station, observations in record.observations.items():
            index_b[record.epoch, station.label].append((dset_b.header.observables, observations))

    observables_a = dset_a.header.observables
    records = list()
    for record in dset_a.records:
        if record.is_event:
            continue

        observations = dict()
        for station, observations_a in record.observations.items():
            matches = index_b.get((record.epoch, station.label))
            if not matches:
                continue
            observables_b, observations_b = matches.popleft()
            values_b = dict(zip(observables_b, observations_b))
            observations[station] = tuple(
                _difference(obs_a, values_b.get(observable, NOT_MEASURED))
                for observable, obs_a in zip(observables_a, observations_a)
            )

        if observations:
            records.append(EpochRecord(record.epoch, record.flag, record.clock_offset, observations))

    comment = config.setting("difference", "comment", "DATASET DIFFERENCE").str
    log.debug(f"Differenced {len(records)} of {len(dset_a.records)} epochs of {dset_a.header.satellite}")
    return Dataset(dset_a.header.with_comment(comment), records)


def _difference(obs_a, obs_b):
    if obs_a.value is None or obs_b.value is None:
        return NOT_MEASURED
    return Observation(obs_a.value - obs_b.value)
