"""A dataset of DORIS observations

Description:
------------

A Dataset is the content of one DORIS RINEX file: the header and the epoch records in file order. Records are never
re-sorted.

Example:
--------

    >>> from doris.data.dataset import Dataset
    >>> from doris.data.station import ByLabel
    >>> dset = Dataset.read("cs2rx18164")
    >>> dset.ground_station(ByLabel("TLSB")).site
    'TOULOUSE'
    >>> dset.standard_filename()
    'CS2RX18164'
    >>> dset.write("copy.gz")

"""

# Standard library imports
from dataclasses import dataclass, field
from typing import Dict, List, Optional

# External library imports
import numpy as np
import pandas as pd

# Doris imports
from doris.data.header import Header
from doris.data.record import EpochRecord
from doris.lib import config
from doris.lib.naming import ProductionAttributes, standard_filename


@dataclass
class Dataset:
    """Header and epoch records of one DORIS RINEX file

    Args:
        header:      Header of the file.
        records:     Epoch records, in file order.
        production:  Attributes of the standard file name the dataset was read from, None if not read from such a file.
    """

    header: Header
    records: List[EpochRecord] = field(default_factory=list)
    production: Optional[ProductionAttributes] = field(default=None, compare=False)

    #
    # Reading and writing
    #
    @classmethod
    def read(cls, file_path, **parser_args):
        """Read a DORIS RINEX file, plain or gzip compressed

        Args:
            file_path (String/Path):  Path to the file.
            parser_args:              Input arguments to the parser, for instance strict=True.

        Returns:
            Dataset:  Content of the file.
        """
        from doris import parsers

        return parsers.parse_file("doris_rinex", file_path, **parser_args).as_dataset()

    @classmethod
    def read_stream(cls, stream, **parser_args):
        """Read DORIS RINEX content from a stream of text lines"""
        from doris import parsers

        return parsers.parse_stream("doris_rinex", stream, **parser_args).as_dataset()

    def write(self, file_path=None, stream=None, version=None):
        """Write the dataset as a DORIS RINEX file

        Args:
            file_path (String/Path):   Path to the file, gzip compressed if the name ends in .gz.
            stream:                    Open text stream to write to, used instead of file_path.
            version (Version/String):  Format version to write, default is the version of the dataset.
        """
        from doris import writers

        writers.write("doris_rinex", dset=self, file_path=file_path, stream=stream, version=version)

    #
    # Queries
    #
    def ground_station(self, matcher):
        """Look up a ground station of the catalog, None if no station matches"""
        return self.header.ground_stations.lookup(matcher)

    def epochs(self):
        """Distinct epochs in file order"""
        return list(dict.fromkeys(r.epoch for r in self.records))

    def satellite_clock_offsets(self):
        """Distinct pairs of epoch and clock offset, for epochs that have a clock offset"""
        return list(dict.fromkeys((r.epoch, r.clock_offset) for r in self.records if r.clock_offset is not None))

    def station_observables(self, matcher):
        """Observations of one station at each epoch where it was observed

        Returns:
            List of pairs of epoch and dictionary from observable to observation.
        """
        station = self.ground_station(matcher)
        if station is None:
            return list()
        observables = self.header.observables
        return [
            (r.epoch, dict(zip(observables, r.observations[station])))
            for r in self.records
            if station in r.observations
        ]

    def sampling_histogram(self) -> Dict[float, int]:
        """Number of occurrences of each interval [seconds] between consecutive epochs"""
        nanoseconds = np.array([e.j2000_nanoseconds for e in self.epochs()], dtype=np.int64)
        intervals, counts = np.unique(np.diff(nanoseconds), return_counts=True)
        return {interval / 1e9: int(count) for interval, count in zip(intervals, counts)}

    def dominant_sampling_period(self) -> Optional[float]:
        """Most common interval [seconds] between consecutive epochs, the shortest one if several are equally common"""
        histogram = self.sampling_histogram()
        if not histogram:
            return None
        intervals = np.array(list(histogram.keys()))
        counts = np.array(list(histogram.values()))
        return float(intervals[np.argmax(counts)])

    def is_merged(self):
        """Whether the file was created by merging files"""
        return any("FILE MERGE" in c for c in self.header.comments)

    def is_difference(self):
        """Whether the dataset is the difference of two datasets"""
        comment = config.setting("difference", "comment", "DATASET DIFFERENCE").str
        return any(c.strip() == comment for c in self.header.comments)

    def standard_filename(self, compressed=None):
        """Standard file name of the dataset

        Datasets read from a standard named file keep the satellite code and date of that name.

        Args:
            compressed (Boolean):  Whether to add .gz, default is to follow the name the dataset was read from.

        Returns:
            String:  Standard file name.
        """
        if self.production is not None:
            return self.production.filename(self.header.version, compressed=compressed)

        first_epoch = self.records[0].epoch if self.records else None
        return standard_filename(self.header, compressed=bool(compressed), first_epoch=first_epoch)

    #
    # Transformations
    #
    def difference(self, other):
        """Difference of this dataset and another, see :func:`doris.data.difference.difference`"""
        from doris.data.difference import difference

        return difference(self, other)

    def as_dataframe(self):
        """Observations as a Pandas DataFrame

        One row for each station at each epoch, with one column for each observable. Values that were not measured
        are NaN.

        Returns:
            DataFrame: The observations.
        """
        tokens = [o.token for o in self.header.observables]
        rows = list()
        for record in self.records:
            time = pd.Timestamp(record.epoch.datetime) + pd.Timedelta(nanoseconds=record.epoch.nanosecond % 1000)
            clock = np.nan if record.clock_offset is None else record.clock_offset.offset
            for station, observations in record.observations.items():
                values = [np.nan if o.value is None else o.value for o in observations]
                rows.append([time, station.label, record.flag, clock] + values)

        return pd.DataFrame(rows, columns=["time", "station", "flag", "clock_offset"] + tokens)

    def __repr__(self):
        return (
            f"{type(self).__name__}(satellite={self.header.satellite!r}, version='{self.header.version}', "
            f"num_records={len(self.records)})"
        )
