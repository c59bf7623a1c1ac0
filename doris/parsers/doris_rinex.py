"""A parser for reading DORIS RINEX observation files

Example:
--------

    from doris import parsers
    parser = parsers.parse_file(parser_name="doris_rinex", file_path="cs2rx18164")
    dset = parser.as_dataset()

Description:
------------

Reads DORIS RINEX observation files of generation 2 and 3. The version on the first line selects the layout
(:mod:`doris.lib.layout`) used for the rest of the file.

Header: required fields (version and observables) that are missing or malformed raise FormatError, as does a missing END
OF HEADER. Malformed optional fields are logged as warnings and left out. Unknown header labels are skipped.

Body: the lines after the header are read in epoch blocks, each starting at an epoch line. Blocks are parsed one at a
time, so that `iter_records` can go through large files without keeping all records in memory. A value that can not be
read is kept as not measured. A block that can not be split unambiguously into stations and values (see LayoutError) is
dropped, logged and listed in `meta["dropped_epochs"]`, and parsing continues at the next epoch line. With the
configuration option `strict_layout` in the `parser` section (or `strict=True`) such a block aborts the parse instead.

Epochs flagged with an event (flag above 1) are kept with the lines following the epoch line, verbatim, and with the
number given on the epoch line. COMMENT lines among the station lines of an epoch are kept with the epoch record.

"""

# Standard library imports
import collections
import dataclasses

# Midgard imports
from midgard.dev import plugins

# Doris imports
from doris.data.header import Antenna, Header, Receiver, Version
from doris.data.identifiers import Cospar, Domes
from doris.data.observable import Observable
from doris.data.record import EpochRecord, NOT_MEASURED
from doris.data.station import ByUniqueId, GroundStation, StationCatalog
from doris.data.time import Epoch
from doris.lib import config
from doris.lib import log
from doris.lib.exceptions import FormatError, LayoutError
from doris.lib.layout import FIELDS_PER_LINE, layout_for
from doris.lib.naming import ProductionAttributes
from doris.parsers._parser_chain import ChainParser, ParserDef


@plugins.register
class DorisRinexParser(ChainParser):
    """A parser for reading DORIS RINEX observation files

    Attributes:
        data (Dict):        The header (key `header`) and the list of epoch records (key `records`).
        meta (Dict):        Version of the file and the epoch blocks that were dropped.
        layout (Layout):    Layout of the format generation of the file, known after the first line.
        strict (Boolean):   Whether an ambiguous epoch block aborts the parse.
    """

    def __init__(self, file_path=None, stream=None, encoding=None, strict=None):
        """Set up the DORIS RINEX parser

        Args:
            file_path (String/Path):  Path to file that will be read.
            stream (Iterable):        Lines that will be read, used instead of file_path.
            encoding (String):        Encoding of the file.
            strict (Boolean):         Abort on ambiguous epoch blocks, default is taken from the configuration.
        """
        super().__init__(file_path=file_path, stream=stream, encoding=encoding)
        self.strict = config.setting("parser", "strict_layout", False).bool if strict is None else strict
        self.layout = None
        self.meta["dropped_epochs"] = list()
        self._completed = collections.deque()

    #
    # PARSERS
    #
    def setup_parser(self):
        """Parsers defined for reading DORIS RINEX files line by line

        First the header is read, then the body one epoch block at a time until the file ends.
        """
        # Parser for DORIS RINEX header
        yield ParserDef(
            end_marker=lambda line, _ln, _n: line[60:73] == "END OF HEADER",
            label=self._header_label,
            parser_def={
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                #      3.00           O                   D                   RINEX VERSION / TYPE
                "RINEX VERSION / TYPE": {
                    "parser": self.parse_version,
                    "fields": {"version": (0, 9), "file_type": (20, 21), "system": (40, 41)},
                },
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                # CRYOSAT-2                                                   SATELLITE NAME
                "SATELLITE NAME": {"parser": self.parse_satellite_name, "fields": {"satellite": (0, 60)}},
                "MARKER NAME": {"parser": self.parse_satellite_name, "fields": {"satellite": (0, 60)}},
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                # 2010-013A                                                   COSPAR NUMBER
                "COSPAR NUMBER": {"parser": self.parse_cospar, "fields": {"cospar": (0, 20)}},
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                # Expert              CNES                20180614 090016 UTC PGM / RUN BY / DATE
                "PGM / RUN BY / DATE": {
                    "parser": self.parse_string,
                    "fields": {"program": (0, 20), "run_by": (20, 40), "date": (40, 60)},
                },
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                # SPA_BN1_4.7P1                                               COMMENT
                "COMMENT": {"parser": self.parse_comment, "fields": None},
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                # SPA_BN1_4.7P1       CNES                                    OBSERVER / AGENCY
                "OBSERVER / AGENCY": {"parser": self.parse_string, "fields": {"observer": (0, 20), "agency": (20, 60)}},
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                # CHAIN1              DGXX                1.00                REC # / TYPE / VERS
                "REC # / TYPE / VERS": {
                    "parser": self.parse_string,
                    "fields": {"receiver_serial": (0, 20), "receiver_model": (20, 40), "receiver_firmware": (40, 60)},
                },
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                # DORIS               STAREC                                  ANT # / TYPE
                "ANT # / TYPE": {
                    "parser": self.parse_string,
                    "fields": {"antenna_serial": (0, 20), "antenna_model": (20, 40)},
                },
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                #       1.4000        0.0000        0.0000                    CENTER OF MASS: XYZ
                "CENTER OF MASS: XYZ": {
                    "parser": self.parse_center_of_mass,
                    "fields": {"x": (0, 14), "y": (14, 28), "z": (28, 42)},
                },
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                # D   10 L1  L2  C1  C2  W1  W2  F   P   T   H                SYS / # / OBS TYPES
                "SYS / # / OBS TYPES": {"parser": self.parse_observables, "fields": None},
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                #     10    L1    L2    C1    C2    W1    W2     F     P     T# / TYPES OF OBSERV
                "# / TYPES OF OBSERV": {"parser": self.parse_observables, "fields": None},
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                #  2018     6    13     0     0   28.0000000     TAI         TIME OF FIRST OBS
                "TIME OF FIRST OBS": {
                    "parser": self.parse_time_of_obs,
                    "fields": {
                        "year": (0, 6),
                        "month": (6, 12),
                        "day": (12, 18),
                        "hour": (18, 24),
                        "minute": (24, 30),
                        "second": (30, 43),
                        "time_sys": (48, 51),
                    },
                },
                "TIME OF LAST OBS": {
                    "parser": self.parse_time_of_obs,
                    "fields": {
                        "year": (0, 6),
                        "month": (6, 12),
                        "day": (12, 18),
                        "hour": (18, 24),
                        "minute": (24, 30),
                        "second": (30, 43),
                        "time_sys": (48, 51),
                    },
                },
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                # D           2.000                                           L2 / L1 DATE OFFSET
                "L2 / L1 DATE OFFSET": {"parser": self.parse_date_offset, "fields": {"offset": (3, 17)}},
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                #     53                                                      # OF STATIONS
                "# OF STATIONS": {"parser": self.parse_num_stations, "fields": {"num_stations": (0, 6)}},
                # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
                # D01  OWFC OWENGA                        50253S002  3   0    STATION REFERENCE
                "STATION REFERENCE": {"parser": self.parse_station, "fields": None},
                "SYS / SCALE FACTOR": {"parser": self.parse_scale_factor, "fields": None},
                "DOI": {"parser": self.parse_string, "fields": {"doi": (0, 60)}},
                "LICENSE OF USE": {"parser": self.parse_string, "fields": {"license": (0, 60)}},
                "END OF HEADER": {"parser": self.parse_end_of_header, "fields": None},
            },
            end_callback=self.setup_header,
        )

        # Parser for DORIS RINEX epoch blocks, repeated until the end of the file
        while True:
            yield ParserDef(
                end_marker=lambda _l, _ln, next_line: self.layout.is_epoch_line(next_line),
                label=lambda _l, _ln: "block_line",
                parser_def={"block_line": {"parser": self.parse_block_line, "fields": None}},
                skip_line=lambda line: not line.strip(),
                end_callback=self.parse_epoch_block,
            )

    #
    # HEADER PARSERS
    #
    def _header_label(self, line, line_num):
        """Label of a header line, the version line must come first"""
        label = line[60:].strip()
        if line_num == 1 and label != "RINEX VERSION / TYPE":
            raise FormatError(f"File {self.source} does not start with RINEX VERSION / TYPE")
        return label

    def parse_version(self, line, cache):
        """Parse the version line, selecting the layout of the rest of the file"""
        if line["file_type"] != "O" or line["system"] != "D":
            raise FormatError(
                f"File {self.source} is not a DORIS observation file (type {line['file_type']!r}, "
                f"system {line['system']!r})"
            )
        cache["version"] = Version.parse(line["version"])
        self.layout = layout_for(cache["version"])
        self.meta["version"] = str(cache["version"])

    def parse_string(self, line, cache):
        """Parse free text header fields, kept as given"""
        cache.update(line)

    def parse_comment(self, line, cache):
        cache.setdefault("comments", list()).append(line[:60].rstrip())

    def _other_generation(self, cache, expected_label):
        """Check whether a generation specific header line belongs to the generation of the file"""
        if cache["line_label"] == expected_label:
            return False
        log.debug(f"Header line {cache['line_label']!r} is not used in version {self.meta['version']}. Ignored")
        return True

    def parse_satellite_name(self, line, cache):
        if not self._other_generation(cache, self.layout.satellite_label):
            cache["satellite"] = line["satellite"]

    def parse_cospar(self, line, cache):
        if not self.layout.has_cospar:
            self._other_generation(cache, None)
            return
        try:
            cache["cospar"] = Cospar.parse(line["cospar"])
        except FormatError as err:
            log.warn(f"{err} in {self.source}. COSPAR number ignored")

    def parse_center_of_mass(self, line, cache):
        try:
            cache["center_of_mass"] = (float(line["x"]), float(line["y"]), float(line["z"]))
        except ValueError:
            log.warn(f"Invalid CENTER OF MASS: XYZ {line} in {self.source}. Center of mass ignored")

    def parse_observables(self, line, cache):
        """Parse the observable list, possibly continued over several lines"""
        if self._other_generation(cache, self.layout.observables_label):
            return
        if "num_observables" not in cache:
            cache["num_observables"] = self.layout.observable_count(line)
            cache["observable_tokens"] = list()
        cache["observable_tokens"].extend(self.layout.observable_tokens(line))

    def parse_time_of_obs(self, line, cache):
        """Parse TIME OF FIRST OBS and TIME OF LAST OBS, both optional"""
        key = "time_of_first_observation" if cache["line_label"] == "TIME OF FIRST OBS" else "time_of_last_observation"
        try:
            whole, _, fraction = line["second"].partition(".")
            cache[key] = Epoch(
                int(line["year"]),
                int(line["month"]),
                int(line["day"]),
                int(line["hour"]),
                int(line["minute"]),
                int(whole),
                int(fraction.ljust(7, "0")[:7]) * 100,
            )
        except (ValueError, FormatError):
            log.warn(f"Invalid {cache['line_label']} in {self.source}. Time ignored")
            return
        if line["time_sys"]:
            cache["time_system"] = line["time_sys"]

    def parse_date_offset(self, line, cache):
        if not self.layout.has_date_offset:
            self._other_generation(cache, None)
            return
        try:
            cache["l2_l1_date_offset"] = float(line["offset"])
        except ValueError:
            log.warn(f"Invalid L2 / L1 DATE OFFSET {line['offset']!r} in {self.source}. Offset ignored")

    def parse_num_stations(self, line, cache):
        try:
            cache["num_stations"] = int(line["num_stations"])
        except ValueError:
            log.warn(f"Invalid # OF STATIONS {line['num_stations']!r} in {self.source}")

    def parse_station(self, line, cache):
        """Parse one STATION REFERENCE line into the station catalog

        A station whose key can not be read is dropped, a station with an invalid DOMES number is kept without it.
        """
        # ----+----1----+----2----+----3----+----4----+----5----+---
        # D13  TLSB TOULOUSE                      10003S005  3   0
        catalog = cache.setdefault("ground_stations", StationCatalog())
        try:
            unique_id = int(line[1:3])
            beacon_revision = int(line[51:52].strip() or 3)
            frequency_shift = int(line[53:56].strip() or 0)
            station = GroundStation(
                label=line[5:9].strip(),
                site=line[10:40].strip(),
                domes=None,
                unique_id=unique_id,
                beacon_revision=beacon_revision,
                frequency_shift=frequency_shift,
            )
        except ValueError as err:
            log.warn(f"Invalid STATION REFERENCE {line[:60].rstrip()!r} in {self.source}: {err}. Station ignored")
            return

        if line[40:49].strip():
            try:
                station = dataclasses.replace(station, domes=Domes.parse(line[40:49]))
            except FormatError as err:
                log.warn(f"{err} for station {station.key} in {self.source}. DOMES number ignored")

        catalog.insert(station)

    def parse_scale_factor(self, line, cache):
        """Keep SYS / SCALE FACTOR lines as given, the factors are not applied to the values"""
        cache.setdefault("scale_factors", list()).append(line[:60].rstrip())
        log.warn(f"SYS / SCALE FACTOR in {self.source} is not applied, values are read as given")

    def parse_end_of_header(self, line, cache):
        cache["end_of_header"] = True

    def parse_line(self, line, cache, parser):
        """Remember the label of the header line being parsed, used by parsers handling several labels"""
        cache["line_label"] = line[60:].strip()
        if "header" not in self.data and cache["line_label"] not in parser.parser_def:
            log.debug(f"Unknown header label {cache['line_label']!r} in {self.source}. Line ignored")
        super().parse_line(line, cache, parser)

    def setup_header(self, cache):
        """Collect the parsed header fields into a Header"""
        if not cache.get("end_of_header"):
            raise FormatError(f"Missing END OF HEADER in {self.source}")
        if "version" not in cache:
            raise FormatError(f"Missing RINEX VERSION / TYPE in {self.source}")
        if "num_observables" not in cache:
            raise FormatError(f"Missing {self.layout.observables_label} in {self.source}")

        tokens = cache["observable_tokens"]
        if len(tokens) != cache["num_observables"]:
            raise FormatError(
                f"{self.layout.observables_label} in {self.source} declares {cache['num_observables']} observables, "
                f"but lists {len(tokens)}"
            )
        observables = [Observable.parse(t) for t in tokens]

        catalog = cache.get("ground_stations", StationCatalog())
        if "num_stations" in cache and cache["num_stations"] != len(catalog):
            log.warn(f"# OF STATIONS is {cache['num_stations']} in {self.source}, but {len(catalog)} are listed")

        header = Header(
            version=cache["version"],
            satellite=cache.get("satellite", ""),
            cospar=cache.get("cospar"),
            program=cache.get("program", ""),
            run_by=cache.get("run_by", ""),
            date=cache.get("date", ""),
            observer=cache.get("observer", ""),
            agency=cache.get("agency", ""),
            comments=cache.get("comments", list()),
            receiver=Receiver(
                cache.get("receiver_serial", ""), cache.get("receiver_model", ""), cache.get("receiver_firmware", "")
            ),
            antenna=Antenna(cache.get("antenna_serial", ""), cache.get("antenna_model", "")),
            center_of_mass=cache.get("center_of_mass"),
            observables=observables,
            time_of_first_observation=cache.get("time_of_first_observation"),
            time_of_last_observation=cache.get("time_of_last_observation"),
            time_system=cache.get("time_system", ""),
            l2_l1_date_offset=cache.get("l2_l1_date_offset", 0.0),
            ground_stations=catalog,
            scale_factors=cache.get("scale_factors", list()),
            doi=cache.get("doi") or None,
            license=cache.get("license") or None,
        )
        self.data["header"] = header
        log.debug(
            f"Read header of {self.source}: {header.satellite} version {header.version}, "
            f"{len(catalog)} stations, {len(observables)} observables"
        )

    def end_of_data(self, parser, cache):
        if "header" not in self.data:
            raise FormatError(f"No DORIS RINEX header found in {self.source}")

    #
    # BODY PARSERS
    #
    def parse_block_line(self, line, cache):
        cache.setdefault("lines", list()).append(line)

    def parse_epoch_block(self, cache):
        """Turn the lines of one epoch block into an epoch record

        Blocks that are ambiguous are dropped, unless the parser is strict.
        """
        lines = cache.get("lines")
        if not lines:
            return

        try:
            record = self.parse_record(lines)
        except LayoutError as err:
            if self.strict:
                raise
            log.warn(f"Dropping epoch block in {self.source}: {err}")
            self.meta["dropped_epochs"].append(dict(epoch_line=lines[0], reason=str(err)))
            return

        self._completed.append(record)

    def parse_record(self, lines):
        """Parse the lines of one epoch block

        Args:
            lines (List):  Epoch line followed by the station lines of the epoch.

        Returns:
            EpochRecord:  The epoch with its observations.
        """
        epoch_line, *body = lines
        if not self.layout.is_epoch_line(epoch_line):
            raise LayoutError(f"Expected epoch line, found {epoch_line!r}")
        epoch, flag, num_records, clock_offset = self.layout.parse_epoch_line(epoch_line)

        # Events are kept verbatim, the count on the epoch line is not checked since its meaning depends on the flag
        if flag > 1:
            record = EpochRecord(epoch, flag, clock_offset, event_lines=body, event_count=num_records)
            log.debug(f"Epoch {epoch} in {self.source} flagged {record.flag_name}, {len(body)} lines kept as is")
            return record

        header = self.data["header"]
        num_obs = header.num_observables
        max_lines = self.layout.lines_per_station(num_obs)
        observations = dict()
        comments = list()
        station_lines = list()  # Pairs of station (None if unknown) and lines
        for line in body:
            if line[60:].strip() == "COMMENT":
                comments.append(line[:60].rstrip())
            elif self.layout.is_station_line(line):
                station = header.ground_stations.lookup(ByUniqueId(self.layout.station_id(line)))
                station_lines.append((station, [line.rstrip()]))
            elif self.layout.is_continuation_line(line):
                if not station_lines:
                    raise LayoutError(f"Continuation line without station line in epoch {epoch}")
                station_lines[-1][1].append(line.rstrip())
                if len(station_lines[-1][1]) > max_lines:
                    raise LayoutError(
                        f"More than {max_lines} lines for station {station_lines[-1][1][0][:3]} in epoch {epoch}"
                    )
            else:
                raise LayoutError(f"Unexpected line {line!r} in epoch {epoch}")

        if len(station_lines) != num_records:
            raise LayoutError(f"Epoch {epoch} announces {num_records} stations, found {len(station_lines)}")

        for station, station_text in station_lines:
            if station is None:
                log.warn(f"Unknown station {station_text[0][:3]} in epoch {epoch} of {self.source}. Station skipped")
                continue
            if station in observations:
                raise LayoutError(f"Station {station.key} appears twice in epoch {epoch}")
            observations[station] = self._station_observations(station_text, num_obs, epoch)

        return EpochRecord(epoch, flag, clock_offset, observations, comments=comments)

    def _station_observations(self, lines, num_obs, epoch):
        """Observations of one station, missing trailing values are not measured"""
        values = list()
        for line in lines:
            line_values = self.layout.parse_observations(line, warn=lambda msg: log.warn(f"{msg} at {epoch}"))
            values.extend(line_values + [NOT_MEASURED] * (FIELDS_PER_LINE - len(line_values)))

        if any(v != NOT_MEASURED for v in values[num_obs:]):
            raise LayoutError(f"More than {num_obs} values for station {lines[0][:3]} in epoch {epoch}")
        return tuple(values[:num_obs] + [NOT_MEASURED] * (num_obs - len(values)))

    #
    # RESULTS
    #
    def iter_records(self):
        """Read the file lazily, yielding one epoch record at a time

        The header is available in `self.data["header"]` once the first record is yielded.
        """
        for _ in self.iter_groups():
            while self._completed:
                yield self._completed.popleft()

    def read_data(self):
        """Read the header and all epoch records"""
        self.data["records"] = list(self.iter_records())
        if self.meta["dropped_epochs"]:
            log.warn(f"Dropped {len(self.meta['dropped_epochs'])} epoch blocks in {self.source}")

    def as_dataset(self):
        """Return the parsed data as a Doris Dataset

        Datasets read from a file with a standard file name remember the production attributes of the name.
        """
        from doris.data.dataset import Dataset

        production = None
        if self.file_path is not None:
            try:
                production = ProductionAttributes.parse(self.file_path)
            except FormatError:
                log.debug(f"{self.file_path.name} is not a standard file name")

        return Dataset(self.data["header"], self.data.get("records", list()), production=production)

    def as_dataframe(self, index=None):
        """Observations as a Pandas DataFrame, one row for each station at each epoch

        See :meth:`doris.data.dataset.Dataset.as_dataframe` for the columns.

        Args:
            index (String / List):  Column(s) to use as index, for instance ["time", "station"].
        """
        df = self.as_dataset().as_dataframe()
        return df if index is None else df.set_index(index, drop=True)
