"""Write DORIS observations in the DORIS RINEX format

Description:
------------

Writes a Dataset in the layout of its own format version, or of another version given explicitly or in the `version`
option of the `writer` configuration section. Optional header lines are only written when the header has a value for
them, and the ground stations are written in catalog order. Values that were not measured are written as blanks.

Writing a generation 3 dataset as generation 2 loses the COSPAR number, the L2 / L1 date offset and the epoch precision
below 100 nanoseconds. This is logged as a warning.

"""

# Standard library imports
from contextlib import contextmanager

# Midgard imports
from midgard.dev import plugins
from midgard.dev.timer import Timer

# Doris imports
from doris.data.header import Version
from doris.lib import config
from doris.lib import files
from doris.lib import log
from doris.lib.layout import layout_for


@plugins.register
def doris_rinex(dset, file_path=None, stream=None, version=None):
    """Write a dataset as a DORIS RINEX file

    Args:
        dset (Dataset):           Header and records that will be written.
        file_path (String/Path):  Path to the file, gzip compressed if the name ends in .gz.
        stream:                   Open text stream to write to, used instead of file_path.
        version (Version/String): Format version to write, default is the version of the dataset.
    """
    version = _target_version(dset, version)
    layout = layout_for(version)
    if layout.generation < dset.header.version.major:
        _warn_lossy_conversion(dset, version, layout)

    with Timer(f"Finish writing DORIS RINEX {version} to {file_path or '<stream>'} in", logger=log.debug):
        with _open_output(file_path, stream) as fid:
            for line in header_lines(dset.header, layout, version):
                fid.write(f"{line}\n")
            for record in dset.records:
                for line in record_lines(record, layout):
                    fid.write(f"{line}\n")


def header_lines(header, layout, version):
    """Lines of the header of a DORIS RINEX file

    Args:
        header (Header):   Header that will be written.
        layout (Layout):   Layout of the format generation.
        version (Version): Version written on the first line.

    Returns:
        List of strings, one for each line.
    """
    lines = list()

    def add(content, label):
        lines.append(f"{content:60.60s}{label}")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    #      3.00           O                   D                   RINEX VERSION / TYPE
    add(f"{str(version):>9s}{'':11s}{'O':20s}{'D':20s}", "RINEX VERSION / TYPE")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    # CRYOSAT-2                                                   SATELLITE NAME
    add(header.satellite, layout.satellite_label)

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    # 2010-013A                                                   COSPAR NUMBER
    if layout.has_cospar and header.cospar is not None:
        add(str(header.cospar), "COSPAR NUMBER")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    # Expert              CNES                20180614 090016 UTC PGM / RUN BY / DATE
    add(f"{header.program:20.20s}{header.run_by:20.20s}{header.date:20.20s}", "PGM / RUN BY / DATE")

    for comment in header.comments:
        add(comment, "COMMENT")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    # SPA_BN1_4.7P1       CNES                                    OBSERVER / AGENCY
    add(f"{header.observer:20.20s}{header.agency:40.40s}", "OBSERVER / AGENCY")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    # CHAIN1              DGXX                1.00                REC # / TYPE / VERS
    receiver = header.receiver
    add(f"{receiver.serial_number:20.20s}{receiver.model:20.20s}{receiver.firmware:20.20s}", "REC # / TYPE / VERS")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    # DORIS               STAREC                                  ANT # / TYPE
    add(f"{header.antenna.serial_number:20.20s}{header.antenna.model:20.20s}", "ANT # / TYPE")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    #       1.4000        0.0000        0.0000                    CENTER OF MASS: XYZ
    if header.center_of_mass is not None:
        add("".join(f"{c:14.4f}" for c in header.center_of_mass), "CENTER OF MASS: XYZ")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    # D   10 L1  L2  C1  C2  W1  W2  F   P   T   H                SYS / # / OBS TYPES
    for line in layout.format_observables(header.observables):
        add(line, layout.observables_label)

    for line in header.scale_factors:
        add(line, "SYS / SCALE FACTOR")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    #  2018     6    13     0     0   28.0000000     TAI         TIME OF FIRST OBS
    if header.time_of_first_observation is not None:
        add(_format_time_of_obs(header.time_of_first_observation, header.time_system), "TIME OF FIRST OBS")
    if header.time_of_last_observation is not None:
        add(_format_time_of_obs(header.time_of_last_observation, header.time_system), "TIME OF LAST OBS")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    # D           2.000                                           L2 / L1 DATE OFFSET
    if layout.has_date_offset:
        add(f"D  {header.l2_l1_date_offset:14.3f}", "L2 / L1 DATE OFFSET")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    #     53                                                      # OF STATIONS
    add(f"{len(header.ground_stations):6d}", "# OF STATIONS")

    # ----+----1----+----2----+----3----+----4----+----5----+----6----+----7----+----8
    # D01  OWFC OWENGA                        50253S002  3   0    STATION REFERENCE
    for station in header.ground_stations:
        domes = "" if station.domes is None else str(station.domes)
        add(
            f"{station.key}  {station.label:4.4s} {station.site:30.30s}{domes:9s}  "
            f"{station.beacon_revision:1d} {station.frequency_shift:3d}",
            "STATION REFERENCE",
        )

    if header.doi is not None:
        add(header.doi, "DOI")
    if header.license is not None:
        add(header.license, "LICENSE OF USE")

    add("", "END OF HEADER")
    return lines


def record_lines(record, layout):
    """Lines of one epoch block

    Args:
        record (EpochRecord):  Record that will be written.
        layout (Layout):       Layout of the format generation.

    Returns:
        List of strings, one for each line.
    """
    epoch = record.epoch.truncated(layout.resolution_ns)
    if record.is_event:
        count = len(record.event_lines) if record.event_count is None else record.event_count
        return [layout.format_epoch_line(epoch, record.flag, count, record.clock_offset)] + list(record.event_lines)

    lines = [layout.format_epoch_line(epoch, record.flag, len(record.observations), record.clock_offset)]
    lines.extend(f"{comment:60.60s}COMMENT" for comment in record.comments)
    for station, observations in record.observations.items():
        lines.extend(layout.format_observations(station.key, observations))
    return lines


def _format_time_of_obs(epoch, time_system):
    return (
        f"{epoch.year:6d}{epoch.month:6d}{epoch.day:6d}{epoch.hour:6d}{epoch.minute:6d}"
        f"{epoch.second:5d}.{epoch.nanosecond // 100:07d}{'':5s}{time_system:3.3s}"
    )


def _target_version(dset, version):
    if version is None:
        version = config.setting("writer", "version", "").str or None
    if version is None:
        return dset.header.version
    return version if isinstance(version, Version) else Version.parse(str(version))


def _warn_lossy_conversion(dset, version, layout):
    """Log what is lost when writing a dataset in the older generation"""
    header = dset.header
    lost = list()
    if header.cospar is not None:
        lost.append("COSPAR number")
    if header.l2_l1_date_offset:
        lost.append("L2 / L1 date offset")
    if any(r.epoch.truncated(layout.resolution_ns) != r.epoch for r in dset.records):
        lost.append(f"epoch precision below {layout.resolution_ns} ns")
    if lost:
        log.warn(f"Writing version {header.version} data as version {version} loses {', '.join(lost)}")


@contextmanager
def _open_output(file_path, stream):
    if stream is not None:
        yield stream
    elif file_path is None:
        raise ValueError("Give either file_path or stream to write DORIS RINEX data")
    else:
        encoding = config.setting("parser", "encoding", "utf-8").str
        with files.open_path(file_path, description="doris_rinex", mode="wt", encoding=encoding) as fid:
            yield fid
