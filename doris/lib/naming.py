"""Standard file names of DORIS RINEX files

Description:
------------

DORIS RINEX files are named after the satellite and the day of the first observation:

    SSSSSYYDDD[.gz]

where SSSSS is the first five letters or digits of the satellite name, YY the two digit year and DDD the day of year.
Generation 3 names are upper case, generation 2 names lower case. For instance, CRYOSAT-2 observed from day 164 of 2018
gives CRYOS18164 (generation 3) or cryos18164 (generation 2).

The ProductionAttributes recovered from a standard file name are kept on datasets read from such files.

"""

# Standard library imports
from dataclasses import dataclass
import pathlib
import re

# Doris imports
from doris.lib.exceptions import FormatError
from doris.lib.layout import expand_year, layout_for

SATELLITE_CODE_LENGTH = 5
_FILENAME_RE = re.compile(r"^(?P<satellite>[A-Z0-9]{5})(?P<year>\d{2})(?P<doy>\d{3})(?P<gz>\.GZ)?$")


def satellite_code(satellite):
    """Five character code of a satellite name, padded with X if the name is short"""
    code = re.sub(r"[^A-Za-z0-9]", "", satellite).upper()
    return code[:SATELLITE_CODE_LENGTH].ljust(SATELLITE_CODE_LENGTH, "X")


def standard_filename(header, compressed=False, first_epoch=None):
    """Standard file name of a file with the given header

    Args:
        header (Header):        Header of the file.
        compressed (Boolean):   Whether the file is gzip compressed.
        first_epoch (Epoch):    Epoch used when the header has no time of first observation.

    Returns:
        String:  Standard file name.
    """
    epoch = header.time_of_first_observation or first_epoch
    if epoch is None:
        raise FormatError("Can not name a file without time of first observation")

    attrs = ProductionAttributes(satellite_code(header.satellite), epoch.year, epoch.day_of_year, compressed)
    return attrs.filename(header.version)


@dataclass(frozen=True)
class ProductionAttributes:
    """Attributes encoded in a standard file name"""

    satellite: str
    year: int
    doy: int
    gzip_compressed: bool = False

    @classmethod
    def parse(cls, file_name):
        """Read the production attributes from a standard file name

        Args:
            file_name (String/Path):  File name, any directory part is ignored.

        Returns:
            ProductionAttributes:  Attributes of the file name.
        """
        name = pathlib.Path(file_name).name
        match = _FILENAME_RE.match(name.upper())
        if not match:
            raise FormatError(f"{name!r} is not a standard DORIS RINEX file name")

        doy = int(match["doy"])
        if not 1 <= doy <= 366:
            raise FormatError(f"Invalid day of year {doy} in file name {name!r}")
        return cls(match["satellite"], expand_year(int(match["year"])), doy, match["gz"] is not None)

    def filename(self, version, compressed=None):
        compressed = self.gzip_compressed if compressed is None else compressed
        name = layout_for(version).format_filename(f"{self.satellite}{self.year % 100:02d}{self.doy:03d}")
        return f"{name}.gz" if compressed else name
