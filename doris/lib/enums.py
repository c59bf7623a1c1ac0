"""Definition of Doris-specific enumerations

Description:
------------

Custom enumerations used by Doris for structured names.


"""

# Standard library imports
import enum

# Make Midgard-enums functions available
from midgard.collections.enums import get_enum, get_value, register_enum  # noqa


#
# ENUMS
#
@register_enum("frequency")
class Frequency(str, enum.Enum):
    """The two DORIS frequency channels, valued by their digit in observable tokens"""

    doris1 = "1"  # S1 channel, 2.036 GHz
    doris2 = "2"  # U2 channel, 401.25 MHz


@register_enum("epoch_flag")
class EpochFlag(enum.IntEnum):
    """Meaning of the epoch flag, values above 1 announce special records"""

    ok = 0
    power_failure = 1
    antenna_moved = 2
    new_site = 3
    header_information = 4
    external_event = 5
