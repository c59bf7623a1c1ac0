"""Definition of Doris-specific exceptions

Description:
------------

Custom exceptions used by Doris for more specific error messages and handling. Lookups that find nothing return None
rather than raising.

"""

from midgard.dev.exceptions import MidgardException  # noqa


class DorisException(Exception):
    pass


class FormatError(DorisException):
    """Content does not follow the DORIS RINEX grammar

    Raised for invalid identifiers, unknown observables and missing or malformed required header fields.
    """

    pass


class UnsupportedVersionError(FormatError):
    pass


class LayoutError(DorisException):
    """An epoch block can not be split unambiguously into stations and observations"""

    pass
