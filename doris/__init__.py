"""Doris, reading and writing of DORIS RINEX observation files

This package models the DORIS observation format: the header with its ground station catalog, the epoch records with
their per station observations, the conversion between the two format generations and the differencing of two
datasets. For parsing and writing files, see :mod:`doris.parsers` and :mod:`doris.writers`.

Current Maintainers:
--------------------

{maintainers}

"""

# Standard library imports
from datetime import date as _date
from collections import namedtuple as _namedtuple


# Version of Doris, updated by bumpversion
__version__ = "0.4.0"


# People working on Doris, with the period they are responsible for it
_Author = _namedtuple("_Author", ["name", "email", "start", "end"])
_AUTHORS = [
    _Author("Geodetic Institute, Kartverket", "doris@kartverket.no", _date(2021, 1, 1), _date.max),
]


def _active_authors():
    today = _date.today()
    return [a for a in _AUTHORS if a.start < today < a.end]


__author__ = ", ".join(a.name for a in _active_authors())
__contact__ = ", ".join(a.email for a in _active_authors())
__copyright__ = f"2021 - {_date.today().year} Kartverket"


def _update_doc(doc):
    """Fill in the current maintainers in the package doc string"""
    return doc.format(maintainers="\n".join(f"+ {a.name} <{a.email}>" for a in _active_authors()))


__doc__ = _update_doc(__doc__)
