"""Observables of DORIS RINEX files

Description:
------------

The set of observables is closed. Each observable is written in the file as a short token:

    ======  =========================  ==========
    Token   Observable                 Channel
    ======  =========================  ==========
    L1, L2  Unambiguous phase range    DORIS1/2
    C1, C2  Pseudo range               DORIS1/2
    W1, W2  Received power             DORIS1/2
    F       Relative frequency ratio   -
    P       Ground pressure            -
    T       Ground temperature         -
    H       Ground humidity rate       -
    ======  =========================  ==========

"""

# Standard library imports
from collections import namedtuple

# Doris imports
from doris.lib import enums
from doris.lib.exceptions import FormatError


class Observable(namedtuple("Observable", ["kind", "frequency"])):
    """One observable, identified by its kind and, for the channel dependent kinds, its frequency"""

    __slots__ = ()

    # Kinds with a channel, keyed by the first letter of the token
    CHANNEL_KINDS = {"L": "phase_range", "C": "pseudo_range", "W": "power"}

    # Kinds without a channel
    SCALAR_KINDS = {"F": "frequency_ratio", "P": "pressure", "T": "temperature", "H": "humidity_rate"}

    @classmethod
    def parse(cls, token):
        """Parse an observable token like L1 or T, raising FormatError for unknown tokens"""
        token = token.strip().upper()
        if token in cls.SCALAR_KINDS:
            return cls(cls.SCALAR_KINDS[token], None)

        if len(token) == 2 and token[0] in cls.CHANNEL_KINDS:
            try:
                frequency = enums.Frequency(token[1])
            except ValueError:
                raise FormatError(f"Unknown DORIS frequency in observable {token!r}") from None
            return cls(cls.CHANNEL_KINDS[token[0]], frequency)

        raise FormatError(f"Unknown observable {token!r}")

    @property
    def token(self):
        letter = {v: k for k, v in {**self.CHANNEL_KINDS, **self.SCALAR_KINDS}.items()}[self.kind]
        return letter if self.frequency is None else f"{letter}{self.frequency.value}"

    @property
    def is_meteo(self):
        return self.kind in ("pressure", "temperature", "humidity_rate")

    def __str__(self):
        return self.token


# The observables, for convenience
L1 = Observable.parse("L1")
L2 = Observable.parse("L2")
C1 = Observable.parse("C1")
C2 = Observable.parse("C2")
W1 = Observable.parse("W1")
W2 = Observable.parse("W2")
F = Observable.parse("F")
P = Observable.parse("P")
T = Observable.parse("T")
H = Observable.parse("H")
