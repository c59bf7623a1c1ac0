"""Doris library module for logging

Description:
------------

This module provides simple logging inside Doris. To write a log message, simply call one of doris.log-functions
corresponding to the log levels defined by Midgard.


Example:
--------

    >>> from doris.lib import log
    >>> log.init("info", prefix="Doris")
    >>> num_stations = 53
    >>> log.info(f"Read {num_stations} ground stations")
    INFO  [Doris] Read 53 ground stations

"""

# Standard library imports
import functools

# Midgard imports
from midgard.collections import enums
from midgard.dev import log as mg_log

# Make functions from Midgard available
from midgard.dev.log import log, blank, init, file_init, print_file  # noqa


# Make each log level available as a function
for level in enums.get_enum("log_level"):
    globals()[level.name] = functools.partial(mg_log.log, level=level.name)
