"""Doris library module for opening files

Example:
--------

    from doris.lib import files
    with files.open_path("cs2rx18164.gz", mode="rt") as fid:
        for line in fid:
            print(line.rstrip())

Description:
------------

DORIS RINEX files are distributed both plain and gzip compressed. open_path hides the difference: paths ending in .gz
are opened through gzip, all other paths with the built-in open. Every opened file is noted in the debug log.

"""

# Standard library imports
import builtins
from contextlib import contextmanager
import gzip
import pathlib

# Doris imports
from doris.lib import log


@contextmanager
def open_path(file_path, description="", mode="rt", create_dirs=False, is_zipped=None, **open_args):
    """Open a plain or gzip compressed file as a context manager

    Args:
        file_path (String/Path):  Path to the file.
        description (String):     What the file contains, used in the log message.
        mode (String):            Mode as for the built-in open, typically 'rt' or 'wt'.
        create_dirs (Boolean):    Whether to create missing parent directories.
        is_zipped (Boolean):      Force gzip on or off, default is to decide from the file name.
        open_args:                Passed on to open, for instance encoding.

    Returns:
        File object.
    """
    file_path = pathlib.Path(file_path)
    _log_file_open(file_path, description, mode)
    if create_dirs:
        file_path.parent.mkdir(parents=True, exist_ok=True)

    opener = gzip.open if (is_path_zipped(file_path) if is_zipped is None else is_zipped) else builtins.open
    with opener(file_path, mode=mode, **open_args) as fid:
        yield fid


def is_path_zipped(file_path):
    """Whether a path points to a gzip compressed file, decided by the .gz suffix"""
    return str(file_path).endswith(".gz")


def _log_file_open(file_path, description, mode):
    what = f"{description} " if description else ""
    if "w" in mode:
        action = "Overwrite {}on {}" if file_path.is_file() else "Write {}to {}"
    elif "a" in mode:
        action = "Append {}to {}"
    else:
        action = "Read {}from {}"
    log.debug(action.format(what, file_path))
