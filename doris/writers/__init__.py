"""Framework for writing output in different formats

Description:
------------

Each output format should be defined in a separate .py-file. The function inside the .py-file that should be called
need to be decorated with the :func:`~midgard.dev.plugins.register` decorator as follows::

    from midgard.dev import plugins

    @plugins.register
    def write_as_fancy_format(dset, file_path=None, stream=None):
        ...

The decorated function will be called with a :class:`~doris.data.dataset.Dataset` with the data that should be
output, and either a file path or an open stream to write to.

"""

# Midgard imports
from midgard.dev import plugins


def names():
    """List the names of the available writers"""
    return plugins.names(package_name=__name__)


def write(writer_name, dset, **writer_args):
    """Write a dataset using the given writer

    Args:
        writer_name (String):  Name of writer.
        dset (Dataset):        Data that will be written.
        writer_args:           Input arguments to the writer, typically file_path or stream.
    """
    return plugins.call(package_name=__name__, plugin_name=writer_name, dset=dset, **writer_args)
