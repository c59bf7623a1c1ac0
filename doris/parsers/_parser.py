"""Base class of the Doris parsers

Description:

A parser reads either a datafile, given by its path, or a stream of text lines that is already open. The parsed content
is kept in the `data` dictionary and information about the parse in the `meta` dictionary.

"""
# Standard library imports
from contextlib import contextmanager
import pathlib

# Midgard imports
from midgard.dev.timer import Timer

# Doris imports
from doris.lib import config
from doris.lib import files
from doris.lib import log


class Parser:
    """Base class of the parsers, subclasses implement `read_data`

    Attributes:
        file_path (Path):           Path to the datafile, None when reading a stream.
        stream (Iterable):          Lines to read, None when reading a file.
        file_encoding (String):     Encoding of the datafile.
        parser_name (String):       Name of the parser, the name of its module.
        data_available (Boolean):   Whether there is anything to read.
        data (Dict):                Parsed content.
        meta (Dict):                Information about the parse.
    """

    def __init__(self, file_path=None, stream=None, encoding=None):
        """Set up a parser of a file or of a stream

        Args:
            file_path (String/Path):    Path to the datafile.
            stream (Iterable):          Lines to read, used instead of file_path.
            encoding (String):          Encoding of the datafile, default is the `encoding` option of the `parser`
                                        configuration section.
        """
        if (file_path is None) == (stream is None):
            raise ValueError("Give exactly one of file_path and stream")

        self.file_path = None if file_path is None else pathlib.Path(file_path)
        self.stream = stream
        self.file_encoding = encoding or config.setting("parser", "encoding", "utf-8").str
        self.parser_name = self.__module__.split(".")[-1]

        self.data_available = self.stream is not None or self.file_path.exists()
        self.meta = dict(__parser_name__=self.parser_name, __data_path__=self.file_path)
        self.data = dict()

    @property
    def source(self):
        """Name of the datafile, or <stream>, for log messages"""
        return "<stream>" if self.file_path is None else str(self.file_path)

    def setup_parser(self):
        pass

    def parse(self):
        """Read and parse all data, timing the parse in the debug log

        Returns:
            Parser:  The parser itself, so that results can be fetched right away.
        """
        with Timer(f"Finish {self.parser_name} - {self.source} in", logger=log.debug):
            if self.data_available:
                self.read_data()

            if not self.data_available:
                log.warn(f"No data found by {self.__class__.__name__} in {self.source}")

        return self

    @contextmanager
    def open_lines(self):
        """Lines of the datafile or of the stream"""
        if self.stream is not None:
            yield self.stream
            return

        with files.open_path(
            self.file_path, description=self.parser_name, mode="rt", encoding=self.file_encoding
        ) as fid:
            yield fid

    def read_data(self):
        """Read `self.file_path` or `self.stream` into `self.data`

        Subclasses set `self.data_available` to False if nothing could be read.
        """
        raise NotImplementedError

    def as_dict(self, include_meta=False):
        """Parsed data as a dictionary, optionally with the meta information under `__meta__`"""
        return dict(self.data, __meta__=self.meta) if include_meta else self.data.copy()

    def __repr__(self):
        return f"{self.__class__.__name__}(file_path='{self.file_path}')"
