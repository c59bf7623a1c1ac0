"""Registry of the Doris parsers

Description:
------------

Every module in this package that is not private holds one parser, registered with midgard's plugin machinery::

    from midgard.dev import plugins
    from doris.parsers._parser_chain import ChainParser

    @plugins.register
    class DorisRinexParser(ChainParser):
        ...

Parsers are looked up by module name. Read a file with :func:`parse_file`, or lines already in memory with
:func:`parse_stream`, and fetch the result from the returned parser::

    from doris import parsers
    dset = parsers.parse_file("doris_rinex", "cs2rx18164.gz").as_dataset()

"""

# Midgard imports
from midgard.dev import plugins

# Doris imports
from doris.lib import log


def names():
    """List the names of the available parsers

    Returns:
        List of strings with the names of the available parsers.
    """
    return plugins.names(package_name=__name__)


def setup_parser(parser_name, **parser_args):
    """Create an instance of a parser without reading anything

    Args:
        parser_name (String):   Name of parser.
        parser_args:            Input arguments to the parser.

    Returns:
        Parser:  An instance of the given parser.
    """
    return plugins.call(package_name=__name__, plugin_name=parser_name, **parser_args)


def parse_file(parser_name, file_path, encoding=None, **parser_args):
    """Use the given parser on a file and return parsed data

    The parsed observations are fetched from the returned parser with `as_dict`, `as_dataframe` or `as_dataset`.

    Example:
        > dset = parsers.parse_file('doris_rinex', 'cs2rx18164.gz').as_dataset()

    Args:
        parser_name (String):  Name of parser.
        file_path (String):    Path to file that should be parsed.
        encoding (String):     Encoding in file that is parsed.
        parser_args:           Input arguments to the parser.

    Returns:
        Parser:  Parser with the parsed data.
    """
    log.debug(f"Parsing {file_path} with {parser_name}")
    parser = setup_parser(parser_name, file_path=file_path, encoding=encoding, **parser_args)
    return parser.parse()


def parse_stream(parser_name, stream, **parser_args):
    """Use the given parser on a stream of text lines and return parsed data

    Args:
        parser_name (String):  Name of parser.
        stream (Iterable):     Text lines, for instance an open file or a list of strings.
        parser_args:           Input arguments to the parser.

    Returns:
        Parser:  Parser with the parsed data.
    """
    parser = setup_parser(parser_name, stream=stream, **parser_args)
    return parser.parse()
