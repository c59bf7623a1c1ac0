"""Parsing of datafiles made of chained groups of lines

Description:

A ChainParser reads a datafile as a sequence of groups of lines. Each group is described by a ParserDef telling how to
label each line, which parser function handles each label, and which line ends the group. The ParserDefs come from
`setup_parser`, which may be a generator: later groups can then depend on what earlier groups contained, and the same
definition can be repeated for as many groups as the file holds.

"""
# Standard library imports
import itertools
from collections import namedtuple

# Doris imports
from doris.parsers._parser import Parser


# Definition of how to parse one group of lines
ParserDef = namedtuple("ParserDef", ["end_marker", "label", "parser_def", "skip_line", "end_callback"])
ParserDef.__new__.__defaults__ = (None, None)  # skip_line and end_callback are optional
ParserDef.__doc__ = """Definition of how to parse one group of lines

    The functions of a ParserDef are called as

        end_marker(line, line_num, next_line)  ->  True for the last line of the group
        label(line, line_num)                  ->  Key into parser_def
        skip_line(line)                        ->  True for lines that are not parsed at all
        end_callback(cache)                    ->  Called once the whole group is read

    The parser_def dictionary maps each label to a parser function and a description of the fields of the line:

        parser_def = {<label>: {"parser": <function(values, cache)>,
                                "fields": <dict of name: (start, end) column slices, or None for the whole line>,
                                "strip":  <characters stripped from sliced fields, optional>}}

    Lines with a label that is not in parser_def are ignored.

    Args:
        end_marker:   Function recognizing the last line of the group.
        label:        Function labelling each line.
        parser_def:   Parser function and fields for each label.
        skip_line:    Function recognizing lines to skip.
        end_callback: Function called when the group is complete.
    """


class ChainParser(Parser):
    """Base class for parsers reading a datafile as chained groups of lines

    Subclasses implement `setup_parser`, returning (or yielding) one ParserDef per group.
    """

    def setup_parser(self):
        """ParserDefs of the groups of lines, in file order"""
        raise NotImplementedError

    def read_data(self):
        """Read and parse all groups of the datafile"""
        for _ in self.iter_groups():
            pass

    def iter_groups(self):
        """Parse the datafile group by group

        Yields the running number of each group once its end_callback has been called, so that callers can act on
        one group before the next is read. The datafile stays open until the generator finishes or is closed.
        """
        parsers_chain = iter(self.setup_parser())
        parser = next(parsers_chain)
        cache = dict(line_num=0)
        group_num = 0

        with self.open_lines() as fid:
            # Look one line ahead, the last line is paired with None
            lines, next_lines = itertools.tee(fid)
            next(next_lines, None)

            for line, next_line in itertools.zip_longest(lines, next_lines):
                line = line.rstrip("\r\n")
                cache["line_num"] += 1
                self.parse_line(line, cache, parser)

                if next_line is not None and not parser.end_marker(line, cache["line_num"], next_line.rstrip("\r\n")):
                    continue

                if parser.end_callback is not None:
                    parser.end_callback(cache)
                group_num += 1
                yield group_num

                cache = dict(line_num=0)
                parser = next(parsers_chain, None)
                if parser is None:
                    break

        self.end_of_data(parser, cache)

    def end_of_data(self, parser, cache):
        """Hook called after the last line, with the ParserDef and cache current at that point"""
        pass

    def parse_line(self, line, cache, parser):
        """Split one line into fields and hand them to the parser function of its label

        Args:
            line (str):           Line without line ending.
            cache (dict):         Data shared by the lines of the group.
            parser (ParserDef):   Definition of the current group.
        """
        if not parser.label:
            return
        if parser.skip_line and parser.skip_line(line):
            return

        label = parser.label(line, cache["line_num"])
        if label not in parser.parser_def:
            return

        line_def = parser.parser_def[label]
        if line_def["fields"] is None:
            values = line
        else:
            strip = line_def.get("strip")
            values = {name: line[slice(*cols)].strip(strip) for name, cols in line_def["fields"].items()}

        line_def["parser"](values, cache)
