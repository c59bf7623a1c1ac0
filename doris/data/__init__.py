"""Data model of DORIS observation files

Description:
------------

The classes in this package describe the content of a DORIS RINEX file independently of how it is laid out on disk. A
:class:`~doris.data.dataset.Dataset` ties a :class:`~doris.data.header.Header` together with the list of
:class:`~doris.data.record.EpochRecord` read from a file.

"""
