""" Test :mod:`doris.data.station`

"""
# Standard library imports
import unittest

# External library imports
import pytest

# Doris imports
from doris.data.identifiers import Domes
from doris.data.station import ByDomes, ByLabel, BySiteName, ByUniqueId, GroundStation, StationCatalog


class TestGroundStation(unittest.TestCase):
    def setUp(self):
        self.toulouse = GroundStation("TLSB", "TOULOUSE", Domes.parse("10003S005"), 13)

    def test_key(self):
        self.assertEqual(self.toulouse.key, "D13")
        self.assertEqual(GroundStation("GRFB", "GREENBELT", None, 2).key, "D02")

    def test_frequencies(self):
        self.assertAlmostEqual(self.toulouse.s1_frequency, 2036.25e6)
        self.assertAlmostEqual(self.toulouse.u2_frequency, 401.25e6)

        shifted = GroundStation("AMVB", "AMSTERDAM", None, 4, frequency_shift=-1)
        self.assertLess(shifted.s1_frequency, self.toulouse.s1_frequency)
        self.assertAlmostEqual(shifted.s1_frequency / shifted.u2_frequency, 543 / 107)

    def test_invalid_key(self):
        with self.assertRaises(ValueError):
            GroundStation("XXXX", "NOWHERE", None, 100)

    def test_matches(self):
        self.assertTrue(self.toulouse.matches(ByLabel("TLSB")))
        self.assertTrue(self.toulouse.matches(ByDomes("10003S005")))
        self.assertFalse(self.toulouse.matches(BySiteName("GREENBELT")))


class TestStationCatalog(unittest.TestCase):
    def setUp(self):
        self.stations = [
            GroundStation("TLSB", "TOULOUSE", Domes.parse("10003S005"), 1),
            GroundStation("GRFB", "GREENBELT", Domes.parse("40451S178"), 2),
            GroundStation("TLSC", "TOULOUSE", Domes.parse("10003S006"), 3),
        ]
        self.catalog = StationCatalog(self.stations)

    def test_declaration_order(self):
        self.assertEqual(list(self.catalog), self.stations)
        self.assertEqual(len(self.catalog), 3)
        self.assertIs(self.catalog[1], self.stations[1])

    def test_lookup(self):
        self.assertIs(self.catalog.lookup(ByLabel("GRFB")), self.stations[1])
        self.assertIs(self.catalog.lookup(ByUniqueId(3)), self.stations[2])
        self.assertIs(self.catalog.lookup(ByDomes(Domes.parse("10003S006"))), self.stations[2])
        self.assertIsNone(self.catalog.lookup(ByLabel("YASB")))

    def test_lookup_first_match(self):
        self.assertIs(self.catalog.lookup(BySiteName("TOULOUSE")), self.stations[0])

    def test_equality(self):
        self.assertEqual(self.catalog, StationCatalog(list(self.stations)))
        self.assertNotEqual(self.catalog, StationCatalog(self.stations[:2]))


@pytest.mark.parametrize(
    "matcher, other",
    [(ByLabel("TLSB"), ByLabel("TLSB")), (ByUniqueId(1), ByUniqueId(1)), (ByDomes("10003S005"), ByDomes("10003S005"))],
)
def test_matchers_are_values(matcher, other):
    assert matcher == other
    assert hash(matcher) == hash(other)
    assert ByLabel("TOULOUSE") != BySiteName("TOULOUSE")
