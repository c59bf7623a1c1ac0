""" Test :mod:`doris.data.identifiers` and :mod:`doris.data.observable`

"""
# Standard library imports
import unittest

# External library imports
import pytest

# Doris imports
from doris.data import observable
from doris.data.identifiers import Cospar, Domes
from doris.data.observable import Observable
from doris.lib import enums
from doris.lib.exceptions import FormatError


class TestCospar(unittest.TestCase):
    def test_parse(self):
        cospar = Cospar.parse("2010-013A")

        self.assertEqual(cospar, Cospar(2010, 13, "A"))
        self.assertEqual(str(cospar), "2010-013A")

    def test_parse_multiple_piece_letters(self):
        self.assertEqual(str(Cospar.parse(" 1998-067ABC ")), "1998-067ABC")

    def test_invalid(self):
        for text in ("2010-13A", "10-013A", "2010-013", "2010-013a", "2010_013A", ""):
            with self.subTest(text=text):
                with self.assertRaises(FormatError):
                    Cospar.parse(text)


class TestDomes(unittest.TestCase):
    def test_parse(self):
        domes = Domes.parse("10003S005")

        self.assertEqual((domes.area, domes.site, domes.point, domes.sequential), (100, 3, "S", 5))
        self.assertEqual(str(domes), "10003S005")
        self.assertTrue(domes.is_instrument)
        self.assertFalse(Domes.parse("10003M001").is_instrument)

    def test_invalid(self):
        for text in ("10003X005", "1000S005", "10003S0055", "ABCDES005"):
            with self.subTest(text=text):
                with self.assertRaises(FormatError):
                    Domes.parse(text)


@pytest.mark.parametrize("token", ["L1", "L2", "C1", "C2", "W1", "W2", "F", "P", "T", "H"])
def test_observable_token(token):
    assert Observable.parse(token).token == token
    assert str(Observable.parse(token)) == token


def test_observable_kinds():
    assert observable.L1 == Observable("phase_range", enums.Frequency.doris1)
    assert observable.C2 == Observable("pseudo_range", enums.Frequency.doris2)
    assert observable.F.frequency is None
    assert Observable.parse("l2") == observable.L2
    assert [o.is_meteo for o in (observable.P, observable.T, observable.H)] == [True, True, True]
    assert not observable.W1.is_meteo
    assert not observable.F.is_meteo


@pytest.mark.parametrize("token", ["L3", "X", "S1", "", "LL"])
def test_unknown_observable(token):
    with pytest.raises(FormatError):
        Observable.parse(token)
