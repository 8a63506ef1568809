import itertools
import unittest

from monomial import DenseMonomial
from ordering import *
from schemes import Named

XY = Named(('x', 'y'))
XYZ = Named(('x', 'y', 'z'))


def mono(ordering, *exponents):
    return DenseMonomial.from_exponents(ordering, exponents)


class OrderingTest(unittest.TestCase):
    def test_lex(self):
        o = LexOrdering(XY)
        self.assertEqual(o(mono(o, 1, 0), mono(o, 0, 5)), 1)
        self.assertEqual(o(mono(o, 1, 1), mono(o, 1, 2)), -1)
        self.assertEqual(o(mono(o, 2, 1), mono(o, 2, 1)), 0)

    def test_deglex(self):
        o = GrlexOrdering(XY)
        self.assertEqual(o(mono(o, 1, 0), mono(o, 0, 5)), -1)
        # ties broken from the first variable: larger exponent wins
        self.assertEqual(o(mono(o, 2, 1), mono(o, 1, 2)), 1)

    def test_degrevlex(self):
        o = GrevlexOrdering(XY)
        self.assertEqual(o(mono(o, 1, 1), mono(o, 0, 2)), 1)
        self.assertEqual(o(mono(o, 2, 0), mono(o, 1, 1)), 1)
        self.assertEqual(o(mono(o, 0, 1), mono(o, 0, 2)), -1)

    def test_tie_break_directions(self):
        # x^2*z against x*y^2: deglex prefers the larger x exponent,
        # degrevlex prefers the smaller z exponent
        a = (2, 0, 1)
        b = (1, 2, 0)
        deglex = GrlexOrdering(XYZ)
        degrevlex = GrevlexOrdering(XYZ)
        self.assertEqual(deglex(mono(deglex, *a), mono(deglex, *b)), 1)
        self.assertEqual(degrevlex(mono(degrevlex, *a), mono(degrevlex, *b)), -1)

    def test_multiplicative(self):
        for cls in (LexOrdering, GrlexOrdering, GrevlexOrdering):
            o = cls(XY)
            monomials = [mono(o, i, j) for i, j in itertools.product(range(3), repeat=2)]
            for a, b, c in itertools.product(monomials, repeat=3):
                if o(a, b) <= 0:
                    self.assertLessEqual(o(a * c, b * c), 0)

    def test_sort_key(self):
        o = GrevlexOrdering(XY)
        ms = [mono(o, 0, 2), mono(o, 0, 0), mono(o, 2, 0), mono(o, 1, 1), mono(o, 1, 0)]
        ms.sort(key=o.key)
        self.assertEqual([m.exponents for m in ms], [(0, 0), (1, 0), (0, 2), (1, 1), (2, 0)])
        self.assertEqual(o.max(ms).exponents, (2, 0))
        self.assertEqual(o.min(ms).exponents, (0, 0))

    def test_equality(self):
        self.assertEqual(LexOrdering(XY), LexOrdering(Named(('x', 'y'))))
        self.assertNotEqual(LexOrdering(XY), GrlexOrdering(XY))
        self.assertNotEqual(LexOrdering(XY), LexOrdering(XYZ))


class RegistryTest(unittest.TestCase):
    def test_tags(self):
        self.assertIsInstance(ordering_for('lex', XY), LexOrdering)
        self.assertIsInstance(ordering_for('deglex', XY), GrlexOrdering)
        self.assertIsInstance(ordering_for('degrevlex', XY), GrevlexOrdering)
        self.assertIsInstance(ordering_for('grevlex', XY), GrevlexOrdering)

    def test_unknown(self):
        with self.assertRaises(OrderingError):
            ordering_for('nonsense', XY)

    def test_instance(self):
        o = LexOrdering(XY)
        self.assertIs(ordering_for(o, XY), o)
        with self.assertRaises(OrderingError):
            ordering_for(o, XYZ)

    def test_register(self):
        class ReverseGrlexOrdering(GrlexOrdering):
            rule = 'test-deglex'
        register_ordering('test-deglex', ReverseGrlexOrdering)
        self.assertIsInstance(ordering_for('test-deglex', XY), ReverseGrlexOrdering)
        with self.assertRaises(OrderingError):
            register_ordering('broken', object)


if __name__ == '__main__':
    unittest.main()
