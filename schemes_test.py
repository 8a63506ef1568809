import math
import unittest

from schemes import *


class NamedTest(unittest.TestCase):
    def test_names(self):
        s = Named(('x', 'y', 'z'))
        self.assertEqual(s.names, ('x', 'y', 'z'))
        self.assertEqual(s.num_variables, 3)
        self.assertEqual(s.index('y'), 1)
        self.assertEqual(s.name(2), 'z')

    def test_empty(self):
        with self.assertRaises(ValueError):
            Named(())

    def test_duplicates(self):
        with self.assertRaises(ValueError):
            Named(('x', 'y', 'x'))

    def test_equality(self):
        self.assertEqual(Named(['x', 'y']), Named(('x', 'y')))
        self.assertEqual(hash(Named(['x', 'y'])), hash(Named(('x', 'y'))))
        self.assertNotEqual(Named(('x', 'y')), Named(('y', 'x')))
        self.assertNotEqual(Named(('x',)), Numbered('x'))


class NumberedTest(unittest.TestCase):
    def test_unbounded(self):
        s = Numbered('c')
        self.assertEqual(s.num_variables, math.inf)
        self.assertEqual(s.name(12), 'c[12]')
        self.assertEqual(s.index('c[12]'), 12)

    def test_bad_name(self):
        with self.assertRaises(ValueError):
            Numbered('c').index('d[1]')

    def test_equality(self):
        self.assertEqual(Numbered('c'), Numbered('c'))
        self.assertNotEqual(Numbered('c'), Numbered('d'))


class PromotionTest(unittest.TestCase):
    def test_same(self):
        s = Named(('x', 'y'))
        self.assertIs(promote_schemes(s, Named(('x', 'y'))), s)

    def test_union(self):
        s = promote_schemes(Named(('x', 'y')), Named(('y', 'z')))
        self.assertEqual(s, Named(('x', 'y', 'z')))

    def test_incompatible(self):
        with self.assertRaises(IncompatibleSchemeError):
            promote_schemes(Named(('x',)), Numbered('x'))
        with self.assertRaises(TypeError):
            promote_schemes(Numbered('c'), Numbered('d'))

    def test_reindex(self):
        pairs = reindex([(0, 2), (1, 1)], Named(('x', 'y')), Named(('y', 'z', 'x')))
        self.assertEqual(pairs, [(0, 1), (2, 2)])

    def test_reindex_drops_zeros(self):
        pairs = reindex([(0, 0), (1, 3)], Named(('x', 'y')), Named(('y',)))
        self.assertEqual(pairs, [(0, 3)])

    def test_reindex_missing(self):
        with self.assertRaises(IncompatibleSchemeError):
            reindex([(0, 1)], Named(('x', 'y')), Named(('y', 'z')))


if __name__ == '__main__':
    unittest.main()
