import unittest

import numpy as np

from monomial import *
from ordering import GrevlexOrdering, LexOrdering
from schemes import IncompatibleSchemeError, Named, Numbered

XYZ = GrevlexOrdering(Named(('x', 'y', 'z')))


def dense(*exponents):
    return DenseMonomial.from_exponents(XYZ, exponents)


def sparse(**exponents):
    names = ('x', 'y', 'z')
    return SparseMonomial.from_pairs(XYZ, {names.index(k): v for k, v in exponents.items()})


class MonomialTest(unittest.TestCase):
    def test_exponents(self):
        m = dense(2, 0, 1)
        self.assertEqual(m.exponent(0), 2)
        self.assertEqual(m.exponent(1), 0)
        self.assertEqual(m.total_degree, 3)
        self.assertEqual(m.scheme, Named(('x', 'y', 'z')))

    def test_dense_sparse_equal(self):
        a = dense(2, 0, 1)
        b = sparse(x=2, z=1)
        self.assertEqual(a, b)
        self.assertEqual(b, a)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len({a, b}), 1)
        self.assertNotEqual(a, sparse(x=2))

    def test_sparse_drops_zeros(self):
        m = SparseMonomial.from_pairs(XYZ, {0: 0, 2: 4})
        self.assertEqual(m.indices, (2,))
        self.assertEqual(m.values, (4,))

    def test_multiply(self):
        self.assertEqual(dense(1, 2, 0) * dense(0, 1, 3), dense(1, 3, 3))
        self.assertEqual(dense(1, 2, 0) * sparse(z=1), dense(1, 2, 1))
        self.assertIsInstance(sparse(x=1) * sparse(y=1), SparseMonomial)
        self.assertIsInstance(dense(1, 0, 0) * dense(0, 1, 0), DenseMonomial)

    def test_power(self):
        m = dense(1, 2, 0) ** 3
        self.assertEqual(m, dense(3, 6, 0))
        self.assertEqual(m.total_degree, 9)
        self.assertEqual(dense(1, 2, 0) ** 0, dense(0, 0, 0))

    def test_lcm_gcd(self):
        a = dense(2, 0, 1)
        b = dense(1, 3, 0)
        self.assertEqual(a.lcm(b), dense(2, 3, 1))
        self.assertEqual(a.gcd(b), dense(1, 0, 0))
        self.assertEqual(a.lcm_degree(b), 6)

    def test_lcm_degree_of_ones(self):
        one = DenseMonomial.one(XYZ)
        self.assertEqual(one.lcm_degree(one), 0)
        self.assertEqual(sparse().lcm_degree(one), 0)

    def test_lcm_multipliers(self):
        a = dense(2, 0, 1)
        b = dense(1, 3, 0)
        t1, t2 = a.lcm_multipliers(b)
        self.assertEqual(t1, dense(0, 3, 0))
        self.assertEqual(t2, dense(1, 0, 1))
        self.assertEqual(t1 * a, t2 * b)

    def test_divide(self):
        a = dense(2, 1, 1)
        self.assertEqual(a.try_divide(dense(1, 1, 0)), dense(1, 0, 1))
        self.assertIsNone(a.try_divide(dense(0, 2, 0)))
        self.assertTrue(dense(1, 1, 0).divides(a))
        self.assertFalse(dense(0, 2, 0).divides(a))
        self.assertTrue(sparse(z=1).divides(a))

    def test_mutually_prime(self):
        self.assertTrue(dense(2, 0, 0).mutually_prime(dense(0, 1, 4)))
        self.assertFalse(dense(2, 1, 0).mutually_prime(dense(0, 1, 4)))

    def test_diff(self):
        n, m = dense(3, 1, 0).diff(0)
        self.assertEqual(n, 3)
        self.assertEqual(m, dense(2, 1, 0))
        n, m = dense(3, 1, 0).diff(2)
        self.assertEqual(n, 0)

    def test_comparisons(self):
        self.assertLess(dense(0, 0, 2), dense(0, 1, 1))
        self.assertGreater(dense(2, 0, 0), dense(0, 2, 0))
        self.assertLessEqual(sparse(x=1), dense(1, 0, 0))

    def test_enumerate_nonzero(self):
        pairs = dense(2, 0, 1).enumerate_nonzero()
        self.assertEqual(list(pairs), [(0, 2), (1, 0), (2, 1)])
        self.assertEqual(list(pairs), [(0, 2), (1, 0), (2, 1)])
        self.assertEqual(list(sparse(x=2, z=1).enumerate_nonzero()), [(0, 2), (2, 1)])

    def test_format(self):
        self.assertEqual(dense(2, 1, 0).format(), 'x^2*y')
        self.assertEqual(dense(0, 0, 0).format(), '1')


class ExponentTest(unittest.TestCase):
    def test_negative(self):
        with self.assertRaises(ExponentError):
            dense(1, -1, 0)

    def test_wrong_length(self):
        with self.assertRaises(ExponentError):
            dense(1, 1)

    def test_overflow(self):
        m = DenseMonomial.from_exponents(XYZ, (100, 0, 0), np.int8)
        with self.assertRaises(ExponentError):
            m * m
        with self.assertRaises(ExponentError):
            DenseMonomial.from_exponents(XYZ, (200, 0, 0), np.int8)

    def test_wider_type(self):
        m = DenseMonomial.from_exponents(XYZ, (100, 0, 0), np.int8)
        n = DenseMonomial.from_exponents(XYZ, (100, 0, 0), np.int16)
        self.assertEqual((m * n).exponent(0), 200)


class SchemeTest(unittest.TestCase):
    def test_promotion(self):
        a = DenseMonomial.from_exponents(GrevlexOrdering(Named(('x', 'y'))), (1, 0))
        b = DenseMonomial.from_exponents(GrevlexOrdering(Named(('y', 'z'))), (0, 1))
        m = a * b
        self.assertEqual(m.scheme, Named(('x', 'y', 'z')))
        self.assertEqual([m.exponent(i) for i in range(3)], [1, 0, 1])

    def test_incompatible_orderings(self):
        a = DenseMonomial.from_exponents(GrevlexOrdering(Named(('x', 'y'))), (1, 0))
        b = DenseMonomial.from_exponents(LexOrdering(Named(('x', 'y'))), (0, 1))
        with self.assertRaises(IncompatibleSchemeError):
            a * b

    def test_incompatible_schemes(self):
        a = DenseMonomial.from_exponents(GrevlexOrdering(Named(('x', 'y'))), (1, 0))
        b = SparseMonomial.from_pairs(GrevlexOrdering(Numbered('c')), {4: 1})
        with self.assertRaises(IncompatibleSchemeError):
            a * b

    def test_numbered(self):
        o = GrevlexOrdering(Numbered('c'))
        m = SparseMonomial.from_pairs(o, {1000: 2}) * SparseMonomial.from_pairs(o, {3: 1})
        self.assertEqual(m.exponent(1000), 2)
        self.assertEqual(m.exponent(3), 1)
        self.assertEqual(m.exponent(4), 0)
        self.assertEqual(m.format(), 'c[3]*c[1000]^2')


class AnyDivisorTest(unittest.TestCase):
    def test_visits_all_divisors(self):
        seen = []

        def record(d):
            seen.append(d)
            return False
        self.assertFalse(any_divisor(record, dense(2, 1, 0)))
        self.assertEqual(len(seen), 6)
        self.assertEqual(len(set(seen)), 6)
        for d in seen:
            self.assertTrue(d.divides(dense(2, 1, 0)))

    def test_short_circuit(self):
        seen = []

        def is_y(d):
            seen.append(d)
            return d == dense(0, 1, 0)
        self.assertTrue(any_divisor(is_y, dense(3, 2, 1)))
        self.assertLess(len(seen), 4 * 3 * 2)

    def test_membership(self):
        H = {dense(1, 1, 0), dense(0, 0, 3)}
        self.assertTrue(any_divisor(lambda d: d in H, dense(2, 1, 1)))
        self.assertFalse(any_divisor(lambda d: d in H, dense(2, 0, 2)))

    def test_one(self):
        one = dense(0, 0, 0)
        self.assertTrue(any_divisor(lambda d: d == one, one))


if __name__ == '__main__':
    unittest.main()
