import unittest
from fractions import Fraction

from modulo import *
from polynomial import polynomial_ring
from groebner import groebner_basis


class ModuloTest(unittest.TestCase):
    def test_comparisons(self):
        a = ModuloInteger(3, 11)
        self.assertEqual(a, 3)
        self.assertEqual(3, a)
        self.assertEqual(a, 14)
        self.assertEqual(a, ModuloInteger(3, 11))
        self.assertLess(a, 4)
        self.assertGreater(a, 0)

    def test_addition(self):
        a = ModuloInteger(4, 7)
        self.assertEqual(a + 2, 6)
        self.assertEqual(a + 4, 1)
        self.assertEqual(6 + a, 3)
        self.assertEqual(a + ModuloInteger(2, 5), 6)
        self.assertEqual(a + ModuloInteger(4, 5), 1)

    def test_subtraction(self):
        a = ModuloInteger(4, 7)
        self.assertEqual(a - 1, 3)
        self.assertEqual(a - 4, 0)
        self.assertEqual(5 - a, 1)
        self.assertEqual(3 - a, 6)
        self.assertEqual(-a, 3)
        self.assertEqual(a - ModuloInteger(1, 5), 3)
        self.assertEqual(a - ModuloInteger(4, 5), 0)

    def test_multiplication(self):
        a = ModuloInteger(2, 5)
        self.assertEqual(a * 2, 4)
        self.assertEqual(a * 3, 1)
        self.assertEqual(a * 0, 0)
        self.assertEqual(2 * a, 4)
        self.assertEqual(3 * a, 1)
        self.assertEqual(0 * a, 0)

    def test_power(self):
        a = ModuloInteger(3, 7)
        self.assertEqual(a ** 2, 2)
        self.assertEqual(a ** 6, 1)
        self.assertEqual(a ** -1, 5)

    def test_inverse(self):
        self.assertEqual(multiplicative_inverse(2, 5), 3)
        self.assertEqual(multiplicative_inverse(9, 17), 2)
        self.assertEqual(multiplicative_inverse(5, 11), 9)
        self.assertEqual(ModuloInteger(2, 5).inverse, 3)
        self.assertEqual(ModuloInteger(9, 17).inverse, 2)
        self.assertEqual(ModuloInteger(5, 11).inverse, 9)

    def test_no_inverse(self):
        with self.assertRaises(InverseOfZeroError):
            ModuloInteger(0, 5).inverse
        with self.assertRaises(InverseOfZeroError):
            ModuloInteger(3, 5) / 0
        with self.assertRaises(ModularInverseError):
            multiplicative_inverse(2, 4)

    def test_division(self):
        a = ModuloInteger(2, 5)
        self.assertEqual(a / 1, a)
        self.assertEqual(a / 1, 2)
        self.assertEqual(1 / a, 3)
        self.assertEqual(4 / a, 2)
        self.assertEqual(3 / a, 4)
        self.assertEqual(a / 2, 1)
        self.assertEqual(2 / a, 1)
        self.assertEqual(a // 2, 1)

    def test_extended_gcd(self):
        for a, b in [(240, 46), (17, 5), (12, 18), (7, 0)]:
            g, x, y = extended_gcd(a, b)
            self.assertEqual(a * x + b * y, g)
            self.assertEqual(a % g if g else 0, 0)
        self.assertEqual(extended_gcd(240, 46)[0], 2)

    def test_rationals(self):
        a = ModuloInteger(Fraction(1, 2), 7)
        self.assertEqual(a, 4)
        self.assertEqual(a * 2, 1)
        self.assertEqual(ModuloInteger(3, 7) + Fraction(1, 2), 0)
        with self.assertRaises(TypeError):
            ModuloInteger(1.5, 7)

    def test_hash_and_repr(self):
        self.assertEqual(hash(ModuloInteger(3, 7)), hash(ModuloInteger(10, 7)))
        self.assertEqual(str(ModuloInteger(10, 7)), '3')
        self.assertEqual(int(ModuloInteger(10, 7)), 3)
        self.assertFalse(ModuloInteger(7, 7))


class ModuloTypeTest(unittest.TestCase):
    def test_parameterised(self):
        F7 = ModuloInteger[7]
        self.assertIs(F7, ModuloInteger[7])
        self.assertIsNot(F7, ModuloInteger[11])
        a = F7(10)
        self.assertIsInstance(a, F7)
        self.assertIsInstance(a, ModuloInteger)
        self.assertEqual(a.n, 7)
        self.assertEqual(a, 3)
        self.assertIsInstance(a + 1, F7)
        self.assertIsInstance(1 / a, F7)

    def test_bad_modulus(self):
        with self.assertRaises(ValueError):
            ModuloInteger[1]
        with self.assertRaises(TypeError):
            ModuloInteger(3)

    def test_polynomial_coefficients(self):
        R, (x, y) = polynomial_ring('x', 'y', ctype=ModuloInteger[7])
        f = (x + 1) ** 7
        self.assertEqual(f, x ** 7 + 1)
        self.assertEqual(f.ctype, ModuloInteger[7])

    def test_groebner_basis(self):
        R, (x,) = polynomial_ring('x', ctype=ModuloInteger[7])
        # x = -3 gives x^2 + 1 = 10, which is nonzero mod 7
        G = groebner_basis([x ** 2 + 1, x + 3])
        self.assertEqual(len(G), 1)
        self.assertEqual(G[0].total_degree, 0)
        # x = 2 gives x^2 + 3 = 7
        G = groebner_basis([x ** 2 + 3, x - 2])
        self.assertEqual(len(G), 1)
        self.assertEqual(G[0].normalized(), x - 2)


if __name__ == '__main__':
    unittest.main()
