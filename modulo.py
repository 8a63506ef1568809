'''Integers modulo n, usable as polynomial coefficients. ModuloInteger[p]
is the coefficient type of the integers modulo p.'''

import numbers


class ModularInverseError(ArithmeticError):
    pass


class InverseOfZeroError(ArithmeticError):
    pass


def extended_gcd(a, b):
    '''Return (g, x, y) such that a*x + b*y == g == gcd(a, b).'''
    x0, x1 = 1, 0
    y0, y1 = 0, 1
    while b != 0:
        q = a // b
        a, b = b, a - q * b
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    return a, x0, y0


def multiplicative_inverse(r, n):
    '''Find the multiplicative inverse of r in the field of integers
    modulo n, ie an integer s such that s<n and s*r = 1 (mod n).'''
    if r % n == 0:
        raise InverseOfZeroError('cannot compute inverse of zero')
    gcd, a, b = extended_gcd(r, n)
    if r * a % n != 1:
        raise ModularInverseError('%s has no inverse modulo %s' % (r, n))
    return a % n


_types = {}


def _modulo_type(n):
    if n not in _types:
        _types[n] = type('ModuloInteger[%d]' % n, (ModuloInteger,), {'modulus': n})
    return _types[n]


class ModuloInteger(object):
    # set on the classes returned by ModuloInteger[n]
    modulus = None

    def __init__(self, r, n=None):
        '''Construct the integer r (mod n). Rationals are mapped through
        the inverse of their denominator.'''
        if n is None:
            n = self.modulus
            if n is None:
                raise TypeError('ModuloInteger needs a modulus')
        if isinstance(r, ModuloInteger):
            r = r.r
        elif isinstance(r, numbers.Integral):
            r = int(r)
        elif isinstance(r, numbers.Rational):
            r = r.numerator * multiplicative_inverse(r.denominator, n)
        else:
            raise TypeError('cannot convert %s to an integer modulo %d' % (type(r).__name__, n))
        self._r = r % n
        self._n = n

    def __class_getitem__(cls, n):
        if not isinstance(n, numbers.Integral) or n < 2:
            raise ValueError('modulus must be an integer greater than one')
        return _modulo_type(int(n))

    @property
    def r(self):
        return self._r

    @property
    def n(self):
        return self._n

    @property
    def inverse(self):
        '''Return this object's multiplicative inverse, which is an
        integer s such that self*s = 1 (mod n).'''
        return multiplicative_inverse(self._r, self._n)

    def _new(self, r):
        return type(self)(r, self._n)

    def _value(self, x):
        if isinstance(x, ModuloInteger):
            return x.r
        elif isinstance(x, numbers.Integral):
            return int(x)
        elif isinstance(x, numbers.Rational):
            return self._new(x).r
        return None

    def __add__(self, rhs):
        x = self._value(rhs)
        if x is None:
            return NotImplemented
        return self._new(self._r + x)

    def __radd__(self, lhs):
        x = self._value(lhs)
        if x is None:
            return NotImplemented
        return self._new(x + self._r)

    def __sub__(self, rhs):
        x = self._value(rhs)
        if x is None:
            return NotImplemented
        return self._new(self._r - x)

    def __rsub__(self, lhs):
        x = self._value(lhs)
        if x is None:
            return NotImplemented
        return self._new(x - self._r)

    def __neg__(self):
        return self._new(self._n - self._r)

    def __pos__(self):
        return self

    def __mul__(self, rhs):
        x = self._value(rhs)
        if x is None:
            return NotImplemented
        return self._new(self._r * x)

    def __rmul__(self, lhs):
        x = self._value(lhs)
        if x is None:
            return NotImplemented
        return self._new(x * self._r)

    def __truediv__(self, rhs):
        x = self._value(rhs)
        if x is None:
            return NotImplemented
        return self._new(self._r * multiplicative_inverse(x, self._n))

    def __rtruediv__(self, lhs):
        x = self._value(lhs)
        if x is None:
            return NotImplemented
        return self._new(x * multiplicative_inverse(self._r, self._n))

    def __floordiv__(self, rhs):
        return self / rhs

    def __rfloordiv__(self, lhs):
        return self.__rtruediv__(lhs)

    def __pow__(self, k):
        if k < 0:
            return self._new(pow(self.inverse, -k, self._n))
        return self._new(pow(self._r, k, self._n))

    def __int__(self):
        return int(self._r)

    def __eq__(self, rhs):
        x = self._value(rhs)
        if x is None:
            return NotImplemented
        return self._r == x % self._n

    def __ne__(self, rhs):
        result = self.__eq__(rhs)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, rhs):
        return self._r < int(rhs)

    def __le__(self, rhs):
        return self._r <= int(rhs)

    def __gt__(self, rhs):
        return self._r > int(rhs)

    def __ge__(self, rhs):
        return self._r >= int(rhs)

    def __hash__(self):
        return hash(self._r)

    def __bool__(self):
        return self._r != 0

    def __str__(self):
        return str(self._r)

    def __repr__(self):
        return '%s(%d,%d)' % (self.__class__.__name__, self._r, self._n)
