'''Ideals of polynomial rings, with a memoised Groebner basis.'''

import numbers

from groebner import groebner_basis, groebner_transformation
from polynomial import Polynomial, as_polynomial, common_ring, divrem, fraction_field


def _unique(polynomials):
    return list(dict.fromkeys(polynomials))


class Ideal(object):
    '''An ideal given by a list of generators. The Groebner basis and the
    transformation expressing it in terms of the generators are computed
    on first use and cached; the generators never change afterwards.

    The cache is written without locking, so sharing an Ideal between
    threads needs external synchronisation.'''
    def __init__(self, *generators):
        if len(generators) == 1 and not isinstance(generators[0], Polynomial):
            generators = tuple(generators[0])
        if len(generators) == 0:
            raise ValueError('an ideal needs at least one generator')
        ring = common_ring(generators)
        self._ring = ring
        self._generators = tuple(as_polynomial(g, ring) for g in generators)
        self._grb = None
        self._trns = None

    @property
    def ring(self):
        return self._ring

    @property
    def generators(self):
        return self._generators

    def groebner_basis(self):
        if self._grb is None:
            self._grb = groebner_basis(self._generators)
        return self._grb

    def groebner_transformation(self):
        if self._trns is None:
            self._grb, self._trns = groebner_transformation(self._generators)
        return self._grb, self._trns

    def _as_member(self, f):
        if isinstance(f, Polynomial):
            return f
        return as_polynomial(f, self._ring)

    def reduce(self, f):
        '''The remainder of f modulo the Groebner basis of this ideal.'''
        f = self._as_member(f)
        G = self.groebner_basis()
        if len(G) == 0:
            return f
        return divrem(f, G)[1]

    rem = reduce

    def divrem(self, f):
        '''Return (quotients, remainder) with one quotient per generator,
        so that f == sum(q*g for q, g in zip(quotients, generators)) + remainder.'''
        f = self._as_member(f)
        G, T = self.groebner_transformation()
        if len(G) == 0:
            zero = f.ring.zero()
            return [zero for g in self._generators], f
        d, r = divrem(f, G)
        quotients = []
        for j in range(len(self._generators)):
            q = r.ring.zero()
            for k, dk in enumerate(d):
                if dk:
                    q = q + dk * T[k, j]
            quotients.append(q)
        return quotients, r

    def div(self, f):
        return self.divrem(f)[0]

    def __contains__(self, f):
        return not self.reduce(f)

    def issubset(self, rhs):
        return all(g in rhs for g in self._generators)

    def __le__(self, rhs):
        return self.issubset(rhs)

    def __eq__(self, rhs):
        if not isinstance(rhs, Ideal):
            return NotImplemented
        return self.issubset(rhs) and rhs.issubset(self)

    def __ne__(self, rhs):
        result = self.__eq__(rhs)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        # equal ideals can have unrelated generators, so only the ring
        # takes part
        return hash(self._ring.base_extend(fraction_field(self._ring.ctype)))

    def __add__(self, rhs):
        return Ideal(_unique(self._generators + rhs.generators))

    def __mul__(self, rhs):
        return Ideal(_unique([f * g for f in self._generators for g in rhs.generators]))

    def __pow__(self, n):
        if not isinstance(n, numbers.Integral) or n < 0:
            raise TypeError('ideals can only be raised to non-negative integer powers')
        if n == 0:
            return Ideal(self._ring.one())
        result = None
        square = self
        while True:
            if n & 1:
                result = square if result is None else result * square
            n >>= 1
            if n == 0:
                return result
            square = square * square

    def __len__(self):
        return len(self._generators)

    def __iter__(self):
        return iter(self._generators)

    def canonical(self):
        '''The generators made monic, deduplicated, with zeros dropped,
        and sorted by their terms from the leading one down.'''
        key = self._ring.ordering.key
        monic = _unique(g.normalized() for g in self._generators if g)
        return tuple(sorted(monic, key=lambda g: ([key(t.monomial) for t in reversed(g.terms())],
                                                  [str(t.coef) for t in reversed(g.terms())])))

    def identity_key(self):
        '''A hash identifying the ideal by its canonical generators.'''
        return hash(self.canonical())

    def __repr__(self):
        return 'Ideal(%s)' % ', '.join(g.format() for g in self._generators)
