'''Quotient rings R/I, represented by remainders modulo a Groebner basis
of I, together with the linear algebra of zero-dimensional quotients:
the monomial basis and the matrices of multiplication operators.'''

import numbers

import numpy as np

from ideal import Ideal
from polynomial import Polynomial, as_polynomial, matrix_form
from schemes import Named


class QuotientAlgebraError(Exception):
    pass


class InfiniteDimensionalError(QuotientAlgebraError):
    pass


class QuotientConversionError(TypeError):
    pass


def monomials_not_divisible_by(monomials, num_vars):
    '''Find the exponents of all monomials not divisible by any monomial
    in MONOMIALS. Raises InfiniteDimensionalError if there are an
    infinite number of such monomials.'''
    if len(monomials) == 0:
        raise InfiniteDimensionalError('list of leading monomials was empty')
    if any(m.total_degree == 0 for m in monomials):
        return []

    # Find the univariate leading terms
    rect = [None] * num_vars
    for monomial in monomials:
        active_vars = [(i, a) for i, a in monomial.enumerate_nonzero() if a > 0]
        if len(active_vars) == 1:
            i, a = active_vars[0]
            if rect[i] is None or rect[i] > a:
                rect[i] = a

    # Is the quotient algebra finite dimensional?
    if any(ri is None for ri in rect):
        raise InfiniteDimensionalError('quotient algebra does not have a finite basis')

    # Mark every exponent in the bounding box that some monomial divides
    divisible = np.zeros(rect, dtype=bool)
    for monomial in monomials:
        block = tuple(slice(min(int(monomial.exponent(i)), ri), ri) for i, ri in enumerate(rect))
        divisible[block] = True
    return [tuple(int(e) for e in exponents) for exponents in np.argwhere(~divisible)]


class IdealRegistry(object):
    '''Maps each (ring, canonical ideal) to its quotient ring, so that
    ideals with the same canonical generators share one QuotientRing.'''
    def __init__(self):
        self._rings = {}

    def quotient_ring(self, ring, ideal):
        canonical = ideal.canonical()
        key = (ring, canonical)
        quotient = self._rings.get(key)
        if quotient is None:
            quotient = QuotientRing(ring, Ideal(canonical) if canonical else ideal, self)
            self._rings[key] = quotient
        return quotient

    def __len__(self):
        return len(self._rings)

    def __iter__(self):
        return iter(self._rings.values())


# Registry used when quotient_ring is not given one; lives for the process.
default_registry = IdealRegistry()


def quotient_ring(ring, ideal, registry=None):
    '''Construct the quotient of RING by IDEAL (an Ideal or a list of
    polynomials).'''
    if registry is None:
        registry = default_registry
    generators = ideal.generators if isinstance(ideal, Ideal) else ideal
    ideal = Ideal([g if isinstance(g, Polynomial) else as_polynomial(g, ring) for g in generators])
    return registry.quotient_ring(ring, ideal)


class QuotientRing(object):
    def __init__(self, ring, ideal, registry):
        self._ring = ring
        self._ideal = ideal
        self._registry = registry
        self._basis = None
        self._convertible = {}

    @property
    def ring(self):
        return self._ring

    @property
    def ideal(self):
        return self._ideal

    @property
    def registry(self):
        return self._registry

    def reduce(self, f):
        if not isinstance(f, Polynomial):
            f = as_polynomial(f, self._ring)
        return self._ideal.reduce(f)

    def __call__(self, f):
        '''Construct the element of this ring represented by f.'''
        if isinstance(f, QuotientRingElement):
            return self.convert(f)
        return QuotientRingElement(self, self.reduce(f))

    def zero(self):
        return QuotientRingElement(self, self._ring.zero())

    def one(self):
        return self(self._ring.one())

    def convert(self, element):
        '''Map an element of another quotient ring into this one. This is
        allowed only when the other ideal lies inside this one.'''
        source = element.parent
        if source is self:
            return element
        if source not in self._convertible:
            try:
                self._convertible[source] = source.ideal.issubset(self._ideal)
            except TypeError as e:
                raise QuotientConversionError('Cannot convert %r to %r: %s' % (source, self, e))
        if not self._convertible[source]:
            raise QuotientConversionError('Cannot convert %r to %r; the conversion is not compatible '
                                          'with the quotients.' % (source, self))
        return self(element.polynomial)

    def monomial_basis(self):
        '''The monomials not divisible by any leading monomial of the
        Groebner basis, which form a basis of a zero-dimensional
        quotient as a vector space.'''
        if self._basis is None:
            if not isinstance(self._ring.scheme, Named):
                raise InfiniteDimensionalError('%r is infinite dimensional and does not have a finite '
                                               'monomial basis' % self)
            G = self._ideal.groebner_basis()
            leading_monomials = [g.leading_monomial() for g in G]
            try:
                exponents = monomials_not_divisible_by(leading_monomials, self._ring.num_vars)
            except InfiniteDimensionalError:
                raise InfiniteDimensionalError('%r is infinite dimensional and does not have a finite '
                                               'monomial basis' % self)
            basis = [self._ring.monomial(e) for e in exponents]
            basis.sort(key=self._ring.ordering.key)
            self._basis = basis
        return list(self._basis)

    def representation_matrix(self, x):
        '''The matrix of multiplication by X on the monomial basis. X may
        be a variable (index, name or generator) or any polynomial.'''
        if isinstance(x, QuotientRingElement):
            x = x.polynomial
        if isinstance(x, (numbers.Integral, str)):
            return self._variable_matrix(self._ring.variable(x))
        f = x if isinstance(x, Polynomial) else as_polynomial(x, self._ring)
        if len(f) == 1 and f.total_degree == 1 and f.leading_coefficient() == 1:
            return self._variable_matrix(f)

        basis = self.monomial_basis()
        matrices = [self._variable_matrix(self._ring.variable(i)) for i in range(self._ring.num_vars)]
        result = np.zeros((len(basis), len(basis)), dtype=object)
        for term in f:
            M = np.identity(len(basis), dtype=object)
            for i, e in term.monomial.enumerate_nonzero():
                for k in range(int(e)):
                    M = M.dot(matrices[i])
            result = result + term.coef * M
        return result

    def _variable_matrix(self, x):
        basis = self.monomial_basis()
        remainders = [self.reduce(x * monomial) for monomial in basis]
        M, B = matrix_form(remainders, basis)
        return M.T

    def __repr__(self):
        return '%r/%r' % (self._ring, self._ideal)


class QuotientRingElement(object):
    '''An element of a quotient ring, stored as its reduced
    representative.'''
    def __init__(self, parent, f):
        self._parent = parent
        self._f = f

    @property
    def parent(self):
        return self._parent

    @property
    def polynomial(self):
        return self._f

    def _coerce(self, rhs):
        '''Bring RHS into the parent of self, or both operands into a
        common quotient ring. Returns (parent, lhs, rhs) or None.'''
        if isinstance(rhs, QuotientRingElement):
            if rhs._parent is self._parent:
                return self._parent, self, rhs
            parent = self._parent.registry.quotient_ring(
                self._parent.ring,
                Ideal(list(self._parent.ideal.generators) + list(rhs._parent.ideal.generators)))
            return parent, parent.convert(self), parent.convert(rhs)
        if isinstance(rhs, (Polynomial, numbers.Number, self._parent.ring.ctype)):
            return self._parent, self, self._parent(rhs)
        return None

    def __add__(self, rhs):
        c = self._coerce(rhs)
        if c is None:
            return NotImplemented
        parent, a, b = c
        return parent(a._f + b._f)

    __radd__ = __add__

    def __sub__(self, rhs):
        c = self._coerce(rhs)
        if c is None:
            return NotImplemented
        parent, a, b = c
        return parent(a._f - b._f)

    def __rsub__(self, lhs):
        c = self._coerce(lhs)
        if c is None:
            return NotImplemented
        parent, a, b = c
        return parent(b._f - a._f)

    def __mul__(self, rhs):
        c = self._coerce(rhs)
        if c is None:
            return NotImplemented
        parent, a, b = c
        return parent(a._f * b._f)

    __rmul__ = __mul__

    def __truediv__(self, rhs):
        if not isinstance(rhs, (numbers.Number, self._parent.ring.ctype)):
            raise TypeError('quotient ring elements can only be divided by scalars')
        return self._parent(self._f / rhs)

    def __neg__(self):
        return QuotientRingElement(self._parent, -self._f)

    def __pos__(self):
        return self

    def __pow__(self, n):
        if not isinstance(n, numbers.Integral) or n < 0:
            raise TypeError('cannot raise a quotient ring element to the power %r' % (n,))
        result = self._parent.one()
        square = self
        while n > 0:
            if n & 1:
                result = result * square
            n >>= 1
            if n > 0:
                square = square * square
        return result

    def __eq__(self, rhs):
        c = self._coerce(rhs)
        if c is None:
            return NotImplemented
        parent, a, b = c
        return a._f == b._f

    def __ne__(self, rhs):
        result = self.__eq__(rhs)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._f)

    def __bool__(self):
        return bool(self._f)

    def __repr__(self):
        return repr(self._f)
