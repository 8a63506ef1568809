'''Polynomial rings over a commutative coefficient ring.

A Polynomial is an ordered sequence of terms, strictly increasing by the
monomial ordering of its ring, with no two terms sharing a monomial and
no zero coefficients. Every public operation returns a polynomial that
satisfies this; accumulation helpers (_add_term, _merge) mutate only
polynomials that the calling operation created itself.'''

import enum
import fractions
import functools
import math
import numbers

import numpy as np

from monomial import DenseMonomial, Monomial, SparseMonomial
from ordering import MonomialOrdering, OrderingError, ordering_for
from schemes import IncompatibleSchemeError, Named, Numbered, promote_schemes

# When set, every polynomial produced by a public operation is checked
# against the sortedness invariant.
check_invariants = False


class DivisionError(ZeroDivisionError):
    pass


class EmptyPolynomialError(ValueError):
    pass


class CoefficientOverflowError(OverflowError):
    pass


def multinomial(n, ks):
    '''The multinomial coefficient n! / (k1! k2! ... km!), computed as a
    product of binomial coefficients.'''
    assert sum(ks) == n
    result = 1
    for k in ks:
        result *= math.comb(n, k)
        n -= k
    return result


#
# Coefficients
#

def is_integral_ctype(ctype):
    return isinstance(ctype, type) and issubclass(ctype, numbers.Integral)


def fraction_field(ctype):
    '''The coefficient type in which division is exact.'''
    if is_integral_ctype(ctype):
        return fractions.Fraction
    return ctype


def promote_ctypes(a, b):
    '''Find a coefficient type that can hold values of both A and B.'''
    if a is b:
        return a
    if is_integral_ctype(b) and not is_integral_ctype(a):
        return a
    if is_integral_ctype(a) and not is_integral_ctype(b):
        return b
    try:
        return type(a(0) + b(0))
    except TypeError:
        raise TypeError('no common coefficient type for %s and %s' % (a.__name__, b.__name__))


def coefficient_from_int(ctype, value):
    '''Convert a python integer to CTYPE, raising CoefficientOverflowError
    if a fixed-width integer type cannot represent it.'''
    if isinstance(ctype, type) and issubclass(ctype, np.integer):
        info = np.iinfo(ctype)
        if value < info.min or value > info.max:
            raise CoefficientOverflowError(
                'coefficient overflow while doing exponentiation: %d does not fit in %s; '
                'suggested fix is replacing f**n by f.astype(int)**n' % (value, ctype.__name__))
    return ctype(value)


def try_divide_coefficient(a, b):
    '''Return a/b, or None if b does not divide a in an integer type.'''
    if isinstance(a, numbers.Integral) and isinstance(b, numbers.Integral):
        q, r = divmod(a, b)
        if r != 0:
            return None
        return q
    return a / b


def coefficient_lcm_multipliers(a, b):
    '''Return (k1, k2) such that k1*a == k2*b without introducing
    fractions into integer coefficients.'''
    if isinstance(a, numbers.Integral) and isinstance(b, numbers.Integral):
        g = math.gcd(int(a), int(b))
        return b // g, a // g
    return 1, a / b


#
# Rings
#

class PolynomialRing(object):
    '''Describes a polynomial ring: the variable scheme, the coefficient
    type, the integer type of the exponents, the monomial ordering and
    the monomial storage (dense or sparse).'''
    def __init__(self, scheme, ctype=fractions.Fraction, exptype=np.int16,
                 ordering='degrevlex', sparse=None):
        if sparse is None:
            sparse = not isinstance(scheme, Named)
        if not sparse and not isinstance(scheme, Named):
            raise ValueError('dense monomials need a fixed set of named variables')
        self._scheme = scheme
        self._ctype = ctype
        self._exptype = exptype
        self._ordering = ordering_for(ordering, scheme)
        self._sparse = sparse
        self._monomial_class = SparseMonomial if sparse else DenseMonomial

    @property
    def scheme(self):
        return self._scheme

    @property
    def ctype(self):
        return self._ctype

    @property
    def exptype(self):
        return self._exptype

    @property
    def ordering(self):
        return self._ordering

    @property
    def sparse(self):
        return self._sparse

    @property
    def num_vars(self):
        return self._scheme.num_variables

    def base_extend(self, ctype):
        '''Return the same ring over another coefficient type.'''
        if ctype is self._ctype:
            return self
        return PolynomialRing(self._scheme, ctype, self._exptype, self._ordering, self._sparse)

    def with_ordering(self, ordering):
        '''Return the same ring with another monomial ordering.'''
        return PolynomialRing(self._scheme, self._ctype, self._exptype, ordering, self._sparse)

    def monomial(self, exponents):
        '''Build a monomial of this ring from a Monomial, a sequence of
        exponents, or a mapping from variable (index or name) to exponent.'''
        cls = self._monomial_class
        if isinstance(exponents, Monomial):
            return exponents.in_ordering(self._ordering)
        if isinstance(exponents, dict):
            pairs = {self._index(var): e for var, e in exponents.items()}
            if not self._sparse and any(i >= self.num_vars for i in pairs):
                raise IndexError('variable index out of range for %r' % self._scheme)
            return cls.from_pairs(self._ordering, pairs, self._exptype)
        if not self._sparse:
            return cls.from_exponents(self._ordering, exponents, self._exptype)
        return cls.from_pairs(self._ordering, enumerate(exponents), self._exptype)

    def one_monomial(self):
        return self._monomial_class.one(self._ordering, self._exptype)

    def _index(self, var):
        if isinstance(var, numbers.Integral):
            if var < 0 or var >= self.num_vars:
                raise IndexError('variable index %d out of range for %r' % (var, self._scheme))
            return int(var)
        return self._scheme.index(var)

    def zero(self):
        return Polynomial(self)

    def one(self):
        return self.constant(1)

    def constant(self, c):
        c = self._ctype(c)
        if c == 0:
            return Polynomial(self)
        return Polynomial(self, [Term(c, self.one_monomial())])

    def term(self, coef, exponents):
        return Polynomial.create([Term(coef, self.monomial(exponents))], self)

    def variable(self, var):
        '''Return the generator for a variable given by index or name.'''
        i = self._index(var)
        return Polynomial(self, [Term(self._ctype(1), self.monomial({i: 1}))])

    def generators(self):
        '''The variables of this ring as polynomials. Rings over a
        numbered scheme yield an infinite iterator.'''
        if isinstance(self._scheme, Numbered):
            return _count_variables(self)
        return tuple(self.variable(i) for i in range(self.num_vars))

    def coerce(self, x):
        return as_polynomial(x, self)

    def __call__(self, x):
        return as_polynomial(x, self)

    def __eq__(self, rhs):
        if self is rhs:
            return True
        if not isinstance(rhs, PolynomialRing):
            return False
        return (self._scheme == rhs._scheme and
                self._ctype is rhs._ctype and
                self._exptype is rhs._exptype and
                self._ordering == rhs._ordering and
                self._sparse == rhs._sparse)

    def __ne__(self, rhs):
        return not (self == rhs)

    def __hash__(self):
        return hash((self._scheme, self._ctype, self._exptype, self._ordering, self._sparse))

    def __repr__(self):
        return 'PolynomialRing(%r, %s, %s)' % (self._scheme, getattr(self._ctype, '__name__', self._ctype),
                                               self._ordering.rule)


def _count_variables(ring):
    i = 0
    while True:
        yield ring.variable(i)
        i += 1


def polynomial_ring(*names, **kwargs):
    '''Create a polynomial ring in the named variables and return it
    together with a tuple of its generators.

    Keyword arguments: ctype (coefficient type, default Fraction),
    exptype (numpy integer type for exponents, default int16),
    ordering ('degrevlex', 'deglex', 'lex' or a registered rule),
    sparse (store monomials sparsely, default False).'''
    if len(names) == 1 and not isinstance(names[0], str):
        names = tuple(names[0])
    ring = PolynomialRing(Named(names),
                          ctype=kwargs.get('ctype', fractions.Fraction),
                          exptype=kwargs.get('exptype', np.int16),
                          ordering=kwargs.get('ordering', 'degrevlex'),
                          sparse=kwargs.get('sparse', False))
    return ring, ring.generators()


def numbered_polynomial_ring(name, **kwargs):
    '''Create a polynomial ring in the variables name[0], name[1], ...
    with sparse monomials.'''
    return PolynomialRing(Numbered(name),
                          ctype=kwargs.get('ctype', fractions.Fraction),
                          exptype=kwargs.get('exptype', np.int16),
                          ordering=kwargs.get('ordering', 'degrevlex'),
                          sparse=True)


def promote_rings(a, b):
    '''Find a ring containing both A and B, or raise
    IncompatibleSchemeError.'''
    if a == b:
        return a
    if type(a.ordering) is not type(b.ordering):
        raise IncompatibleSchemeError('cannot combine polynomials ordered by %s and %s' %
                                      (a.ordering.rule, b.ordering.rule))
    scheme = promote_schemes(a.scheme, b.scheme)
    return PolynomialRing(scheme,
                          promote_ctypes(a.ctype, b.ctype),
                          np.promote_types(a.exptype, b.exptype).type,
                          type(a.ordering),
                          a.sparse or b.sparse or not isinstance(scheme, Named))


def common_ring(polynomials):
    polynomials = list(polynomials)
    if len(polynomials) == 0:
        raise ValueError('need at least one polynomial to determine a ring')
    return functools.reduce(promote_rings, (p.ring for p in polynomials))


#
# Terms
#

class Term(object):
    '''A coefficient times a monomial. Terms order by their monomial.'''
    __slots__ = ('_coef', '_monomial')

    def __init__(self, coef, monomial):
        self._coef = coef
        self._monomial = monomial

    @property
    def coef(self):
        return self._coef

    @property
    def monomial(self):
        return self._monomial

    @property
    def total_degree(self):
        return self._monomial.total_degree

    def __mul__(self, rhs):
        if isinstance(rhs, Term):
            return Term(self._coef * rhs._coef, self._monomial * rhs._monomial)
        elif isinstance(rhs, Monomial):
            return Term(self._coef, self._monomial * rhs)
        elif isinstance(rhs, Polynomial):
            return NotImplemented
        return Term(self._coef * rhs, self._monomial)

    def __rmul__(self, lhs):
        if isinstance(lhs, Monomial):
            return Term(self._coef, lhs * self._monomial)
        return Term(lhs * self._coef, self._monomial)

    def __neg__(self):
        return Term(-self._coef, self._monomial)

    def divides(self, rhs):
        '''True if the monomial of this term divides that of RHS.'''
        return self._monomial.divides(rhs.monomial)

    def try_divide(self, rhs):
        '''Return self/rhs as a term, or None if it is not a term of the
        same ring.'''
        m = self._monomial.try_divide(rhs.monomial)
        if m is None:
            return None
        c = try_divide_coefficient(self._coef, rhs.coef)
        if c is None:
            return None
        return Term(c, m)

    def __lt__(self, rhs):
        return self._monomial < rhs.monomial

    def __eq__(self, rhs):
        if not isinstance(rhs, Term):
            return NotImplemented
        return self._coef == rhs._coef and self._monomial == rhs._monomial

    def __ne__(self, rhs):
        return not (self == rhs)

    def __hash__(self):
        return hash((self._coef, self._monomial))

    def format(self):
        if self._monomial.total_degree == 0:
            return str(self._coef)
        elif self._coef == 1:
            return self._monomial.format()
        else:
            return '%s*%s' % (self._coef, self._monomial.format())

    def __repr__(self):
        return self.format()


def _merge_terms(left, right, ordering, negate=False):
    '''Merge two sorted term lists, summing (or, with NEGATE, subtracting)
    coefficients of equal monomials and dropping zeros.'''
    result = []
    i = j = 0
    nl = len(left)
    nr = len(right)
    while i < nl and j < nr:
        a = left[i]
        b = right[j]
        c = ordering(a.monomial, b.monomial)
        if c < 0:
            result.append(a)
            i += 1
        elif c > 0:
            result.append(-b if negate else b)
            j += 1
        else:
            coef = a.coef - b.coef if negate else a.coef + b.coef
            if coef != 0:
                result.append(Term(coef, a.monomial))
            i += 1
            j += 1
    result.extend(left[i:])
    if negate:
        result.extend(-b for b in right[j:])
    else:
        result.extend(right[j:])
    return result


def _assert_valid(p):
    if check_invariants:
        ordering = p.ring.ordering
        for t in p._terms:
            assert t.coef != 0, 'zero coefficient in %r' % (p,)
        for a, b in zip(p._terms, p._terms[1:]):
            assert ordering(a.monomial, b.monomial) < 0, 'terms out of order in %r' % (p,)
    return p


class Reduction(enum.Enum):
    '''Which terms of the dividend a one-step division may cancel.'''
    LEAD = 'lead'
    FULL = 'full'
    TAIL = 'tail'


def as_polynomial(x, ring):
    '''Convert scalars, terms, monomials or polynomials from another ring
    to polynomials in RING.'''
    if isinstance(x, Polynomial):
        if x.ring == ring:
            return x
        return Polynomial.create((Term(ring.ctype(t.coef), t.monomial.in_ordering(ring.ordering))
                                  for t in x), ring)
    elif isinstance(x, Term):
        return Polynomial.create([Term(ring.ctype(x.coef), x.monomial.in_ordering(ring.ordering))], ring)
    elif isinstance(x, Monomial):
        return Polynomial(ring, [Term(ring.ctype(1), x.in_ordering(ring.ordering))])
    elif isinstance(x, (numbers.Number, ring.ctype)):
        return ring.constant(x)
    else:
        raise TypeError('Cannot convert %s to polynomial' % type(x).__name__)


def _is_scalar(x):
    return not isinstance(x, (Polynomial, Term, Monomial))


class Polynomial(object):
    def __init__(self, ring, terms=None):
        '''Construct a polynomial from a list of terms that is already
        sorted and coalesced. Use Polynomial.create for arbitrary terms.'''
        self._ring = ring
        self._terms = [] if terms is None else terms

    @classmethod
    def create(cls, terms, ring):
        '''Construct a polynomial from terms in any order, possibly
        sharing monomials.'''
        key = ring.ordering.key
        result = []
        for t in sorted(terms, key=lambda t: key(t.monomial)):
            if result and result[-1].monomial == t.monomial:
                result[-1] = Term(result[-1].coef + t.coef, t.monomial)
            else:
                result.append(t)
        return _assert_valid(Polynomial(ring, [t for t in result if t.coef != 0]))

    @property
    def ring(self):
        return self._ring

    @property
    def ctype(self):
        return self._ring.ctype

    @property
    def num_vars(self):
        '''Return the number of variables in the polynomial ring in
        which this polynomial resides.'''
        return self._ring.num_vars

    @property
    def total_degree(self):
        '''Return the sum of the exponents of the highest-degree term in this polynomial.'''
        if len(self) == 0:
            return 0
        else:
            return max(term.total_degree for term in self._terms)

    def terms(self):
        '''The terms of this polynomial in increasing monomial order.'''
        return tuple(self._terms)

    def monomials(self):
        return tuple(t.monomial for t in self._terms)

    def coefficients(self):
        return tuple(t.coef for t in self._terms)

    def copy(self):
        '''Return a copy of this polynomial.'''
        return Polynomial(self._ring, list(self._terms))

    def astype(self, ctype):
        '''Return a copy of this polynomial in which each coefficient
        is cast to the given type.'''
        if ctype is self.ctype:
            return self
        return as_polynomial(self, self._ring.base_extend(ctype))

    def base_extend(self, ctype=None):
        '''Return this polynomial over the given coefficient type, or over
        the fraction field of its own if none is given.'''
        return self.astype(fraction_field(self.ctype) if ctype is None else ctype)

    def _resolve_ordering(self, ordering=None):
        '''Map None to the ring's ordering and rule tags to orderings
        over the ring's variables.'''
        if ordering is None:
            return self._ring.ordering
        elif isinstance(ordering, MonomialOrdering):
            return ordering
        elif isinstance(ordering, str):
            return ordering_for(ordering, self._ring.scheme)
        else:
            raise OrderingError('monomial orderings must be MonomialOrdering instances or rule tags')

    def sorted_terms(self, ordering=None, reverse=False):
        '''Return the terms of this polynomial sorted by the given
        ordering (lowest ordered term first).'''
        ordering = self._resolve_ordering(ordering)
        if ordering == self._ring.ordering:
            return list(reversed(self._terms)) if reverse else list(self._terms)
        return sorted(self._terms, key=lambda t: ordering.key(t.monomial), reverse=reverse)

    def leading_term(self, ordering=None):
        '''Return the term of this polynomial that is largest under the
        given ordering.'''
        if len(self._terms) == 0:
            raise EmptyPolynomialError('the zero polynomial has no leading term')
        ordering = self._resolve_ordering(ordering)
        if ordering == self._ring.ordering:
            return self._terms[-1]
        return ordering.max(self._terms, key=lambda t: t.monomial)

    def leading_monomial(self, ordering=None):
        return self.leading_term(ordering).monomial

    def leading_coefficient(self, ordering=None):
        return self.leading_term(ordering).coef

    def trailing_terms(self, ordering=None):
        '''Return a polynomial consisting of all terms in this
        polynomial other than the leading term.'''
        lt = self.leading_term(ordering)
        return Polynomial(self._ring, [t for t in self._terms if t is not lt])

    def lt(self, rhs, ordering=None):
        '''Compare polynomials by their leading monomials; zero is the
        smallest polynomial.'''
        if len(rhs) == 0:
            return False
        if len(self) == 0:
            return True
        ordering = self._resolve_ordering(ordering)
        return ordering(self.leading_monomial(ordering), rhs.leading_monomial(ordering)) < 0

    def divides(self, rhs, ordering=None):
        '''True if the leading term of this polynomial divides some term
        of RHS.'''
        lm = self.leading_monomial(ordering)
        return any(lm.divides(term.monomial) for term in rhs)

    def partial_derivative(self, var):
        '''Return a polynomial representing the partial derivative of
        this polynomial with respect to a variable (index or name).'''
        i = self._ring._index(var)
        result = Polynomial(self._ring)
        derivatives = ((t.coef, t.monomial.diff(i)) for t in self._terms)
        result._add_terms(Term(c * n, m) for c, (n, m) in derivatives if n != 0)
        return _assert_valid(result)

    diff = partial_derivative

    def normalized(self, ordering=None):
        '''Return a copy of this polynomial in which the leading
        coefficient is 1.'''
        if len(self) == 0:
            return self.copy()
        return self / self.leading_coefficient(ordering)

    def content(self):
        '''The gcd of the coefficients of a polynomial over the integers.'''
        return functools.reduce(math.gcd, (int(c) for c in self.coefficients()), 0)

    def _add_term(self, term):
        '''Accumulate a term in place, keeping the terms sorted.'''
        if term.coef == 0:
            return
        ordering = self._ring.ordering
        terms = self._terms
        lo, hi = 0, len(terms)
        while lo < hi:
            mid = (lo + hi) // 2
            c = ordering(terms[mid].monomial, term.monomial)
            if c < 0:
                lo = mid + 1
            elif c > 0:
                hi = mid
            else:
                coef = terms[mid].coef + term.coef
                if coef == 0:
                    del terms[mid]
                else:
                    terms[mid] = Term(coef, term.monomial)
                return
        terms.insert(lo, term)

    def _add_terms(self, terms):
        for term in terms:
            self._add_term(term)

    def _merge(self, rhs_terms, negate=False):
        '''Accumulate a sorted list of terms in place.'''
        self._terms = _merge_terms(self._terms, rhs_terms, self._ring.ordering, negate)

    def _coerce_pair(self, rhs):
        if isinstance(rhs, Polynomial):
            if rhs._ring == self._ring:
                return self, rhs
            ring = promote_rings(self._ring, rhs._ring)
            return as_polynomial(self, ring), as_polynomial(rhs, ring)
        elif _is_scalar(rhs):
            ring = self._scalar_ring(rhs)
            return as_polynomial(self, ring), as_polynomial(rhs, ring)
        return self, as_polynomial(rhs, self._ring)

    def _scalar_ring(self, scalar):
        if isinstance(scalar, (self.ctype, numbers.Integral)):
            return self._ring
        return self._ring.base_extend(promote_ctypes(self.ctype, type(scalar)))

    def __eq__(self, rhs):
        if not isinstance(rhs, (Polynomial, Term, Monomial, numbers.Number, self.ctype)):
            return NotImplemented
        try:
            lhs, rhs = self._coerce_pair(rhs)
        except (TypeError, IncompatibleSchemeError):
            return False
        return lhs._terms == rhs._terms

    def __ne__(self, rhs):
        result = self.__eq__(rhs)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(tuple(self._terms))

    def __bool__(self):
        return len(self._terms) > 0

    def __len__(self):
        '''Return the number of terms in this polynomial.'''
        return len(self._terms)

    def __iter__(self):
        '''Iterate over the terms in increasing monomial order.'''
        return iter(self._terms)

    def __getitem__(self, monomial):
        '''Get the coefficient of the given monomial (or exponents) in
        this polynomial, or zero if it does not appear.'''
        m = self._ring.monomial(monomial)
        for term in self._terms:
            if term.monomial == m:
                return term.coef
        return self.ctype(0)

    def __contains__(self, monomial):
        '''Return true if this polynomial contains a non-zero term with
        the given monomial.'''
        m = self._ring.monomial(monomial)
        return any(term.monomial == m for term in self._terms)

    def __neg__(self):
        return Polynomial(self._ring, [-t for t in self._terms])

    def __pos__(self):
        return self

    def __add__(self, rhs):
        if isinstance(rhs, Polynomial) or not _is_scalar(rhs) or isinstance(rhs, (numbers.Number, self.ctype)):
            lhs, rhs = self._coerce_pair(rhs)
            return _assert_valid(Polynomial(lhs._ring, _merge_terms(lhs._terms, rhs._terms, lhs._ring.ordering)))
        return NotImplemented

    def __sub__(self, rhs):
        if isinstance(rhs, Polynomial) or not _is_scalar(rhs) or isinstance(rhs, (numbers.Number, self.ctype)):
            lhs, rhs = self._coerce_pair(rhs)
            return _assert_valid(Polynomial(lhs._ring, _merge_terms(lhs._terms, rhs._terms, lhs._ring.ordering,
                                                                    negate=True)))
        return NotImplemented

    def __radd__(self, lhs):
        try:
            return as_polynomial(lhs, self._ring) + self
        except TypeError:
            return NotImplemented

    def __rsub__(self, lhs):
        try:
            return as_polynomial(lhs, self._ring) - self
        except TypeError:
            return NotImplemented

    def _scale(self, scalar):
        ring = self._scalar_ring(scalar)
        if scalar == 0:
            return Polynomial(ring)
        terms = []
        for t in self._terms:
            c = t.coef * scalar
            if c != 0:
                terms.append(Term(c, t.monomial))
        return Polynomial(ring, terms)

    def _multiply_terms(self, term):
        '''Multiply by a single term; the result stays sorted because the
        ordering is compatible with multiplication.'''
        terms = []
        for t in self._terms:
            c = t.coef * term.coef
            if c != 0:
                terms.append(Term(c, t.monomial * term.monomial))
        return terms

    def __mul__(self, rhs):
        if isinstance(rhs, (Term, Monomial)):
            rhs = as_polynomial(rhs, self._ring)
        if isinstance(rhs, Polynomial):
            lhs, rhs = self._coerce_pair(rhs)
            result = Polynomial(lhs._ring)
            for term in lhs._terms:
                result._merge(rhs._multiply_terms(term))
            return _assert_valid(result)
        elif isinstance(rhs, (numbers.Number, self.ctype)):
            return _assert_valid(self._scale(rhs))
        return NotImplemented

    def __rmul__(self, lhs):
        try:
            return as_polynomial(lhs, self._ring) * self if not _is_scalar(lhs) else self * lhs
        except TypeError:
            return NotImplemented

    def __truediv__(self, rhs):
        '''We only support division by a scalar (or a constant
        polynomial). To perform polynomial division, use f % g to compute
        the remainder, f // g to compute the quotient, or divrem() to
        compute both.'''
        if isinstance(rhs, Polynomial):
            if rhs.total_degree != 0 or len(rhs) == 0:
                if len(rhs) == 0:
                    raise DivisionError('cannot divide by the zero polynomial')
                raise TypeError('must use f % g or f // g for non-constant division')
            rhs = rhs.leading_coefficient()
        if rhs == 0:
            raise DivisionError('cannot divide by zero')
        ctype = fraction_field(self.ctype)
        if not isinstance(rhs, (numbers.Integral, ctype)):
            ctype = promote_ctypes(ctype, type(rhs))
        ring = self._ring.base_extend(ctype)
        terms = []
        for t in self._terms:
            c = ring.ctype(t.coef) / rhs
            if c != 0:
                terms.append(Term(c, t.monomial))
        return _assert_valid(Polynomial(ring, terms))

    def __floordiv__(self, rhs):
        quotients, remainder = divrem(self, [rhs])
        return quotients[0]

    def __mod__(self, rhs):
        quotients, remainder = divrem(self, [rhs])
        return remainder

    def __divmod__(self, rhs):
        quotients, remainder = divrem(self, [rhs])
        return quotients[0], remainder

    def __pow__(self, n):
        '''Expand f**n by enumerating the multinomial terms directly
        rather than by repeated multiplication.'''
        if not isinstance(n, numbers.Integral):
            raise TypeError('cannot raise a polynomial to the power of a %s' % type(n).__name__)
        elif n < 0:
            raise TypeError('cannot raise a polynomial to a negative power.')

        ring = self._ring
        if n == 0:
            return ring.one()
        if n == 1 or len(self) == 0:
            return self.copy()

        terms = self._terms
        N = len(terms)
        i = [0] * N
        i[N - 1] = int(n)
        result = Polynomial(ring)

        while True:
            c = coefficient_from_int(ring.ctype, multinomial(int(n), i))
            m = ring.one_monomial()
            for k in range(N):
                if i[k] > 0:
                    m = m * terms[k].monomial ** i[k]
                    c = c * terms[k].coef ** i[k]
            result._add_term(Term(c, m))

            carry = 1
            for j in range(N - 2, -1, -1):
                i[j] += carry
                i[N - 1] -= carry
                if i[N - 1] < 0:
                    carry = 1
                    i[N - 1] += i[j]
                    i[j] = 0
                else:
                    carry = 0
                    break
            if carry != 0:
                break
        return _assert_valid(result)

    def format(self):
        '''Construct a string representation of this polynomial, leading
        term first.'''
        if len(self) == 0:
            return '0'
        parts = []
        for term in reversed(self._terms):
            if _is_negative(term.coef):
                parts.append('-' if len(parts) == 0 else ' - ')
                term = -term
            elif len(parts) != 0:
                parts.append(' + ')
            parts.append(term.format())
        return ''.join(parts)

    def __repr__(self):
        return self.format()


def _is_negative(c):
    try:
        return c < 0
    except TypeError:
        return False


#
# Division
#

def _terms_to_reduce(redtype, f, ordering):
    if redtype is Reduction.LEAD:
        return (f.leading_term(ordering),)
    terms = f.sorted_terms(ordering, reverse=True)
    if redtype is Reduction.TAIL:
        return terms[1:]
    return terms


def _one_step_div(f, g, ordering, redtype):
    '''Cancel the first term of F (an accumulator owned by the caller)
    that is divisible by the leading term of G. Returns the factor
    used, or None.'''
    if len(f) == 0:
        return None
    if len(g) == 0:
        raise DivisionError('cannot divide by the zero polynomial')
    lt_g = g.leading_term(ordering)
    for t in _terms_to_reduce(redtype, f, ordering):
        factor = t.try_divide(lt_g)
        if factor is not None:
            f._merge(g._multiply_terms(factor), negate=True)
            return factor
    return None


def _one_step_xdiv(f, g, ordering, redtype):
    '''Like _one_step_div, but replaces F by k1*f - k2*m*g so that no
    fractions are introduced. Returns (k1, k2*m) or None.'''
    if len(f) == 0:
        return None
    if len(g) == 0:
        raise DivisionError('cannot divide by the zero polynomial')
    lt_g = g.leading_term(ordering)
    for t in _terms_to_reduce(redtype, f, ordering):
        m = t.monomial.try_divide(lt_g.monomial)
        if m is not None:
            k1, k2 = coefficient_lcm_multipliers(t.coef, lt_g.coef)
            factor = Term(k2, m)
            f._terms = f._scale(k1)._terms
            f._merge(g._multiply_terms(factor), negate=True)
            return k1, factor
    return None


def one_step_div(f, g, ordering=None, redtype=Reduction.FULL):
    '''Perform one step of the division of F by G. Returns (f - m*g, m)
    where m is the term used, or (f, None) if no term of F selected by
    REDTYPE is divisible by the leading term of G.'''
    f, g = f._coerce_pair(g)
    result = f.copy()
    factor = _one_step_div(result, g, f._resolve_ordering(ordering), redtype)
    return _assert_valid(result), factor


def one_step_xdiv(f, g, ordering=None, redtype=Reduction.FULL):
    '''Perform one fraction-free step of the division of F by G. Returns
    (k1*f - m*g, (k1, m)), or (f, None) if no reduction is possible.'''
    f, g = f._coerce_pair(g)
    result = f.copy()
    multipliers = _one_step_xdiv(result, g, f._resolve_ordering(ordering), redtype)
    return _assert_valid(result), multipliers


def divrem(f, G, ordering=None):
    '''Divide F by the polynomials in G until no term of the remainder is
    divisible by any of their leading terms. Returns (quotients,
    remainder) with f == sum(q*g) + remainder.'''
    G = list(G)
    if isinstance(f, Polynomial):
        ring = common_ring([f] + [g for g in G if isinstance(g, Polynomial)])
    else:
        ring = common_ring([g for g in G if isinstance(g, Polynomial)])
    f = as_polynomial(f, ring)
    G = [as_polynomial(g, ring) for g in G]
    if any(len(g) == 0 for g in G):
        raise DivisionError('cannot divide by the zero polynomial')
    ordering = f._resolve_ordering(ordering)

    quotients = [Polynomial(ring) for g in G]
    remainder = f.copy()
    i = 0
    while i < len(G):
        factor = _one_step_div(remainder, G[i], ordering, Reduction.FULL)
        if factor is not None:
            quotients[i]._add_term(factor)
            i = 0
        else:
            i += 1
    return [_assert_valid(q) for q in quotients], _assert_valid(remainder)


def divide(f, G, ordering=None):
    '''The quotients of the division of F by the polynomials in G.'''
    return divrem(f, G, ordering)[0]


def remainder(f, G, ordering=None):
    '''Compute the remainder of f on division by the polynomials in G.'''
    return divrem(f, G, ordering)[1]


#
# Utilities
#

def map_coefficients(f, polynomial, ctype=None):
    '''Return a new polynomial formed by replacing each coefficient in
    the given polynomial with f(coefficient).'''
    ring = polynomial.ring if ctype is None else polynomial.ring.base_extend(ctype)
    terms = []
    for term in polynomial:
        c = f(term.coef)
        if c != 0:
            terms.append(Term(c, term.monomial))
    return _assert_valid(Polynomial(ring, terms))


def common_denominator(polynomial):
    '''The least common multiple of the denominators of the coefficients.'''
    result = 1
    for c in polynomial.coefficients():
        d = fractions.Fraction(c).denominator
        result = result * d // math.gcd(result, d)
    return result


def integral_fraction(polynomial):
    '''Return (g, N) such that polynomial == g / N and g has integer
    coefficients.'''
    N = common_denominator(polynomial)
    return map_coefficients(lambda c: int(c * N), polynomial, int), N


def matrix_form(F, monomials=None, ordering=None):
    '''Put the system of polynomials F into matrix form as C * X, where C
    is a matrix of coefficients and X is a list of monomials. If no
    monomials are given, all monomials of F are used, sorted by the
    ordering.'''
    F = list(F)
    if monomials is None:
        monomials = list(set(term.monomial for f in F for term in f))
        ordering = F[0]._resolve_ordering(ordering)
        monomials.sort(key=ordering.key)
    C = np.empty((len(F), len(monomials)), dtype=object)
    for i, f in enumerate(F):
        for j, monomial in enumerate(monomials):
            C[i, j] = f[monomial]
    return C, list(monomials)
