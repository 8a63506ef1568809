'''Monomials: exponent vectors over a variable scheme.

A monomial is logically a map from variable index to a non-negative
exponent with finitely many nonzero values. Two storage strategies share
one interface (exponent(i), nonzero_indices(), _build(...)):

  DenseMonomial   a tuple with one slot per variable of a Named scheme
  SparseMonomial  sorted (index, exponent) pairs of the nonzero exponents

Monomials are immutable. Every operation builds a new value.'''

import bisect

import numpy as np

from schemes import IncompatibleSchemeError, Named, promote_schemes, reindex


class ExponentError(ValueError):
    pass


def check_exponents(values, exptype):
    '''Raise ExponentError unless every exponent fits in EXPTYPE and is
    non-negative.'''
    upper = np.iinfo(exptype).max
    for v in values:
        if v < 0:
            raise ExponentError('negative exponent %d' % v)
        if v > upper:
            raise ExponentError('exponent %d does not fit in %s; use a wider exptype' %
                                (v, np.dtype(exptype).name))


def _join_exptypes(a, b):
    if a is b:
        return a
    return np.promote_types(a, b).type


class _EnumerateNonzero(object):
    '''Lazy, restartable sequence of (index, exponent) pairs for the
    structurally nonzero slots of a monomial.'''
    def __init__(self, monomial):
        self._monomial = monomial

    def __iter__(self):
        m = self._monomial
        for i in m.nonzero_indices():
            yield i, m.exponent(i)

    def __len__(self):
        return len(self._monomial.nonzero_indices())


class Monomial(object):
    '''Abstract base class for monomials. Concrete classes implement
    exponent(), nonzero_indices() and _build().'''
    def __init__(self, ordering, exptype, degree):
        self._ordering = ordering
        self._exptype = exptype
        self._degree = degree
        self._hash = None

    @property
    def ordering(self):
        return self._ordering

    @property
    def scheme(self):
        return self._ordering.scheme

    @property
    def exptype(self):
        return self._exptype

    @property
    def total_degree(self):
        return self._degree

    def exponent(self, i):
        raise NotImplementedError()

    def nonzero_indices(self):
        raise NotImplementedError()

    @classmethod
    def _build(cls, ordering, exptype, f, indices, degree=None):
        '''Construct a monomial with exponent f(i) for each i in INDICES
        (all other exponents being zero).'''
        raise NotImplementedError()

    @classmethod
    def from_exponents(cls, ordering, exponents, exptype=np.int16):
        exponents = tuple(int(e) for e in exponents)
        return cls._build(ordering, exptype, lambda i: exponents[i], range(len(exponents)))

    @classmethod
    def from_pairs(cls, ordering, pairs, exptype=np.int16):
        pairs = dict(pairs)
        return cls._build(ordering, exptype, lambda i: pairs.get(i, 0), sorted(pairs))

    @classmethod
    def one(cls, ordering, exptype=np.int16):
        return cls._build(ordering, exptype, lambda i: 0, (), 0)

    def enumerate_nonzero(self):
        return _EnumerateNonzero(self)

    def index_union(self, rhs):
        '''Sorted indices at which either monomial may be nonzero.'''
        return sorted(set(self.nonzero_indices()) | set(rhs.nonzero_indices()))

    def in_ordering(self, ordering):
        '''Re-express this monomial in another ordering, matching
        variables by name if the scheme differs.'''
        if ordering == self._ordering:
            return self
        pairs = reindex(self.enumerate_nonzero(), self.scheme, ordering.scheme)
        cls = type(self) if isinstance(ordering.scheme, Named) else SparseMonomial
        return cls.from_pairs(ordering, pairs, self._exptype)

    def _unify(self, rhs):
        '''Bring SELF and RHS into a common ordering and pick the class
        of the result.'''
        if not isinstance(rhs, Monomial):
            raise TypeError('expected a monomial, got %s' % type(rhs).__name__)
        a, b = self, rhs
        if a._ordering is not b._ordering and a._ordering != b._ordering:
            if type(a._ordering) is not type(b._ordering):
                raise IncompatibleSchemeError('cannot combine monomials ordered by %r and %r' %
                                              (a._ordering, b._ordering))
            ordering = a._ordering.with_scheme(promote_schemes(a.scheme, b.scheme))
            a = a.in_ordering(ordering)
            b = b.in_ordering(ordering)
        if isinstance(a, DenseMonomial) and isinstance(b, DenseMonomial):
            cls = DenseMonomial
        else:
            cls = SparseMonomial
        return a, b, cls, _join_exptypes(a._exptype, b._exptype)

    def __mul__(self, rhs):
        if not isinstance(rhs, Monomial):
            return NotImplemented
        a, b, cls, exptype = self._unify(rhs)
        return cls._build(a._ordering, exptype,
                          lambda i: a.exponent(i) + b.exponent(i),
                          a.index_union(b),
                          a._degree + b._degree)

    def __pow__(self, n):
        if n < 0:
            raise ExponentError('cannot raise a monomial to a negative power')
        return type(self)._build(self._ordering, self._exptype,
                                 lambda i: self.exponent(i) * n,
                                 self.nonzero_indices(),
                                 self._degree * n)

    def lcm(self, rhs):
        a, b, cls, exptype = self._unify(rhs)
        return cls._build(a._ordering, exptype,
                          lambda i: max(a.exponent(i), b.exponent(i)),
                          a.index_union(b))

    def gcd(self, rhs):
        a, b, cls, exptype = self._unify(rhs)
        return cls._build(a._ordering, exptype,
                          lambda i: min(a.exponent(i), b.exponent(i)),
                          a.index_union(b))

    def try_divide(self, rhs):
        '''Return self/rhs, or None if rhs does not divide self.'''
        a, b, cls, exptype = self._unify(rhs)
        indices = a.index_union(b)
        if any(a.exponent(i) < b.exponent(i) for i in indices):
            return None
        return cls._build(a._ordering, exptype,
                          lambda i: a.exponent(i) - b.exponent(i),
                          indices,
                          a._degree - b._degree)

    def divides(self, rhs):
        '''True if self divides rhs.'''
        a, b, cls, exptype = self._unify(rhs)
        if a._degree > b._degree:
            return False
        return all(a.exponent(i) <= b.exponent(i) for i in a.index_union(b))

    def lcm_multipliers(self, rhs):
        '''Return (c1, c2) such that c1*self == c2*rhs == lcm(self, rhs).'''
        a, b, cls, exptype = self._unify(rhs)
        indices = a.index_union(b)
        return (cls._build(a._ordering, exptype,
                           lambda i: max(a.exponent(i), b.exponent(i)) - a.exponent(i),
                           indices),
                cls._build(a._ordering, exptype,
                           lambda i: max(a.exponent(i), b.exponent(i)) - b.exponent(i),
                           indices))

    def lcm_degree(self, rhs):
        '''Total degree of lcm(self, rhs).'''
        a, b, cls, exptype = self._unify(rhs)
        if a._degree == 0 and b._degree == 0:
            return 0
        return sum(max(a.exponent(i), b.exponent(i)) for i in a.index_union(b))

    def mutually_prime(self, rhs):
        a, b, cls, exptype = self._unify(rhs)
        return all(min(a.exponent(i), b.exponent(i)) == 0 for i in a.index_union(b))

    def diff(self, i):
        '''Return (n, m) such that the derivative of self with respect to
        the i-th variable is n*m.'''
        n = self.exponent(i)
        if n == 0:
            return 0, type(self).one(self._ordering, self._exptype)
        return n, type(self)._build(self._ordering, self._exptype,
                                    lambda j: self.exponent(j) - (j == i),
                                    self.nonzero_indices(),
                                    self._degree - 1)

    def _cmp(self, rhs):
        a, b, cls, exptype = self._unify(rhs)
        return a._ordering(a, b)

    def __lt__(self, rhs):
        return self._cmp(rhs) < 0

    def __le__(self, rhs):
        return self._cmp(rhs) <= 0

    def __gt__(self, rhs):
        return self._cmp(rhs) > 0

    def __ge__(self, rhs):
        return self._cmp(rhs) >= 0

    def __eq__(self, rhs):
        if not isinstance(rhs, Monomial):
            return NotImplemented
        if self.scheme != rhs.scheme or self._degree != rhs._degree:
            return False
        return all(self.exponent(i) == rhs.exponent(i) for i in self.index_union(rhs))

    def __ne__(self, rhs):
        result = self.__eq__(rhs)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        # only structurally nonzero entries take part so that dense and
        # sparse monomials hash alike
        if self._hash is None:
            self._hash = hash(tuple((i, e) for i, e in self.enumerate_nonzero() if e != 0))
        return self._hash

    def format(self):
        if self._degree == 0:
            return '1'
        parts = []
        for i, e in self.enumerate_nonzero():
            if e == 0:
                continue
            var = self.scheme.name(i)
            parts.append(var if e == 1 else '%s^%d' % (var, e))
        return '*'.join(parts)

    def __repr__(self):
        return self.format()


class DenseMonomial(Monomial):
    '''A monomial stored as one exponent per variable.'''
    def __init__(self, ordering, exponents, degree=None, exptype=np.int16):
        if degree is None:
            degree = sum(exponents)
        super(DenseMonomial, self).__init__(ordering, exptype, degree)
        self._exponents = exponents

    @property
    def exponents(self):
        return self._exponents

    @classmethod
    def _build(cls, ordering, exptype, f, indices, degree=None):
        n = ordering.scheme.num_variables
        exponents = tuple(f(i) for i in range(n))
        check_exponents(exponents, exptype)
        return cls(ordering, exponents, degree, exptype)

    @classmethod
    def from_exponents(cls, ordering, exponents, exptype=np.int16):
        exponents = tuple(int(e) for e in exponents)
        if len(exponents) != ordering.scheme.num_variables:
            raise ExponentError('expected %d exponents but got %d' %
                                (ordering.scheme.num_variables, len(exponents)))
        check_exponents(exponents, exptype)
        return cls(ordering, exponents, None, exptype)

    def exponent(self, i):
        if 0 <= i < len(self._exponents):
            return self._exponents[i]
        return 0

    def nonzero_indices(self):
        return range(len(self._exponents))

    def index_union(self, rhs):
        if isinstance(rhs, DenseMonomial) and len(rhs._exponents) == len(self._exponents):
            return range(len(self._exponents))
        return super(DenseMonomial, self).index_union(rhs)


class SparseMonomial(Monomial):
    '''A monomial stored as sorted indices and their nonzero exponents.'''
    def __init__(self, ordering, indices, values, degree=None, exptype=np.int16):
        if degree is None:
            degree = sum(values)
        super(SparseMonomial, self).__init__(ordering, exptype, degree)
        self._indices = indices
        self._values = values

    @property
    def indices(self):
        return self._indices

    @property
    def values(self):
        return self._values

    @classmethod
    def _build(cls, ordering, exptype, f, indices, degree=None):
        pairs = [(i, f(i)) for i in indices]
        check_exponents((e for i, e in pairs), exptype)
        pairs = [(i, e) for i, e in pairs if e != 0]
        return cls(ordering,
                   tuple(i for i, e in pairs),
                   tuple(e for i, e in pairs),
                   degree,
                   exptype)

    def exponent(self, i):
        k = bisect.bisect_left(self._indices, i)
        if k < len(self._indices) and self._indices[k] == i:
            return self._values[k]
        return 0

    def nonzero_indices(self):
        return self._indices

    def enumerate_nonzero(self):
        return tuple(zip(self._indices, self._values))


def any_divisor(predicate, monomial):
    '''Return True if predicate(d) holds for some divisor d of MONOMIAL.

    The prod(e_i + 1) divisors are visited one at a time by counting
    down the nonzero exponents like an odometer, so they are never all
    held in memory. The divisors are passed as SparseMonomial objects,
    which compare and hash equal to dense monomials with the same
    exponents.'''
    pairs = [(i, e) for i, e in monomial.enumerate_nonzero() if e != 0]
    if len(pairs) == 0:
        return bool(predicate(monomial))

    indices = [i for i, e in pairs]
    upper = [e for i, e in pairs]
    counter = list(upper)
    ordering = monomial.ordering
    exptype = monomial.exptype

    while True:
        nz = [(i, e) for i, e in zip(indices, counter) if e != 0]
        divisor = SparseMonomial(ordering,
                                 tuple(i for i, e in nz),
                                 tuple(e for i, e in nz),
                                 sum(counter),
                                 exptype)
        if predicate(divisor):
            return True
        carry = 1
        for j in range(len(counter)):
            if carry == 0:
                break
            if counter[j] == 0:
                counter[j] = upper[j]
            else:
                counter[j] -= 1
                carry = 0
        if carry != 0:
            return False
