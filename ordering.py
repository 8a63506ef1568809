'''Monomial orderings. An ordering is a strategy object identified by a
rule tag together with the variable scheme it orders. Calling it on two
monomials returns -1, 0, or 1.'''

import abc
import functools


class OrderingError(Exception):
    pass


def compare_leftmost(a, b):
    '''Compare exponents from the first variable forward; the monomial
    with the larger exponent at the first difference is larger.'''
    for i in a.index_union(b):
        ea = a.exponent(i)
        eb = b.exponent(i)
        if ea > eb:
            return 1
        elif ea < eb:
            return -1
    return 0


def compare_rightmost(a, b):
    '''Compare exponents from the last variable backward; the monomial
    with the larger exponent at the last difference is larger.'''
    for i in reversed(a.index_union(b)):
        ea = a.exponent(i)
        eb = b.exponent(i)
        if ea > eb:
            return 1
        elif ea < eb:
            return -1
    return 0


def compare_degree(a, b):
    if a.total_degree > b.total_degree:
        return 1
    elif a.total_degree < b.total_degree:
        return -1
    return 0


class MonomialOrdering(abc.ABC):
    '''Represents a total order on the monomials of a variable scheme.
    The order must be compatible with multiplication.'''
    rule = None

    def __init__(self, scheme):
        self._scheme = scheme

    @property
    def scheme(self):
        return self._scheme

    @abc.abstractmethod
    def __call__(self, a, b):
        '''Compare two monomials and return -1, 0, or 1.'''

    @property
    def key(self):
        '''A sort key implementing this ordering.'''
        return functools.cmp_to_key(self)

    def lt(self, a, b):
        return self(a, b) < 0

    def max(self, items, key=None):
        if key is None:
            return max(items, key=self.key)
        return max(items, key=lambda item: self.key(key(item)))

    def min(self, items, key=None):
        if key is None:
            return min(items, key=self.key)
        return min(items, key=lambda item: self.key(key(item)))

    def with_scheme(self, scheme):
        '''Return the ordering with the same rule over another scheme.'''
        return type(self)(scheme)

    def __eq__(self, rhs):
        return type(self) is type(rhs) and self._scheme == rhs._scheme

    def __ne__(self, rhs):
        return not (self == rhs)

    def __hash__(self):
        return hash((self.rule, self._scheme))

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self._scheme)


class LexOrdering(MonomialOrdering):
    '''Implements "lex" monomial ordering.'''
    rule = 'lex'

    def __call__(self, a, b):
        return compare_leftmost(a, b)


class GrlexOrdering(MonomialOrdering):
    '''Implements "deglex" monomial ordering.'''
    rule = 'deglex'

    def __call__(self, a, b):
        return compare_degree(a, b) or compare_leftmost(a, b)


class GrevlexOrdering(MonomialOrdering):
    '''Implements "degrevlex" monomial ordering.'''
    rule = 'degrevlex'

    def __call__(self, a, b):
        return compare_degree(a, b) or compare_rightmost(b, a)  # yes this is (b,a) not (a,b)


_orderings = {
    'lex': LexOrdering,
    'deglex': GrlexOrdering,
    'grlex': GrlexOrdering,
    'degrevlex': GrevlexOrdering,
    'grevlex': GrevlexOrdering,
}


def register_ordering(rule, cls):
    '''Make a user-defined MonomialOrdering subclass available under the
    given rule tag.'''
    if not (isinstance(cls, type) and issubclass(cls, MonomialOrdering)):
        raise OrderingError('monomial orderings must subclass MonomialOrdering')
    _orderings[rule] = cls


def ordering_for(rule, scheme):
    '''Resolve a rule tag (or an ordering instance) for the given scheme.'''
    if isinstance(rule, MonomialOrdering):
        if rule.scheme != scheme:
            raise OrderingError('%r does not order the variables of %r' % (rule, scheme))
        return rule
    if isinstance(rule, type) and issubclass(rule, MonomialOrdering):
        return rule(scheme)
    try:
        return _orderings[rule](scheme)
    except KeyError:
        raise OrderingError('unknown monomial ordering %r' % (rule,))
