'''Signature-based Groebner bases, following the GWV algorithm of

  Shuhong Gao, Frank Volny and Mingsheng Wang, "A new algorithm for
  computing Groebner bases", IACR Cryptology ePrint Archive 2010/641.

The engine works with labelled polynomials (T, v) where the signature T
is a monomial multiple of a unit vector e_i, one unit vector per input
generator. When transformation tracking is requested each labelled
polynomial also carries a row r with v == sum(r[j] * F[j]).'''

import collections
import functools
import heapq
import itertools
import logging

import numpy as np

from monomial import any_divisor
from polynomial import Polynomial, Term, as_polynomial, common_ring, divrem, fraction_field
from schemes import IncompatibleSchemeError

_logger = logging.getLogger(__name__)


class Signature(object):
    '''The module monomial monomial*e_index.'''
    __slots__ = ('index', 'monomial')

    def __init__(self, index, monomial):
        self.index = index
        self.monomial = monomial

    def __mul__(self, monomial):
        return Signature(self.index, self.monomial * monomial)

    __rmul__ = __mul__

    def try_divide(self, rhs):
        '''Return the monomial t with t*rhs == self, or None.'''
        if self.index != rhs.index:
            return None
        return self.monomial.try_divide(rhs.monomial)

    def divides(self, rhs):
        return self.index == rhs.index and self.monomial.divides(rhs.monomial)

    def __eq__(self, rhs):
        if not isinstance(rhs, Signature):
            return NotImplemented
        return self.index == rhs.index and self.monomial == rhs.monomial

    def __ne__(self, rhs):
        return not (self == rhs)

    def __hash__(self):
        return hash((self.index, self.monomial))

    def __repr__(self):
        return '%s*e%d' % (self.monomial.format(), self.index)


def compare_signatures(ordering, a, b):
    '''Order signatures by monomial under ORDERING, then by index.'''
    c = ordering(a.monomial, b.monomial)
    if c != 0:
        return c
    return (a.index > b.index) - (a.index < b.index)


class JoinPairs(object):
    '''Pending J-pairs keyed by signature. Holds at most one labelled
    polynomial per signature and pops them in increasing signature
    order. Entries removed by discard_if leave stale heap records behind,
    which pop_min skips.'''
    def __init__(self, ordering):
        self._key = functools.cmp_to_key(functools.partial(compare_signatures, ordering))
        self._entries = {}
        self._heap = []
        self._counter = itertools.count()

    def __len__(self):
        return len(self._entries)

    def __contains__(self, signature):
        return signature in self._entries

    def __getitem__(self, signature):
        return self._entries[signature]

    def insert(self, signature, entry):
        if signature not in self._entries:
            heapq.heappush(self._heap, (self._key(signature), next(self._counter), signature))
        self._entries[signature] = entry

    def pop_min(self):
        while True:
            key, n, signature = heapq.heappop(self._heap)
            entry = self._entries.pop(signature, None)
            if entry is not None:
                return entry

    def discard_if(self, predicate):
        for signature in [s for s in self._entries if predicate(s)]:
            del self._entries[signature]


#
# Transformation rows
#

def _unit_row(ring, n, i):
    return [ring.one() if j == i else ring.zero() for j in range(n)]


def _multiply_row(row, factor):
    if row is None:
        return None
    return [p * factor for p in row]


def _subtract_row(a, b):
    if a is None:
        return None
    return [x - y for x, y in zip(a, b)]


def _combine_rows(coefficients, T, ring):
    '''Compute the row vector coefficients * T.'''
    n = T.shape[1]
    result = [ring.zero() for j in range(n)]
    for l, c in enumerate(coefficients):
        if c:
            for j in range(n):
                result[j] = result[j] + c * T[l, j]
    return result


def _row_matrix(rows, n):
    # filled elementwise so that numpy never treats polynomials as sequences
    M = np.empty((len(rows), n), dtype=object)
    for i, row in enumerate(rows):
        for j, p in enumerate(row):
            M[i, j] = p
    return M


#
# The engine
#

def engine_ring(polynomials, ordering=None):
    '''The ring in which the engine computes: the common ring of the
    inputs over the fraction field of its coefficients.'''
    rings = [p.ring for p in polynomials if isinstance(p, Polynomial)]
    if len(rings) == 0:
        raise TypeError('need at least one polynomial to determine a ring')
    for ring in rings[1:]:
        if ring.scheme != rings[0].scheme:
            raise IncompatibleSchemeError('generators belong to different variable schemes: %r and %r' %
                                          (rings[0].scheme, ring.scheme))
    ring = common_ring(p for p in polynomials if isinstance(p, Polynomial))
    ring = ring.base_extend(fraction_field(ring.ctype))
    if ordering is not None:
        ring = ring.with_ordering(ordering)
    return ring


def _rewritable(ordering, T, v, G):
    '''The signature criterion: (T, v) is redundant if some (u2, v2) in
    G has u2 | T and (T/u2)*lm(v2) < lm(v).'''
    lm = v.leading_monomial()
    for u2, v2, row2 in G:
        t = T.try_divide(u2)
        if t is not None and ordering(t * v2.leading_monomial(), lm) < 0:
            return True
    return False


def _regular_topreduce(ordering, T, v, row, G):
    '''Cancel the leading monomial of v against elements of G whose
    scaled signature is smaller than T, until no such reduction applies.
    Returns (v, row, supertopreducible).'''
    supertopreducible = False
    i = 0
    while i < len(G):
        u2, v2, row2 = G[i]
        if v:
            t = v.leading_monomial().try_divide(v2.leading_monomial())
            if t is not None:
                c = v.leading_coefficient() / v2.leading_coefficient()
                cmp = compare_signatures(ordering, u2 * t, T)
                if cmp < 0:
                    factor = Term(c, t)
                    v = v - v2 * factor
                    row = _subtract_row(row, _multiply_row(row2, factor))
                    supertopreducible = False
                    i = 0
                    continue
                elif cmp == 0 and c == 1:
                    supertopreducible = True
        i += 1
    return v, row, supertopreducible


def gwv(polynomials, ordering=None, transformation=False):
    '''Compute a Groebner basis of the ideal generated by POLYNOMIALS.

    Returns a list of polynomials over the fraction field of the input
    coefficients. With TRANSFORMATION, returns (basis, rows) where
    rows[i] lists the coefficients expressing basis[i] in terms of the
    input polynomials.'''
    polynomials = list(polynomials)
    if len(polynomials) == 0:
        return ([], []) if transformation else []

    ring = engine_ring(polynomials, ordering)
    F = [as_polynomial(p, ring) for p in polynomials]
    n = len(F)
    o = ring.ordering
    one = ring.one_monomial()

    G = []
    H = collections.defaultdict(set)
    JP = JoinPairs(o)
    for i, p in enumerate(F):
        if p:
            T = Signature(i, one)
            JP.insert(T, (T, p, _unit_row(ring, n, i) if transformation else None))

    stats = collections.Counter()

    def reducible_by_syzygies(index):
        known = H.get(index, ())

        def predicate(d):
            stats['divisors_considered'] += 1
            return d in known
        return predicate

    loops = 0
    considered = 0
    progress_logged = False
    while len(JP) > 0:
        loops += 1
        if loops % 100 == 0:
            _logger.info('GWV: After %d loops: %d elements in basis; %d J-pairs considered; '
                         '|JP|=%d, |H|=%d; %d considerations of divisors (%.2f divisors on average).',
                         loops, len(G), considered, len(JP), sum(len(h) for h in H.values()),
                         stats['divisor_considerations'],
                         stats['divisors_considered'] / max(1, stats['divisor_considerations']))
            progress_logged = True

        T, v, row = JP.pop_min()

        if _rewritable(o, T, v, G):
            continue

        v, row, supertopreducible = _regular_topreduce(o, T, v, row, G)

        if not v:
            H[T.index].add(T.monomial)
            JP.discard_if(T.divides)
            _logger.debug('GWV: reduction to zero at signature %r', T)
        elif not supertopreducible:
            lm = v.leading_monomial()
            lc = v.leading_coefficient()

            # leading monomials of the principal syzygies v*Tj - vj*T
            for Tj, vj, rowj in G:
                lhs = Tj * lm
                rhs = T * vj.leading_monomial()
                if lhs != rhs:
                    h = lhs if compare_signatures(o, lhs, rhs) > 0 else rhs
                    H[h.index].add(h.monomial)

            for Tj, vj, rowj in G:
                t1, t2 = lm.lcm_multipliers(vj.leading_monomial())
                c = lc / vj.leading_coefficient()
                lhs = T * t1
                rhs = Tj * t2
                if c == 1 and lhs == rhs:
                    continue
                if compare_signatures(o, lhs, rhs) < 0:
                    signature, value, jrow = rhs, vj * t2, _multiply_row(rowj, t2)
                else:
                    signature, value, jrow = lhs, v * t1, _multiply_row(row, t1)

                stats['divisor_considerations'] += 1
                if any_divisor(reducible_by_syzygies(signature.index), signature.monomial):
                    continue
                if signature in JP:
                    if value.lt(JP[signature][1]):
                        JP.insert(signature, (signature, value, jrow))
                else:
                    JP.insert(signature, (signature, value, jrow))
                    _logger.debug('GWV: new J-pair with signature %r', signature)

            G.append((T, v, row))

        considered += 1

    if progress_logged:
        _logger.info('Done; interreducing the %d result polynomials', len(G))
    values, rows = _interreduce([v for T, v, row in G], [row for T, v, row in G])
    if progress_logged:
        _logger.info('Done. Returning a Groebner basis of length %d', len(values))

    if transformation:
        return values, rows
    return values


def _interreduce(values, rows):
    '''Drop the elements whose leading monomial is divisible by that of
    another element (keeping the first of equal ones), then reduce the
    remaining ones against each other. Leading monomials do not change
    in the second step.'''
    lms = [v.leading_monomial() for v in values]
    k = len(values)
    keep = [i for i in range(k)
            if not any(j != i and lms[j].divides(lms[i]) and (lms[j] != lms[i] or j < i)
                       for j in range(k))]
    result_values = []
    result_rows = []
    for i in keep:
        others = [j for j in keep if j != i]
        v = values[i]
        row = rows[i]
        if others:
            quotients, v = divrem(v, [values[j] for j in others])
            for q, j in zip(quotients, others):
                if q:
                    row = _subtract_row(row, _multiply_row(rows[j], q))
        result_values.append(v)
        result_rows.append(row)
    return result_values, result_rows


def groebner_basis(polynomials, ordering=None):
    '''Compute a Groebner basis of the ideal generated by POLYNOMIALS.'''
    return gwv(polynomials, ordering)


def groebner_transformation(polynomials, ordering=None):
    '''Compute a Groebner basis G of the ideal generated by F together
    with a numpy object matrix T of shape (len(G), len(F)) such that
    G[i] == sum(T[i, j] * F[j]).'''
    polynomials = list(polynomials)
    G, rows = gwv(polynomials, ordering, transformation=True)
    return G, _row_matrix(rows, len(polynomials))


def syzygies(polynomials, ordering=None):
    '''Compute relations among the polynomials F: the rows s of the
    returned numpy object matrix satisfy sum(s[j] * F[j]) == 0.

    The relations come from two places. Reducing the S-polynomial of
    each pair of Groebner basis elements to zero gives a relation among
    the basis, which T maps back to F. Writing each F[m] in terms of the
    basis gives the rows of I - D*T.'''
    polynomials = list(polynomials)
    n = len(polynomials)
    if n == 0:
        return np.empty((0, 0), dtype=object)
    ring = engine_ring(polynomials, ordering)
    F = [as_polynomial(p, ring) for p in polynomials]
    G, T = groebner_transformation(F)
    k = len(G)

    candidates = []
    for i in range(k):
        lti = G[i].leading_term()
        for j in range(i + 1, k):
            ltj = G[j].leading_term()
            mi, mj = lti.monomial.lcm_multipliers(ltj.monomial)
            ti = Term(1 / lti.coef, mi)
            tj = Term(1 / ltj.coef, mj)
            s = G[i] * ti - G[j] * tj
            quotients, r = divrem(s, G)
            assert not r, 'S-polynomial did not reduce to zero'
            coefficients = [-q for q in quotients]
            coefficients[i] = coefficients[i] + ti
            coefficients[j] = coefficients[j] - tj
            candidates.append(_combine_rows(coefficients, T, ring))

    for m in range(n):
        if k > 0:
            quotients, r = divrem(F[m], G)
            row = [-p for p in _combine_rows(quotients, T, ring)]
        else:
            row = [ring.zero() for j in range(n)]
        row[m] = row[m] + ring.one()
        candidates.append(row)

    rows = []
    seen = set()
    for row in candidates:
        key = tuple(row)
        if all(not p for p in row) or key in seen:
            continue
        seen.add(key)
        rows.append(row)
    _logger.debug('found %d syzygies among %d polynomials', len(rows), n)
    return _row_matrix(rows, n)
