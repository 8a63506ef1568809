'''Variable schemes: which variables exist in a ring and in what order.'''

import math


class IncompatibleSchemeError(TypeError):
    pass


class NamingScheme(object):
    '''Base class for variable schemes. Schemes are immutable and
    compare by value.'''
    def __eq__(self, rhs):
        return type(self) is type(rhs) and self._key() == rhs._key()

    def __ne__(self, rhs):
        return not (self == rhs)

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    def _key(self):
        raise NotImplementedError()


class Named(NamingScheme):
    '''A fixed, ordered tuple of variable names.'''
    def __init__(self, names):
        names = tuple(names)
        if len(names) == 0:
            raise ValueError('need at least one variable name')
        if len(set(names)) != len(names):
            raise ValueError('duplicated variable names in %s' % (names,))
        self._names = names

    @property
    def names(self):
        return self._names

    @property
    def num_variables(self):
        return len(self._names)

    def index(self, name):
        return self._names.index(name)

    def name(self, index):
        return self._names[index]

    def _key(self):
        return self._names

    def __repr__(self):
        return 'Named(%s)' % ', '.join(self._names)


class Numbered(NamingScheme):
    '''An unbounded family of variables name[0], name[1], ...'''
    def __init__(self, name):
        self._name = name

    @property
    def names(self):
        return None

    @property
    def num_variables(self):
        return math.inf

    def index(self, name):
        prefix = self._name + '['
        if not (isinstance(name, str) and name.startswith(prefix) and name.endswith(']')):
            raise ValueError('%s is not a variable of %s' % (name, self))
        return int(name[len(prefix):-1])

    def name(self, index):
        return '%s[%d]' % (self._name, index)

    def _key(self):
        return self._name

    def __repr__(self):
        return 'Numbered(%s)' % self._name


def promote_schemes(a, b):
    '''Find a scheme containing the variables of both A and B, or raise
    IncompatibleSchemeError if there is none.'''
    if a == b:
        return a
    if isinstance(a, Named) and isinstance(b, Named):
        extra = tuple(name for name in b.names if name not in a.names)
        return Named(a.names + extra)
    raise IncompatibleSchemeError('no common variable scheme for %s and %s' % (a, b))


def reindex(index_value_pairs, source, target):
    '''Map (index, exponent) pairs expressed in the scheme SOURCE to the
    indices of the scheme TARGET, matching variables by name.'''
    if source == target:
        return list(index_value_pairs)
    if not (isinstance(source, Named) and isinstance(target, Named)):
        raise IncompatibleSchemeError('cannot express %s variables in %s' % (source, target))
    result = []
    for i, e in index_value_pairs:
        if e == 0:
            continue
        name = source.name(i)
        if name not in target.names:
            raise IncompatibleSchemeError('variable %s does not exist in %s' % (name, target))
        result.append((target.index(name), e))
    return sorted(result)
