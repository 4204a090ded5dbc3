'''tpcgeo.ids: identifiers of the detector elements.

Geometry elements are nested, and so are their identifiers::

    CryostatID > TPCID > PlaneID > WireID

Each level adds one index to the identifier of its parent.  The readout
side has its own, parallel hierarchy::

    CryostatID > TPCsetID > ROPID

whose content is decided by the channel mapping only.  Readout channels
are plain non-negative integers.

Identifiers are immutable.  Equality and ordering are lexicographic on the
indices and ignore the validity flag; identifiers of different types are
never equal and can't be ordered.  An identifier may be explicitly marked
invalid (for example, the "end" identifier of an empty cryostat); the
default-constructed one is invalid with all indices at ``INVALID_INDEX``.
'''

from functools import total_ordering

INVALID_INDEX = 2**32 - 1
INVALID_CHANNEL_ID = 2**32 - 1

def is_valid_channel(channel):
    return channel is not None and 0 <= channel < INVALID_CHANNEL_ID

@total_ordering
class ElementID(object):
    "Base of all the identifiers; not used directly."
    __slots__ = ('_indices', '_is_valid')
    _fields = ()
    _labels = ()
    _parent = None

    def __init__(self, *args, is_valid=None):
        if not args:
            indices = (INVALID_INDEX,) * len(self._fields)
            valid = False
        elif isinstance(args[0], ElementID):
            parent = args[0]
            indices = parent.indices + tuple(args[1:])
            valid = parent.is_valid
        else:
            indices = tuple(args)
            valid = True

        if len(indices) != len(self._fields):
            raise TypeError('%s needs %d indices (%s), got %r'
                            % (type(self).__name__, len(self._fields),
                               ', '.join(self._fields), indices))
        indices = tuple(int(i) for i in indices)
        if any(i < 0 for i in indices):
            raise ValueError('%s indices must be non-negative: %r'
                             % (type(self).__name__, indices))

        if is_valid is not None:
            valid = bool(is_valid)
        object.__setattr__(self, '_indices', indices)
        object.__setattr__(self, '_is_valid', valid)

    def __setattr__(self, name, value):
        raise AttributeError('%s is immutable' % type(self).__name__)

    @property
    def indices(self):
        return self._indices

    @property
    def is_valid(self):
        return self._is_valid

    def __bool__(self):
        return self._is_valid

    @property
    def deepest_index(self):
        return self._indices[-1]

    @classmethod
    def level(cls):
        "Depth of this identifier type (cryostat is 1)."
        return len(cls._fields)

    def parent_id(self):
        return self._parent(*self._indices[:-1], is_valid=self._is_valid)

    def with_deepest(self, index):
        "Returns a copy with the deepest index replaced by `index`."
        return type(self)(*(self._indices[:-1] + (index,)), is_valid=self._is_valid)

    def next_id(self):
        return self.with_deepest(self.deepest_index + 1)

    def invalidated(self):
        "Returns a copy of this identifier marked as invalid."
        return type(self)(*self._indices, is_valid=False)

    def _as(self, cls):
        if not isinstance(self, cls):
            raise TypeError('%s is not a %s' % (type(self).__name__, cls.__name__))
        return cls(*self._indices[:len(cls._fields)], is_valid=self._is_valid)

    def as_cryostat_id(self):
        return self._as(CryostatID)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._indices == other._indices

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._indices < other._indices

    def __hash__(self):
        return hash((type(self).__name__,) + self._indices)

    def __str__(self):
        return ' '.join('%s:%d' % pair for pair in zip(self._labels, self._indices))

    def __repr__(self):
        args = ', '.join(str(i) for i in self._indices)
        if not self._is_valid:
            args += ', is_valid=False'
        return '%s(%s)' % (type(self).__name__, args)

class CryostatID(ElementID):
    __slots__ = ()
    _fields = ('cryostat',)
    _labels = ('C',)

    @property
    def cryostat(self):
        return self._indices[0]

    def parent_id(self):
        raise TypeError('CryostatID has no parent')

class TPCID(CryostatID):
    __slots__ = ()
    _fields = ('cryostat', 'tpc')
    _labels = ('C', 'T')
    _parent = CryostatID

    @property
    def tpc(self):
        return self._indices[1]

    parent_id = ElementID.parent_id

    def as_tpc_id(self):
        return self._as(TPCID)

class PlaneID(TPCID):
    __slots__ = ()
    _fields = ('cryostat', 'tpc', 'plane')
    _labels = ('C', 'T', 'P')
    _parent = TPCID

    @property
    def plane(self):
        return self._indices[2]

    def as_plane_id(self):
        return self._as(PlaneID)

class WireID(PlaneID):
    __slots__ = ()
    _fields = ('cryostat', 'tpc', 'plane', 'wire')
    _labels = ('C', 'T', 'P', 'W')
    _parent = PlaneID

    @property
    def wire(self):
        return self._indices[3]

class TPCsetID(CryostatID):
    __slots__ = ()
    _fields = ('cryostat', 'tpcset')
    _labels = ('C', 'S')
    _parent = CryostatID

    @property
    def tpcset(self):
        return self._indices[1]

    parent_id = ElementID.parent_id

    def as_tpcset_id(self):
        return self._as(TPCsetID)

class ROPID(TPCsetID):
    __slots__ = ()
    _fields = ('cryostat', 'tpcset', 'rop')
    _labels = ('C', 'S', 'R')
    _parent = TPCsetID

    @property
    def rop(self):
        return self._indices[2]

EnclosureID = CryostatID
VolumeID = TPCID
TPCSetID = TPCsetID
ReadoutPlaneID = ROPID
