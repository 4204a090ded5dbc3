'''tpcgeo.errors: exceptions raised by the geometry core.'''

from tpcgeo.ids import WireID

class GeometryError(Exception):
    '''A structural request on the geometry can't be satisfied (missing
    element, wrong plane count, no channel map, ...).'''
    def __init__(self, msg):
        Exception.__init__(self, msg)

class WireOutOfRangeError(GeometryError, IndexError):
    '''A wire index beyond the last wire of a plane was requested.'''
    def __init__(self, msg):
        GeometryError.__init__(self, msg)

class InvalidWireError(GeometryError):
    '''A position projects outside the wires of a plane.

    The nominal wire number, which does not exist, is in ``wire_number``
    (it may be negative); ``better_wire_id`` is the existing wire closest
    to it.  ``bad_wire_id`` is an invalid ``WireID`` with the nominal
    number, or None when that number is negative.
    '''
    def __init__(self, msg, plane_id, wire_number, better_wire_id):
        GeometryError.__init__(self, msg)
        self.plane_id = plane_id
        self.wire_number = wire_number
        self.better_wire_id = better_wire_id

    @property
    def bad_wire_id(self):
        if self.wire_number < 0:
            return None
        return WireID(self.plane_id, self.wire_number, is_valid=False)
