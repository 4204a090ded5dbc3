'''tpcgeo.geometry: access point to the whole detector geometry.

``GeometryCore`` owns the hierarchy of cryostats, TPCs, wire planes and
wires, and the channel mapping which relates wires to readout channels.
The usual life cycle is::

    geom = GeometryCore(name='mydetector')
    geom.load_geometry(cryostats)
    geom.apply_channel_map(ChannelMapStandardAlg())

after which every geometry element can be reached by its ID, and all the
readout queries are forwarded to the channel mapping.
'''

import numpy as np

from tpcgeo.constants import View, view_name
from tpcgeo.errors import GeometryError, InvalidWireError
from tpcgeo.ids import (INVALID_CHANNEL_ID, CryostatID, TPCID, PlaneID, WireID,
                        TPCsetID, ROPID)
from tpcgeo import intersections
from tpcgeo.intersections import WireIDIntersection
from tpcgeo.log import logger

# configuration keys in parameter set style, and the keyword they map to
CONFIG_KEYS = {
    'Name': 'name',
    'SurfaceY': 'surface_y',
    'MinWireZDist': 'min_wire_z_dist',
    'PositionEpsilon': 'position_epsilon',
}

class GeometryCore(object):
    '''Description of the detector geometry and of its readout.

    `name` is the detector name (stored lower case); `surface_y` is the
    height of the surface of the Earth in world coordinates [cm];
    `min_wire_z_dist` is the minimum distance in z between wires for them
    to be considered separate [cm]; `position_epsilon` is the relative
    tolerance used when checking whether a point is inside a volume.
    `surface_y` and `min_wire_z_dist` are only stored, for the benefit of
    callers reading them from a parameter set; no query here uses them.
    '''
    def __init__(self, name='', surface_y=0.0, min_wire_z_dist=3.0, position_epsilon=1e-4):
        self.name = name.lower()
        self.surface_y = surface_y
        self.min_wire_z_dist = min_wire_z_dist
        self.position_epsilon = position_epsilon

        self._cryostats = []
        self._channel_map = None
        self._all_views = set()
        self._opdet_offsets = np.zeros(1, dtype=np.int64)

    @classmethod
    def from_config(cls, config):
        '''Create a geometry from the mapping `config`, whose keys may be
        either parameter set style (``Name``, ``SurfaceY``, ...) or the
        keyword arguments of the constructor.'''
        kwargs = {}
        for key, value in config.items():
            if key in CONFIG_KEYS:
                key = CONFIG_KEYS[key]
            elif key not in CONFIG_KEYS.values():
                raise KeyError('unknown geometry configuration key: %r' % (key,))
            kwargs[key] = value
        return cls(**kwargs)

    def detector_name(self):
        return self.name

    @property
    def position_wiggle(self):
        return 1.0 + self.position_epsilon

    #
    # geometry life cycle
    #

    def load_geometry(self, cryostats):
        '''Replaces the current geometry with the given cryostats.  The new
        geometry is neither sorted nor mapped: see apply_channel_map().'''
        self.clear_geometry()
        self._cryostats = list(cryostats)
        logger.info('new detector geometry "%s" loaded: %d cryostats',
                    self.name, len(self._cryostats))

    def clear_geometry(self):
        self._cryostats = []
        self._all_views = set()
        self._opdet_offsets = np.zeros(1, dtype=np.int64)

    def apply_channel_map(self, channel_map):
        '''Sorts the geometry as `channel_map` wants it, assigns all the
        IDs, then initializes and adopts the channel map.'''
        self.sort_geometry(channel_map.sorter())
        self.update_after_sorting()
        channel_map.initialize(self)
        self._channel_map = channel_map

    def sort_geometry(self, sorter):
        logger.info('sorting volumes...')
        sorter.sort_cryostats(self._cryostats)
        for cryo in self._cryostats:
            cryo.sort_sub_volumes(sorter)

    def update_after_sorting(self):
        for c, cryo in enumerate(self._cryostats):
            cryo.update_after_sorting(CryostatID(c))
        self._all_views = set()
        for tpc in self.iterate_tpcs():
            self._all_views.update(tpc.views())
        self._opdet_offsets = np.concatenate(
            [[0], np.cumsum([cryo.n_opdet() for cryo in self._cryostats], dtype=np.int64)])

    @property
    def channel_map(self):
        if self._channel_map is None:
            raise GeometryError('no channel mapping has been applied to geometry "%s"' % self.name)
        return self._channel_map

    #
    # counts
    #

    def n_cryostats(self):
        return len(self._cryostats)

    def n_tpc(self, cid=CryostatID(0)):
        cryo = self.get_cryostat(cid)
        return cryo.n_tpc() if cryo is not None else 0

    def n_planes(self, tpcid=TPCID(0, 0)):
        tpc = self.get_tpc(tpcid)
        return tpc.n_planes() if tpc is not None else 0

    def n_wires(self, pid=PlaneID(0, 0, 0)):
        plane = self.get_plane(pid)
        return plane.n_wires() if plane is not None else 0

    def max_tpcs(self):
        return max([cryo.n_tpc() for cryo in self._cryostats] + [0])

    def total_n_tpc(self):
        return sum(cryo.n_tpc() for cryo in self._cryostats)

    def max_planes(self):
        return max([cryo.max_planes() for cryo in self._cryostats] + [0])

    def max_wires(self):
        return max([cryo.max_wires() for cryo in self._cryostats] + [0])

    def n_views(self):
        "Number of different views, or wire orientations."
        return self.max_planes()

    def views(self):
        "The set of all the views present in the detector."
        return set(self._all_views)

    #
    # element access
    #

    def has_cryostat(self, cid):
        return 0 <= cid.cryostat < len(self._cryostats)

    def has_tpc(self, tpcid):
        return self.has_cryostat(tpcid) and self.cryostat(tpcid).has_tpc(tpcid)

    def has_plane(self, pid):
        return self.has_tpc(pid) and self.tpc(pid).has_plane(pid)

    def has_wire(self, wid):
        return self.has_plane(wid) and self.plane(wid).has_wire(wid)

    def cryostat(self, cid=CryostatID(0)):
        if not self.has_cryostat(cid):
            raise GeometryError('cryostat #%d does not exist' % cid.cryostat)
        return self._cryostats[cid.cryostat]

    def tpc(self, tpcid=TPCID(0, 0)):
        return self.cryostat(tpcid).tpc(tpcid)

    def plane(self, pid=PlaneID(0, 0, 0)):
        return self.tpc(pid).plane(pid)

    def wire(self, wid):
        return self.plane(wid).wire(wid)

    def get_cryostat(self, cid):
        return self._cryostats[cid.cryostat] if self.has_cryostat(cid) else None

    def get_tpc(self, tpcid):
        return self.tpc(tpcid) if self.has_tpc(tpcid) else None

    def get_plane(self, pid):
        return self.plane(pid) if self.has_plane(pid) else None

    def iterate_cryostats(self):
        return iter(self._cryostats)

    def iterate_tpcs(self):
        for cryo in self._cryostats:
            for tpc in cryo:
                yield tpc

    def iterate_planes(self):
        for tpc in self.iterate_tpcs():
            for plane in tpc:
                yield plane

    #
    # begin and end IDs
    #

    def get_begin_cryostat_id(self):
        return CryostatID(0, is_valid=len(self._cryostats) > 0)

    def get_end_cryostat_id(self):
        if not self._cryostats:
            return self.get_begin_cryostat_id()
        return CryostatID(len(self._cryostats))

    def get_begin_tpc_id(self, cid):
        return TPCID(cid.cryostat, 0, is_valid=self.has_cryostat(cid))

    def get_end_tpc_id(self, cid):
        if self.n_tpc(cid) > 0:
            return TPCID(cid.cryostat + 1, 0)
        return self.get_begin_tpc_id(cid).invalidated()

    def get_begin_plane_id(self, id):
        if isinstance(id, TPCID):
            return PlaneID(id.cryostat, id.tpc, 0, is_valid=self.has_tpc(id))
        return PlaneID(self.get_begin_tpc_id(id), 0)

    def get_end_plane_id(self, id):
        if isinstance(id, TPCID):
            tpcid = id.as_tpc_id()
            if self.n_planes(tpcid) > 0:
                return PlaneID(tpcid.next_id(), 0)
        else:
            cryo = self.get_cryostat(id)
            if cryo is not None and cryo.max_planes() > 0:
                return PlaneID(self.get_end_tpc_id(id), 0)
        return self.get_begin_plane_id(id).invalidated()

    def get_begin_wire_id(self, id):
        if isinstance(id, PlaneID):
            return WireID(id.cryostat, id.tpc, id.plane, 0, is_valid=self.has_plane(id))
        return WireID(self.get_begin_plane_id(id), 0)

    def get_end_wire_id(self, id):
        if isinstance(id, PlaneID):
            pid = id.as_plane_id()
            if self.n_wires(pid) > 0:
                return WireID(pid.next_id(), 0)
        elif isinstance(id, TPCID):
            tpc = self.get_tpc(id)
            if tpc is not None and tpc.max_wires() > 0:
                return WireID(self.get_end_plane_id(id), 0)
        else:
            cryo = self.get_cryostat(id)
            if cryo is not None and cryo.max_wires() > 0:
                return WireID(self.get_end_plane_id(id), 0)
        return self.get_begin_wire_id(id).invalidated()

    def iterate_cryostat_ids(self):
        for c in range(len(self._cryostats)):
            yield CryostatID(c)

    def iterate_tpc_ids(self, cid=None):
        '''Iterates through the IDs of all the TPCs, or only of the ones in
        cryostat `cid`.'''
        cids = self.iterate_cryostat_ids() if cid is None else [cid.as_cryostat_id()]
        for c in cids:
            for t in range(self.n_tpc(c)):
                yield TPCID(c, t)

    def iterate_plane_ids(self, id=None):
        "Iterates through the IDs of the planes in `id` (a cryostat or a TPC)."
        if isinstance(id, TPCID):
            tpcids = [id.as_tpc_id()]
        else:
            tpcids = self.iterate_tpc_ids(id)
        for tpcid in tpcids:
            for p in range(self.n_planes(tpcid)):
                yield PlaneID(tpcid, p)

    def iterate_wire_ids(self, id=None):
        "Iterates through the IDs of the wires in `id` (cryostat, TPC or plane)."
        if isinstance(id, PlaneID):
            pids = [id.as_plane_id()]
        else:
            pids = self.iterate_plane_ids(id)
        for pid in pids:
            for w in range(self.n_wires(pid)):
                yield WireID(pid, w)

    #
    # position queries
    #

    def position_to_cryostat_id(self, point):
        "ID of the cryostat containing `point`; invalid if none."
        for cryo in self._cryostats:
            if cryo.contains_position(point, self.position_wiggle):
                return cryo.id
        return CryostatID()

    def position_to_cryostat(self, point):
        cid = self.position_to_cryostat_id(point)
        if not cid.is_valid:
            raise GeometryError("can't find any cryostat at position %s" % (np.asarray(point).tolist(),))
        return self.cryostat(cid)

    def find_tpc_at_position(self, point):
        '''ID of the TPC containing `point`.  If the point is in a cryostat
        but in none of its TPCs, the returned ID is invalid but has the
        cryostat number set.'''
        cid = self.position_to_cryostat_id(point)
        if not cid.is_valid:
            return TPCID()
        return self.cryostat(cid).position_to_tpc_id(point, self.position_wiggle)

    def position_to_tpc_id(self, point):
        tpcid = self.find_tpc_at_position(point)
        return tpcid if tpcid.is_valid else TPCID()

    def position_to_tpc(self, point):
        tpcid = self.find_tpc_at_position(point)
        if not tpcid.is_valid:
            raise GeometryError("can't find any TPC at position %s" % (np.asarray(point).tolist(),))
        return self.tpc(tpcid)

    def nearest_plane_id(self, point, tpcid=None):
        '''ID of the plane of `tpcid` (by default, the TPC containing the
        point) closest to `point`; invalid if there is no such TPC.'''
        if tpcid is None:
            tpcid = self.find_tpc_at_position(point)
        if not tpcid.is_valid or not self.has_tpc(tpcid):
            return PlaneID()
        return self.tpc(tpcid).closest_plane_id(point)

    def nearest_wire_id(self, point, pid):
        return self.plane(pid).nearest_wire_id(point)

    #
    # plane and wire geometry
    #

    def wire_coordinate(self, point, pid):
        return self.plane(pid).wire_coordinate(point)

    def wire_end_points(self, wid):
        '''Start and end of the wire, with the end at larger z (or larger y,
        for wires at constant z).'''
        return self.wire(wid).end_points()

    def wire_pitch(self, pid=PlaneID(0, 0, 0)):
        return self.plane(pid).wire_pitch()

    def wire_pitch_for_view(self, view):
        "Wire pitch of the plane with `view` in the first TPC."
        return self.tpc(TPCID(0, 0)).plane_for_view(view).wire_pitch()

    def wire_angle_to_vertical(self, view, tpcid=TPCID(0, 0)):
        for plane in self.tpc(tpcid):
            if plane.view == view:
                return plane.theta_z()
        raise GeometryError('wire_angle_to_vertical(): no view "%s" in %s'
                            % (view_name(view), tpcid))

    def plane_pitch(self, pid1, pid2):
        return self.tpc(pid1).plane_pitch(pid1.plane, pid2.plane)

    #
    # wire intersections
    #

    def wire_id_intersection_check(self, wid1, wid2):
        '''Returns whether the two wires exist and are on different planes of
        the same TPC; the reason of a failure is logged.'''
        if wid1.as_tpc_id() != wid2.as_tpc_id():
            logger.error('comparing two wires on different TPCs (%s and %s): return failure',
                         wid1, wid2)
            return False
        if wid1.plane == wid2.plane:
            logger.error('comparing two wires in the same plane (%s and %s): return failure',
                         wid1, wid2)
            return False
        if not self.has_wire(wid1):
            logger.error('1st wire %s does not exist (max wire number: %d)',
                         wid1, self.n_wires(wid1.as_plane_id()))
            return False
        if not self.has_wire(wid2):
            logger.error('2nd wire %s does not exist (max wire number: %d)',
                         wid2, self.n_wires(wid2.as_plane_id()))
            return False
        return True

    def wire_ids_intersect(self, wid1, wid2):
        '''Intersects the projections of the two wires on the (y, z) plane.

        Returns whether the crossing point is within both wires, and a
        ``WireIDIntersection`` with its (y, z) coordinates and the TPC
        (invalid if the crossing is not within the wires).  If the wires
        are not suitable or parallel, the coordinates are infinite.
        '''
        failure = WireIDIntersection(np.inf, np.inf, TPCID())
        if not self.wire_id_intersection_check(wid1, wid2):
            return False, failure

        start1, end1 = self.wire_end_points(wid1)
        start2, end2 = self.wire_end_points(wid2)
        a0, a1, b0, b1 = start1[1:], end1[1:], start2[1:], end2[1:]
        cross = intersections.intersect_lines(a0, a1, b0, b1)
        if cross is None:
            return False, failure

        within = intersections.point_within_segments(a0, a1, b0, b1, cross)
        tpcid = wid1.as_tpc_id() if within else TPCID()
        return within, WireIDIntersection(cross[0], cross[1], tpcid)

    def wire_ids_intersect_point(self, wid1, wid2):
        '''Returns whether the two wires "cross", and the point of the first
        wire closest to the second one.  The wires cross if that point and
        its closest point on the second wire lie within the two wires.'''
        if not self.wire_id_intersection_check(wid1, wid2):
            return False, np.full(3, np.inf)
        wire1, wire2 = self.wire(wid1), self.wire(wid2)
        result = intersections.wires_intersection_and_offsets(wire1, wire2)
        within = (abs(result.offset1) <= wire1.half_length
                  and abs(result.offset2) <= wire2.half_length)
        return within, result.point

    def intersection_point(self, wid1, wid2):
        "Like wire_ids_intersect(), returning ``(found, y, z)``."
        found, intersection = self.wire_ids_intersect(wid1, wid2)
        return found, intersection.y, intersection.z

    def channels_intersect(self, channel1, channel2):
        '''Returns ``(found, y, z)`` for the intersection of the wires of the
        two channels; each channel must read exactly one wire.'''
        for nth, channel in (('1st', channel1), ('2nd', channel2)):
            wires = self.channel_to_wire(channel)
            if not wires:
                logger.error('%s channel %d maps to no wire (is it a real one?)', nth, channel)
                return False, np.inf, np.inf
            if len(wires) > 1:
                logger.error('%s channel %d maps to %d wires', nth, channel, len(wires))
                return False, np.inf, np.inf
        return self.intersection_point(self.channel_to_wire(channel1)[0],
                                       self.channel_to_wire(channel2)[0])

    #
    # slope in the third plane
    #

    def third_plane(self, pid1, pid2):
        "Returns the ID of the plane which is neither `pid1` nor `pid2`."
        n_planes = self.n_planes(pid1.as_tpc_id())
        if n_planes != 3:
            raise GeometryError('third_plane() supports only TPCs with 3 planes, and I see %d instead'
                                % n_planes)
        others = [p for p in range(n_planes) if p not in (pid1.plane, pid2.plane)]
        if len(others) != 1:
            raise GeometryError("third_plane() can't find a single plane that is not %s nor %s"
                                % (pid1, pid2))
        return PlaneID(pid1.as_tpc_id(), others[0])

    def _check_independent_planes(self, pid1, pid2, caller):
        if pid1.as_tpc_id() != pid2.as_tpc_id():
            raise GeometryError('%s needs two planes on the same TPC (got %s and %s)'
                                % (caller, pid1, pid2))
        if pid1.as_plane_id() == pid2.as_plane_id():
            raise GeometryError('%s needs two different planes, got %s twice' % (caller, pid1))

    def third_plane_slope(self, pid1, slope1, pid2, slope2, output=None):
        '''Returns the slope of a track in the plane `output` (by default,
        the third plane of the TPC) given its slopes on `pid1` and `pid2`.
        Slopes are ratios of drift distance to wire coordinate distance.'''
        self._check_independent_planes(pid1, pid2, 'third_plane_slope()')
        if output is None:
            output = self.third_plane(pid1, pid2)
        tpc = self.tpc(pid1)
        return intersections.compute_third_plane_slope(
            tpc.plane(pid1).phi_z(), slope1, tpc.plane(pid2).phi_z(), slope2,
            tpc.plane(output).phi_z())

    def third_plane_dtdw(self, pid1, dtdw1, pid2, dtdw2, output=None):
        "Like third_plane_slope(), with slopes in drift distance per wire."
        self._check_independent_planes(pid1, pid2, 'third_plane_dtdw()')
        if output is None:
            output = self.third_plane(pid1, pid2)
        tpc = self.tpc(pid1)
        planes = [tpc.plane(pid) for pid in (pid1, pid2, output)]
        return intersections.compute_third_plane_dtdw(
            planes[0].phi_z(), planes[0].wire_pitch(), dtdw1,
            planes[1].phi_z(), planes[1].wire_pitch(), dtdw2,
            planes[2].phi_z(), planes[2].wire_pitch())

    #
    # readout channels
    #

    def nchannels(self, ropid=None):
        if ropid is None:
            return self.channel_map.nchannels()
        return self.channel_map.nchannels_in_rop(ropid)

    def channels_in_tpcs(self):
        "Sorted list of all the channels reading wires in TPCs."
        channels = set()
        for cid in self.iterate_cryostat_ids():
            for s in range(self.n_tpcsets(cid)):
                for tpcid in self.tpcset_to_tpcs(TPCsetID(cid, s)):
                    for wid in self.iterate_wire_ids(tpcid):
                        channels.add(self.channel_map.plane_wire_to_channel(wid))
        return sorted(channels)

    def has_channel(self, channel):
        return self.channel_map.has_channel(channel)

    def channel_to_wire(self, channel):
        return self.channel_map.channel_to_wire(channel)

    def channel_to_rop(self, channel):
        return self.channel_map.channel_to_rop(channel)

    def plane_wire_to_channel(self, wid):
        return self.channel_map.plane_wire_to_channel(wid)

    def nearest_channel(self, point, pid):
        '''Channel reading the wire closest to `point` on plane `pid`, or
        ``INVALID_CHANNEL_ID`` if the point is beyond the wires.'''
        try:
            wid = self.nearest_wire_id(point, pid)
        except InvalidWireError:
            return INVALID_CHANNEL_ID
        return self.plane_wire_to_channel(wid)

    def signal_type(self, what):
        "Signal type of a channel, a wire plane or a readout plane."
        if isinstance(what, ROPID):
            return self.channel_map.signal_type_for_rop(what)
        if isinstance(what, PlaneID):
            ropid = self.wire_plane_to_rop(what)
            if not ropid.is_valid:
                raise GeometryError('signal_type(): mapping of wire plane %s to readout plane failed'
                                    % (what,))
            return self.channel_map.signal_type_for_rop(ropid)
        return self.channel_map.signal_type_for_channel(what)

    def view(self, what):
        "View of a channel, a wire plane or a readout plane."
        if isinstance(what, ROPID):
            return self.view(self.channel_map.first_wire_plane_in_rop(what))
        if isinstance(what, PlaneID):
            return self.plane(what).view if what.is_valid else View.UNKNOWN
        if what == INVALID_CHANNEL_ID:
            return View.UNKNOWN
        return self.view(self.channel_to_rop(what))

    #
    # TPC sets and readout planes
    #

    def n_tpcsets(self, cid):
        return self.channel_map.n_tpcsets(cid)

    def max_tpcsets(self):
        return self.channel_map.max_tpcsets()

    def has_tpcset(self, tpcsetid):
        return self.channel_map.has_tpcset(tpcsetid)

    def find_tpcset_at_position(self, point):
        return self.tpc_to_tpcset(self.find_tpc_at_position(point))

    def tpc_to_tpcset(self, tpcid):
        return self.channel_map.tpc_to_tpcset(tpcid)

    def tpcset_to_tpcs(self, tpcsetid):
        return self.channel_map.tpcset_to_tpcs(tpcsetid)

    def n_rops(self, tpcsetid):
        return self.channel_map.n_rops(tpcsetid)

    def max_rops(self):
        return self.channel_map.max_rops()

    def has_rop(self, ropid):
        return self.channel_map.has_rop(ropid)

    def wire_plane_to_rop(self, pid):
        return self.channel_map.wire_plane_to_rop(pid)

    def rop_to_wire_planes(self, ropid):
        return self.channel_map.rop_to_wire_planes(ropid)

    def rop_to_tpcs(self, ropid):
        return self.channel_map.rop_to_tpcs(ropid)

    def first_channel_in_rop(self, ropid):
        return self.channel_map.first_channel_in_rop(ropid)

    #
    # optical detectors
    #

    def n_opdets(self):
        return int(self._opdet_offsets[-1])

    def opdet_from_cryo(self, o, c):
        "Detector-wide number of the optical detector `o` of cryostat `c`."
        if c < len(self._cryostats) and 0 <= o < self._cryostats[c].n_opdet():
            return int(self._opdet_offsets[c]) + o
        raise GeometryError("can't find optical detector #%d in cryostat #%d" % (o, c))

    def opdet_geo_from_opdet(self, opdet):
        if not 0 <= opdet < self.n_opdets():
            raise GeometryError('optical detector #%d out of range (%d detectors)'
                                % (opdet, self.n_opdets()))
        c = int(np.searchsorted(self._opdet_offsets, opdet, side='right')) - 1
        return self._cryostats[c].opdet(opdet - int(self._opdet_offsets[c]))

    def opdet_geo_from_op_channel(self, op_channel):
        return self.opdet_geo_from_opdet(self.opdet_from_op_channel(op_channel))

    def get_closest_opdet(self, point):
        '''Number of the optical detector closest to `point`, among the ones
        in the cryostat containing it; None if there is none.'''
        cid = self.position_to_cryostat_id(point)
        if not cid.is_valid:
            return None
        o = self.cryostat(cid).get_closest_opdet(point)
        if o < 0:
            return None
        return self.opdet_from_cryo(o, cid.cryostat)

    def n_op_channels(self):
        return self.channel_map.n_op_channels(self.n_opdets())

    def max_op_channel(self):
        return self.channel_map.max_op_channel(self.n_opdets())

    def n_op_hardware_channels(self, opdet):
        return self.channel_map.n_op_hardware_channels(opdet)

    def op_channel(self, opdet, hardware_channel=0):
        return self.channel_map.op_channel(opdet, hardware_channel)

    def opdet_from_op_channel(self, op_channel):
        return self.channel_map.opdet_from_op_channel(op_channel)

    def hardware_channel_from_op_channel(self, op_channel):
        return self.channel_map.hardware_channel_from_op_channel(op_channel)

    def is_valid_op_channel(self, op_channel):
        return self.channel_map.is_valid_op_channel(op_channel, self.n_opdets())

    #
    # information
    #

    def info(self, indent=''):
        "Returns a description of the whole detector."
        lines = ['detector "%s" has %d cryostats' % (self.name, len(self._cryostats))]
        sub = indent + '  '
        for cryo in self._cryostats:
            lines.append(sub + cryo.cryostat_info(sub + '  '))
            for tpc in cryo:
                lines.append(sub + '  ' + tpc.tpc_info(sub + '    ', verbosity=2))
                for plane in tpc:
                    lines.append(sub + '    ' + plane.plane_info(sub + '      ', verbosity=3))
                    lines.append(plane.first_wire().wire_info(sub + '      [first] '))
                    lines.append(plane.last_wire().wire_info(sub + '      [last]  '))
        return '\n'.join(indent + line if i == 0 else line for i, line in enumerate(lines))

    def __repr__(self):
        return '<GeometryCore "%s": %d cryostats>' % (self.name, len(self._cryostats))
