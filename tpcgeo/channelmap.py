'''tpcgeo.channelmap: mapping between wires and readout channels.

A channel mapping decides which wires are read out by which channel (one
channel may read several wires, and in principle one wire may be read by
several channels), how TPCs are grouped into TPC sets and wire planes
into readout planes, and in which order the geometry elements are
numbered.  ``GeometryCore`` initializes the mapping once the geometry is
sorted and then forwards all the readout queries to it.
'''

from abc import ABC, abstractmethod

import numpy as np

from tpcgeo.constants import SigType
from tpcgeo.errors import GeometryError, WireOutOfRangeError
from tpcgeo.ids import INVALID_CHANNEL_ID, TPCID, PlaneID, WireID, TPCsetID, ROPID
from tpcgeo.log import logger
from tpcgeo.sorter import GeoObjectSorterStandard

class ChannelMapAlg(ABC):
    "Interface of all the channel mapping algorithms."

    @abstractmethod
    def initialize(self, geometry):
        '''Builds the mapping for `geometry`, which is already sorted and
        has its IDs assigned.'''

    @abstractmethod
    def uninitialize(self):
        pass

    @abstractmethod
    def nchannels(self):
        pass

    @abstractmethod
    def nchannels_in_rop(self, ropid):
        pass

    @abstractmethod
    def channel_to_wire(self, channel):
        "Returns the list of the IDs of the wires read by `channel`."

    @abstractmethod
    def plane_wire_to_channel(self, wireid):
        pass

    @abstractmethod
    def signal_type_for_channel(self, channel):
        pass

    @abstractmethod
    def signal_type_for_rop(self, ropid):
        pass

    @abstractmethod
    def n_tpcsets(self, cryoid):
        pass

    @abstractmethod
    def max_tpcsets(self):
        pass

    @abstractmethod
    def has_tpcset(self, tpcsetid):
        pass

    @abstractmethod
    def tpc_to_tpcset(self, tpcid):
        pass

    @abstractmethod
    def tpcset_to_tpcs(self, tpcsetid):
        pass

    @abstractmethod
    def n_rops(self, tpcsetid):
        pass

    @abstractmethod
    def max_rops(self):
        pass

    @abstractmethod
    def has_rop(self, ropid):
        pass

    @abstractmethod
    def wire_plane_to_rop(self, planeid):
        pass

    @abstractmethod
    def rop_to_wire_planes(self, ropid):
        pass

    @abstractmethod
    def rop_to_tpcs(self, ropid):
        pass

    @abstractmethod
    def channel_to_rop(self, channel):
        pass

    @abstractmethod
    def first_channel_in_rop(self, ropid):
        pass

    @abstractmethod
    def first_wire_plane_in_rop(self, ropid):
        pass

    def has_channel(self, channel):
        return 0 <= channel < self.nchannels()

    def sorter(self):
        "The sorter deciding the numbering of the geometry elements."
        return GeoObjectSorterStandard()

    # optical detectors: one hardware channel each, by default

    def n_op_channels(self, n_opdets):
        return n_opdets

    def max_op_channel(self, n_opdets):
        return self.n_op_channels(n_opdets)

    def n_op_hardware_channels(self, opdet):
        return 1

    def op_channel(self, opdet, hardware_channel=0):
        return opdet

    def opdet_from_op_channel(self, op_channel):
        return op_channel

    def hardware_channel_from_op_channel(self, op_channel):
        return 0

    def is_valid_op_channel(self, op_channel, n_opdets):
        return 0 <= op_channel < self.n_op_channels(n_opdets)

class ChannelMapStandardAlg(ChannelMapAlg):
    '''Each wire is read by its own channel.

    Channels are numbered in order of cryostat, TPC, plane and wire.  Each
    TPC is a TPC set of its own and each plane a readout plane; the last
    plane of each TPC collects the charge, the others are induction planes.
    '''
    def __init__(self):
        self.uninitialize()

    def initialize(self, geometry):
        self._tpcs_in_cryostat = [geometry.n_tpc(cid) for cid in geometry.iterate_cryostat_ids()]
        self._planes_in_tpc = dict((tpcid, geometry.n_planes(tpcid))
                                   for tpcid in geometry.iterate_tpc_ids())
        self._plane_ids = list(geometry.iterate_plane_ids())
        self._plane_index = dict((pid, i) for i, pid in enumerate(self._plane_ids))
        self._wires_in_plane = np.array([geometry.n_wires(pid) for pid in self._plane_ids],
                                        dtype=np.int64)
        # first channel of each plane, and the total count at the end
        self._first_channel = np.concatenate([[0], np.cumsum(self._wires_in_plane)])
        logger.info('standard channel map: %d channels in %d planes',
                    self.nchannels(), len(self._plane_ids))

    def uninitialize(self):
        self._tpcs_in_cryostat = []
        self._planes_in_tpc = {}
        self._plane_ids = []
        self._plane_index = {}
        self._wires_in_plane = np.zeros(0, dtype=np.int64)
        self._first_channel = np.zeros(1, dtype=np.int64)

    def nchannels(self):
        return int(self._first_channel[-1])

    def nchannels_in_rop(self, ropid):
        if not self.has_rop(ropid):
            return 0
        return int(self._wires_in_plane[self._plane_index[self._rop_plane(ropid)]])

    def _channel_plane_index(self, channel):
        return int(np.searchsorted(self._first_channel, channel, side='right')) - 1

    def channel_to_wire(self, channel):
        if not self.has_channel(channel):
            return []
        index = self._channel_plane_index(channel)
        return [WireID(self._plane_ids[index], channel - int(self._first_channel[index]))]

    def plane_wire_to_channel(self, wireid):
        index = self._plane_index.get(wireid.as_plane_id())
        if index is None:
            raise GeometryError('no plane %s in the channel map' % (wireid.as_plane_id(),))
        if wireid.wire >= self._wires_in_plane[index]:
            raise WireOutOfRangeError('plane %s has no wire #%d (it has %d)'
                                      % (wireid.as_plane_id(), wireid.wire,
                                         self._wires_in_plane[index]))
        return int(self._first_channel[index]) + wireid.wire

    def signal_type_for_channel(self, channel):
        return self.signal_type_for_rop(self.channel_to_rop(channel))

    def signal_type_for_rop(self, ropid):
        if not self.has_rop(ropid):
            return SigType.MYSTERY
        if ropid.rop == self.n_rops(ropid.as_tpcset_id()) - 1:
            return SigType.COLLECTION
        return SigType.INDUCTION

    #
    # TPC sets
    #

    def n_tpcsets(self, cryoid):
        if not 0 <= cryoid.cryostat < len(self._tpcs_in_cryostat):
            return 0
        return self._tpcs_in_cryostat[cryoid.cryostat]

    def max_tpcsets(self):
        return max(self._tpcs_in_cryostat + [0])

    def has_tpcset(self, tpcsetid):
        return 0 <= tpcsetid.tpcset < self.n_tpcsets(tpcsetid)

    def tpc_to_tpcset(self, tpcid):
        if not tpcid.is_valid or tpcid not in self._planes_in_tpc:
            return TPCsetID()
        return TPCsetID(tpcid.cryostat, tpcid.tpc)

    def tpcset_to_tpcs(self, tpcsetid):
        if not self.has_tpcset(tpcsetid):
            return []
        return [TPCID(tpcsetid.cryostat, tpcsetid.tpcset)]

    #
    # readout planes
    #

    def _rop_plane(self, ropid):
        return PlaneID(ropid.cryostat, ropid.tpcset, ropid.rop)

    def n_rops(self, tpcsetid):
        return self._planes_in_tpc.get(TPCID(tpcsetid.cryostat, tpcsetid.tpcset), 0)

    def max_rops(self):
        return max(list(self._planes_in_tpc.values()) + [0])

    def has_rop(self, ropid):
        return 0 <= ropid.rop < self.n_rops(ropid)

    def wire_plane_to_rop(self, planeid):
        planeid = planeid.as_plane_id()
        if not planeid.is_valid or planeid not in self._plane_index:
            return ROPID()
        return ROPID(planeid.cryostat, planeid.tpc, planeid.plane)

    def rop_to_wire_planes(self, ropid):
        if not self.has_rop(ropid):
            return []
        return [self._rop_plane(ropid)]

    def rop_to_tpcs(self, ropid):
        if not self.has_rop(ropid):
            return []
        return [TPCID(ropid.cryostat, ropid.tpcset)]

    def channel_to_rop(self, channel):
        if not self.has_channel(channel):
            return ROPID()
        return self.wire_plane_to_rop(self._plane_ids[self._channel_plane_index(channel)])

    def first_channel_in_rop(self, ropid):
        if not self.has_rop(ropid):
            return INVALID_CHANNEL_ID
        return int(self._first_channel[self._plane_index[self._rop_plane(ropid)]])

    def first_wire_plane_in_rop(self, ropid):
        if not self.has_rop(ropid):
            return PlaneID()
        return self._rop_plane(ropid)
