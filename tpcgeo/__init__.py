from tpcgeo.constants import View, Orientation, SigType
from tpcgeo.errors import GeometryError, WireOutOfRangeError, InvalidWireError
from tpcgeo.ids import (CryostatID, TPCID, PlaneID, WireID, TPCsetID, ROPID,
                        INVALID_CHANNEL_ID)
from tpcgeo.wire import WireGeo
from tpcgeo.plane import PlaneGeo
from tpcgeo.tpc import TPCGeo
from tpcgeo.cryostat import CryostatGeo, OpDetGeo
from tpcgeo.channelmap import ChannelMapAlg, ChannelMapStandardAlg
from tpcgeo.geometry import GeometryCore
from tpcgeo import make
from tpcgeo import transform
