import numpy as np

from tpcgeo.cryostat import CryostatGeo, OpDetGeo
from tpcgeo.plane import PlaneGeo
from tpcgeo.tpc import TPCGeo
from tpcgeo.transform import Transformation, rounded01
from tpcgeo.wire import WireGeo

# default thickness of a wire plane box, along the drift direction [cm]
PLANE_THICKNESS = 0.01

def wire_direction(angle):
    "Direction of wires at `angle` from the vertical, toward +z."
    return np.array([0.0, np.cos(angle), np.sin(angle)])

def wire_perpendicular(angle):
    '''Direction on the (y, z) plane perpendicular to wires at `angle`,
    chosen with positive z (positive y for horizontal wires).'''
    perp = rounded01(np.array([0.0, -np.sin(angle), np.cos(angle)]), 1e-9)
    if perp[2] < 0.0 or (perp[2] == 0.0 and perp[1] < 0.0):
        perp = -perp
    return perp

def wire_plane(x, angle, pitch, n_wires, half_length, center=(0.0, 0.0), view=None,
               thickness=PLANE_THICKNESS):
    """
    Return a plane of `n_wires` parallel wires at drift coordinate `x`.

    The wires have the same length, ``2 * half_length``, and are tilted by
    `angle` from the vertical toward +z.  Their centers are `pitch` apart
    on a line through `center`, the (y, z) coordinates of the middle of
    the plane.  The plane box contains all the wires and is `thickness`
    thick along x.

    Example:
        >>> # a collection plane of 100 vertical wires, 3 mm apart
        >>> plane = wire_plane(-95.6, 0.0, 0.3, 100, 50.0)
    """
    if n_wires < 1:
        raise ValueError('a wire plane needs at least one wire.')

    direction = wire_direction(angle)
    perp = wire_perpendicular(angle)
    origin = np.array([x, center[0], center[1]], dtype=float)

    offsets = (np.arange(n_wires) - (n_wires - 1) / 2.0) * pitch
    centers = origin + offsets[:, np.newaxis] * perp
    wires = [WireGeo(c - half_length * direction, c + half_length * direction)
             for c in centers]

    ends = np.concatenate([centers - half_length * direction,
                           centers + half_length * direction])
    extent = np.abs(ends - origin).max(axis=0)
    half_sizes = np.maximum(extent, thickness)
    half_sizes[0] = thickness / 2.0

    return PlaneGeo(wires, Transformation(translation=origin), half_sizes, view=view)

def tpc(planes, center, half_sizes, active_half_sizes=None):
    "Return a TPC box centered at `center` containing `planes`."
    return TPCGeo(planes, Transformation(translation=center), half_sizes, active_half_sizes)

def cryostat(tpcs, center, half_sizes, opdets=(), name=''):
    "Return a cryostat box centered at `center` containing `tpcs` and `opdets`."
    return CryostatGeo(tpcs, Transformation(translation=center), half_sizes, opdets, name)

def opdet(center, radius=0.0, name=''):
    return OpDetGeo(center, radius, name)

def three_plane_tpc(center=(0.0, 0.0, 0.0), half_sizes=(10.0, 10.0, 20.0), pitch=0.5,
                    plane_spacing=0.3, angles=(np.pi / 3, -np.pi / 3, 0.0)):
    """
    Return a TPC with three wire planes on its low x side, by default
    with wires at +60 degrees, -60 degrees and vertical (U, V and Z views).

    The plane closest to the TPC face is the last one in `angles`; each of
    the others is `plane_spacing` further inside.  Each plane has as many
    wires as fit across the (y, z) face of the TPC, and the wires are as
    long as the face is along their direction.
    """
    center = np.asarray(center, dtype=float)
    hx, hy, hz = half_sizes
    n_planes = len(angles)

    planes = []
    for i, angle in enumerate(angles):
        x = center[0] - hx + (n_planes - i) * plane_spacing
        direction = wire_direction(angle)
        perp = wire_perpendicular(angle)
        span = 2.0 * (abs(perp[1]) * hy + abs(perp[2]) * hz)
        half_length = abs(direction[1]) * hy + abs(direction[2]) * hz
        n_wires = max(int(span / pitch), 1)
        planes.append(wire_plane(x, angle, pitch, n_wires, half_length,
                                 center=(center[1], center[2])))
    return tpc(planes, center, half_sizes)

def simple_detector(n_cryostats=1, n_tpcs=1, tpc_half_sizes=(10.0, 10.0, 20.0), pitch=0.5,
                    n_opdets=0, gap=5.0):
    """
    Return a list of `n_cryostats` cryostats, side by side along x, each
    with `n_tpcs` three-plane TPCs in a row along z and `n_opdets` optical
    detectors on its high x side.  `gap` is the clearance between the TPCs
    and the cryostat walls.

    Example:
        >>> geom = GeometryCore(name='test')
        >>> geom.load_geometry(simple_detector(n_cryostats=2, n_tpcs=2))
        >>> geom.apply_channel_map(ChannelMapStandardAlg())
    """
    hx, hy, hz = tpc_half_sizes
    cryo_half_sizes = (hx + gap, hy + gap, n_tpcs * hz + gap)
    cryo_step = 2.0 * cryo_half_sizes[0] + gap

    cryostats = []
    for c in range(n_cryostats):
        cx = c * cryo_step
        tpcs = [three_plane_tpc(center=(cx, 0.0, (2 * t + 1 - n_tpcs) * hz),
                                half_sizes=tpc_half_sizes, pitch=pitch)
                for t in range(n_tpcs)]
        opdet_step = 2.0 * n_tpcs * hz / max(n_opdets, 1)
        opdets = [opdet((cx + hx + gap / 2.0, 0.0, -n_tpcs * hz + (k + 0.5) * opdet_step),
                        radius=1.0, name='opdet%d' % k)
                  for k in range(n_opdets)]
        cryostats.append(cryostat(tpcs, (cx, 0.0, 0.0), cryo_half_sizes, opdets,
                                  name='cryostat%d' % c))
    return cryostats
