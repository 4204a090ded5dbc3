'''tpcgeo.sorter: ordering of the geometry elements.

The numbering of cryostats, TPCs, planes and wires is the order in which
they are stored, so it is decided by a sorter before the IDs are assigned.
Each channel mapping chooses its sorter.
'''

from abc import ABC, abstractmethod

# centers closer than this are considered at the same coordinate [cm]
SORT_PRECISION = 1e-6

def _rounded(value):
    return round(value / SORT_PRECISION) * SORT_PRECISION

class GeoObjectSorter(ABC):
    "Interface of the sorting algorithms; all sort lists in place."

    @abstractmethod
    def sort_cryostats(self, cryostats):
        pass

    @abstractmethod
    def sort_tpcs(self, tpcs):
        pass

    @abstractmethod
    def sort_planes(self, planes):
        pass

    @abstractmethod
    def sort_wires(self, wires):
        pass

    def sort_opdets(self, opdets):
        pass

class GeoObjectSorterStandard(GeoObjectSorter):
    '''Cryostats and TPCs by increasing x, then y and z of their center;
    planes by decreasing x; wires by increasing z, then y; optical detectors
    by increasing z, then y and x.'''

    def sort_cryostats(self, cryostats):
        cryostats.sort(key=lambda c: tuple(_rounded(x) for x in c.get_center()))

    def sort_tpcs(self, tpcs):
        tpcs.sort(key=lambda t: tuple(_rounded(x) for x in t.get_center()))

    def sort_planes(self, planes):
        planes.sort(key=lambda p: -_rounded(p.get_box_center()[0]))

    def sort_wires(self, wires):
        def key(wire):
            center = wire.get_center()
            return (_rounded(center[2]), _rounded(center[1]))
        wires.sort(key=key)

    def sort_opdets(self, opdets):
        def key(opdet):
            center = opdet.get_center()
            return (_rounded(center[2]), _rounded(center[1]), _rounded(center[0]))
        opdets.sort(key=key)
