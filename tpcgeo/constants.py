from enum import IntEnum

class View(IntEnum):
    "Projection measured by the wires of a plane."
    U = 0
    V = 1
    Z = 2
    Y = 3
    X = 4
    THREE_D = 5
    UNKNOWN = 6

class Orientation(IntEnum):
    "Orientation of a wire plane (of its normal, really)."
    HORIZONTAL = 0
    VERTICAL = 1

class SigType(IntEnum):
    "Signal type of a readout channel."
    INDUCTION = 0
    COLLECTION = 1
    MYSTERY = 2

_view_names = {
    View.U: 'U',
    View.V: 'V',
    View.Z: 'Z',
    View.Y: 'Y',
    View.X: 'X',
    View.THREE_D: '3D',
    View.UNKNOWN: '?',
}

def view_name(view):
    try:
        return _view_names[View(view)]
    except ValueError:
        return 'view #%d' % view

def orientation_name(orientation):
    if orientation == Orientation.HORIZONTAL:
        return 'horizontal'
    if orientation == Orientation.VERTICAL:
        return 'vertical'
    return 'unexpected'

def signal_type_name(sigtype):
    if sigtype == SigType.INDUCTION:
        return 'induction'
    if sigtype == SigType.COLLECTION:
        return 'collection'
    return 'unknown'
