import numpy as np

def norm(x):
    "Returns the norm of the vector `x`."
    x = np.asarray(x, dtype=float)
    return np.sqrt((x*x).sum(-1))

def normalize(x):
    "Returns unit vectors in the direction of `x`."
    x = np.atleast_2d(np.asarray(x, dtype=float))
    return (x/norm(x)[:,np.newaxis]).squeeze()

def make_rotation_matrix(phi, n):
    """
    Make the rotation matrix to rotate points through an angle `phi`
    counter-clockwise around the axis `n` (when looking towards +infinity).

    Source: Weissten, Eric W. "Rotation Formula." Mathworld.
    """
    n = normalize(n)

    return np.cos(phi)*np.identity(3) + (1-np.cos(phi))*np.outer(n,n) + \
        np.sin(phi)*np.array([[0,n[2],-n[1]],[-n[2],0,n[0]],[n[1],-n[0],0]])

def rounded01(v, tol):
    '''Returns a copy of `v` where components within `tol` of 0, +1 or -1
    are replaced by exactly those values.'''
    v = np.array(v, dtype=float)
    v[np.abs(v) < tol] = 0.0
    v[np.abs(v - 1.0) < tol] = 1.0
    v[np.abs(v + 1.0) < tol] = -1.0
    return v

def dominant_axis(v):
    "Index of the component of `v` with the largest magnitude."
    return int(np.argmax(np.abs(v)))

class Transformation(object):
    '''Rigid transformation from a local reference frame to the world frame.

    A local point `p` is placed in the world at ``rotation . p + translation``.
    This is the placement information a solid-model description gives for
    each of its nodes.
    '''
    def __init__(self, rotation=None, translation=None):
        if rotation is None:
            rotation = np.identity(3)
        else:
            rotation = np.asarray(rotation, dtype=float)

        if rotation.shape != (3,3):
            raise ValueError('rotation matrix has the wrong shape.')

        if translation is None:
            translation = np.zeros(3)
        else:
            translation = np.asarray(translation, dtype=float)

        if translation.shape != (3,):
            raise ValueError('translation vector has the wrong shape.')

        self.rotation = rotation
        self.translation = translation

    def to_world_point(self, local):
        return np.inner(np.asarray(local, dtype=float), self.rotation) + self.translation

    def to_world_vector(self, local):
        return np.inner(np.asarray(local, dtype=float), self.rotation)

    def to_local_point(self, world):
        return np.inner(np.asarray(world, dtype=float) - self.translation, self.rotation.T)

    def to_local_vector(self, world):
        return np.inner(np.asarray(world, dtype=float), self.rotation.T)

    def __mul__(self, other):
        "Compose with the transformation `other` applied first."
        return Transformation(np.dot(self.rotation, other.rotation),
                              self.to_world_point(other.translation))

    def __repr__(self):
        return 'Transformation(rotation=%r, translation=%r)' % (self.rotation.tolist(), self.translation.tolist())
