from collections import namedtuple
import numpy as np

ScreenPoint = namedtuple('ScreenPoint', ['x', 'y'])

def _combined(projection, view, world=None):
    """Returns the single world -> clip space matrix `projection @ view @ world`."""
    m = np.asarray(projection, dtype=float) @ np.asarray(view, dtype=float)
    if world is not None:
        m = m @ np.asarray(world, dtype=float)
    return m

def _homogeneous(points: np.ndarray) -> np.ndarray:
    return np.hstack([points, np.ones((len(points), 1))])

class Viewport:
    """
    The pixel rectangle of a render surface that clip space is mapped onto.

    Screen coordinates have their origin at the top-left corner of the
    viewport, with x growing right and y growing down. Depth is mapped to
    [min_depth, max_depth].
    """
    def __init__(self, width, height, x=0, y=0, min_depth=0.0, max_depth=1.0):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.min_depth = min_depth
        self.max_depth = max_depth

    @property
    def aspect_ratio(self) -> float:
        if self.height == 0:
            return 0.0
        return self.width / self.height

    def project_points(self, points, projection, view, world=None) -> np.ndarray:
        """
        Projects an (N, 3) array of world points into viewport space.

        Returns an (N, 3) array of (x, y, depth). Nothing is clipped: points
        outside the frustum land off-screen, and a point whose clip-space w is
        zero (the eye itself) comes back as non-finite values.
        """
        points = np.asarray(points, dtype=float).reshape(-1, 3)
        if len(points) == 0:
            return np.empty((0, 3))

        clip = _homogeneous(points) @ _combined(projection, view, world).T
        with np.errstate(divide='ignore', invalid='ignore'):
            ndc = clip[:, :3] / clip[:, 3:4]

        out = np.empty_like(ndc)
        out[:, 0] = (ndc[:, 0] + 1.0) * 0.5 * self.width + self.x
        out[:, 1] = (1.0 - ndc[:, 1]) * 0.5 * self.height + self.y
        out[:, 2] = ndc[:, 2] * (self.max_depth - self.min_depth) + self.min_depth
        return out

    def project(self, point, projection, view, world=None) -> np.ndarray:
        """Projects a single world point, returning (x, y, depth)."""
        return self.project_points([point], projection, view, world)[0]

    def unproject(self, source, projection, view, world=None) -> np.ndarray:
        """
        Maps a viewport (x, y, depth) back into world space.

        This is the inverse of `project` for the same transforms.
        """
        sx, sy, sz = np.asarray(source, dtype=float)
        ndc = np.array([
            (sx - self.x) / self.width * 2.0 - 1.0,
            1.0 - (sy - self.y) / self.height * 2.0,
            (sz - self.min_depth) / (self.max_depth - self.min_depth),
            1.0,
        ])
        world_h = np.linalg.inv(_combined(projection, view, world)) @ ndc
        return world_h[:3] / world_h[3]

    def __repr__(self):
        return f"Viewport(width={self.width}, height={self.height}, x={self.x}, y={self.y})"

def project(world_point, projection, view, world=None, viewport=None) -> ScreenPoint:
    """
    Maps a world point to the 2D screen position used for overlay placement.

    The point goes through `world`, `view` and `projection`, is divided by
    its clip-space w and mapped onto `viewport`; the depth is discarded.

    Args:
        world_point: The (x, y, z) point to project.
        projection (np.ndarray): 4x4 projection matrix.
        view (np.ndarray): 4x4 view matrix.
        world (np.ndarray, optional): 4x4 world matrix. Defaults to identity.
        viewport (Viewport): The target viewport.

    Returns:
        ScreenPoint: Pixel coordinates, origin at the viewport's top-left.
    """
    if viewport is None:
        raise TypeError("project() requires a viewport.")
    x, y, _ = viewport.project(world_point, projection, view, world)
    return ScreenPoint(float(x), float(y))

def project_points(points, projection, view, world=None, viewport=None) -> np.ndarray:
    """Vectorized `project` over an (N, 3) array, returning an (N, 2) array."""
    if viewport is None:
        raise TypeError("project_points() requires a viewport.")
    return viewport.project_points(points, projection, view, world)[:, :2]
