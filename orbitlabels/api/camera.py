import numpy as np

DEFAULT_EYE = (0.0, 10.0, 20.0)
DEFAULT_TARGET = (0.0, 0.0, 0.0)
DEFAULT_UP = (0.0, 1.0, 0.0)
DEFAULT_FOV = 45.0
DEFAULT_NEAR = 1.0
DEFAULT_FAR = 100.0

class CameraError(ValueError):
    """Raised when a view or projection transform would be degenerate."""

def translation(offset) -> np.ndarray:
    """Returns a 4x4 matrix translating points by `offset`."""
    m = np.identity(4)
    m[:3, 3] = np.asarray(offset, dtype=float)[:3]
    return m

def rotation_y(angle: float) -> np.ndarray:
    """Returns a 4x4 matrix rotating points by `angle` radians about +Y."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [c,   0.0, s,   0.0],
        [0.0, 1.0, 0.0, 0.0],
        [-s,  0.0, c,   0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])

def look_at(eye, target, up) -> np.ndarray:
    """
    Builds a right-handed view matrix for a camera at `eye` looking at `target`.

    Matrices in this package use the column-vector convention, so a point is
    moved into view space with `view @ (x, y, z, 1)`. The camera looks down
    its local -Z axis.
    """
    eye = np.asarray(eye, dtype=float)
    target = np.asarray(target, dtype=float)
    up = np.asarray(up, dtype=float)

    z_axis = eye - target
    z_len = np.linalg.norm(z_axis)
    if z_len == 0.0:
        raise CameraError("Camera eye and target must be different points.")
    z_axis /= z_len

    x_axis = np.cross(up, z_axis)
    x_len = np.linalg.norm(x_axis)
    if x_len < 1e-12:
        raise CameraError("Camera up vector must not be parallel to the viewing direction.")
    x_axis /= x_len
    y_axis = np.cross(z_axis, x_axis)

    m = np.identity(4)
    m[0, :3], m[1, :3], m[2, :3] = x_axis, y_axis, z_axis
    m[:3, 3] = -m[:3, :3] @ eye
    return m

def build_projection(fov_degrees: float, aspect_ratio: float, near: float, far: float) -> np.ndarray:
    """
    Builds a right-handed perspective projection matrix.

    Clip-space depth is mapped to [0, 1]: points on the near plane end up at
    depth 0 and points on the far plane at depth 1 after the perspective divide.

    Raises:
        CameraError: If the field of view is outside (0, 180) degrees, the
                     aspect ratio is not positive, or the clip planes are not
                     `0 < near < far`.
    """
    if not 0.0 < fov_degrees < 180.0:
        raise CameraError(f"Field of view must be between 0 and 180 degrees, got {fov_degrees}.")
    if aspect_ratio <= 0.0:
        raise CameraError(f"Aspect ratio must be positive, got {aspect_ratio}.")
    if near <= 0.0 or far <= 0.0:
        raise CameraError(f"Clip planes must be positive, got near={near}, far={far}.")
    if near >= far:
        raise CameraError(f"Near plane must be closer than far plane, got near={near}, far={far}.")

    y_scale = 1.0 / np.tan(np.radians(fov_degrees) / 2.0)
    x_scale = y_scale / aspect_ratio
    depth = far / (near - far)
    return np.array([
        [x_scale, 0.0,     0.0,   0.0],
        [0.0,     y_scale, 0.0,   0.0],
        [0.0,     0.0,     depth, near * depth],
        [0.0,     0.0,     -1.0,  0.0],
    ])

def build_view(orbit_angle: float, eye=DEFAULT_EYE, target=DEFAULT_TARGET, up=DEFAULT_UP) -> np.ndarray:
    """
    Builds the orbiting view matrix.

    The world is rotated by `orbit_angle` about the up axis first and then
    seen through the fixed look-at camera, so the camera appears to circle the
    target while the projection stays the same.
    """
    return look_at(eye, target, up) @ rotation_y(orbit_angle)

class Camera:
    """An orbiting camera with a fixed look-at pose and perspective lens."""

    def __init__(self, eye=DEFAULT_EYE, target=DEFAULT_TARGET, up=DEFAULT_UP,
                 fov=DEFAULT_FOV, near=DEFAULT_NEAR, far=DEFAULT_FAR):
        """
        Initializes the camera.

        Args:
            eye (tuple, optional): Camera position before any orbit rotation.
                                   Defaults to (0, 10, 20).
            target (tuple, optional): The point the camera looks at and orbits.
                                      Defaults to the origin.
            up (tuple, optional): The world up direction. Defaults to +Y.
            fov (float, optional): Vertical field of view in degrees. Defaults to 45.
            near (float, optional): Near clip plane distance. Defaults to 1.0.
            far (float, optional): Far clip plane distance. Defaults to 100.0.

        Example:
            >>> from orbitlabels import Camera, Viewport
            >>> cam = Camera(eye=(0, 5, 10))
            >>> projection = cam.projection(Viewport(800, 480))
            >>> view = cam.view(0.25)
        """
        self.eye = tuple(float(v) for v in eye)
        self.target = tuple(float(v) for v in target)
        self.up = tuple(float(v) for v in up)
        self.fov = fov
        self.near = near
        self.far = far
        # Fails early on a degenerate pose instead of on the first frame.
        look_at(self.eye, self.target, self.up)

    def projection(self, viewport) -> np.ndarray:
        """Builds the projection matrix for the viewport's current aspect ratio."""
        if viewport.height <= 0:
            raise CameraError(f"Viewport height must be positive, got {viewport.height}.")
        return build_projection(self.fov, viewport.aspect_ratio, self.near, self.far)

    def view(self, orbit_angle: float) -> np.ndarray:
        return build_view(orbit_angle, self.eye, self.target, self.up)

    def __repr__(self):
        return f"Camera(eye={self.eye}, target={self.target}, fov={self.fov}, near={self.near}, far={self.far})"
