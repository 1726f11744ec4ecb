import numpy as np

# One (normal, tangent_u, tangent_v) frame per cube face.
_FACES = (
    ((1, 0, 0), (0, 0, -1), (0, 1, 0)),
    ((-1, 0, 0), (0, 0, 1), (0, 1, 0)),
    ((0, 1, 0), (1, 0, 0), (0, 0, -1)),
    ((0, -1, 0), (1, 0, 0), (0, 0, 1)),
    ((0, 0, 1), (1, 0, 0), (0, 1, 0)),
    ((0, 0, -1), (-1, 0, 0), (0, 1, 0)),
)

def cube(size=1.0):
    """
    Generates a flat-shaded cube centered on the origin.

    Each face gets its own four vertices so normals stay per-face.

    Returns:
        tuple: (verts (24, 3) float32, normals (24, 3) float32, faces (12, 3) int32).
    """
    h = size / 2.0
    verts, normals, faces = [], [], []
    for normal, u, v in _FACES:
        n, u, v = np.array(normal, dtype=float), np.array(u, dtype=float), np.array(v, dtype=float)
        base = len(verts)
        for su, sv in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
            verts.append((n + su * u + sv * v) * h)
            normals.append(n)
        faces.append((base, base + 1, base + 2))
        faces.append((base, base + 2, base + 3))
    return (
        np.array(verts, dtype='f4'),
        np.array(normals, dtype='f4'),
        np.array(faces, dtype='i4'),
    )

def interleave(verts: np.ndarray, normals: np.ndarray) -> np.ndarray:
    """Packs positions and normals as (x, y, z, nx, ny, nz) rows for a vertex buffer."""
    return np.hstack([verts, normals]).astype('f4')

def gl_matrix(m: np.ndarray) -> bytes:
    """Returns a 4x4 matrix as the column-major float32 bytes OpenGL expects."""
    return np.asarray(m, dtype='f4').T.tobytes()
