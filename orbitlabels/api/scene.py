import numpy as np

DEFAULT_BOUNDS = 10.0

def initialize(count: int, bounds: float = DEFAULT_BOUNDS, seed=None) -> np.ndarray:
    """
    Scatters `count` object positions on the ground plane.

    x and z are drawn uniformly from [-bounds/2, bounds/2] and y is 0. The
    same `seed` always produces the same positions.

    Returns:
        np.ndarray: A read-only (count, 3) array of world positions.
    """
    if count < 0:
        raise ValueError(f"Object count must not be negative, got {count}.")
    if bounds <= 0:
        raise ValueError(f"Scene bounds must be positive, got {bounds}.")

    rng = np.random.default_rng(seed)
    positions = np.zeros((count, 3))
    positions[:, 0] = (rng.random(count) - 0.5) * bounds
    positions[:, 2] = (rng.random(count) - 0.5) * bounds
    positions.setflags(write=False)
    return positions

class SceneState:
    """Object positions plus the orbit angle of the current frame."""
    def __init__(self, positions):
        positions = np.array(positions, dtype=float).reshape(-1, 3)
        positions.setflags(write=False)
        self.positions = positions
        self.angle = 0.0

    @classmethod
    def random(cls, count: int, bounds: float = DEFAULT_BOUNDS, seed=None):
        return cls(initialize(count, bounds, seed))

    def advance(self, elapsed_seconds: float) -> float:
        """Sets and returns the orbit angle for a frame, `elapsed_seconds / 2`."""
        self.angle = elapsed_seconds / 2.0
        return self.angle

    def labels(self):
        return [f"Model {i + 1}" for i in range(len(self.positions))]

    def __len__(self):
        return len(self.positions)

    def __repr__(self):
        return f"SceneState(objects={len(self)}, angle={self.angle})"
