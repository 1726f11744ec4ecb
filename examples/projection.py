import numpy as np
from orbitlabels import Camera, Viewport, project, project_points

def main():
    """
    Uses the projection pipeline directly, without any renderer.

    This shows how to:
    - Build the projection once for a viewport.
    - Build an orbiting view for a given time.
    - Project single points and whole arrays into pixel coordinates.
    """
    viewport = Viewport(800, 480)
    camera = Camera(eye=(0, 10, 20))
    projection = camera.projection(viewport)

    for seconds in (0.0, 1.0, 2.0, 3.0):
        view = camera.view(seconds / 2.0)
        origin = project((0, 0, 0), projection, view, viewport=viewport)
        corners = project_points(
            np.array([[-5, 0, -5], [5, 0, -5], [5, 0, 5], [-5, 0, 5]], dtype=float),
            projection, view, viewport=viewport,
        )
        print(f"t={seconds:.1f}s origin -> ({origin.x:.1f}, {origin.y:.1f})")
        print(np.round(corners, 1))

if __name__ == "__main__":
    main()
