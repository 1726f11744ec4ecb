from collections import namedtuple
from .api.camera import Camera, translation
from .api.projector import project
from .api.scene import SceneState

LABEL_COLOR = (1.0, 1.0, 1.0, 1.0)

Frame = namedtuple('Frame', ['angle', 'view', 'projection', 'labels'])

class FrameDriver:
    """
    Draws one frame of the orbiting scene onto a surface.

    The projection is built once from the surface size. Each frame builds a
    single view matrix that every mesh draw and every label projection
    shares, so labels never lag behind the geometry they annotate.
    """
    def __init__(self, scene: SceneState, surface, camera: Camera = None, label_color=LABEL_COLOR):
        self.scene = scene
        self.camera = camera if camera else Camera()
        self.surface = surface
        self.label_color = label_color
        self.viewport = surface.viewport
        self.projection = self.camera.projection(self.viewport)

    def draw_frame(self, elapsed_seconds: float) -> Frame:
        angle = self.scene.advance(elapsed_seconds)
        view = self.camera.view(angle)

        self.surface.begin_frame()
        for position in self.scene.positions:
            self.surface.draw_mesh(translation(position), view, self.projection)

        labels = []
        for text, position in zip(self.scene.labels(), self.scene.positions):
            screen = project(position, self.projection, view, viewport=self.viewport)
            self.surface.draw_text(text, screen, self.label_color)
            labels.append((text, screen))
        self.surface.end_frame()

        return Frame(angle, view, self.projection, labels)
