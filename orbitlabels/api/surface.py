from collections import namedtuple
from .projector import Viewport

MeshDraw = namedtuple('MeshDraw', ['world', 'view', 'projection'])
TextDraw = namedtuple('TextDraw', ['text', 'position', 'color'])

class Surface:
    """
    Base class for anything the frame driver can draw on.

    Subclasses provide the pixel size and the two draw primitives; the
    frame hooks are optional.
    """
    width = 0
    height = 0

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.width, self.height)

    def begin_frame(self):
        pass

    def draw_mesh(self, world, view, projection):
        raise NotImplementedError

    def draw_text(self, text, position, color):
        raise NotImplementedError

    def end_frame(self):
        pass

class RecordingSurface(Surface):
    """
    A headless surface that records draw calls instead of issuing them.

    Only the calls of the most recent frame are kept.
    """
    def __init__(self, width=800, height=480):
        self.width = width
        self.height = height
        self.frames_drawn = 0
        self.meshes = []
        self.texts = []

    def begin_frame(self):
        self.meshes = []
        self.texts = []

    def draw_mesh(self, world, view, projection):
        self.meshes.append(MeshDraw(world, view, projection))

    def draw_text(self, text, position, color):
        self.texts.append(TextDraw(text, position, color))

    def end_frame(self):
        self.frames_drawn += 1
