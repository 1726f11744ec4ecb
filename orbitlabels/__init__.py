from .api.camera import (
    Camera, CameraError, build_projection, build_view,
    look_at, rotation_y, translation,
)
from .api.projector import Viewport, ScreenPoint, project, project_points
from .api.scene import SceneState, initialize
from .api.surface import Surface, RecordingSurface
from .frame import FrameDriver, Frame
from .render import NativeRenderer, render
