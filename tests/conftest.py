import pytest
import numpy as np
from unittest.mock import MagicMock, patch
from orbitlabels import Camera, Viewport, SceneState

@pytest.fixture
def viewport():
    return Viewport(800, 480)

@pytest.fixture
def camera():
    return Camera()

@pytest.fixture
def scene():
    return SceneState.random(3, 10.0, seed=42)

@pytest.fixture
def mock_glfw():
    """Stands in for the glfw module so window code runs without a display."""
    glfw = MagicMock()
    glfw.init.return_value = True
    glfw.window_should_close.return_value = False
    glfw.get_key.return_value = 0
    glfw.joystick_is_gamepad.return_value = False
    glfw.get_framebuffer_size.return_value = (800, 480)
    glfw.get_window_size.return_value = (800, 480)
    glfw.get_time.return_value = 0.0
    with patch.dict('sys.modules', {'glfw': glfw}):
        yield glfw
