import pytest
import numpy as np
from unittest.mock import MagicMock, patch
from orbitlabels import render, Camera, SceneState, RecordingSurface
from orbitlabels.render import NativeRenderer
from orbitlabels.mesh import gl_matrix

def test_headless_mode_prints_label_positions(capsys):
    surface = render(count=3, seed=42, mode='headless', frames=2)
    assert isinstance(surface, RecordingSurface)
    assert surface.frames_drawn == 2
    out = capsys.readouterr().out
    assert "INFO: frame 0 angle=0.000" in out
    assert "INFO: frame 1" in out
    assert "Model 3 ->" in out

def test_headless_mode_empty_scene(capsys):
    surface = render(count=0, mode='headless')
    assert surface.meshes == []
    assert "INFO: frame 0" in capsys.readouterr().out

def test_render_invalid_camera_settings(capsys):
    result = render(camera=Camera(near=10.0, far=1.0), mode='headless')
    assert result is None
    assert "ERROR: Invalid scene settings" in capsys.readouterr().err

def test_render_zero_height_surface(capsys):
    render(mode='headless', height=0)
    assert "ERROR: Invalid scene settings" in capsys.readouterr().err

def test_render_negative_count(capsys):
    render(count=-2, mode='headless')
    assert "ERROR: Invalid scene settings" in capsys.readouterr().err

def test_render_unknown_mode(capsys):
    render(mode='invalid_mode')
    assert "ERROR: Unknown render mode 'invalid_mode'" in capsys.readouterr().err

def test_render_window_missing_deps(capsys):
    with patch.dict('sys.modules', {'moderngl': None, 'glfw': None, 'pygame': None}):
        render(mode='window')
    assert "ERROR: Native window rendering requires" in capsys.readouterr().err

@patch('orbitlabels.render.NativeRenderer.run')
def test_render_mode_window_launches_renderer(mock_run):
    with patch.dict('sys.modules', {'moderngl': MagicMock(), 'glfw': MagicMock(), 'pygame': MagicMock()}):
        render(mode='window', seed=1)
    mock_run.assert_called_once()

@patch('orbitlabels.render.NativeRenderer.run', side_effect=RuntimeError("Could not initialize GLFW"))
def test_render_window_launch_failure(mock_run, capsys):
    with patch.dict('sys.modules', {'moderngl': MagicMock(), 'glfw': MagicMock(), 'pygame': MagicMock()}):
        render(mode='window')
    assert "ERROR: Failed to launch native window: Could not initialize GLFW" in capsys.readouterr().err

@patch('orbitlabels.render._render_headless')
def test_render_mode_auto_detects_notebook(mock_headless):
    with patch('orbitlabels.render._IS_NOTEBOOK', True):
        render(mode='auto')
    mock_headless.assert_called_once()

@patch('orbitlabels.render.NativeRenderer.run')
@patch('orbitlabels.render._render_headless')
def test_render_mode_auto_detects_desktop(mock_headless, mock_run):
    with patch('orbitlabels.render._IS_NOTEBOOK', False):
        with patch.dict('sys.modules', {'moderngl': MagicMock(), 'glfw': MagicMock(), 'pygame': MagicMock()}):
            render(mode='auto')
    mock_headless.assert_not_called()
    mock_run.assert_called_once()

def test_init_window_failure_raises(mock_glfw):
    mock_glfw.init.return_value = False
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    with patch.dict('sys.modules', {'moderngl': MagicMock()}):
        with pytest.raises(RuntimeError, match="Could not initialize GLFW"):
            renderer._init_window()

def test_window_creation_failure_terminates_glfw(mock_glfw):
    mock_glfw.create_window.return_value = None
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    with patch.dict('sys.modules', {'moderngl': MagicMock()}):
        with pytest.raises(RuntimeError, match="Could not create GLFW window"):
            renderer._init_window()
    mock_glfw.terminate.assert_called_once()

def test_init_window_uses_framebuffer_size(mock_glfw):
    mock_glfw.get_framebuffer_size.return_value = (1600, 960)
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    with patch.dict('sys.modules', {'moderngl': MagicMock()}):
        renderer._init_window()
    assert (renderer.width, renderer.height) == (1600, 960)
    assert renderer.viewport.aspect_ratio == pytest.approx(800 / 480)
    assert renderer.pixel_ratio == 2.0

def test_exit_on_window_close(mock_glfw):
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    assert renderer.exit_requested() is False
    mock_glfw.window_should_close.return_value = True
    assert renderer.exit_requested() is True

def test_exit_on_escape(mock_glfw):
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    mock_glfw.get_key.return_value = mock_glfw.PRESS
    assert renderer.exit_requested() is True

def test_exit_on_gamepad_back(mock_glfw):
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    state = MagicMock()
    state.buttons.__getitem__.return_value = mock_glfw.PRESS
    mock_glfw.joystick_is_gamepad.return_value = True
    mock_glfw.get_gamepad_state.return_value = state
    assert renderer.exit_requested() is True

def test_draw_mesh_uploads_column_major_matrices():
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    renderer.mesh_program = MagicMock()
    renderer.mesh_vao = MagicMock()
    world, view, projection = np.identity(4), np.arange(16.0).reshape(4, 4), np.eye(4) * 2
    renderer.draw_mesh(world, view, projection)

    uploads = [c.args[0] for c in renderer.mesh_program.__getitem__.return_value.write.call_args_list]
    assert uploads == [gl_matrix(world), gl_matrix(view), gl_matrix(projection)]
    renderer.mesh_vao.render.assert_called_once()

def test_label_textures_are_cached():
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    renderer.ctx = MagicMock()
    renderer.font = MagicMock()
    renderer.font.render.return_value.get_size.return_value = (40, 12)
    with patch.dict('sys.modules', {'pygame': MagicMock()}):
        first = renderer._label_texture("Model 1")
        second = renderer._label_texture("Model 1")
    assert first is second
    assert first[1:] == (40, 12)
    renderer.font.render.assert_called_once()
    renderer.ctx.texture.assert_called_once()

@patch.object(NativeRenderer, 'end_frame')
@patch.object(NativeRenderer, 'draw_text')
@patch.object(NativeRenderer, 'draw_mesh')
@patch.object(NativeRenderer, 'begin_frame')
@patch.object(NativeRenderer, '_build_programs')
@patch.object(NativeRenderer, '_init_font')
@patch.object(NativeRenderer, '_init_window')
def test_run_loop_draws_until_exit(mock_window, mock_font, mock_build, mock_begin,
                                   mock_mesh, mock_text, mock_end, mock_glfw, capsys):
    mock_glfw.get_time.return_value = 4.0
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    with patch.object(NativeRenderer, 'exit_requested', side_effect=[False, False, True]):
        renderer.run()

    assert mock_begin.call_count == 2
    assert mock_mesh.call_count == 6
    assert mock_text.call_count == 6
    assert renderer.scene.angle == 2.0
    mock_glfw.terminate.assert_called_once()
    assert "INFO: Rendering 3 objects at 800x480." in capsys.readouterr().out

def test_headless_mode_zero_frames_draws_nothing(capsys):
    surface = render(count=3, seed=42, mode='headless', frames=0)
    assert surface.frames_drawn == 0
    assert "INFO: frame" not in capsys.readouterr().out

def test_render_negative_frames(capsys):
    assert render(mode='headless', frames=-1) is None
    assert "ERROR: Invalid scene settings: Frame count must not be negative" in capsys.readouterr().err

@pytest.mark.parametrize("fps", [0.0, -30.0])
def test_render_non_positive_fps(fps, capsys):
    assert render(mode='headless', fps=fps) is None
    assert "ERROR: Invalid scene settings: Frame rate must be positive" in capsys.readouterr().err

def test_font_scales_with_pixel_ratio():
    renderer = NativeRenderer(SceneState.random(3, seed=1), font_size=24)
    renderer.pixel_ratio = 2.0
    mock_pygame = MagicMock()
    with patch.dict('sys.modules', {'pygame': mock_pygame}):
        renderer._init_font()
    mock_pygame.font.Font.assert_called_once_with(None, 48)

def test_release_frees_all_gl_objects():
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    ctx = renderer.ctx = MagicMock()
    texture = MagicMock()
    renderer._textures = {"Model 1": (texture, 40, 12)}
    owned = [MagicMock() for _ in range(7)]
    (renderer.mesh_vao, renderer.text_vao, renderer.text_vbo,
     renderer.mesh_program, renderer.text_program, vbo, ibo) = owned
    renderer._buffers = [vbo, ibo]

    renderer.release()

    texture.release.assert_called_once()
    for obj in owned:
        obj.release.assert_called_once()
    ctx.release.assert_called_once()
    assert renderer.ctx is None
    assert renderer.mesh_vao is None and renderer.text_program is None
    assert renderer._buffers == []

def test_release_before_setup_is_safe():
    renderer = NativeRenderer(SceneState.random(3, seed=1))
    renderer.release()
    assert renderer.ctx is None
