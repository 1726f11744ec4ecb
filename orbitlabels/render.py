import sys
import os
import numpy as np
from .api.camera import Camera
from .api.projector import Viewport
from .api.scene import SceneState, DEFAULT_BOUNDS
from .api.surface import Surface, RecordingSurface
from .frame import FrameDriver, LABEL_COLOR
from .mesh import cube, interleave, gl_matrix

try:
    get_ipython()
    _IS_NOTEBOOK = True
except NameError:
    _IS_NOTEBOOK = False

CLEAR_COLOR = (0.392, 0.584, 0.929)
FONT_SIZE = 24

MESH_VERTEX_SHADER = """
    #version 330 core
    uniform mat4 u_world;
    uniform mat4 u_view;
    uniform mat4 u_projection;
    in vec3 in_position;
    in vec3 in_normal;
    out vec3 v_normal;
    void main() {
        v_normal = mat3(u_world) * in_normal;
        gl_Position = u_projection * u_view * u_world * vec4(in_position, 1.0);
    }
"""

MESH_FRAGMENT_SHADER = """
    #version 330 core
    uniform vec3 u_light_dir;
    uniform vec3 u_color;
    in vec3 v_normal;
    out vec4 f_color;
    void main() {
        float diffuse = max(dot(normalize(v_normal), -u_light_dir), 0.0);
        f_color = vec4(u_color * (0.25 + 0.75 * diffuse), 1.0);
    }
"""

TEXT_VERTEX_SHADER = """
    #version 330 core
    uniform vec2 u_resolution;
    in vec2 in_pos;
    in vec2 in_uv;
    out vec2 v_uv;
    void main() {
        v_uv = in_uv;
        vec2 ndc = vec2(in_pos.x / u_resolution.x * 2.0 - 1.0, 1.0 - in_pos.y / u_resolution.y * 2.0);
        gl_Position = vec4(ndc, 0.0, 1.0);
    }
"""

TEXT_FRAGMENT_SHADER = """
    #version 330 core
    uniform sampler2D u_texture;
    uniform vec4 u_color;
    in vec2 v_uv;
    out vec4 f_color;
    void main() {
        f_color = texture(u_texture, v_uv) * u_color;
    }
"""

class NativeRenderer(Surface):
    """
    Interactive window renderer using GLFW, ModernGL and pygame fonts.

    Each object is drawn as a lit cube and labelled with text rasterized by
    pygame. The loop runs until the window is closed, Escape is pressed or
    the gamepad Back button is pressed.
    """
    def __init__(self, scene: SceneState, camera: Camera = None, width=800, height=480,
                 title="orbitlabels", font_size=FONT_SIZE, label_color=LABEL_COLOR):
        self.scene = scene
        self.camera = camera
        self.width = width
        self.height = height
        self.title = title
        self.font_size = font_size
        self.label_color = label_color
        self.pixel_ratio = 1.0

        self.window = None
        self.ctx = None
        self.font = None
        self.mesh_program = None
        self.mesh_vao = None
        self.text_program = None
        self.text_vbo = None
        self.text_vao = None
        self._buffers = []
        self._textures = {}

    def _init_window(self):
        import glfw
        import moderngl

        if not glfw.init():
            raise RuntimeError("Could not initialize GLFW")

        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, True)
        glfw.window_hint(glfw.RESIZABLE, False)

        self.window = glfw.create_window(self.width, self.height, self.title, None, None)
        if not self.window:
            glfw.terminate()
            raise RuntimeError("Could not create GLFW window.")
        glfw.make_context_current(self.window)

        # Framebuffer size can differ from the window size on HiDPI displays.
        window_width, _ = glfw.get_window_size(self.window)
        self.width, self.height = glfw.get_framebuffer_size(self.window)
        if window_width > 0:
            self.pixel_ratio = self.width / window_width
        self.ctx = moderngl.create_context()
        self.ctx.viewport = (0, 0, self.width, self.height)

    def _init_font(self):
        import pygame
        pygame.font.init()
        self.font = pygame.font.Font(None, max(1, round(self.font_size * self.pixel_ratio)))

    def _build_programs(self):
        verts, normals, faces = cube(1.0)
        self.mesh_program = self.ctx.program(
            vertex_shader=MESH_VERTEX_SHADER, fragment_shader=MESH_FRAGMENT_SHADER
        )
        light_dir = np.array([-0.5, -1.0, -0.6])
        self.mesh_program['u_light_dir'].value = tuple(light_dir / np.linalg.norm(light_dir))
        self.mesh_program['u_color'].value = (0.85, 0.85, 0.9)

        vbo = self.ctx.buffer(interleave(verts, normals).tobytes())
        ibo = self.ctx.buffer(faces.tobytes())
        self.mesh_vao = self.ctx.vertex_array(
            self.mesh_program, [(vbo, '3f 3f', 'in_position', 'in_normal')], index_buffer=ibo
        )

        self.text_program = self.ctx.program(
            vertex_shader=TEXT_VERTEX_SHADER, fragment_shader=TEXT_FRAGMENT_SHADER
        )
        self.text_program['u_resolution'].value = (float(self.width), float(self.height))
        self.text_vbo = self.ctx.buffer(reserve=4 * 4 * 4)
        self.text_vao = self.ctx.vertex_array(
            self.text_program, [(self.text_vbo, '2f 2f', 'in_pos', 'in_uv')]
        )
        self._buffers = [vbo, ibo]
        print("INFO: Shaders compiled successfully.")

    def _label_texture(self, text):
        """Rasterizes `text` once and caches the texture for later frames."""
        if text not in self._textures:
            import pygame
            image = self.font.render(text, True, (255, 255, 255))
            w, h = image.get_size()
            texture = self.ctx.texture((w, h), 4, pygame.image.tobytes(image, 'RGBA', True))
            self._textures[text] = (texture, w, h)
        return self._textures[text]

    def begin_frame(self):
        import moderngl
        self.ctx.clear(*CLEAR_COLOR)
        self.ctx.disable(moderngl.BLEND)
        self.ctx.enable(moderngl.DEPTH_TEST)

    def draw_mesh(self, world, view, projection):
        self.mesh_program['u_world'].write(gl_matrix(world))
        self.mesh_program['u_view'].write(gl_matrix(view))
        self.mesh_program['u_projection'].write(gl_matrix(projection))
        self.mesh_vao.render()

    def draw_text(self, text, position, color):
        import moderngl
        texture, w, h = self._label_texture(text)
        x, y = position
        quad = np.array([
            [x,     y,     0.0, 1.0],
            [x + w, y,     1.0, 1.0],
            [x,     y + h, 0.0, 0.0],
            [x + w, y + h, 1.0, 0.0],
        ], dtype='f4')
        self.text_vbo.write(quad.tobytes())

        self.ctx.disable(moderngl.DEPTH_TEST)
        self.ctx.enable(moderngl.BLEND)
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA
        texture.use(0)
        self.text_program['u_color'].value = tuple(color)
        self.text_vao.render(mode=moderngl.TRIANGLE_STRIP)

    def end_frame(self):
        import glfw
        glfw.swap_buffers(self.window)

    def exit_requested(self) -> bool:
        """Polls the exit signal: window close, Escape key, or gamepad Back."""
        import glfw
        if glfw.window_should_close(self.window):
            return True
        if glfw.get_key(self.window, glfw.KEY_ESCAPE) == glfw.PRESS:
            return True
        if glfw.joystick_is_gamepad(glfw.JOYSTICK_1):
            state = glfw.get_gamepad_state(glfw.JOYSTICK_1)
            if state and state.buttons[glfw.GAMEPAD_BUTTON_BACK] == glfw.PRESS:
                return True
        return False

    def release(self):
        """Releases every GL object this renderer created, then the context."""
        for texture, _, _ in self._textures.values():
            texture.release()
        self._textures = {}
        # Vertex arrays go before the buffers and programs they reference.
        for obj in (self.mesh_vao, self.text_vao, self.text_vbo, *self._buffers,
                    self.mesh_program, self.text_program):
            if obj is not None:
                obj.release()
        self.mesh_vao = self.text_vao = self.text_vbo = None
        self.mesh_program = self.text_program = None
        self._buffers = []
        if self.ctx is not None:
            self.ctx.release()
            self.ctx = None

    def run(self):
        import glfw

        self._init_window()
        try:
            self._init_font()
            self._build_programs()
            driver = FrameDriver(self.scene, self, self.camera, label_color=self.label_color)
            print(f"INFO: Rendering {len(self.scene)} objects at {self.width}x{self.height}.")

            while True:
                glfw.poll_events()
                if self.exit_requested():
                    break
                driver.draw_frame(glfw.get_time())
        finally:
            self.release()
            glfw.terminate()

def _render_headless(scene: SceneState, camera: Camera = None, width=800, height=480, frames=1, fps=60.0):
    """
    Drives the scene without a window and prints where each label lands.
    This works in headless environments and notebooks.
    """
    surface = RecordingSurface(width, height)
    driver = FrameDriver(scene, surface, camera)
    for i in range(frames):
        frame = driver.draw_frame(i / fps)
        placed = ", ".join(f"{text} -> ({p.x:.1f}, {p.y:.1f})" for text, p in frame.labels)
        print(f"INFO: frame {i} angle={frame.angle:.3f} {placed}")
    return surface

def render(count=3, bounds=DEFAULT_BOUNDS, seed=None, camera: Camera = None, mode='auto',
           width=800, height=480, frames=None, fps=60.0, **kwargs):
    """
    Public API to build a scene and launch the renderer.

    Args:
        count (int, optional): Number of labelled objects. Defaults to 3.
        bounds (float, optional): Side length of the square the objects are
                                  scattered in. Defaults to 10.0.
        seed (int, optional): Seed for object placement. Random if omitted.
        camera (Camera, optional): The orbiting camera. Defaults to `Camera()`.
        mode (str, optional): The rendering backend to use.
                              - 'auto': (Default) Picks 'headless' in a notebook, else 'window'.
                              - 'window': Opens an interactive window (requires ModernGL/GLFW/pygame).
                              - 'headless': Draws onto a recording surface and prints label positions.
        width (int, optional): Surface width in pixels. Defaults to 800.
        height (int, optional): Surface height in pixels. Defaults to 480.
        frames (int, optional): Number of frames in headless mode. Defaults to 1.
        fps (float, optional): Simulated frame rate in headless mode. Defaults to 60.
        **kwargs: Additional arguments for the window renderer (e.g. `title`, `font_size`).
    """
    camera = camera if camera else Camera()
    try:
        scene = SceneState.random(count, bounds, seed)
        camera.projection(Viewport(width, height))
        if frames is not None and frames < 0:
            raise ValueError(f"Frame count must not be negative, got {frames}.")
        if fps <= 0:
            raise ValueError(f"Frame rate must be positive, got {fps}.")
    except ValueError as e:
        print(f"ERROR: Invalid scene settings: {e}", file=sys.stderr)
        return

    if mode == 'auto':
        mode = 'headless' if _IS_NOTEBOOK else 'window'

    if mode == 'headless':
        return _render_headless(scene, camera, width, height, 1 if frames is None else frames, fps)

    elif mode == 'window':
        try:
            import moderngl, glfw, pygame
        except ImportError:
            print("ERROR: Native window rendering requires 'moderngl', 'glfw' and 'pygame'.", file=sys.stderr)
            print("       Try using `mode='headless'` to compute label positions without a window.", file=sys.stderr)
            return

        if not os.environ.get("DISPLAY") and sys.platform == 'linux':
            print("WARNING: No display detected. Window creation may fail.", file=sys.stderr)
            print("         Consider using `mode='headless'`.", file=sys.stderr)

        renderer = NativeRenderer(scene, camera=camera, width=width, height=height, **kwargs)
        try:
            renderer.run()
        except RuntimeError as e:
            print(f"ERROR: Failed to launch native window: {e}", file=sys.stderr)
            print("       This often happens due to missing drivers or a headless environment.", file=sys.stderr)
            print("       Try using `mode='headless'` instead.", file=sys.stderr)

    else:
        print(f"ERROR: Unknown render mode '{mode}'. Use 'auto', 'window', or 'headless'.", file=sys.stderr)
