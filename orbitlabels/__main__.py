import argparse
from .api.camera import Camera, DEFAULT_FOV, DEFAULT_NEAR, DEFAULT_FAR
from .api.scene import DEFAULT_BOUNDS
from .render import render

def build_parser():
    parser = argparse.ArgumentParser(
        prog='orbitlabels',
        description='Orbit a camera around a scene and label each object in screen space',
    )
    parser.add_argument('--count', type=int, default=3, help='Number of labelled objects')
    parser.add_argument('--bounds', type=float, default=DEFAULT_BOUNDS, help='Side length of the placement square')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible placement')
    parser.add_argument('--width', type=int, default=800, help='Surface width in pixels')
    parser.add_argument('--height', type=int, default=480, help='Surface height in pixels')
    parser.add_argument('--fov', type=float, default=DEFAULT_FOV, help='Vertical field of view in degrees')
    parser.add_argument('--near', type=float, default=DEFAULT_NEAR, help='Near clip plane distance')
    parser.add_argument('--far', type=float, default=DEFAULT_FAR, help='Far clip plane distance')
    parser.add_argument('--headless', action='store_true', help='Print label positions instead of opening a window')
    parser.add_argument('--frames', type=int, default=1, help='Frames to compute in headless mode')
    parser.add_argument('--fps', type=float, default=60.0, help='Simulated frame rate in headless mode')
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    camera = Camera(fov=args.fov, near=args.near, far=args.far)
    return render(
        count=args.count,
        bounds=args.bounds,
        seed=args.seed,
        camera=camera,
        mode='headless' if args.headless else 'window',
        width=args.width,
        height=args.height,
        frames=args.frames,
        fps=args.fps,
    )

if __name__ == "__main__":
    main()
