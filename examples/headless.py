from orbitlabels import render

def main():
    """
    Computes label positions without opening a window.

    This works in headless environments and notebooks. Each frame prints
    where every label would be drawn on an 800x480 surface.
    """
    return dict(count=5, seed=7, mode='headless', frames=10, fps=2.0)

if __name__ == "__main__":
    render(**main())
