from orbitlabels import render

def main():
    """
    Three cubes scattered on the ground plane, each labelled "Model N".

    The camera circles the scene at half a radian per second. Every label
    is placed by projecting its cube's world position through the same
    view and projection matrices used to draw the cube.
    """
    return dict(count=3, bounds=10.0, seed=42)

if __name__ == "__main__":
    render(**main())
