from collections import namedtuple

import numpy as np

# Render space is y-up: render (X, Y, Z) = data (x, z, y).
FLOOR = -1.0        # XY projection, render Y
BACK_WALL = -1.0    # XZ projection, render Z
SIDE_WALL_NEAR = -1.0
SIDE_WALL_FAR = 25.0

Projections = namedtuple("Projections", ["body", "xy", "xz", "yz"])


def wall_position(yaw: float) -> float:
    """Side wall used for the YZ projection; it swings to the far side of the camera."""
    if yaw > 0:
        return SIDE_WALL_NEAR
    return SIDE_WALL_FAR


def project_window(points, yaw: float) -> Projections:
    """
    points: (m, 3) array of data x, y, z for one window.

    Returns four lists of (X, Y, Z) render-space triples, in row order:
      body  (x, z, y)
      xy    (x, -1, y)    flattened on the floor
      xz    (x, z, -1)    flattened on the back wall
      yz    (wall, z, y)  flattened on the side wall
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    wall = wall_position(yaw)

    body, xy, xz, yz = [], [], [], []
    for x, y, z in pts:
        x, y, z = float(x), float(y), float(z)
        body.append((x, z, y))
        xy.append((x, FLOOR, y))
        xz.append((x, z, BACK_WALL))
        yz.append((wall, z, y))

    return Projections(body, xy, xz, yz)
