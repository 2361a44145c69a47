import math
from collections import namedtuple

LOWER_YAW = 0.52
UPPER_YAW = 1.05
STEP = 0.002

INITIAL_YAW = 1.05
INITIAL_DELTA = -STEP   # drift toward the lower bound first
DEFAULT_SCALE = 0.8

CameraState = namedtuple("CameraState", ["yaw", "delta", "pitch", "scale"])


def initial_state(pitch: float, scale: float = DEFAULT_SCALE) -> CameraState:
    return CameraState(INITIAL_YAW, INITIAL_DELTA, pitch, scale)


def advance(state: CameraState) -> CameraState:
    """Flip direction outside [LOWER_YAW, UPPER_YAW], then step the yaw."""
    delta = state.delta
    if state.yaw < LOWER_YAW:
        delta = STEP
    elif state.yaw > UPPER_YAW:
        delta = -STEP

    return state._replace(yaw=state.yaw + delta, delta=delta)


def view_angles(state: CameraState):
    """(elev_deg, azim_deg, zoom) for Axes3D.view_init / set_box_aspect."""
    return math.degrees(state.pitch), math.degrees(state.yaw), state.scale
