import cv2
import numpy as np

import matplotlib
matplotlib.use("Agg")  # frames go to a GIF, never to a window
import matplotlib.pyplot as plt

from camera_orbit import view_angles

# =========================
CANVAS_W, CANVAS_H = 600, 450
DPI = 100
BACKGROUND = "white"

# render-space ranges (y-up)
X_RANGE = (-1.0, 25.0)
Y_RANGE = (-1.0, 20.0)
Z_RANGE = (-1.0, 25.0)

SERIES = [
    # (field in Projections, label, color)
    ("body", "Body", "black"),
    ("xy", "Proj. XY", "blue"),
    ("xz", "Proj. XZ", "green"),
    ("yz", "Proj. YZ", "red"),
]

TEXT_FONT = cv2.FONT_HERSHEY_SIMPLEX
TEXT_SCALE = 0.5
TEXT_COLOR = (0, 0, 0)
PERIOD_POS = (20, 400)
TIME_POS = (20, 420)
# =========================


def new_figure():
    return plt.figure(figsize=(CANVAS_W / DPI, CANVAS_H / DPI), dpi=DPI)


def annotation_lines(t0: float, period: int = 0):
    return [f"period: {period}", f"time: {t0:.2f}"]


def _to_axes(triples):
    """Render space is y-up, matplotlib is z-up: (X, Y, Z) -> (X, Z, Y)."""
    if not triples:
        return [], [], []
    arr = np.asarray(triples, dtype=np.float64)
    return arr[:, 0], arr[:, 2], arr[:, 1]


def draw_chart(fig, projections, camera, title: str):
    fig.clf()
    fig.set_facecolor(BACKGROUND)

    ax = fig.add_subplot(111, projection="3d")
    ax.set_facecolor(BACKGROUND)
    ax.set_title(title, fontsize=18)

    ax.set_xlim(*X_RANGE)
    ax.set_ylim(*Z_RANGE)
    ax.set_zlim(*Y_RANGE)
    ax.set_xlabel("X")
    ax.set_ylabel("Z")
    ax.set_zlabel("Y")

    elev, azim, zoom = view_angles(camera)
    ax.view_init(elev=elev, azim=azim)
    ax.set_box_aspect(None, zoom=zoom)

    for field, label, color in SERIES:
        xs, ys, zs = _to_axes(getattr(projections, field))
        if field == "body":
            ax.plot(xs, ys, zs, color=color, lw=1, marker="o", markersize=1, label=label)
        else:
            ax.plot(xs, ys, zs, color=color, lw=1, label=label)

    legend = ax.legend(loc="upper right", fontsize=8)
    legend.get_frame().set_edgecolor("black")
    return ax


def canvas_to_rgb(fig) -> np.ndarray:
    fig.canvas.draw()
    buf = np.asarray(fig.canvas.buffer_rgba())
    return cv2.cvtColor(buf, cv2.COLOR_RGBA2RGB)


def annotate(frame: np.ndarray, t0: float) -> np.ndarray:
    for text, pos in zip(annotation_lines(t0), [PERIOD_POS, TIME_POS]):
        cv2.putText(frame, text, pos, TEXT_FONT, TEXT_SCALE, TEXT_COLOR, 1, cv2.LINE_AA)
    return frame


def render_frame(fig, projections, camera, t0: float, title: str) -> np.ndarray:
    """Draw one frame and return it as an (H, W, 3) uint8 RGB array."""
    draw_chart(fig, projections, camera, title)
    frame = canvas_to_rgb(fig)
    if frame.shape[:2] != (CANVAS_H, CANVAS_W):
        frame = cv2.resize(frame, (CANVAS_W, CANVAS_H), interpolation=cv2.INTER_AREA)
    return annotate(frame, t0)
