import os
import sys
import time
import argparse

import matplotlib.pyplot as plt
from tqdm import tqdm

from trajectory_source import load_trajectory, to_array
from frame_windows import iter_windows, count_windows
from projection import project_window
from camera_orbit import initial_state, advance, DEFAULT_SCALE
from render_frames import new_figure, render_frame, CANVAS_W, CANVAS_H
from gif_sink import GifSink

# =========================
# SETTINGS
# =========================
DEFAULT_FRAMES = 0          # 0 = whole table
DEFAULT_SECS = 40           # ms between frames
DEFAULT_PITCH = 0.5234      # 0.2617 or 0.5234
DEFAULT_SKIP = 40
DEFAULT_FILEKEY = "walker"
DEFAULT_OUTPUT_DIR = "data"
DEFAULT_INPUT_DIR = "input"

CAMERA_SCALE = DEFAULT_SCALE
# =========================


def parseargs(argv=None):
    parser = argparse.ArgumentParser(description="Mouse trajectory viewer: render a 3D trajectory CSV as a rotating GIF.")
    parser.add_argument('-f', '--frames', default=DEFAULT_FRAMES, type=int, help='How many frames to generate (0 = all).')
    parser.add_argument('-s', '--secs', default=DEFAULT_SECS, type=int, help='Milliseconds between frames.')
    parser.add_argument('-p', '--initial-pitch', default=DEFAULT_PITCH, type=float, help='Camera pitch in radians.')
    parser.add_argument('-k', '--skip', default=DEFAULT_SKIP, type=int, help='Samples skipped between frames.')
    parser.add_argument('--filekey', default=DEFAULT_FILEKEY, help='Dataset key (<input-dir>/<key>.csv or the S3 statistics file).')
    parser.add_argument('-o', '--output-dir', default=DEFAULT_OUTPUT_DIR, help='Output folder.')
    parser.add_argument('-i', '--input-dir', default=DEFAULT_INPUT_DIR, help='Input folder.')

    args = parser.parse_args(argv)
    if args.skip <= 0:
        parser.error("--skip must be a positive integer")
    if args.frames < 0:
        parser.error("--frames must be >= 0")
    return args


def output_path(output_dir: str, filekey: str) -> str:
    return os.path.join(output_dir, f"{filekey}_traj.gif")


def run(args, source=None) -> str:
    df = load_trajectory(args.filekey, args.input_dir, source=source)
    data = to_array(df)
    n = len(data)

    os.makedirs(args.output_dir, exist_ok=True)
    file_path = output_path(args.output_dir, args.filekey)
    camera = initial_state(args.initial_pitch, CAMERA_SCALE)
    fig = new_figure()

    start = time.perf_counter()
    total = count_windows(n, args.frames, args.skip)
    try:
        with GifSink(file_path, args.secs, size=(CANVAS_W, CANVAS_H)) as sink:
            for w in tqdm(iter_windows(n, args.frames, args.skip), total=total, desc="Image Generation"):
                points = data[w.start:w.end, 0:3]
                t0 = data[w.start, 3]

                # wall side follows the yaw before this frame's step
                projections = project_window(points, camera.yaw)
                camera = advance(camera)

                frame = render_frame(fig, projections, camera, t0, args.filekey)
                sink.append(frame)

            sink.finish()
    finally:
        plt.close(fig)

    print(f"Processing Time: {time.perf_counter() - start:.3f}s, frames: {sink.frame_count}")
    print("✅ Save to", file_path)
    return file_path


def main(argv=None):
    args = parseargs(argv)
    print(args)

    try:
        run(args)
    except Exception as e:
        print(f"Application error: {e}", file=sys.stderr)
        sys.exit(1)
    return 0


if __name__ == "__main__":
    main()
