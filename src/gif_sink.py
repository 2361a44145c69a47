import numpy as np
from PIL import Image
from PIL import GifImagePlugin

GIF_TRAILER = b";"


class GifSink:
    """
    Streams RGB frames into one looping GIF.

    The target file is opened on construction so an unusable output path
    fails before any rendering work is done. Every append quantizes the
    frame, writes its image block (with its own colour table) and flushes,
    so a run that dies halfway leaves the frames written so far on disk.
    finish() writes the trailer and closes the file.
    """

    def __init__(self, path: str, delay_ms: int, size=(600, 450)):
        self.path = path
        self.delay_ms = int(delay_ms)
        self.size = tuple(size)
        self.frame_count = 0
        self.finished = False
        self.header_written = False
        self.f = open(path, "wb")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def close(self) -> None:
        if not self.f.closed:
            self.f.close()

    def _write_header(self, im_p) -> None:
        # global header: logical screen, palette of the first image, NETSCAPE loop block
        header, _ = GifImagePlugin.getheader(im_p, info={"loop": 0, "duration": self.delay_ms})
        self.f.write(b"".join(header))
        self.header_written = True

    def append(self, frame) -> None:
        if self.finished:
            raise RuntimeError(f"GIF already finalized: {self.path}")
        arr = np.asarray(frame, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) RGB frame, got shape {arr.shape}")

        im_p = Image.fromarray(arr).quantize(colors=256)
        if not self.header_written:
            self.size = im_p.size
            self._write_header(im_p)

        data = GifImagePlugin.getdata(im_p, duration=self.delay_ms, include_color_table=True)
        self.f.write(b"".join(data))
        self.f.flush()
        self.frame_count += 1

    def finish(self) -> None:
        if self.finished:
            raise RuntimeError(f"GIF already finalized: {self.path}")
        self.finished = True

        try:
            if not self.header_written:
                # no frames: still a well-formed (empty) GIF of the canvas size
                print("Warning: no frames generated, writing an empty GIF:", self.path)
                blank = Image.new("RGB", self.size, "white").quantize(colors=2)
                self._write_header(blank)
            self.f.write(GIF_TRAILER)
        finally:
            self.close()
