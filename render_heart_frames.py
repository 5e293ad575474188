#!/usr/bin/env python3
"""
render_heart_frames.py

OFFLINE FRAME RENDERER for the heart swarm

- Runs the swarm headless (SDL dummy video driver)
- Plays a scripted session: the pointer sweeps a Lissajous path, taps once,
  then the heart forms
- Time is virtual (1/fps per frame), so the scramble lasts exactly as many
  frames as it would live
- Saves frames as JPEGs in frames_out/

Later, stitch into a video with FFmpeg:
  ffmpeg -framerate 60 -i frames_out/%06d.jpg -c:v libx264 -crf 18 -pix_fmt yuv420p heart_swarm.mp4
"""
import argparse
import math
import os
import sys
import time
from pathlib import Path

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
from PIL import Image

from swarm_config import add_swarm_arguments, config_from_args
from swarm_engine import Swarm
from swarm_surface import PygameSurface


class FrameClock:
    """Virtual clock advanced by hand, one frame at a time."""
    def __init__(self, fps):
        self.fps = fps
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self):
        self.now += 1.0 / self.fps


def pointer_path(frame, fps, width, height):
    """Slow Lissajous sweep across the middle of the frame."""
    t = frame / float(fps)
    x = width / 2 + math.sin(t * 0.7) * width * 0.35
    y = height / 2 + math.sin(t * 1.1 + 0.5) * height * 0.30
    return x, y


def render_frames(swarm, clock, frames, fps, out_dir: Path, tap_at, formation_at, quality=90):
    """
    Drive the swarm through the scripted session and save one JPEG per frame.
    Returns the number of frames written.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    width, height = int(swarm.viewport.width), int(swarm.viewport.height)
    surface = pygame.Surface((width, height))
    canvas = PygameSurface(surface)

    start = time.time()
    last_print = start

    for idx in range(frames):
        swarm.pointer_move(*pointer_path(idx, fps, width, height))
        if idx == tap_at:
            swarm.pointer_down(*pointer_path(idx, fps, width, height))
        if idx == formation_at:
            swarm.activate_formation()

        swarm.tick(canvas)
        canvas.present()

        # Convert Surface -> PIL Image
        raw = pygame.image.tostring(surface, "RGB")
        img = Image.frombytes("RGB", (width, height), raw)
        img.save(out_dir / f"{idx:06d}.jpg", "JPEG", quality=quality, optimize=True)

        clock.advance()

        now = time.time()
        if now - last_print > 10:
            done_pct = 100.0 * (idx + 1) / frames
            elapsed = now - start
            eta = elapsed / (done_pct / 100.0) - elapsed
            print(f"[RENDER] frame {idx+1}/{frames} ({done_pct:5.1f}%), "
                  f"elapsed {elapsed/60:.1f} min, ETA {eta/60:.1f} min, lines {swarm.line_count}")
            last_print = now

    return frames


def main(argv=None):
    ap = argparse.ArgumentParser(description='Render the heart swarm to numbered JPEG frames')
    add_swarm_arguments(ap)
    ap.add_argument('--frames', type=int, default=600, help='Number of frames to render')
    ap.add_argument('--out', type=Path, default=Path('frames_out'), help='Output directory')
    ap.add_argument('--tap-at', type=int, default=None, help='Frame of the pointer tap (default: 2 s in)')
    ap.add_argument('--formation-at', type=int, default=None, help='Frame the heart forms (default: 4 s in)')
    ap.add_argument('--quality', type=int, default=90, help='JPEG quality')
    args = ap.parse_args(argv)

    if args.frames <= 0:
        print(f"[ERROR] --frames must be positive, got {args.frames}")
        return 1
    try:
        cfg = config_from_args(args)
    except (KeyError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 1

    tap_at = args.fps * 2 if args.tap_at is None else args.tap_at
    formation_at = args.fps * 4 if args.formation_at is None else args.formation_at

    pygame.init()
    clock = FrameClock(args.fps)
    width, height = args.size
    swarm = Swarm(cfg, width, height, clock=clock)

    print(f"[STEP] Rendering {args.frames} frames at {width}x{height} -> {args.out}/")
    render_frames(swarm, clock, args.frames, args.fps, args.out, tap_at, formation_at, args.quality)
    pygame.quit()

    print("\n[COMPLETE]")
    print(f"Frames saved to: {args.out}/%06d.jpg")
    print("\nNext, stitch them with FFmpeg:\n")
    print(f"  ffmpeg -framerate {args.fps} -i {args.out}/%06d.jpg -c:v libx264 -crf 18 -pix_fmt yuv420p heart_swarm.mp4")
    return 0


if __name__ == '__main__':
    sys.exit(main())
