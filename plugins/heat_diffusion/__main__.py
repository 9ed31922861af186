"""
Heat Diffusion Viewer - Entry Point

Usage:
    python -m heat_diffusion [preset] [options]

Options:
    --window WxH        Canvas size in pixels (default 800x600)
    --scale LEVEL       Scale selector level 1-6 (1 = 10px cells, 6 = 1px)
    --gamma G           Diffusion rate (about 0.24-0.25 is stable)
    --beta B            Initial bump spread, selector units (1-100)
    --heat H            Heat multiplier for mouse injection
    --init MODE         Initial grid: radial or zeros
    --snap N            Headless: run N frames, save a PNG, exit
    --list              List presets and scale levels

Examples:
    python -m heat_diffusion
    python -m heat_diffusion blank --scale 5
    python -m heat_diffusion classic --snap 200
"""

import os
import sys

from .presets import (
    PRESET_ORDER, DEFAULT_PRESET, SCALE_LEVELS, SCALE_LEVEL_ORDER, list_presets,
)


def snap(preset, width, height, frames, overrides):
    """Headless mode: run N frames, save the canvas as PNG, exit."""
    from PIL import Image
    from .session import SimulationSession

    screenshots_dir = os.path.join(
        os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
        "screenshots"
    )
    os.makedirs(screenshots_dir, exist_ok=True)

    sim = SimulationSession(width, height, preset=preset, **overrides)
    print(f"  {preset}: {sim.grid.cols}x{sim.grid.rows} cells @ {sim.scale}px, "
          f"running {frames} frames...", end="", flush=True)
    for _ in range(frames):
        sim.tick()

    img = Image.fromarray(sim.target.pixels)
    path = os.path.join(screenshots_dir, f"heat_{preset}.png")
    img.save(path)
    img.save(os.path.join(screenshots_dir, "latest.png"))
    st = sim.stats
    print(f" saved: {path}  (total heat {st['total_heat']:.1f}, max {st['max']:.2f})")
    return path


def parse_args(args):
    """Parse argv into (preset, width, height, snap_frames, overrides).

    Returns None when the command only printed something (--help, --list)
    or was invalid.
    """
    preset = DEFAULT_PRESET
    width, height = 800, 600
    snap_frames = 0
    overrides = {}

    i = 0
    while i < len(args):
        arg = args[i]
        has_value = i + 1 < len(args)
        if arg == "--window" and has_value:
            parts = args[i + 1].lower().split("x")
            width, height = int(parts[0]), int(parts[1])
            i += 2
        elif arg == "--scale" and has_value:
            level = int(args[i + 1])
            if level not in SCALE_LEVELS:
                print(f"Unknown scale level: {level} (expected {SCALE_LEVEL_ORDER[0]}-{SCALE_LEVEL_ORDER[-1]})")
                return None
            overrides["scale_level"] = level
            i += 2
        elif arg == "--gamma" and has_value:
            overrides["gamma"] = float(args[i + 1])
            i += 2
        elif arg == "--beta" and has_value:
            overrides["beta"] = int(args[i + 1])
            i += 2
        elif arg == "--heat" and has_value:
            overrides["heat_multiplier"] = float(args[i + 1])
            i += 2
        elif arg == "--init" and has_value:
            overrides["init"] = args[i + 1]
            i += 2
        elif arg == "--snap" and has_value:
            snap_frames = int(args[i + 1])
            i += 2
        elif arg == "--list":
            print("\nAvailable presets:")
            for key, name, desc in list_presets():
                print(f"    {key:12s} {name:14s} {desc}")
            print("\nScale levels:")
            for level in SCALE_LEVEL_ORDER:
                print(f"    {level}  {SCALE_LEVELS[level]:2d} px per cell")
            print()
            return None
        elif arg in ("--help", "-h"):
            print(__doc__)
            return None
        elif arg in PRESET_ORDER:
            preset = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print("Use --list to see available presets")
            return None

    return preset, width, height, snap_frames, overrides


def main(argv=None):
    parsed = parse_args(sys.argv[1:] if argv is None else argv)
    if parsed is None:
        return 0
    preset, width, height, snap_frames, overrides = parsed

    try:
        if snap_frames > 0:
            print(f"Headless snap mode: {preset} @ {width}x{height}, {snap_frames} frames")
            snap(preset, width, height, snap_frames, overrides)
            return 0

        # pygame is only needed for the interactive window
        from .viewer import Viewer

        print("Starting Heat Diffusion Viewer")
        print(f"  Preset: {preset}")
        print(f"  Canvas: {width}x{height}")
        print()

        viewer = Viewer(width=width, height=height, start_preset=preset, **overrides)
        viewer.run()
    except (ValueError, KeyError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
