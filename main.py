#!/usr/bin/env python3
"""
Main orchestration script for Trial Trim.

This script reviews one recorded trial (video + force-plate CSV) and
exports both modalities trimmed from a single cut point to the end:
1. Load configuration (frame rate, CSV column layout, output names)
2. Load the force series and/or the video
3. Resolve the cut point in both timelines
4. Export trimmed CSV and trimmed video
5. Optionally plot the force timeline with the cut marker

Usage:
    python main.py --video trial.mp4 --data force.csv --cut-time 2.5 --output results/
"""

import argparse
import asyncio
import logging
from pathlib import Path
import sys

from session import ReviewSession
from timeline.mapper import frame_to_time
from utils.blob_sink import DirectorySink
from utils.config_loader import load_config, TrimSettings
from visualization import plot_force_timeline

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).parent / 'configs' / 'trim.yaml'


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler('trial_trim.log'),
            logging.StreamHandler(sys.stdout)
        ]
    )


def run_trim(
    settings: TrimSettings,
    output_dir: str,
    video_path: str = None,
    data_path: str = None,
    cut_time: float = 0.0,
    plot: bool = False
) -> dict:
    """
    Load inputs, export both trims and return what was written.

    Args:
        settings: Trim settings
        output_dir: Directory for exported files
        video_path: Optional video file
        data_path: Optional force CSV file
        cut_time: Cut point in seconds
        plot: Also write the force timeline plot

    Returns:
        Mapping of output name to path
    """
    sink = DirectorySink(output_dir)
    session = ReviewSession(settings, sink)
    outputs = {}

    try:
        if data_path:
            session.load_series_file(data_path)
        if video_path:
            session.load_video(video_path)

        cut = session.resolve_cut(cut_time)
        logger.info(
            f"Cut point: {cut.time:.3f}s (frame {cut.frame}, "
            f"force row {cut.series_index}/{len(session.series)})"
        )

        if data_path:
            session.seek_series_time(cut_time)
            session.export_series(cut_time)

            if plot:
                plot_path = Path(output_dir) / 'force_timeline.png'
                outputs['force_timeline.png'] = plot_force_timeline(
                    session.series,
                    cut_time,
                    str(plot_path),
                    y_limits=settings.plot_y_limits
                )

        if video_path:
            session.seek_frame(cut.frame)
            asyncio.run(session.export_video(cut_time))

    finally:
        session.close()

    outputs.update({name: str(path) for name, path in sink.saved.items()})
    return outputs


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Trial Trim - synchronized video and force-plate trim/export"
    )

    parser.add_argument('--video', type=str, help='Path to trial video')
    parser.add_argument('--data', type=str, help='Path to force-plate CSV')
    parser.add_argument(
        '--config',
        type=str,
        default=str(DEFAULT_CONFIG),
        help='Path to configuration YAML file'
    )
    parser.add_argument(
        '--output',
        type=str,
        default='results/',
        help='Output directory for trimmed files'
    )

    cut_group = parser.add_mutually_exclusive_group()
    cut_group.add_argument('--cut-time', type=float, help='Cut point in seconds')
    cut_group.add_argument('--cut-frame', type=int, help='Cut point as a video frame')

    parser.add_argument('--plot', action='store_true', help='Write force timeline plot')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')

    args = parser.parse_args()

    setup_logging(args.verbose)

    if not args.video and not args.data:
        logger.error("Nothing to trim: pass --video and/or --data")
        sys.exit(1)

    for path in (args.video, args.data):
        if path and not Path(path).exists():
            logger.error(f"Input file not found: {path}")
            sys.exit(1)

    try:
        settings = TrimSettings.from_config(load_config(args.config))
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    if args.cut_frame is not None:
        cut_time = frame_to_time(args.cut_frame, settings.frame_rate)
    else:
        cut_time = args.cut_time or 0.0

    try:
        outputs = run_trim(
            settings,
            args.output,
            video_path=args.video,
            data_path=args.data,
            cut_time=cut_time,
            plot=args.plot
        )
    except Exception as e:
        logger.error(f"Trim failed: {e}", exc_info=True)
        sys.exit(1)

    logger.info("\n✓ Trim complete")
    for name, path in outputs.items():
        logger.info(f"  {name}: {path}")


if __name__ == '__main__':
    main()
