import logging
import time
from argparse import ArgumentParser
from pathlib import Path

from mandelfill import (
    DEFAULT_CONFIG,
    FillMode,
    MandelfillError,
    RenderConfig,
    render,
    render_hue_cycle,
)
from mandelfill.config import VIEWPORTS
from mandelfill.output import adjust_image, filename_with_flags, pil_format_name, save_image, write_animation

logger = logging.getLogger("mandelfill.cli")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser():
    parser = ArgumentParser(description="Render the Mandelbrot set to an image file.")

    parser.add_argument('--out', type=str,
                        dest='out', help='name of the output file with extension (.png, .jpg, .jpeg, .gif)',
                        metavar='OUT', default='mandelbrot.png')

    parser.add_argument('--iter', type=int,
                        dest='max_iterations', help=f'maximum number of iterations per point (default {DEFAULT_CONFIG.max_iterations})',
                        metavar='MAX_ITERATIONS')

    parser.add_argument('--width', type=int,
                        dest='width', help=f'width of the image before scaling (default {DEFAULT_CONFIG.width})',
                        metavar='WIDTH')

    parser.add_argument('--height', type=int,
                        dest='height', help=f'height of the image before scaling (default {DEFAULT_CONFIG.height})',
                        metavar='HEIGHT')

    parser.add_argument('--threshold', type=float,
                        dest='threshold', help=f'squared escape radius (default {DEFAULT_CONFIG.threshold:g})',
                        metavar='THRESHOLD')

    parser.add_argument('--workers', type=int,
                        dest='workers', help=f'number of workers for the "workers" mode (default {DEFAULT_CONFIG.workers})',
                        metavar='WORKERS')

    parser.add_argument('--scale', type=int,
                        dest='scale', help='multiplies width and height before rendering',
                        metavar='SCALE')

    parser.add_argument('--mode', type=str,
                        dest='fill_mode', help='fill strategy (options: %s)' % ', '.join(m.value for m in FillMode),
                        metavar='MODE')

    parser.add_argument('--zoom', type=float,
                        dest='zoom', help='divides the extent of the viewport', metavar='ZOOM')

    parser.add_argument('--hue', type=float,
                        dest='hue_offset', help='hue offset in degrees', metavar='HUE')

    parser.add_argument('--offset-x', '--offsetX', type=float,
                        dest='offset_x', help='translation subtracted from every x coordinate', metavar='OFFSET_X')

    parser.add_argument('--offset-y', '--offsetY', type=float,
                        dest='offset_y', help='translation subtracted from every y coordinate', metavar='OFFSET_Y')

    parser.add_argument('--smooth', dest='smooth', action='store_true', default=None,
                        help='use the continuous escape count to remove colour banding')

    parser.add_argument('--viewport', choices=sorted(VIEWPORTS), default=None,
                        help='region of the complex plane mapped onto the image (default classic)')

    parser.add_argument('--quality', type=int, default=100,
                        help='JPEG quality')

    parser.add_argument('--contrast', type=float, default=2.0,
                        help='contrast adjustment in percent applied before saving')

    parser.add_argument('--brightness', type=float, default=0.0,
                        help='brightness adjustment in percent applied before saving')

    parser.add_argument('--tag-filename', dest='tag_filename', action='store_true',
                        help='append the render parameters to the output file name')

    parser.add_argument('--frames', type=int, default=1,
                        help='number of frames; more than one writes a hue-cycling GIF animation')

    parser.add_argument('--hue-step', type=float, dest='hue_step', default=10.0,
                        help='hue offset added per animation frame, in degrees')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable debug logging')

    return parser


def config_from_args(opt) -> RenderConfig:
    viewport = VIEWPORTS[opt.viewport] if opt.viewport else None
    return RenderConfig(
        width=opt.width,
        height=opt.height,
        threshold=opt.threshold,
        max_iterations=opt.max_iterations,
        workers=opt.workers,
        scale=opt.scale,
        fill_mode=opt.fill_mode,
        zoom=opt.zoom,
        offset_x=opt.offset_x,
        offset_y=opt.offset_y,
        hue_offset=opt.hue_offset,
        smooth=opt.smooth,
        viewport=viewport,
    )


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    configure_logging(bool(opt.verbose))

    if opt.frames < 1:
        parser.error("--frames must be at least 1.")
    out_path = Path(opt.out)
    if opt.frames > 1 and out_path.suffix.lower() != ".gif":
        parser.error("--frames greater than 1 requires a .gif output.")
    try:
        pil_format_name(out_path.suffix)
    except MandelfillError as exc:
        parser.error(str(exc))

    config = config_from_args(opt)

    t_start = time.perf_counter()
    try:
        if opt.frames > 1:
            results = render_hue_cycle(config, opt.frames, opt.hue_step)
        else:
            results = [render(config)]
    except MandelfillError as exc:
        parser.error(str(exc))
    logger.info("Time taken to create image: %.3fs", time.perf_counter() - t_start)

    final_config = results[0].config
    if opt.tag_filename:
        out_path = Path(filename_with_flags(out_path, final_config))

    images = [
        adjust_image(result.to_image(), contrast=opt.contrast, brightness=opt.brightness)
        for result in results
    ]

    t_start = time.perf_counter()
    try:
        if len(images) > 1:
            write_animation(images, out_path)
        else:
            save_image(images[0], out_path, quality=opt.quality)
    except MandelfillError as exc:
        parser.error(str(exc))
    logger.info("Time taken to save image: %.3fs", time.perf_counter() - t_start)

    return out_path


if __name__ == '__main__':
    main()
