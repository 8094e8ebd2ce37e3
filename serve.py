import logging
from argparse import ArgumentParser
from dataclasses import replace

from mandelfill import DEFAULT_CONFIG, FillMode
from mandelfill.server import ServerDefaults, serve


def build_parser():
    parser = ArgumentParser(description="Serve Mandelbrot renders over HTTP.")

    parser.add_argument('--port', type=int, default=8080,
                        help='port to run the server on')
    parser.add_argument('--host', type=str, default='',
                        help='interface to bind, all interfaces by default')
    parser.add_argument('--out', type=str, default='.png',
                        help='default response format (.png, .jpg, .jpeg, .gif)')

    parser.add_argument('--iter', type=int, dest='max_iterations', default=DEFAULT_CONFIG.max_iterations,
                        help='default maximum number of iterations')
    parser.add_argument('--width', type=int, default=DEFAULT_CONFIG.width,
                        help='default image width')
    parser.add_argument('--height', type=int, default=DEFAULT_CONFIG.height,
                        help='default image height')
    parser.add_argument('--threshold', type=float, default=DEFAULT_CONFIG.threshold,
                        help='default squared escape radius')
    parser.add_argument('--workers', type=int, default=DEFAULT_CONFIG.workers,
                        help='default number of workers')
    parser.add_argument('--scale', type=int, default=DEFAULT_CONFIG.scale,
                        help='default scale of the image')
    parser.add_argument('--mode', type=str, dest='fill_mode', default=DEFAULT_CONFIG.fill_mode.value,
                        help='default fill strategy (options: %s)' % ', '.join(m.value for m in FillMode))

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable debug logging')
    return parser


def defaults_from_args(opt) -> ServerDefaults:
    config = replace(
        DEFAULT_CONFIG,
        width=opt.width,
        height=opt.height,
        threshold=opt.threshold,
        max_iterations=opt.max_iterations,
        workers=opt.workers,
        scale=opt.scale,
        fill_mode=opt.fill_mode,
    )
    return ServerDefaults(config=config, out=opt.out)


def main(argv=None):
    opt = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if opt.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    serve(opt.host, opt.port, defaults_from_args(opt))


if __name__ == '__main__':
    main()
