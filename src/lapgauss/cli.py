# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Command-line front-end.

Usage::

    lapgauss input.bmp output.bmp 1.0 4
    lapgauss --preset fine input.bmp output.bmp
    lapgauss --demo circle_square demo.bmp 1.5 8 --edges demo_edges.png
"""

import argparse
import logging
import sys

from .config import FilterConfig, PRESETS
from .convolution import filter_raster
from .edges import edge_map
from .errors import LapGaussError, RasterError
from .raster import Raster, read_raster, write_raster
from .synthetic import SHAPES

logger = logging.getLogger("lapgauss")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lapgauss",
        description="Fixed-point separable Laplacian-of-Gaussian image filter",
    )
    parser.add_argument("input", nargs="?", default=None,
                        help="Input image file (omit with --demo)")
    parser.add_argument("output", help="Output image file")
    parser.add_argument("sigma", type=float, nargs="?", default=None,
                        help="Gaussian scale; half-width H = ceil(3*sigma)")
    parser.add_argument("alpha", type=float, nargs="?", default=None,
                        help="Output scale applied before the +128 shift")
    parser.add_argument("--preset", choices=sorted(PRESETS), default=None,
                        help="Named sigma/alpha preset (positional values override)")
    parser.add_argument("--demo", choices=sorted(SHAPES), default=None,
                        help="Filter a synthetic shape instead of an input file")
    parser.add_argument("--size", type=int, default=64,
                        help="Synthetic shape size in pixels (default: 64)")
    parser.add_argument("--edges", default=None, metavar="PATH",
                        help="Also write the zero-crossing edge map to PATH")
    parser.add_argument("--debug", action="store_true",
                        help="Log filter taps, BIBO gain and shift")
    return parser


def _resolve_args(parser: argparse.ArgumentParser, args: argparse.Namespace):
    # With --demo there is no input path, so positionals shift left by one.
    if args.demo is not None and args.input is not None:
        args.input, args.output, args.sigma, args.alpha = (
            None, args.input, _float_arg(parser, args.output, "sigma"), args.sigma)
    if args.demo is None and args.input is None:
        parser.error("an input file is required unless --demo is given")
    if args.preset is None and (args.sigma is None or args.alpha is None):
        parser.error("sigma and alpha are required unless --preset is given")
    return args


def _float_arg(parser, value, name):
    try:
        return float(value)
    except ValueError:
        parser.error(f"argument {name}: invalid float value: {value!r}")


def main(argv=None) -> int:
    parser = build_parser()
    args = _resolve_args(parser, parser.parse_args(argv))

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.preset is not None:
            config = FilterConfig.from_preset(args.preset, sigma=args.sigma,
                                              alpha=args.alpha, debug=args.debug)
        else:
            config = FilterConfig(args.sigma, args.alpha, debug=args.debug)

        if args.demo is not None:
            raster = Raster.from_top_down(SHAPES[args.demo](args.size))
        else:
            raster = read_raster(args.input)
        logger.info("Filtering %dx%d image, %d channel(s), sigma=%g H=%d alpha=%g",
                    raster.width, raster.height, raster.channel_count,
                    config.sigma, config.half_width, config.alpha)

        filtered = filter_raster(raster, config)
        write_raster(args.output, filtered)
        if args.edges is not None:
            write_raster(args.edges, Raster(edge_map(filtered.samples)))
    except RasterError as e:
        print(f"I/O error: {e}", file=sys.stderr)
        return 1
    except LapGaussError as e:
        print(f"Filter error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
