"""
fav - generate PNG icons, favicon.ico and PWA metadata from an SVG.

Usage:
  fav                                  Interactive mode
  fav -i logo.svg -o ./public/icons    Flags only
  fav --input favicon.svg --output dist/icons --quality 90
  fav --silent --no-favicon

Set FAV_DEBUG=1 to see library debug logging.
"""

import argparse
import logging
import os
import sys

from . import __version__
from .config import DEFAULT_OPTIONS, merge_options
from .errors import FaviconError
from .generator import generate
from .utils import Reporter, file_exists, is_svg_file


def build_parser():
    parser = argparse.ArgumentParser(
        prog="fav",
        description="Generate PNG icons, favicon.ico and PWA metadata from an SVG",
        epilog="Run 'fav' without arguments to use interactive mode.",
    )
    parser.add_argument("-i", "--input", dest="svg_path", metavar="PATH",
                        help=f"Path to SVG file (default: {DEFAULT_OPTIONS.svg_path})")
    parser.add_argument("-o", "--output", dest="output_dir", metavar="PATH",
                        help=f"Output directory (default: {DEFAULT_OPTIONS.output_dir})")
    parser.add_argument("-q", "--quality", type=int, metavar="N",
                        help=f"PNG quality 1-100 (default: {DEFAULT_OPTIONS.quality})")
    parser.add_argument("-c", "--compression", dest="compression_level", type=int, metavar="N",
                        help=f"Compression level 0-9 (default: {DEFAULT_OPTIONS.compression_level})")
    parser.add_argument("--no-favicon", dest="generate_favicon", action="store_false", default=None,
                        help="Skip generating additional favicon sizes")
    parser.add_argument("--no-root-favicons", dest="generate_root_favicons", action="store_false",
                        default=None, help="Skip favicon.png, favicon.svg and favicon.ico")
    parser.add_argument("--favicon-png-size", type=int, metavar="N",
                        help=f"Size of favicon.png (default: {DEFAULT_OPTIONS.favicon_png_size})")
    parser.add_argument("--name", dest="app_name", help="App name for manifest.json")
    parser.add_argument("--short-name", help="Short app name for manifest.json")
    parser.add_argument("--description", help="App description for manifest.json")
    parser.add_argument("--theme-color", help=f"Theme color (default: {DEFAULT_OPTIONS.theme_color})")
    parser.add_argument("--background-color",
                        help=f"Manifest background color (default: {DEFAULT_OPTIONS.background_color})")
    parser.add_argument("--base-url", help=f"URL prefix for icon links (default: {DEFAULT_OPTIONS.base_url})")
    parser.add_argument("-j", "--jobs", dest="max_workers", type=int, metavar="N",
                        help="Parallel render workers (default: automatic)")
    parser.add_argument("--silent", dest="verbose", action="store_false", default=None,
                        help="Suppress output messages")
    parser.add_argument("-v", "--version", action="version", version=f"v{__version__}")
    return parser


def parse_args(argv):
    """Return only the options given on the command line."""
    args = build_parser().parse_args(argv)
    return {k: v for k, v in vars(args).items() if v is not None}


def get_input(prompt: str, default, validator=None, convert=str, input_fn=None):
    """Prompt until the answer passes validator. Empty answer takes the default."""
    input_fn = input_fn or input
    while True:
        raw = input_fn(f"{prompt} ({default}): ").strip()
        if not raw:
            raw = str(default)
        try:
            value = convert(raw)
        except ValueError:
            print("  Invalid value, try again")
            continue
        problem = validator(value) if validator else None
        if problem:
            print(f"  {problem}")
            continue
        return value


def confirm(prompt: str, default: bool = True, input_fn=None) -> bool:
    input_fn = input_fn or input
    suffix = "[Y/n]" if default else "[y/N]"
    ans = input_fn(f"{prompt} {suffix} ").strip().lower()
    if ans == "":
        return default
    return ans in ("y", "yes")


def _check_svg(path):
    if not path:
        return "SVG path is required"
    if not is_svg_file(path):
        return "File must be an SVG (.svg)"
    if not file_exists(path):
        return f"File not found: {path}"
    return None


def _check_range(label, low, high):
    def check(value):
        if not low <= value <= high:
            return f"{label} must be between {low} and {high}"
        return None
    return check


def prompt_for_config(input_fn=None):
    print("Favicon Generator - Interactive Mode\n")
    d = DEFAULT_OPTIONS
    return {
        "svg_path": get_input("Path to SVG file", d.svg_path, _check_svg, input_fn=input_fn),
        "output_dir": get_input("Output directory", d.output_dir,
                                lambda v: None if v else "Output directory is required",
                                input_fn=input_fn),
        "quality": get_input("PNG quality (1-100)", d.quality, _check_range("Quality", 1, 100),
                             convert=int, input_fn=input_fn),
        "compression_level": get_input("Compression level (0-9)", d.compression_level,
                                       _check_range("Compression level", 0, 9),
                                       convert=int, input_fn=input_fn),
        "generate_favicon": confirm("Generate additional favicon sizes (16x16, 32x32)?",
                                    d.generate_favicon, input_fn=input_fn),
    }


def print_summary(result):
    print("\nSummary:")
    print(f"   Icons generated: {len(result.icons)}")
    print(f"   Output directory: {os.path.abspath(result.output_dir)}")
    if result.favicon_sizes:
        print(f"   Favicon sizes: {len(result.favicon_sizes)}")
    if result.root_favicons:
        print(f"   Root favicons: {', '.join(os.path.basename(p) for p in result.root_favicons.paths())}")


def main(argv=None):
    if os.environ.get("FAV_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    argv = sys.argv[1:] if argv is None else argv
    reporter = Reporter()
    try:
        if not argv:
            overrides = prompt_for_config()
        else:
            overrides = parse_args(argv)

        options = merge_options(DEFAULT_OPTIONS, overrides)
        result = generate(options)
        if options.verbose:
            print_summary(result)
        return 0
    except FaviconError as e:
        reporter.error(str(e))
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nCancelled", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
