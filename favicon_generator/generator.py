"""
Generate the full icon set for one SVG.

    from favicon_generator import generate
    result = generate(svg_path='logo.svg', output_dir='public/icons')

Renders run in a thread pool; the two favicon.ico inputs are joined before
the ICO is packed. Any error aborts the run and is re-raised; files
already written stay on disk.
"""

import logging
import os
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .config import DEFAULT_OPTIONS, ICO_SIZES, Options, merge_options, validate_options
from .errors import FileSystemError, SourceNotFoundError
from .ico import write_ico
from .metadata import write_metadata
from .planner import ROOT_FAVICON_ICO, ROOT_FAVICON_SVG, plan_renders
from .render import render_png
from .utils import Reporter, ensure_directory, file_exists, write_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IconEntry:
    size: int
    name: str
    path: str


@dataclass(frozen=True)
class FaviconEntry:
    path: str
    size: int


@dataclass(frozen=True)
class RootFavicons:
    png: str
    svg: str
    ico: str

    def paths(self):
        return (self.png, self.svg, self.ico)


@dataclass(frozen=True)
class GenerationResult:
    icons: Tuple[IconEntry, ...]
    favicon_sizes: Tuple[FaviconEntry, ...]
    output_dir: str
    root_favicons: Optional[RootFavicons] = None
    metadata_files: Tuple[str, ...] = ()


def _resolve_options(options, overrides) -> Options:
    if options is None:
        return merge_options(DEFAULT_OPTIONS, overrides)
    if isinstance(options, Mapping):
        return merge_options(DEFAULT_OPTIONS, {**options, **overrides})
    return merge_options(options, overrides)


def _read_source(svg_path) -> bytes:
    try:
        with open(svg_path, 'rb') as f:
            return f.read()
    except FileNotFoundError as e:
        raise SourceNotFoundError(svg_path) from e
    except OSError as e:
        raise FileSystemError(svg_path, e.strerror or str(e)) from e


def _render_request(svg_bytes, request, options, reporter):
    data = render_png(svg_bytes, request.size, request.background.value,
                      quality=options.quality, compression_level=options.compression_level)
    if request.kind == 'ico':
        return data, None

    path = os.path.join(options.output_dir, request.name)
    write_bytes(path, data)
    reporter.success(f"{request.name} ({request.size}x{request.size}): {len(data)} bytes")
    return data, path


def _render_all(svg_bytes, requests, options, reporter):
    """Render every request in parallel. Results come back in request order."""
    with ThreadPoolExecutor(max_workers=options.max_workers) as pool:
        futures = [pool.submit(_render_request, svg_bytes, r, options, reporter) for r in requests]
        try:
            return [f.result() for f in futures]
        except BaseException:
            for f in futures:
                f.cancel()
            raise


def generate(options=None, **overrides) -> GenerationResult:
    """Render the icon set described by options (or DEFAULT_OPTIONS + overrides)."""
    options = validate_options(_resolve_options(options, overrides))
    reporter = Reporter(options.verbose)

    if not file_exists(options.svg_path):
        raise SourceNotFoundError(options.svg_path)

    reporter.log(f"Reading SVG from {options.svg_path}")
    svg_bytes = _read_source(options.svg_path)

    ensure_directory(options.output_dir)
    reporter.log(f"Output directory: {options.output_dir}")

    requests = plan_renders(options)
    logger.debug("planned %d renders", len(requests))
    reporter.log(f"Rendering {len(requests)} images...")
    rendered = _render_all(svg_bytes, requests, options, reporter)

    icons, favicons = [], []
    ico_images = {}
    root_png = None
    for request, (data, path) in zip(requests, rendered):
        if request.kind == 'icon':
            icons.append(IconEntry(request.size, request.name, path))
        elif request.kind == 'favicon':
            favicons.append(FaviconEntry(path, request.size))
        elif request.kind == 'root':
            root_png = path
        else:
            ico_images[request.size] = data

    root_favicons = None
    if options.generate_root_favicons:
        svg_copy = os.path.join(options.output_dir, ROOT_FAVICON_SVG)
        write_bytes(svg_copy, svg_bytes)
        reporter.success(f"{ROOT_FAVICON_SVG} (copy of source)")

        ico_path = os.path.join(options.output_dir, ROOT_FAVICON_ICO)
        ico_data = write_ico(ico_path, [(size, ico_images[size]) for size in ICO_SIZES])
        sizes = ", ".join(f"{s}x{s}" for s in ICO_SIZES)
        reporter.success(f"{ROOT_FAVICON_ICO} ({sizes}): {len(ico_data)} bytes")

        root_favicons = RootFavicons(root_png, svg_copy, ico_path)

    result = GenerationResult(
        icons=tuple(icons),
        favicon_sizes=tuple(favicons),
        output_dir=options.output_dir,
        root_favicons=root_favicons,
    )

    metadata_files = write_metadata(result, options)
    for path in metadata_files:
        reporter.success(os.path.basename(path))

    reporter.log(f"\nGenerated {len(icons)} icons in {options.output_dir}")
    return replace(result, metadata_files=tuple(metadata_files))


generate_icons = generate


def generate_custom_icons(svg_path, output_dir, custom_sizes, **options) -> GenerationResult:
    """Shortcut for generate() with an explicit size/name list."""
    return generate(svg_path=svg_path, output_dir=output_dir, icon_sizes=custom_sizes, **options)
