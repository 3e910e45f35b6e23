"""
Generator options and their defaults.

DEFAULT_OPTIONS is frozen; callers derive their own configuration with
merge_options() and check it with validate_options() before any I/O.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Optional, Tuple

from .errors import ConfigurationError
from .utils import is_svg_file


class Purpose(Enum):
    HOME_SCREEN = 'home-screen'
    TOUCH = 'touch'
    FAVICON = 'favicon'


class Background(Enum):
    """Fill colours as RGBA tuples."""
    TRANSPARENT = (255, 255, 255, 0)
    WHITE = (255, 255, 255, 255)
    BLACK = (0, 0, 0, 255)


@dataclass(frozen=True)
class IconSize:
    size: int
    name: str
    purpose: Optional[Purpose] = None


# iOS and PWA sizes
DEFAULT_ICON_SIZES = (
    IconSize(57, 'apple-touch-icon-57x57.png', Purpose.TOUCH),
    IconSize(60, 'apple-touch-icon-60x60.png', Purpose.TOUCH),
    IconSize(72, 'apple-touch-icon-72x72.png', Purpose.TOUCH),
    IconSize(76, 'apple-touch-icon-76x76.png', Purpose.TOUCH),
    IconSize(114, 'apple-touch-icon-114x114.png', Purpose.TOUCH),
    IconSize(120, 'apple-touch-icon-120x120.png', Purpose.TOUCH),
    IconSize(144, 'apple-touch-icon-144x144.png', Purpose.TOUCH),
    IconSize(152, 'apple-touch-icon-152x152.png', Purpose.TOUCH),
    IconSize(180, 'apple-touch-icon-180x180.png', Purpose.TOUCH),
    IconSize(192, 'icon-192x192.png', Purpose.HOME_SCREEN),
    IconSize(256, 'icon-256x256.png', Purpose.HOME_SCREEN),
    IconSize(384, 'icon-384x384.png', Purpose.HOME_SCREEN),
    IconSize(512, 'icon-512x512.png', Purpose.HOME_SCREEN),
)

# favicon.ico always embeds these, in this order
ICO_SIZES = (16, 32)


@dataclass(frozen=True)
class Options:
    svg_path: str = './favicon.svg'
    output_dir: str = './icons'
    icon_sizes: Tuple[IconSize, ...] = DEFAULT_ICON_SIZES
    generate_favicon: bool = True
    favicon_sizes: Tuple[int, ...] = (16, 32)
    generate_root_favicons: bool = True
    favicon_png_size: int = 32
    quality: int = 95
    compression_level: int = 9
    verbose: bool = True
    max_workers: Optional[int] = None

    # manifest.json / meta tags / browserconfig.xml
    app_name: str = 'My App'
    short_name: str = 'App'
    description: str = ''
    theme_color: str = '#ffffff'
    background_color: str = '#ffffff'
    base_url: str = '/'


DEFAULT_OPTIONS = Options()

OPTION_NAMES = frozenset(f.name for f in fields(Options))

METADATA_FIELDS = ('app_name', 'short_name', 'description', 'theme_color',
                   'background_color', 'base_url')


def _coerce_icon_size(item) -> IconSize:
    if isinstance(item, IconSize):
        size, name, purpose = item.size, item.name, item.purpose
    elif isinstance(item, dict):
        unknown = set(item) - {'size', 'name', 'purpose'}
        if unknown:
            raise ConfigurationError(
                f"Unknown icon size keys: {', '.join(sorted(unknown))}", 'icon_sizes')
        size, name, purpose = item.get('size'), item.get('name'), item.get('purpose')
    elif isinstance(item, (tuple, list)) and len(item) in (2, 3):
        size, name = item[0], item[1]
        purpose = item[2] if len(item) == 3 else None
    else:
        raise ConfigurationError(f"Invalid icon size entry: {item!r}", 'icon_sizes')

    if purpose is not None and not isinstance(purpose, Purpose):
        try:
            purpose = Purpose(purpose)
        except ValueError:
            raise ConfigurationError(f"Unknown icon purpose: {purpose!r}", 'icon_sizes') from None
    return IconSize(size, name, purpose)


def merge_options(base: Options = DEFAULT_OPTIONS, overrides=None) -> Options:
    """Return a copy of base with overrides applied.

    Keys with a None value are ignored so CLI flags that were not given
    fall through to the defaults.
    """
    changes = {k: v for k, v in (overrides or {}).items() if v is not None}

    unknown = set(changes) - OPTION_NAMES
    if unknown:
        raise ConfigurationError(f"Unknown option(s): {', '.join(sorted(unknown))}")

    # Always normalised, so an Options built directly gets the same treatment
    sizes = changes.get('icon_sizes', base.icon_sizes)
    if sizes is not None:
        if isinstance(sizes, (str, bytes)) or not hasattr(sizes, '__iter__'):
            raise ConfigurationError("icon_sizes must be a list of sizes", 'icon_sizes')
        changes['icon_sizes'] = tuple(_coerce_icon_size(s) for s in sizes)
    if 'favicon_sizes' in changes:
        try:
            changes['favicon_sizes'] = tuple(changes['favicon_sizes'])
        except TypeError:
            raise ConfigurationError("favicon_sizes must be a list of sizes", 'favicon_sizes') from None

    return replace(base, **changes)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_options(options: Options) -> Options:
    """Check every option, raising ConfigurationError on the first bad one."""
    if not options.svg_path:
        raise ConfigurationError("svg_path is required", 'svg_path')
    if not is_svg_file(options.svg_path):
        raise ConfigurationError("svg_path must be an SVG file", 'svg_path')

    if not options.output_dir:
        raise ConfigurationError("output_dir is required", 'output_dir')

    if not options.icon_sizes:
        raise ConfigurationError("icon_sizes must be a non-empty list", 'icon_sizes')
    for icon in options.icon_sizes:
        if not isinstance(icon, IconSize):
            raise ConfigurationError(f"Invalid icon size entry: {icon!r}", 'icon_sizes')
        if icon.purpose is not None and not isinstance(icon.purpose, Purpose):
            raise ConfigurationError(f"Unknown icon purpose: {icon.purpose!r}", 'icon_sizes')
        if not _is_int(icon.size) or icon.size <= 0:
            raise ConfigurationError("Each icon must have a valid positive size", 'icon_sizes')
        if not icon.name or not isinstance(icon.name, str):
            raise ConfigurationError("Each icon must have a valid name", 'icon_sizes')

    for size in options.favicon_sizes:
        if not _is_int(size) or size <= 0:
            raise ConfigurationError("favicon_sizes must contain positive integers", 'favicon_sizes')

    if not _is_int(options.favicon_png_size) or options.favicon_png_size <= 0:
        raise ConfigurationError("favicon_png_size must be a positive integer", 'favicon_png_size')

    if not _is_int(options.quality) or not 1 <= options.quality <= 100:
        raise ConfigurationError("quality must be a number between 1 and 100", 'quality')

    if not _is_int(options.compression_level) or not 0 <= options.compression_level <= 9:
        raise ConfigurationError("compression_level must be a number between 0 and 9",
                                 'compression_level')

    if options.max_workers is not None and (not _is_int(options.max_workers) or options.max_workers < 1):
        raise ConfigurationError("max_workers must be a positive integer", 'max_workers')

    for name in METADATA_FIELDS:
        if not isinstance(getattr(options, name), str):
            raise ConfigurationError(f"{name} must be a string", name)

    return options
