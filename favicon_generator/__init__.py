"""Generate PNG icons, favicon.ico and PWA metadata from a single SVG."""

__version__ = "1.0.0"

from .config import (
    DEFAULT_ICON_SIZES,
    DEFAULT_OPTIONS,
    Background,
    IconSize,
    Options,
    Purpose,
    merge_options,
    validate_options,
)
from .errors import (
    ConfigurationError,
    EncodingError,
    FaviconError,
    FileSystemError,
    RenderError,
    SourceNotFoundError,
)
from .generator import (
    FaviconEntry,
    GenerationResult,
    IconEntry,
    RootFavicons,
    generate,
    generate_custom_icons,
    generate_icons,
)
from .ico import encode_ico, read_ico_directory, write_ico
from .utils import Reporter, ensure_directory, file_exists, is_svg_file
