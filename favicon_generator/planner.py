"""
Turn options into the ordered list of renders a generation run needs.

Order: configured icons, supplementary favicon-N.png files, favicon.png,
then the two ICO inputs (16, 32).
"""

from dataclasses import dataclass
from typing import Tuple

from .config import ICO_SIZES, Background, IconSize, Options, Purpose

# Home-screen icons at or above this size get an opaque white fill
OPAQUE_MIN_SIZE = 192

ROOT_FAVICON_PNG = 'favicon.png'
ROOT_FAVICON_SVG = 'favicon.svg'
ROOT_FAVICON_ICO = 'favicon.ico'


@dataclass(frozen=True)
class RenderRequest:
    size: int
    name: str
    background: Background
    kind: str = 'icon'  # icon | favicon | root | ico


def purpose_of(icon: IconSize) -> Purpose:
    """Explicit purpose, else inferred from the file name."""
    if icon.purpose is not None:
        return Purpose(icon.purpose)
    return Purpose.HOME_SCREEN if 'icon-' in icon.name else Purpose.TOUCH


def background_for(icon: IconSize) -> Background:
    if purpose_of(icon) is Purpose.HOME_SCREEN and icon.size >= OPAQUE_MIN_SIZE:
        return Background.WHITE
    return Background.TRANSPARENT


def favicon_name(size: int) -> str:
    return f"favicon-{size}.png"


def plan_renders(options: Options) -> Tuple[RenderRequest, ...]:
    requests = [
        RenderRequest(icon.size, icon.name, background_for(icon))
        for icon in options.icon_sizes
    ]

    if options.generate_favicon:
        requests.extend(
            RenderRequest(size, favicon_name(size), Background.TRANSPARENT, 'favicon')
            for size in options.favicon_sizes
        )

    if options.generate_root_favicons:
        requests.append(RenderRequest(options.favicon_png_size, ROOT_FAVICON_PNG,
                                      Background.TRANSPARENT, 'root'))
        # Rendered in memory only, packed into favicon.ico
        requests.extend(
            RenderRequest(size, f"{ROOT_FAVICON_ICO}[{size}]", Background.TRANSPARENT, 'ico')
            for size in ICO_SIZES
        )

    return tuple(requests)
