"""
Companion files derived from a generation result:

  meta-tags.html     <link>/<meta> tags to paste into <head>
  manifest.json      Web App Manifest
  browserconfig.xml  Windows tile configuration

Lookups that find nothing just drop the corresponding line.
"""

import json
import os
import re
from html import escape

from .utils import write_text

META_TAGS_FILE = 'meta-tags.html'
MANIFEST_FILE = 'manifest.json'
BROWSERCONFIG_FILE = 'browserconfig.xml'

MASKABLE_SIZES = (192, 512)

# size -> browserconfig element
TILE_ELEMENTS = (
    (70, 'square70x70logo'),
    (144, 'TileImage'),
    (150, 'square150x150logo'),
    (310, 'square310x310logo'),
)


def _url(options, name: str) -> str:
    base = options.base_url or ''
    if base and not base.endswith('/'):
        base += '/'
    return base + name


def _attr(value) -> str:
    return escape(str(value), quote=True)


def _find_icon(result, size: int):
    for icon in result.icons:
        if icon.size == size:
            return icon
    return None


def _parsed_size(icon) -> int:
    match = re.search(r'\d+', icon.name)
    return int(match.group()) if match else icon.size


def build_meta_tags(result, options) -> str:
    lines = ['<!-- Favicons -->']

    if result.root_favicons:
        lines.append(f'<link rel="icon" href="{_attr(_url(options, "favicon.ico"))}" sizes="any">')
        lines.append(f'<link rel="icon" type="image/svg+xml" href="{_attr(_url(options, "favicon.svg"))}">')

    for favicon in sorted(result.favicon_sizes, key=lambda f: f.size, reverse=True):
        href = _url(options, os.path.basename(favicon.path))
        lines.append(f'<link rel="icon" type="image/png" sizes="{favicon.size}x{favicon.size}" '
                     f'href="{_attr(href)}">')

    touch_icons = [i for i in result.icons if 'apple-touch-icon' in i.name]
    if touch_icons:
        lines.append('')
        lines.append('<!-- Apple Touch Icons -->')
        for icon in sorted(touch_icons, key=lambda i: i.size, reverse=True):
            lines.append(f'<link rel="apple-touch-icon" sizes="{icon.size}x{icon.size}" '
                         f'href="{_attr(_url(options, icon.name))}">')

    lines += [
        '',
        '<!-- PWA -->',
        f'<link rel="manifest" href="{_attr(_url(options, MANIFEST_FILE))}">',
        f'<meta name="theme-color" content="{_attr(options.theme_color)}">',
        '',
        '<!-- iOS -->',
        '<meta name="apple-mobile-web-app-capable" content="yes">',
        '<meta name="apple-mobile-web-app-status-bar-style" content="default">',
        f'<meta name="apple-mobile-web-app-title" content="{_attr(options.short_name)}">',
        '',
        '<!-- Windows -->',
        f'<meta name="application-name" content="{_attr(options.app_name)}">',
        f'<meta name="msapplication-TileColor" content="{_attr(options.theme_color)}">',
    ]
    tile = _find_icon(result, 144)
    if tile:
        lines.append(f'<meta name="msapplication-TileImage" content="{_attr(_url(options, tile.name))}">')
    lines.append(f'<meta name="msapplication-config" content="{_attr(_url(options, BROWSERCONFIG_FILE))}">')

    return '\n'.join(lines) + '\n'


def build_manifest(result, options) -> dict:
    pwa_icons = [i for i in result.icons if i.name.startswith('icon-') and 'apple' not in i.name]
    icons = []
    for icon in sorted(pwa_icons, key=_parsed_size):
        icons.append({
            'src': _url(options, icon.name),
            'sizes': f'{icon.size}x{icon.size}',
            'type': 'image/png',
            'purpose': 'any maskable' if icon.size in MASKABLE_SIZES else 'any',
        })

    return {
        'name': options.app_name,
        'short_name': options.short_name,
        'description': options.description,
        'start_url': '/',
        'display': 'standalone',
        'background_color': options.background_color,
        'theme_color': options.theme_color,
        'orientation': 'portrait',
        'icons': icons,
    }


def build_manifest_json(result, options) -> str:
    return json.dumps(build_manifest(result, options), indent=2) + '\n'


def build_browserconfig(result, options) -> str:
    tiles = []
    for size, element in TILE_ELEMENTS:
        icon = _find_icon(result, size)
        if icon:
            tiles.append(f'      <{element} src="{_attr(_url(options, icon.name))}"/>')
    tiles.append(f'      <TileColor>{escape(options.theme_color, quote=False)}</TileColor>')

    return '\n'.join([
        '<?xml version="1.0" encoding="utf-8"?>',
        '<browserconfig>',
        '  <msapplication>',
        '    <tile>',
        *tiles,
        '    </tile>',
        '  </msapplication>',
        '</browserconfig>',
    ]) + '\n'


def write_metadata(result, options):
    """Write the three companion files into the output directory. Returns their paths."""
    outputs = (
        (META_TAGS_FILE, build_meta_tags),
        (MANIFEST_FILE, build_manifest_json),
        (BROWSERCONFIG_FILE, build_browserconfig),
    )
    paths = []
    for name, build in outputs:
        path = os.path.join(result.output_dir, name)
        write_text(path, build(result, options))
        paths.append(path)
    return paths
