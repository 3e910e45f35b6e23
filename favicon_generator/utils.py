"""File helpers and console progress output."""

import os
import sys
from pathlib import Path

from .errors import FileSystemError


def file_exists(file_path) -> bool:
    return Path(file_path).is_file()


def is_svg_file(file_path) -> bool:
    return Path(str(file_path)).suffix.lower() == '.svg'


def ensure_directory(dir_path):
    """Create dir_path (and parents) if missing."""
    try:
        os.makedirs(dir_path, exist_ok=True)
    except OSError as e:
        raise FileSystemError(dir_path, f"could not create directory ({e.strerror or e})") from e


def write_bytes(path, data: bytes):
    try:
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise FileSystemError(path, e.strerror or str(e)) from e


def write_text(path, text: str):
    write_bytes(path, text.encode('utf-8'))


class Reporter:
    """Prints progress when verbose. Errors always go to stderr."""

    def __init__(self, verbose: bool = True, stream=None):
        self.verbose = verbose
        self.stream = stream

    def log(self, message: str):
        if self.verbose:
            print(message, file=self.stream or sys.stdout)

    def success(self, message: str):
        self.log(f"  Created {message}")

    def error(self, message: str):
        print(f"Error: {message}", file=sys.stderr)
