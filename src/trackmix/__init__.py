"""trackmix - media track inspection and mkvmerge remux pipeline."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("trackmix")
except PackageNotFoundError:
    __version__ = "0.0.0"
