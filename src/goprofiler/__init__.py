"""goprofiler: find common performance anti-patterns in Go source."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("goprofiler")
except PackageNotFoundError:
    __version__ = "dev"
