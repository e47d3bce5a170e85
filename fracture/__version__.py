"""Version information for fracture."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fracture")
except PackageNotFoundError:
    # Running from a source checkout without an installed distribution
    __version__ = "0.0.0+unknown"
