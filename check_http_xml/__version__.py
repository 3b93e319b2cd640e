"""
Version information for check_http_xml.

The package version is read from the installed distribution metadata.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("check-http-xml")
except PackageNotFoundError:
    # Running from a source checkout without installation
    __version__ = "0.0.0-dev"

USER_AGENT = f"check_http_xml/{__version__}"
