"""
API module exposing the portal core over HTTP.
"""

from .rest_api import PortalRestAPI

__all__ = [
    "PortalRestAPI",
]
