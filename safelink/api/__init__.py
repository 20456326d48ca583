"""
safelink.api - Contact service client module
"""

from safelink.api.contact_api import (
    ContactAPI,
    ContactAPIError,
    NetworkError,
    NotFoundError,
    ServerError,
)

__all__ = [
    "ContactAPI",
    "ContactAPIError",
    "NetworkError",
    "NotFoundError",
    "ServerError",
]
