"""slidemanager - Edit, query and export Google Slides from the command line."""

from slidemanager.client import SlidesClient, parse_presentation_id
from slidemanager.exceptions import (
    APIError,
    AuthenticationError,
    CredentialsError,
    ExportError,
    LocalWriteError,
    MalformedInputError,
    NotesShapeNotFoundError,
    NotesUnavailableError,
    NotFoundError,
    ObjectNotFoundError,
    OutOfRangeError,
    RejectedError,
    SlideManagerError,
    TransportError,
)
from slidemanager.ids import ObjectIdGenerator, new_object_id
from slidemanager.transport import (
    GoogleSlidesTransport,
    LocalFileTransport,
    PresentationData,
    Transport,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "CredentialsError",
    "ExportError",
    "GoogleSlidesTransport",
    "LocalFileTransport",
    "LocalWriteError",
    "MalformedInputError",
    "NotFoundError",
    "NotesShapeNotFoundError",
    "NotesUnavailableError",
    "ObjectIdGenerator",
    "ObjectNotFoundError",
    "OutOfRangeError",
    "PresentationData",
    "RejectedError",
    "SlideManagerError",
    "SlidesClient",
    "Transport",
    "TransportError",
    "new_object_id",
    "parse_presentation_id",
]

__version__ = "0.1.0"
