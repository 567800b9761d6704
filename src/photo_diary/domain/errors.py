"""Domain errors for the photo diary."""


class PhotoDiaryError(Exception):
    """Base class for per-request failures with a user-facing message."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class StoreUnreadableError(PhotoDiaryError):
    """Persisted photo list is missing, unreadable or malformed."""

    default_message = "Failed to read photo list"


class StoreUnwritableError(PhotoDiaryError):
    """Persisted photo list could not be written."""

    default_message = "Failed to save photo list"


class NoCandidatesError(PhotoDiaryError):
    """No photo could be selected."""

    default_message = "No photos"


class EmptyStoreError(NoCandidatesError):
    """The store holds no photos at all."""


class NoFilterMatchError(NoCandidatesError):
    """The store has photos but none match the requested filter."""

    default_message = "No photos found for this filter"


class UploadDirectoryUnreadableError(PhotoDiaryError):
    """The upload directory could not be listed."""

    default_message = "Failed to read photos"


class UploadMissingError(PhotoDiaryError):
    """The request carried no file."""

    default_message = "No file uploaded"


class UploadRejectedTypeError(PhotoDiaryError):
    """The uploaded file is not an image."""

    default_message = "Only image files are allowed (jpg, png, gif, webp, avif)"


class UploadTooLargeError(PhotoDiaryError):
    """The uploaded file exceeds the size limit."""

    default_message = "File too large (max 25MB)"


class UnauthorizedError(PhotoDiaryError):
    """Presented admin token is missing or wrong."""

    default_message = "Unauthorized"


class ServerMisconfiguredError(PhotoDiaryError):
    """No admin secret is configured, so admin access can never succeed."""

    default_message = "Server missing ADMIN_TOKEN"
