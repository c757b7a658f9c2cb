from fastapi import status


class MetadataError(Exception):
    """Terminal pipeline failure with a fixed, caller-safe reason."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    reason: str = "Internal error"

    def __str__(self) -> str:
        return self.reason


class InvalidUrlError(MetadataError):
    status_code = status.HTTP_400_BAD_REQUEST
    reason = "Invalid URL"


class FetchError(MetadataError):
    status_code = status.HTTP_502_BAD_GATEWAY
    reason = "Failed to fetch URL"
