"""Error taxonomy shared by services and the HTTP layer."""

from fastapi import status


class BotDeskError(Exception):
    """Base application error, rendered as ``{"detail": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(BotDeskError):
    """Missing or invalid required input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(BotDeskError):
    """Referenced bot does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ProcessingError(BotDeskError):
    """Text extraction or storage failed during ingestion."""


class UpstreamError(BotDeskError):
    """Inference provider failed. Always recovered by the resolver."""

    status_code = status.HTTP_502_BAD_GATEWAY
