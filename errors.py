from __future__ import annotations


class GatewayError(Exception):
    """An expected request failure with a fixed HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RequestFieldError(GatewayError):
    status_code = 400


class NotFound(GatewayError):
    status_code = 404
