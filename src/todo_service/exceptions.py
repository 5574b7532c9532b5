from __future__ import annotations


# PUBLIC_INTERFACE
class InvalidPayloadError(Exception):
    """
    Raised when a request carries a missing or invalid field.

    The message is returned verbatim to the client as ``{"error": message}``
    with status 400.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
