from enum import Enum


class OCRErrorReason(str, Enum):
    AUTH = "auth"
    QUOTA = "quota"
    NETWORK = "network"
    NO_TEXT = "no_text"
    API = "api"


class OCRError(Exception):
    """Raised when an image cannot be turned into text.

    ``reason`` tells callers whether retrying makes sense (network, quota)
    or not (auth, no_text).
    """

    def __init__(self, message: str, reason: OCRErrorReason = OCRErrorReason.API) -> None:
        super().__init__(message)
        self.reason = reason
