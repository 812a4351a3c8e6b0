class UnsupportedTypeError(Exception):
    """Raised for MIME types that are neither image/* nor application/pdf."""

    def __init__(self, mime_type: str) -> None:
        super().__init__(f"Unsupported file type: {mime_type}")
        self.mime_type = mime_type
