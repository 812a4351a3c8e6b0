class RecordStoreError(Exception):
    """Raised when a record store read or write fails."""


class ReportNotFoundError(RecordStoreError):
    """Raised when the base report row does not exist."""
