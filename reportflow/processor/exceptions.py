class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class EmptyExtractionError(ProcessorError):
    """Raised when text extraction succeeds but yields no usable text."""


class StageTimeoutError(ProcessorError):
    """Raised when a pipeline stage does not finish within its time budget."""


class FileReadError(ProcessorError):
    """Raised when a report file cannot be read from disk or downloaded."""


class UnsupportedUriSchemeError(ProcessorError):
    """Raised when a file URI uses a scheme the loader cannot resolve."""
