class ImageGenError(Exception):
    """Raised when an illustration could not be generated."""
