"""Exceptions raised inside the resolution pipeline."""


class InvalidLocationError(ValueError):
    """Raised when text cannot be turned into an absolute location."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid location '{text}': {reason}")


class ManifestParseError(ValueError):
    """Raised when a registry, module manifest or description is malformed.

    Only parsing code raises this. The registry catalogue and module resolver
    catch it and exclude the offending item from their results.
    """

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"Malformed document at {location}: {reason}")
