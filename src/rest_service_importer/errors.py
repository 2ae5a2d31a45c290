"""Exceptions raised while converting and publishing REST service artifacts."""


class ImporterError(Exception):
    """Base class for all importer errors."""


class MissingFieldError(ImporterError):
    """A required field is absent from the API description document."""

    def __init__(self, field: str):
        super().__init__(f"Required field '{field}' is missing from the API document")
        self.field = field


class MalformedArtifactError(ImporterError):
    """An artifact element lacks the overview children needed to publish it."""


class StoreWriteError(ImporterError):
    """The artifact store could not write a resource."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to write resource at {path}: {reason}")
        self.path = path


class DocumentLoadError(ImporterError):
    """An input document could not be read or parsed."""


class InvalidFieldError(ImporterError):
    """A document field is present but has the wrong shape."""

    def __init__(self, field: str, expected: str):
        super().__init__(f"Field '{field}' in the API document must be {expected}")
        self.field = field
