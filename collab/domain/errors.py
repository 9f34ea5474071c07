# collab/domain/errors.py


class CollabError(Exception):
    pass


class AuthRequiredError(CollabError):
    """A write was attempted without a signed-in identity."""


class ValidationError(CollabError):
    """A required field was empty or missing."""


class FetchError(CollabError):
    """The backend or its transport failed."""


class PermissionDeniedError(CollabError):
    pass
