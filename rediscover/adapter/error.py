"""Adapter layer errors.

Raised by outbound clients; the domain AuthService converts them into
ProviderAuthFailedError.
"""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """External identity provider returned an error or an unusable response."""

    pass
