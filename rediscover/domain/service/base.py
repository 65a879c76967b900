"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold identity rules that span entities or need
    collaborators (repositories, settings) injected at construction.
    """

    pass
