# utils/exceptions.py


class GitLabCatalogError(Exception):
    """
    Base exception for errors raised while reading GitLab users.
    """
    pass


class ConfigurationError(GitLabCatalogError):
    """
    The target URL cannot be served by the configured client, e.g. it points
    at another host or outside of the client's base URL.
    """
    pass


class PreconditionError(GitLabCatalogError):
    """
    The requested operation is not supported for the kind of host the
    client talks to.
    """
    pass
