"""Domain service marker."""


class Service:
    """Stateless rules that span entities or need a repository."""
