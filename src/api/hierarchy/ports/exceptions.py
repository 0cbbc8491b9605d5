"""Domain exceptions for the hierarchy bounded context.

Tree walks and permission checks never raise for missing groups, cycles
or unrecognized stored policy values; they fail safe instead. These
exceptions cover the remaining cases the application layer must handle.
"""


class CacheUnavailableError(Exception):
    """Raised by a cache store when its backing service cannot be reached.

    The hierarchy cache catches this and degrades to always-miss. It never
    reaches callers of the engine.
    """

    pass


class InvalidPolicyValueError(ValueError):
    """Raised when saving a policy value outside its enumerated set.

    Stored values are parsed leniently, but new values are validated so
    that no unrecognized value is ever written.
    """

    pass


class UnauthorizedError(Exception):
    """Raised when a user lacks permission to change a hierarchy setting.

    Raised only on write paths; capability checks return False instead.
    """

    pass
