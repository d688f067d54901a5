"""Exception definitions for Quire application"""


class QuireException(Exception):
    """Base exception for all Quire application errors.

    All custom exceptions in the Quire application inherit from this class.
    Use this as a catch-all for Quire-specific errors when you don't need
    to handle specific exception types.
    """

    pass


class ConfigException(QuireException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (missing required fields, invalid values)
    """

    pass


class NotFoundError(QuireException):
    """Raised when a content document, schema or editor cannot be found by id.

    Lookup failures are reported to the user but are never fatal: the editor
    offers the raw JSON editing route as a fallback.
    """

    pass


class CyclicSchemaError(QuireException):
    """Raised when a schema's parent chain refers back to itself."""

    def __init__(self, chain: list[str]):
        self.chain = chain
        super().__init__(f"Cyclic schema inheritance: {' -> '.join(chain)}")


class AuthorizationError(QuireException):
    """Raised when a request carries no token, an unknown token, or a user
    lacking the required scope. Surfaced as HTTP 403.
    """

    pass


class ContextError(QuireException):
    """Raised when the project/environment routing context cannot be
    derived from a request URL. Surfaced as HTTP 400.
    """

    pass


class ValidationError(QuireException):
    """Raised by field editors when a stored value does not have the shape
    they expect. Recovered locally by the field dispatcher.
    """

    pass


class EditorBusyError(QuireException):
    pass
