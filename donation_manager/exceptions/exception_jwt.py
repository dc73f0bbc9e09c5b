"""Exception handlers for JWT errors."""
# pylint: disable=too-few-public-methods


class JWTError( Exception ):
    """Base class for some custom exceptions for JWT errors."""


class JWTManagerRequiredError( JWTError ):
    """Exception to handle an authenticated request that lacks the manager role."""

    def __init__( self ):
        super().__init__()
        self.message = 'Manager access required.'
