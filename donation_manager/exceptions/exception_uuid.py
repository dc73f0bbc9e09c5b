"""Exception handlers for UUID errors."""
# pylint: disable=too-few-public-methods


class UUIDError( Exception ):
    """Base class for some custom exceptions for UUID errors."""


class UUIDMalformedError( UUIDError ):
    """Exception to handle an identifier that is not a well formed UUID."""

    def __init__( self, entity='entity' ):
        super().__init__()
        self.message = 'Invalid {} ID.'.format( entity )
