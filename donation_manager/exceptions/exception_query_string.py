"""Exception handlers for the query string deserialization."""
# pylint: disable=too-few-public-methods


class QueryStringError( Exception ):
    """Base class for some custom exceptions for the filter query string."""


class QueryStringImproperError( QueryStringError ):
    """Exception to handle query string parameters that fail validation.

    The errors are a list of dictionaries: [ { 'field': 'limit', 'message': 'Must be between 1 and 100.' } ]
    """

    def __init__( self, errors ):
        super().__init__()
        self.errors = errors
        self.message = 'Query string deserialization error.'
