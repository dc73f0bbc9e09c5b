"""Exception handlers for the module path errors."""
# pylint: disable=too-few-public-methods


class CriticalPathError( Exception ):
    """Base class for some custom exceptions for handling critical path errors."""

    def __init__( self, where=None ):
        super().__init__()
        self.where = where


class DonorTotalsPathError( CriticalPathError ):
    """Exception to handle a failure incrementing the donor running total."""

    def __init__( self, where ):
        super().__init__( where )
        self.message = '***** Critical path error: updating donor totals for %s' % self.where


class CampaignTotalsPathError( CriticalPathError ):
    """Exception to handle a failure incrementing the campaign running total."""

    def __init__( self, where ):
        super().__init__( where )
        self.message = '***** Critical path error: updating campaign totals for %s' % self.where
