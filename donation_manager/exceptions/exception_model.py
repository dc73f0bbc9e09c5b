"""Exception handlers for the models."""
# pylint: disable=too-few-public-methods


class ModelError( Exception ):
    """Base class for some custom exceptions for the models."""


class ModelImproperFieldError( ModelError ):
    """Exception to handle a payload that fails field validation on a model.

    The errors are a list of dictionaries: [ { 'field': 'email', 'message': 'Not a valid email address.' } ]
    """

    def __init__( self, errors ):
        super().__init__()
        self.errors = errors
        self.message = 'Model improper field error.'


class ModelNotFoundError( ModelError ):
    """Base class for a request that references a model that does not exist."""


class ModelDonorNotFoundError( ModelNotFoundError ):
    """Exception for a donor that was not found."""

    def __init__( self ):
        super().__init__()
        self.message = 'Donor not found.'


class ModelCampaignNotFoundError( ModelNotFoundError ):
    """Exception for a campaign that was not found."""

    def __init__( self ):
        super().__init__()
        self.message = 'Campaign not found.'


class ModelDonationNotFoundError( ModelNotFoundError ):
    """Exception for a donation that was not found."""

    def __init__( self ):
        super().__init__()
        self.message = 'Donation not found.'


class ModelConflictError( ModelError ):
    """Base class for an operation that would break a business rule on a model."""


class ModelDonorEmailExistsError( ModelConflictError ):
    """Exception to handle a donor email that is already in use."""

    def __init__( self ):
        super().__init__()
        self.message = 'Donor with this email already exists.'


class ModelDonationTransactionIdExistsError( ModelConflictError ):
    """Exception to handle a transaction ID that is already in use."""

    def __init__( self ):
        super().__init__()
        self.message = 'Donation with this transaction ID already exists.'


class ModelDonationCompletedError( ModelConflictError ):
    """Exception to handle the deletion of a completed donation."""

    def __init__( self ):
        super().__init__()
        self.message = 'Cannot delete completed donations.'


class ModelCampaignHasDonationsError( ModelConflictError ):
    """Exception to handle the deletion of a campaign that donations reference."""

    def __init__( self ):
        super().__init__()
        self.message = 'Cannot delete campaign with existing donations. Consider setting status to cancelled instead.'
