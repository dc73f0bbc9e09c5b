"""Schema for DonationModel: incorporates data from the relationship() joins to DonorModel and CampaignModel."""
# pylint: disable=too-few-public-methods
from marshmallow import EXCLUDE
from marshmallow import fields
from marshmallow import validate
from marshmallow import validates_schema
from marshmallow import ValidationError

from donation_manager.flask_essentials import database
from donation_manager.flask_essentials import marshmallow as flask_marshmallow
from donation_manager.helpers.general_helper_functions import format_amount
from donation_manager.models.donation import CURRENCIES
from donation_manager.models.donation import DonationModel
from donation_manager.models.donation import PAYMENT_METHODS
from donation_manager.models.donation import PAYMENT_STATUSES
from donation_manager.models.donation import RECURRING_FREQUENCIES
from donation_manager.schemas.campaign import CampaignSummarySchema
from donation_manager.schemas.common import CamelCaseMixin
from donation_manager.schemas.common import Money
from donation_manager.schemas.donor import DonorSummarySchema

DONATION_UPDATE_ATTRIBUTES = ( 'payment_status', 'notes', 'tags', 'receipt_sent' )


class DonationSchema( CamelCaseMixin, flask_marshmallow.SQLAlchemySchema ):
    """Marshmallow schema for serialization/deserialization of DonationModel.

    The donor and campaign keys carry the referenced IDs. The donorInfo and campaignInfo keys are dump only and show
    a few fields of the referenced records.
    """

    id = fields.UUID( dump_only=True )
    transaction_id = fields.String( validate=validate.Length( min=1, max=40 ) )
    donor = fields.UUID( attribute='donor_id', required=True )
    campaign = fields.UUID( attribute='campaign_id', allow_none=True )
    donor_info = fields.Nested( DonorSummarySchema, attribute='donor', dump_only=True )
    campaign_info = fields.Nested( CampaignSummarySchema, attribute='campaign', dump_only=True, allow_none=True )
    amount = Money( required=True )
    formatted_amount = fields.Method( 'get_formatted_amount', dump_only=True )
    currency = fields.String( validate=validate.OneOf( CURRENCIES ) )
    payment_method = fields.String( required=True, validate=validate.OneOf( PAYMENT_METHODS ) )
    payment_status = fields.String( validate=validate.OneOf( PAYMENT_STATUSES ) )
    is_anonymous = fields.Boolean()
    is_recurring = fields.Boolean()
    recurring_frequency = fields.String( allow_none=True, validate=validate.OneOf( RECURRING_FREQUENCIES ) )
    message = fields.String( allow_none=True, validate=validate.Length( max=500 ) )
    notes = fields.String( allow_none=True )
    receipt_sent = fields.Boolean()
    receipt_sent_at = fields.DateTime( dump_only=True )
    processed_by = fields.String( dump_only=True )
    tags = fields.List( fields.String() )
    created_at = fields.DateTime( dump_only=True )
    updated_at = fields.DateTime( dump_only=True )

    class Meta:
        """Meta object for Marshmallow schema."""

        model = DonationModel
        load_instance = True
        sqla_session = database.session
        unknown = EXCLUDE

    @validates_schema( skip_on_field_errors=False, pass_original=True )
    def validate_recurring( self, data, original_data, **kwargs ):  # pylint: disable=unused-argument
        """A recurring donation needs a frequency. A frequency that was sent but is invalid has its own error."""

        if isinstance( original_data, dict ) and original_data.get( 'recurringFrequency' ) is not None:
            return
        if data.get( 'is_recurring' ) and not data.get( 'recurring_frequency' ):
            raise ValidationError(
                'Recurring frequency is required for recurring donations.', field_name='recurringFrequency'
            )

    @staticmethod
    def get_formatted_amount( donation ):
        """The amount with its currency symbol, e.g. $25.00."""

        return format_amount( donation.amount, donation.currency or 'USD' )
