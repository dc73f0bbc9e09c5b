"""Marshmallow schema module for CampaignModel."""
# pylint: disable=too-few-public-methods
from marshmallow import EXCLUDE
from marshmallow import fields
from marshmallow import Schema
from marshmallow import validate
from marshmallow import validates_schema
from marshmallow import ValidationError

from donation_manager.flask_essentials import database
from donation_manager.flask_essentials import marshmallow as flask_marshmallow
from donation_manager.helpers.campaign import campaign_days_remaining
from donation_manager.helpers.campaign import campaign_is_active
from donation_manager.helpers.campaign import campaign_progress_percentage
from donation_manager.models.campaign import CAMPAIGN_CATEGORIES
from donation_manager.models.campaign import CAMPAIGN_STATUSES
from donation_manager.models.campaign import CampaignModel
from donation_manager.schemas.common import CamelCaseMixin
from donation_manager.schemas.common import IsoDateTime
from donation_manager.schemas.common import Money

END_DATE_MESSAGE = 'End date must be after start date.'


class CampaignSchema( CamelCaseMixin, flask_marshmallow.SQLAlchemySchema ):
    """Marshmallow schema for serialization/deserialization of CampaignModel."""

    id = fields.UUID( dump_only=True )
    name = fields.String( required=True, validate=validate.Length( min=3, max=120 ) )
    description = fields.String( required=True, validate=validate.Length( min=10 ) )
    goal = Money( required=True )
    current_amount = fields.Decimal( places=2, as_string=True, dump_only=True )
    start_date = IsoDateTime( required=True )
    end_date = IsoDateTime( required=True )
    category = fields.String( required=True, validate=validate.OneOf( CAMPAIGN_CATEGORIES ) )
    status = fields.String( validate=validate.OneOf( CAMPAIGN_STATUSES ) )
    image = fields.String( allow_none=True, validate=validate.Length( max=255 ) )
    organizer = fields.String( dump_only=True )
    tags = fields.List( fields.String() )
    is_featured = fields.Boolean()
    is_public = fields.Boolean()
    notes = fields.String( allow_none=True )
    progress_percentage = fields.Function( campaign_progress_percentage, dump_only=True )
    days_remaining = fields.Function( campaign_days_remaining, dump_only=True )
    is_active = fields.Function( campaign_is_active, dump_only=True )
    created_at = fields.DateTime( dump_only=True )
    updated_at = fields.DateTime( dump_only=True )

    class Meta:
        """Meta object for Marshmallow schema."""

        model = CampaignModel
        load_instance = True
        sqla_session = database.session
        unknown = EXCLUDE

    @validates_schema( skip_on_field_errors=False )
    def validate_dates( self, data, **kwargs ):  # pylint: disable=unused-argument
        """When both dates are on the payload the end date must come strictly after the start date."""

        start_date = data.get( 'start_date' )
        end_date = data.get( 'end_date' )
        if start_date and end_date and end_date <= start_date:
            raise ValidationError( END_DATE_MESSAGE, field_name='endDate' )


class CampaignSummarySchema( CamelCaseMixin, Schema ):
    """The campaign fields shown on a donation."""

    id = fields.UUID()
    name = fields.String()
