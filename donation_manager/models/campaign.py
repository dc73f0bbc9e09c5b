"""The model for the Donation Manager API: campaign table.

Tables are explicitly named. Notice that the database=SQLAlchemy() is done through the import of flask_essentials.
This will keep the Marshmallow and model SQLAlchemy sessions the same.
"""
# pylint: disable=R0903
import uuid

from donation_manager.flask_essentials import database
from donation_manager.helpers.general_helper_functions import utc_now
from donation_manager.models.binary_uuid import BinaryUUID

CAMPAIGN_CATEGORIES = ( 'education', 'healthcare', 'environment', 'poverty', 'disaster-relief', 'arts', 'other' )
CAMPAIGN_STATUSES = ( 'draft', 'active', 'paused', 'completed', 'cancelled' )


class CampaignModel( database.Model ):
    """A fundraising initiative with a monetary goal and a date window."""

    __tablename__ = 'campaign'
    id = database.Column( BinaryUUID, primary_key=True, default=uuid.uuid4 )
    name = database.Column( database.VARCHAR( 120 ), nullable=False )
    description = database.Column( database.Text, nullable=False )
    goal = database.Column( database.DECIMAL( 12, 2 ), nullable=False )
    current_amount = database.Column( database.DECIMAL( 12, 2 ), nullable=False, default=0 )
    start_date = database.Column( database.DateTime, nullable=False )
    end_date = database.Column( database.DateTime, nullable=False )
    status = database.Column(
        database.Enum( *CAMPAIGN_STATUSES, native_enum=False, name='campaign_status' ),
        default='draft',
        nullable=False,
        index=True
    )
    category = database.Column(
        database.Enum( *CAMPAIGN_CATEGORIES, native_enum=False, name='campaign_category' ),
        nullable=False,
        index=True
    )
    image = database.Column( database.VARCHAR( 255 ), nullable=True )
    organizer = database.Column( database.VARCHAR( 80 ), nullable=True )
    tags = database.Column( database.JSON, nullable=True, default=list )
    is_featured = database.Column( database.Boolean, nullable=False, default=False, index=True )
    is_public = database.Column( database.Boolean, nullable=False, default=True )
    notes = database.Column( database.Text, nullable=True )
    created_at = database.Column( database.DateTime, nullable=False, default=utc_now, index=True )
    updated_at = database.Column( database.DateTime, nullable=False, default=utc_now, onupdate=utc_now )

    __table_args__ = ( database.Index( 'ix_campaign_dates', 'start_date', 'end_date' ), )
