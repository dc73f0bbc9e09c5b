"""The model for the Donation Manager API: donor table.

Tables are explicitly named. Notice that the database=SQLAlchemy() is done through the import of flask_essentials.
This will keep the Marshmallow and model SQLAlchemy sessions the same.
"""
# pylint: disable=R0903
import uuid

from donation_manager.flask_essentials import database
from donation_manager.helpers.general_helper_functions import utc_now
from donation_manager.models.binary_uuid import BinaryUUID

DONOR_TYPES = ( 'individual', 'corporate', 'foundation' )


class DonorModel( database.Model ):
    """A person or organization that contributes donations.

    The total_donated and last_donation_date columns are a materialized view over the donation table. They are only
    written by helpers.donation_totals and never through a client payload.
    """

    __tablename__ = 'donor'
    id = database.Column( BinaryUUID, primary_key=True, default=uuid.uuid4 )
    first_name = database.Column( database.VARCHAR( 80 ), nullable=False )
    last_name = database.Column( database.VARCHAR( 80 ), nullable=False )
    email = database.Column( database.VARCHAR( 254 ), nullable=False, unique=True, index=True )
    phone = database.Column( database.VARCHAR( 32 ), nullable=True )
    address = database.Column( database.JSON, nullable=True )
    date_of_birth = database.Column( database.Date, nullable=True )
    donor_type = database.Column(
        database.Enum( *DONOR_TYPES, native_enum=False, name='donor_type' ),
        default='individual',
        nullable=False
    )
    is_anonymous = database.Column( database.Boolean, nullable=False, default=False )
    total_donated = database.Column( database.DECIMAL( 12, 2 ), nullable=False, default=0 )
    last_donation_date = database.Column( database.DateTime, nullable=True )
    notes = database.Column( database.Text, nullable=True )
    tags = database.Column( database.JSON, nullable=True, default=list )
    is_active = database.Column( database.Boolean, nullable=False, default=True, index=True )
    created_at = database.Column( database.DateTime, nullable=False, default=utc_now, index=True )
    updated_at = database.Column( database.DateTime, nullable=False, default=utc_now, onupdate=utc_now )

    __table_args__ = ( database.Index( 'ix_donor_last_first', 'last_name', 'first_name' ), )
