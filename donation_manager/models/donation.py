"""The model for the Donation Manager API: donation table.

The donation is the source of truth for the running totals on the donor and campaign tables. Like the other models
the references are plain columns joined through relationship() with an explicit primaryjoin.
"""
# pylint: disable=R0903
import uuid

from donation_manager.flask_essentials import database
from donation_manager.helpers.general_helper_functions import utc_now
from donation_manager.models.binary_uuid import BinaryUUID
from donation_manager.models.campaign import CampaignModel  # pylint: disable=unused-import
from donation_manager.models.donor import DonorModel  # pylint: disable=unused-import

CURRENCIES = ( 'USD', 'EUR', 'GBP', 'CAD', 'AUD' )
PAYMENT_METHODS = ( 'credit_card', 'debit_card', 'bank_transfer', 'check', 'cash', 'paypal', 'stripe', 'other' )
PAYMENT_STATUSES = ( 'pending', 'completed', 'failed', 'refunded', 'cancelled' )
RECURRING_FREQUENCIES = ( 'weekly', 'monthly', 'quarterly', 'yearly' )


class DonationModel( database.Model ):
    """A single financial contribution from a donor, optionally given to a campaign."""

    __tablename__ = 'donation'
    id = database.Column( BinaryUUID, primary_key=True, default=uuid.uuid4 )
    transaction_id = database.Column( database.VARCHAR( 40 ), nullable=False, unique=True, index=True )
    donor_id = database.Column( BinaryUUID, nullable=False, index=True )
    campaign_id = database.Column( BinaryUUID, nullable=True, default=None, index=True )
    amount = database.Column( database.DECIMAL( 12, 2 ), nullable=False )
    currency = database.Column(
        database.Enum( *CURRENCIES, native_enum=False, name='currency' ), default='USD', nullable=False
    )
    payment_method = database.Column(
        database.Enum( *PAYMENT_METHODS, native_enum=False, name='payment_method' ), nullable=False
    )
    payment_status = database.Column(
        database.Enum( *PAYMENT_STATUSES, native_enum=False, name='payment_status' ),
        default='pending',
        nullable=False,
        index=True
    )
    is_anonymous = database.Column( database.Boolean, nullable=False, default=False )
    is_recurring = database.Column( database.Boolean, nullable=False, default=False )
    recurring_frequency = database.Column(
        database.Enum( *RECURRING_FREQUENCIES, native_enum=False, name='recurring_frequency' ),
        nullable=True,
        default=None
    )
    message = database.Column( database.VARCHAR( 500 ), nullable=True )
    notes = database.Column( database.Text, nullable=True )
    receipt_sent = database.Column( database.Boolean, nullable=False, default=False )
    receipt_sent_at = database.Column( database.DateTime, nullable=True )
    processed_by = database.Column( database.VARCHAR( 80 ), nullable=True )
    tags = database.Column( database.JSON, nullable=True, default=list )
    created_at = database.Column( database.DateTime, nullable=False, default=utc_now, index=True )
    updated_at = database.Column( database.DateTime, nullable=False, default=utc_now, onupdate=utc_now )

    donor = database.relationship(
        'DonorModel',
        foreign_keys=[ donor_id ],
        primaryjoin='DonationModel.donor_id == DonorModel.id',
        uselist=False,
        viewonly=True
    )
    campaign = database.relationship(
        'CampaignModel',
        foreign_keys=[ campaign_id ],
        primaryjoin='DonationModel.campaign_id == CampaignModel.id',
        uselist=False,
        viewonly=True
    )
