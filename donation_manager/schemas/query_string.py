"""Marshmallow schemas that validate the query strings of the listing and analytics endpoints.

Each schema loads request.args into a dictionary of snake_case filter terms, e.g. ?donorType=corporate&page=2
loads as { 'donor_type': 'corporate', 'page': 2, 'limit': 10 }.
"""
# pylint: disable=too-few-public-methods
from marshmallow import EXCLUDE
from marshmallow import fields
from marshmallow import Schema
from marshmallow import validate

from donation_manager.models.campaign import CAMPAIGN_CATEGORIES
from donation_manager.models.campaign import CAMPAIGN_STATUSES
from donation_manager.models.donation import PAYMENT_STATUSES
from donation_manager.models.donor import DONOR_TYPES
from donation_manager.schemas.common import CamelCaseMixin
from donation_manager.schemas.common import IsoDateTime

MAX_PAGE_LIMIT = 100


class PaginationQuerySchema( CamelCaseMixin, Schema ):
    """Page is 1-indexed; limit is the page size."""

    page = fields.Integer(
        load_default=1, validate=validate.Range( min=1, error='Page must be a positive integer.' )
    )
    limit = fields.Integer(
        load_default=10,
        validate=validate.Range( min=1, max=MAX_PAGE_LIMIT, error='Limit must be between 1 and 100.' )
    )

    class Meta:
        """Meta object for Marshmallow schema."""

        unknown = EXCLUDE


class DonationQuerySchema( PaginationQuerySchema ):
    """Filters for the donation listing."""

    status = fields.String( validate=validate.OneOf( PAYMENT_STATUSES ) )
    campaign = fields.UUID( error_messages={ 'invalid_uuid': 'Invalid campaign ID.' } )
    donor = fields.UUID( error_messages={ 'invalid_uuid': 'Invalid donor ID.' } )
    start_date = IsoDateTime( error_messages={ 'invalid': 'Invalid start date.' } )
    end_date = IsoDateTime( error_messages={ 'invalid': 'Invalid end date.' } )


class DonorQuerySchema( PaginationQuerySchema ):
    """Filters for the donor listing."""

    search = fields.String()
    donor_type = fields.String( validate=validate.OneOf( DONOR_TYPES ) )
    is_active = fields.Boolean()


class CampaignQuerySchema( PaginationQuerySchema ):
    """Filters for the campaign listing."""

    status = fields.String( validate=validate.OneOf( CAMPAIGN_STATUSES ) )
    category = fields.String( validate=validate.OneOf( CAMPAIGN_CATEGORIES ) )
    is_featured = fields.Boolean()
    is_public = fields.Boolean()


class DonationAnalyticsQuerySchema( CamelCaseMixin, Schema ):
    """Filters for the donation analytics."""

    start_date = IsoDateTime( error_messages={ 'invalid': 'Invalid start date.' } )
    end_date = IsoDateTime( error_messages={ 'invalid': 'Invalid end date.' } )
    campaign = fields.UUID( error_messages={ 'invalid_uuid': 'Invalid campaign ID.' } )
    donor_type = fields.String( validate=validate.OneOf( DONOR_TYPES ) )

    class Meta:
        """Meta object for Marshmallow schema."""

        unknown = EXCLUDE
