"""Marshmallow schema module for DonorModel."""
# pylint: disable=too-few-public-methods
from marshmallow import EXCLUDE
from marshmallow import fields
from marshmallow import pre_load
from marshmallow import Schema
from marshmallow import validate

from donation_manager.flask_essentials import database
from donation_manager.flask_essentials import marshmallow as flask_marshmallow
from donation_manager.models.donor import DONOR_TYPES
from donation_manager.models.donor import DonorModel
from donation_manager.schemas.common import CamelCaseMixin


class AddressSchema( CamelCaseMixin, Schema ):
    """The optional structured address on a donor; stored as JSON."""

    street = fields.String( allow_none=True )
    city = fields.String( allow_none=True )
    state = fields.String( allow_none=True )
    zip_code = fields.String( allow_none=True )
    country = fields.String( load_default='USA' )

    class Meta:
        """Meta object for Marshmallow schema."""

        unknown = EXCLUDE


class DonorSchema( CamelCaseMixin, flask_marshmallow.SQLAlchemySchema ):
    """Marshmallow schema for serialization/deserialization of DonorModel.

    The running total and the last donation date are dump only: a client payload can never write them.
    """

    id = fields.UUID( dump_only=True )
    first_name = fields.String( required=True, validate=validate.Length( min=1, max=80 ) )
    last_name = fields.String( required=True, validate=validate.Length( min=1, max=80 ) )
    full_name = fields.Method( 'get_full_name', dump_only=True )
    email = fields.Email( required=True, validate=validate.Length( max=254 ) )
    phone = fields.String( allow_none=True, validate=validate.Length( max=32 ) )
    address = fields.Nested( AddressSchema, allow_none=True )
    date_of_birth = fields.Date( allow_none=True )
    donor_type = fields.String( validate=validate.OneOf( DONOR_TYPES ) )
    is_anonymous = fields.Boolean()
    total_donated = fields.Decimal( places=2, as_string=True, dump_only=True )
    last_donation_date = fields.DateTime( dump_only=True )
    notes = fields.String( allow_none=True )
    tags = fields.List( fields.String() )
    is_active = fields.Boolean()
    created_at = fields.DateTime( dump_only=True )
    updated_at = fields.DateTime( dump_only=True )

    class Meta:
        """Meta object for Marshmallow schema."""

        model = DonorModel
        load_instance = True
        sqla_session = database.session
        unknown = EXCLUDE

    @pre_load
    def lowercase_email( self, data, **kwargs ):  # pylint: disable=unused-argument
        """Emails are unique without regard to case and so are stored in lowercase."""

        if isinstance( data, dict ) and isinstance( data.get( 'email' ), str ):
            data = dict( data )
            data[ 'email' ] = data[ 'email' ].strip().lower()
        return data

    @staticmethod
    def get_full_name( donor ):
        """The donor first and last name."""

        return '{} {}'.format( donor.first_name, donor.last_name )


class DonorSummarySchema( CamelCaseMixin, Schema ):
    """The donor fields shown on a donation."""

    id = fields.UUID()
    first_name = fields.String()
    last_name = fields.String()
    email = fields.String()
