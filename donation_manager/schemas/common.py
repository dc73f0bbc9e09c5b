"""Pieces shared by the Marshmallow schemas: camelCase keys, whitespace trimming, ISO 8601 dates and money."""
# pylint: disable=too-few-public-methods
from datetime import datetime
from decimal import Decimal
from decimal import InvalidOperation

from marshmallow import fields
from marshmallow import pre_load
from marshmallow import validate

from donation_manager.helpers.general_helper_functions import TWO_PLACES
from donation_manager.helpers.general_helper_functions import to_naive_utc

# The largest value a DECIMAL( 12, 2 ) column holds.
MAX_AMOUNT = Decimal( '9999999999.99' )


def camelcase( name ):
    """Turn a snake_case attribute name into its camelCase JSON key, e.g. first_name -> firstName."""

    parts = iter( name.split( '_' ) )
    return next( parts ) + ''.join( part.title() for part in parts )


class CamelCaseMixin:
    """Schema mixin: model attributes are snake_case, JSON payloads and query strings are camelCase.

    String values on the payload are trimmed before validation.
    """

    def on_bind_field( self, field_name, field_obj ):
        """Set the data_key of every field to its camelCase name unless one was given."""

        field_obj.data_key = camelcase( field_obj.data_key or field_name )

    @pre_load
    def strip_strings( self, data, **kwargs ):  # pylint: disable=unused-argument
        """Trim leading and trailing whitespace from the top level string values."""

        if not isinstance( data, dict ):
            return data
        return { key: value.strip() if isinstance( value, str ) else value for key, value in data.items() }


class IsoDateTime( fields.DateTime ):
    """A DateTime that accepts a date ( 2024-01-05 ) or a full ISO 8601 datetime and loads naive UTC."""

    default_error_messages = { 'invalid': 'Not a valid ISO 8601 date or datetime.' }

    def _deserialize( self, value, attr, data, **kwargs ):
        if isinstance( value, datetime ):
            return to_naive_utc( value )
        if not isinstance( value, str ) or not value.strip():
            raise self.make_error( 'invalid' )

        text = value.strip()
        if text.endswith( 'Z' ):
            text = '{}+00:00'.format( text[ :-1 ] )
        try:
            parsed = datetime.fromisoformat( text )
        except ValueError:
            raise self.make_error( 'invalid' ) from None
        return to_naive_utc( parsed )


class Money( fields.Decimal ):
    """A positive amount with at most two decimal places that fits a DECIMAL( 12, 2 ) column.

    Extra places are rejected instead of being rounded away.
    """

    default_error_messages = { 'too_many_places': 'Must have at most two decimal places.' }

    def __init__( self, **kwargs ):
        kwargs.setdefault(
            'validate',
            validate.Range(
                min=0,
                min_inclusive=False,
                max=MAX_AMOUNT,
                error='Must be greater than 0 and at most {}.'.format( MAX_AMOUNT )
            )
        )
        super().__init__( places=2, as_string=True, **kwargs )

    def _deserialize( self, value, attr, data, **kwargs ):
        if value is not None and not isinstance( value, bool ):
            try:
                number = Decimal( str( value ).strip() )
                has_extra_places = number.is_finite() and number != number.quantize( TWO_PLACES )
            except ( InvalidOperation, ValueError ):
                has_extra_places = False
            if has_extra_places:
                raise self.make_error( 'too_many_places' )
        return super()._deserialize( value, attr, data, **kwargs )
