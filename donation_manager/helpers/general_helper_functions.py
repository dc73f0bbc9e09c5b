"""A Module for general helper functions used across the application."""
import math
import random
import string
import time
import uuid
from datetime import date
from datetime import datetime
from datetime import timezone
from decimal import Decimal

from donation_manager.exceptions.exception_uuid import UUIDMalformedError

BASE_36_DIGITS = string.digits + string.ascii_lowercase
TRANSACTION_ID_PREFIX = 'TXN'
TWO_PLACES = Decimal( '0.01' )
CURRENCY_SYMBOLS = { 'USD': '$', 'EUR': '€', 'GBP': '£', 'CAD': 'CA$', 'AUD': 'A$' }


def utc_now():
    """The current time as a naive UTC datetime, which is how the models store time."""

    return datetime.now( timezone.utc ).replace( tzinfo=None )


def to_naive_utc( value ):
    """Convert an aware datetime to naive UTC; naive datetimes are assumed to be UTC already."""

    if value.tzinfo is not None:
        value = value.astimezone( timezone.utc ).replace( tzinfo=None )
    return value


def parse_uuid( identifier, entity='entity' ):
    """Parse an identifier from a URL or payload into a UUID.

    :param identifier: A string, or UUID.
    :param str entity: The name of the entity used in the error message, e.g. donor.
    :return: The UUID.
    :raises UUIDMalformedError: When the identifier is not a well formed UUID.
    """

    if isinstance( identifier, uuid.UUID ):
        return identifier
    try:
        return uuid.UUID( str( identifier ) )
    except ( TypeError, ValueError, AttributeError ):
        raise UUIDMalformedError( entity )


def generate_transaction_id( now_in_milliseconds=None ):
    """Build a human readable transaction ID, e.g. TXN-1718035200000-k3j9x0a1b.

    :param int now_in_milliseconds: Creation time in epoch milliseconds. Defaults to now.
    :return: The transaction ID.
    """

    if now_in_milliseconds is None:
        now_in_milliseconds = int( time.time() * 1000 )
    suffix = ''.join( random.choice( BASE_36_DIGITS ) for _ in range( 9 ) )
    return '{}-{}-{}'.format( TRANSACTION_ID_PREFIX, now_in_milliseconds, suffix )


def format_amount( amount, currency='USD' ):
    """Format an amount for display, e.g. $1,250.00.

    :param amount: Decimal amount.
    :param str currency: ISO currency code.
    :return: The formatted string.
    """

    symbol = CURRENCY_SYMBOLS.get( currency, '{} '.format( currency ) )
    return '{}{:,.2f}'.format( symbol, Decimal( amount ) )


def quantize_amount( amount ):
    """Round an amount to two places. None becomes 0.00."""

    if amount is None:
        return Decimal( '0.00' )
    return Decimal( amount ).quantize( TWO_PLACES )


def safe_percentage( numerator, denominator ):
    """Return numerator / denominator * 100 rounded to two places, or 0 when the denominator is zero."""

    if not denominator:
        return 0.0
    return round( float( numerator or 0 ) / float( denominator ) * 100, 2 )


def days_until( end_datetime, now=None ):
    """Whole days remaining until end_datetime, rounded up and never negative."""

    if end_datetime is None:
        return 0
    now = now or utc_now()
    difference = ( end_datetime - now ).total_seconds() / 86400
    return max( 0, math.ceil( difference ) )


def json_default( value ):
    """Default hook for the JSON encoder of Flask-RESTful: handle Decimal, datetime, date and UUID.

    :param value: The value the standard encoder could not serialize.
    :return: A JSON serializable value.
    """

    if isinstance( value, Decimal ):
        return str( quantize_amount( value ) )
    if isinstance( value, ( datetime, date ) ):
        return value.isoformat()
    if isinstance( value, uuid.UUID ):
        return str( value )
    raise TypeError( 'Object of type {} is not JSON serializable'.format( type( value ).__name__ ) )
