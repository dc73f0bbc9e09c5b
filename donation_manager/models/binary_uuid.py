"""TypeDecorator allows custom types which add bind-parameter/result-processing behavior to an existing type object"""
# pylint: disable=R0903
import uuid

from sqlalchemy.types import BINARY
from sqlalchemy.types import TypeDecorator


class BinaryUUID( TypeDecorator ):
    """Optimize UUID keys. Store as 16 byte binary, retrieve as uuid."""

    # Required and identifies the TypeEngine class.
    impl = BINARY( 16 )
    cache_ok = True

    def process_bind_param( self, value, dialect ):  # pylint: disable=unused-argument
        """On the way in.

        :param value: UUID, or its string representation.
        :param dialect:
        :return: 16 bytes
        """

        if value is None:
            return None
        try:
            return value.bytes
        except AttributeError:
            return uuid.UUID( str( value ) ).bytes

    def process_result_value( self, value, dialect ):  # pylint: disable=unused-argument
        """On the way out.

        :param value: UUID in bytes
        :param dialect:
        :return: UUID
        """

        if value is None:
            return None
        return uuid.UUID( bytes=bytes( value ) )
