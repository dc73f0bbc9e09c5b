"""A module to facilitate serialization and deserialization of a model given its schema."""
from marshmallow.exceptions import ValidationError as MarshmallowValidationError

from donation_manager.exceptions.exception_model import ModelImproperFieldError
from donation_manager.exceptions.exception_query_string import QueryStringImproperError


def flatten_validation_messages( messages, prefix='' ):
    """Flatten the nested Marshmallow error messages into a list of field errors.

    Marshmallow reports { 'address': { 'zipCode': [ 'Not a valid string.' ] }, 'email': [ '...' ] }. The API reports
    [ { 'field': 'address.zipCode', 'message': 'Not a valid string.' }, { 'field': 'email', 'message': '...' } ].

    :param messages: The messages attribute of a marshmallow ValidationError.
    :param str prefix: The dotted path of the parent field.
    :return: A list of dictionaries with keys field and message.
    """

    errors = []
    if isinstance( messages, dict ):
        for key, value in messages.items():
            field = '{}.{}'.format( prefix, key ) if prefix else str( key )
            if key == '_schema':
                field = prefix or 'payload'
            errors.extend( flatten_validation_messages( value, field ) )
    elif isinstance( messages, list ):
        for message in messages:
            errors.extend( flatten_validation_messages( message, prefix ) )
    else:
        errors.append( { 'field': prefix or 'payload', 'message': str( messages ) } )
    return errors


def from_json( model_schema, model_dictionary, instance=None ):
    """Deserialize model_dictionary into a model using its Marshmallow schema.

    If instance is None a new, transient model is built. Otherwise only the keys on model_dictionary are applied to
    instance ( a partial update ). Every failed field constraint is reported together.

    :param obj model_schema: A Marshmallow schema with load_instance=True.
    :param dict model_dictionary: The payload.
    :param obj instance: An existing model to update, or None to create.
    :return: The model.
    :raises ModelImproperFieldError: When validation fails.
    """

    if not isinstance( model_dictionary, dict ):
        raise ModelImproperFieldError( [ { 'field': 'payload', 'message': 'A JSON object is required.' } ] )

    try:
        if instance is None:
            return model_schema.load( model_dictionary )
        return model_schema.load( model_dictionary, instance=instance, partial=True )
    except MarshmallowValidationError as error:
        raise ModelImproperFieldError( flatten_validation_messages( error.messages ) )


def to_json( model_schema, model ):
    """Serializes the model given its Schema"""

    return model_schema.dump( model )


def load_query_string( query_schema, request_args ):
    """Validate the request arguments with a query string schema.

    :param obj query_schema: A Marshmallow schema from schemas.query_string.
    :param request_args: The request.args MultiDict, or a dictionary.
    :return: A dictionary of filter terms.
    :raises QueryStringImproperError: When any argument fails validation.
    """

    arguments = request_args.to_dict() if hasattr( request_args, 'to_dict' ) else dict( request_args or {} )
    try:
        return query_schema.load( arguments )
    except MarshmallowValidationError as error:
        raise QueryStringImproperError( flatten_validation_messages( error.messages ) )
