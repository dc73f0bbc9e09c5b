"""Controllers for Flask-RESTful resources: handle the business logic for the donor endpoints."""
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.exc import SQLAlchemyError

from donation_manager.exceptions.exception_model import ModelDonorEmailExistsError
from donation_manager.exceptions.exception_model import ModelDonorNotFoundError
from donation_manager.flask_essentials import database
from donation_manager.helpers.general_helper_functions import parse_uuid
from donation_manager.helpers.manage_paginate import paginate_query
from donation_manager.helpers.manage_paginate import transform_data
from donation_manager.helpers.model_serialization import from_json
from donation_manager.helpers.model_serialization import load_query_string
from donation_manager.helpers.model_serialization import to_json
from donation_manager.models.donor import DonorModel
from donation_manager.schemas.donor import DonorSchema
from donation_manager.schemas.query_string import DonorQuerySchema


def get_donors( request_args ):
    """Donors filtered by the query string, sorted by last then first name, and paginated.

    Here is an example of the query string: ?search=smith&donorType=individual&isActive=true&page=2&limit=20

    The search term is matched without regard to case against the first name, last name and email.

    :param request_args: The request.args of the HTTP request.
    :return: { 'items': [ ... ], 'pagination': { ... } }
    """

    terms = load_query_string( DonorQuerySchema(), request_args )

    query = DonorModel.query
    if terms.get( 'search' ):
        term = terms[ 'search' ]
        # The term is matched literally: % and _ are escaped.
        query = query.filter(
            or_(
                DonorModel.first_name.icontains( term, autoescape=True ),
                DonorModel.last_name.icontains( term, autoescape=True ),
                DonorModel.email.icontains( term, autoescape=True )
            )
        )
    if 'donor_type' in terms:
        query = query.filter( DonorModel.donor_type == terms[ 'donor_type' ] )
    if 'is_active' in terms:
        query = query.filter( DonorModel.is_active == terms[ 'is_active' ] )
    query = query.order_by( DonorModel.last_name, DonorModel.first_name, DonorModel.id )

    page = paginate_query( query, terms[ 'page' ], terms[ 'limit' ] )
    return transform_data( page, DonorSchema )


def find_donor( donor_id ):
    """Return the donor with the given ID.

    :param donor_id: The ID from the URL.
    :return: The DonorModel.
    :raises UUIDMalformedError: When the ID is malformed.
    :raises ModelDonorNotFoundError: When there is no such donor.
    """

    donor = DonorModel.query.filter_by( id=parse_uuid( donor_id, 'donor' ) ).one_or_none()
    if not donor:
        raise ModelDonorNotFoundError()
    return donor


def get_donor_by_id( donor_id ):
    """Serialize the donor with the given ID."""

    return to_json( DonorSchema(), find_donor( donor_id ) )


def ensure_email_is_free( payload, donor_id=None ):
    """Raise a conflict when the email on the payload belongs to another donor, active or not.

    :param dict payload: The request payload.
    :param donor_id: The ID of the donor being updated, or None on create.
    :raises ModelDonorEmailExistsError: When the email is taken.
    """

    if not isinstance( payload, dict ) or not isinstance( payload.get( 'email' ), str ):
        return

    email = payload[ 'email' ].strip().lower()
    query = DonorModel.query.filter( DonorModel.email == email )
    if donor_id is not None:
        query = query.filter( DonorModel.id != donor_id )
    if database.session.query( query.exists() ).scalar():
        raise ModelDonorEmailExistsError()


def commit_donor( donor ):
    """Commit the donor: a unique email collision that slipped past the check is reported as a conflict."""

    try:
        database.session.add( donor )
        database.session.commit()
    except IntegrityError:
        database.session.rollback()
        raise ModelDonorEmailExistsError()
    except SQLAlchemyError as error:
        database.session.rollback()
        raise error


def create_donor( payload ):
    """Create a donor from the payload.

    :param dict payload: The request JSON.
    :return: The serialized donor.
    :raises ModelImproperFieldError: When the payload fails validation.
    :raises ModelDonorEmailExistsError: When the email is taken.
    """

    donor = from_json( DonorSchema(), payload )
    ensure_email_is_free( payload )
    commit_donor( donor )
    return to_json( DonorSchema(), donor )


def update_donor( donor_id, payload ):
    """Apply the keys on the payload to the donor.

    :param donor_id: The ID from the URL.
    :param dict payload: The request JSON.
    :return: The serialized donor.
    """

    donor = find_donor( donor_id )
    with database.session.no_autoflush:
        donor = from_json( DonorSchema(), payload, instance=donor )
        try:
            ensure_email_is_free( payload, donor.id )
        except ModelDonorEmailExistsError as error:
            database.session.rollback()
            raise error
    commit_donor( donor )
    return to_json( DonorSchema(), donor )


def deactivate_donor( donor_id ):
    """Soft delete: the donor is kept and marked inactive."""

    donor = find_donor( donor_id )
    donor.is_active = False
    try:
        database.session.commit()
    except SQLAlchemyError as error:
        database.session.rollback()
        raise error
    return True
