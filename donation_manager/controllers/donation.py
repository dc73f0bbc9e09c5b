"""Controllers for Flask-RESTful resources: handle the business logic for the donation endpoints."""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.exc import SQLAlchemyError

from donation_manager.exceptions.exception_model import ModelCampaignNotFoundError
from donation_manager.exceptions.exception_model import ModelDonationCompletedError
from donation_manager.exceptions.exception_model import ModelDonationNotFoundError
from donation_manager.exceptions.exception_model import ModelDonationTransactionIdExistsError
from donation_manager.exceptions.exception_model import ModelDonorNotFoundError
from donation_manager.flask_essentials import database
from donation_manager.helpers.authorization import get_actor
from donation_manager.helpers.dashboard import donation_stats_summary
from donation_manager.helpers.donation_totals import apply_donation_totals
from donation_manager.helpers.general_helper_functions import generate_transaction_id
from donation_manager.helpers.general_helper_functions import parse_uuid
from donation_manager.helpers.general_helper_functions import utc_now
from donation_manager.helpers.manage_paginate import paginate_query
from donation_manager.helpers.manage_paginate import transform_data
from donation_manager.helpers.model_serialization import from_json
from donation_manager.helpers.model_serialization import load_query_string
from donation_manager.helpers.model_serialization import to_json
from donation_manager.models.campaign import CampaignModel
from donation_manager.models.donation import DonationModel
from donation_manager.models.donor import DonorModel
from donation_manager.schemas.donation import DONATION_UPDATE_ATTRIBUTES
from donation_manager.schemas.donation import DonationSchema
from donation_manager.schemas.query_string import DonationQuerySchema


def get_donations( request_args ):
    """Donations filtered by the query string, newest first, and paginated.

    Here is an example of the query string:
        ?status=completed&campaign=5f0b...&startDate=2024-01-01&endDate=2024-01-31T23:59:59Z&page=1&limit=25

    The date bounds are inclusive and apply to the creation time.

    :param request_args: The request.args of the HTTP request.
    :return: { 'items': [ ... ], 'pagination': { ... } }
    """

    terms = load_query_string( DonationQuerySchema(), request_args )

    query = DonationModel.query
    if 'status' in terms:
        query = query.filter( DonationModel.payment_status == terms[ 'status' ] )
    if 'campaign' in terms:
        query = query.filter( DonationModel.campaign_id == terms[ 'campaign' ] )
    if 'donor' in terms:
        query = query.filter( DonationModel.donor_id == terms[ 'donor' ] )
    if 'start_date' in terms:
        query = query.filter( DonationModel.created_at >= terms[ 'start_date' ] )
    if 'end_date' in terms:
        query = query.filter( DonationModel.created_at <= terms[ 'end_date' ] )
    query = query.order_by( DonationModel.created_at.desc(), DonationModel.id )

    page = paginate_query( query, terms[ 'page' ], terms[ 'limit' ] )
    return transform_data( page, DonationSchema )


def find_donation( donation_id ):
    """Return the donation with the given ID.

    :param donation_id: The ID from the URL.
    :return: The DonationModel.
    :raises UUIDMalformedError: When the ID is malformed.
    :raises ModelDonationNotFoundError: When there is no such donation.
    """

    donation = DonationModel.query.filter_by( id=parse_uuid( donation_id, 'donation' ) ).one_or_none()
    if not donation:
        raise ModelDonationNotFoundError()
    return donation


def get_donation_by_id( donation_id ):
    """Serialize the donation with the given ID."""

    return to_json( DonationSchema(), find_donation( donation_id ) )


def ensure_references_exist( donation ):
    """The donor, and the campaign when one is given, must exist before a donation is recorded against them."""

    if not database.session.query( DonorModel.query.filter_by( id=donation.donor_id ).exists() ).scalar():
        raise ModelDonorNotFoundError()
    if donation.campaign_id is not None:
        if not database.session.query(
                CampaignModel.query.filter_by( id=donation.campaign_id ).exists()
        ).scalar():
            raise ModelCampaignNotFoundError()


def assign_transaction_id( donation ):
    """Generate a transaction ID when none was supplied; a supplied one must be unused."""

    if not donation.transaction_id:
        donation.transaction_id = generate_transaction_id()
        return
    if database.session.query(
            DonationModel.query.filter_by( transaction_id=donation.transaction_id ).exists()
    ).scalar():
        raise ModelDonationTransactionIdExistsError()


def create_donation( payload ):
    """Record a donation and then move the donor and campaign running totals forward.

    The donation is committed first. The totals are best effort and a failure there does not fail the request.

    :param dict payload: The request JSON.
    :return: The serialized donation.
    :raises ModelImproperFieldError: When the payload fails validation.
    :raises ModelNotFoundError: When the donor or campaign does not exist.
    :raises ModelDonationTransactionIdExistsError: When the supplied transaction ID is in use.
    """

    donation = from_json( DonationSchema(), payload )
    ensure_references_exist( donation )
    assign_transaction_id( donation )
    donation.processed_by = get_actor()

    try:
        database.session.add( donation )
        database.session.commit()
    except IntegrityError:
        database.session.rollback()
        raise ModelDonationTransactionIdExistsError()
    except SQLAlchemyError as error:
        database.session.rollback()
        raise error

    apply_donation_totals( donation )
    return to_json( DonationSchema(), donation )


def update_donation( donation_id, payload ):
    """Change the payment status, notes, tags or receipt flag of a donation.

    Other keys on the payload are ignored. Marking the receipt as sent stamps receiptSentAt the first time. The
    running totals are not adjusted.

    :param donation_id: The ID from the URL.
    :param dict payload: The request JSON.
    :return: The serialized donation.
    """

    donation = find_donation( donation_id )
    with database.session.no_autoflush:
        donation = from_json( DonationSchema( only=DONATION_UPDATE_ATTRIBUTES ), payload, instance=donation )
    if donation.receipt_sent and donation.receipt_sent_at is None:
        donation.receipt_sent_at = utc_now()

    try:
        database.session.commit()
    except SQLAlchemyError as error:
        database.session.rollback()
        raise error
    return to_json( DonationSchema(), donation )


def delete_donation( donation_id ):
    """Delete a donation unless it is completed. The running totals are not adjusted.

    :raises ModelDonationCompletedError: When the donation is completed.
    """

    donation = find_donation( donation_id )
    if donation.payment_status == 'completed':
        raise ModelDonationCompletedError()

    try:
        database.session.delete( donation )
        database.session.commit()
    except SQLAlchemyError as error:
        database.session.rollback()
        raise error
    return True


def get_donation_stats_summary():
    """Headline donation figures."""

    return donation_stats_summary()
