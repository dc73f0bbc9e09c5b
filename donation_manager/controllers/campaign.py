"""Controllers for Flask-RESTful resources: handle the business logic for the campaign endpoints."""
from sqlalchemy.exc import SQLAlchemyError

from donation_manager.exceptions.exception_model import ModelCampaignHasDonationsError
from donation_manager.exceptions.exception_model import ModelCampaignNotFoundError
from donation_manager.exceptions.exception_model import ModelImproperFieldError
from donation_manager.flask_essentials import database
from donation_manager.helpers.authorization import get_actor
from donation_manager.helpers.dashboard import campaign_stats_summary
from donation_manager.helpers.general_helper_functions import parse_uuid
from donation_manager.helpers.manage_paginate import paginate_query
from donation_manager.helpers.manage_paginate import transform_data
from donation_manager.helpers.model_serialization import from_json
from donation_manager.helpers.model_serialization import load_query_string
from donation_manager.helpers.model_serialization import to_json
from donation_manager.models.campaign import CampaignModel
from donation_manager.models.donation import DonationModel
from donation_manager.schemas.campaign import CampaignSchema
from donation_manager.schemas.campaign import END_DATE_MESSAGE
from donation_manager.schemas.query_string import CampaignQuerySchema


def get_campaigns( request_args ):
    """Campaigns filtered by the query string, newest first, and paginated.

    Here is an example of the query string: ?status=active&category=education&isFeatured=true&page=1&limit=10

    :param request_args: The request.args of the HTTP request.
    :return: { 'items': [ ... ], 'pagination': { ... } }
    """

    terms = load_query_string( CampaignQuerySchema(), request_args )

    query = CampaignModel.query
    for attribute in ( 'status', 'category', 'is_featured', 'is_public' ):
        if attribute in terms:
            query = query.filter( getattr( CampaignModel, attribute ) == terms[ attribute ] )
    query = query.order_by( CampaignModel.created_at.desc(), CampaignModel.id )

    page = paginate_query( query, terms[ 'page' ], terms[ 'limit' ] )
    return transform_data( page, CampaignSchema )


def find_campaign( campaign_id ):
    """Return the campaign with the given ID.

    :param campaign_id: The ID from the URL.
    :return: The CampaignModel.
    :raises UUIDMalformedError: When the ID is malformed.
    :raises ModelCampaignNotFoundError: When there is no such campaign.
    """

    campaign = CampaignModel.query.filter_by( id=parse_uuid( campaign_id, 'campaign' ) ).one_or_none()
    if not campaign:
        raise ModelCampaignNotFoundError()
    return campaign


def get_campaign_by_id( campaign_id ):
    """Serialize the campaign with the given ID."""

    return to_json( CampaignSchema(), find_campaign( campaign_id ) )


def commit_campaign( campaign ):
    """Add and commit the campaign."""

    try:
        database.session.add( campaign )
        database.session.commit()
    except SQLAlchemyError as error:
        database.session.rollback()
        raise error


def create_campaign( payload ):
    """Create a campaign; the organizer is the caller.

    :param dict payload: The request JSON.
    :return: The serialized campaign.
    :raises ModelImproperFieldError: When the payload fails validation.
    """

    campaign = from_json( CampaignSchema(), payload )
    campaign.organizer = get_actor()
    commit_campaign( campaign )
    return to_json( CampaignSchema(), campaign )


def update_campaign( campaign_id, payload ):
    """Apply the keys on the payload to the campaign.

    The dates are checked again on the merged record: moving only the start date past the stored end date fails.

    :param campaign_id: The ID from the URL.
    :param dict payload: The request JSON.
    :return: The serialized campaign.
    """

    campaign = find_campaign( campaign_id )
    with database.session.no_autoflush:
        campaign = from_json( CampaignSchema(), payload, instance=campaign )
        if campaign.end_date <= campaign.start_date:
            database.session.rollback()
            raise ModelImproperFieldError( [ { 'field': 'endDate', 'message': END_DATE_MESSAGE } ] )
    commit_campaign( campaign )
    return to_json( CampaignSchema(), campaign )


def delete_campaign( campaign_id ):
    """Delete a campaign that no donation references.

    :raises ModelCampaignHasDonationsError: When a donation references the campaign.
    """

    campaign = find_campaign( campaign_id )
    referenced = database.session.query(
        DonationModel.query.filter( DonationModel.campaign_id == campaign.id ).exists()
    ).scalar()
    if referenced:
        raise ModelCampaignHasDonationsError()

    try:
        database.session.delete( campaign )
        database.session.commit()
    except SQLAlchemyError as error:
        database.session.rollback()
        raise error
    return True


def get_campaign_stats_summary():
    """Headline campaign figures."""

    return campaign_stats_summary()
