"""Resources entry point for campaign endpoints."""
# pylint: disable=no-self-use
from flask import request

from donation_manager.controllers.campaign import create_campaign
from donation_manager.controllers.campaign import delete_campaign
from donation_manager.controllers.campaign import get_campaign_by_id
from donation_manager.controllers.campaign import get_campaign_stats_summary
from donation_manager.controllers.campaign import get_campaigns
from donation_manager.controllers.campaign import update_campaign
from donation_manager.resources.restful import AuthenticatedResource
from donation_manager.resources.restful import ManagerResource


class Campaigns( ManagerResource ):
    """Flask-RESTful resource endpoints for the CampaignModel collection."""

    def get( self ):
        """Campaigns filtered, sorted and paginated by the query string."""

        return get_campaigns( request.args ), 200

    def post( self ):
        """Create a campaign."""

        campaign = create_campaign( request.get_json( silent=True ) )
        return { 'message': 'Campaign created successfully', 'campaign': campaign }, 201


class CampaignById( ManagerResource ):
    """Flask-RESTful resource endpoints for a CampaignModel by ID."""

    def get( self, campaign_id ):
        """Retrieve a campaign by its ID."""

        return { 'campaign': get_campaign_by_id( campaign_id ) }, 200

    def put( self, campaign_id ):
        """Update the fields on the payload."""

        campaign = update_campaign( campaign_id, request.get_json( silent=True ) )
        return { 'message': 'Campaign updated successfully', 'campaign': campaign }, 200

    def delete( self, campaign_id ):
        """Delete a campaign that has no donations."""

        delete_campaign( campaign_id )
        return { 'message': 'Campaign deleted successfully' }, 200


class CampaignStatsSummary( AuthenticatedResource ):
    """Flask-RESTful resource endpoint for the campaign summary figures."""

    def get( self ):
        """Campaign counts by status and category with the top and most recent campaigns."""

        return get_campaign_stats_summary(), 200
