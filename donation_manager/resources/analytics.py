"""Resources entry point for the analytics endpoints."""
# pylint: disable=too-few-public-methods
# pylint: disable=no-self-use
from flask import request

from donation_manager.controllers.analytics import get_campaign_analytics
from donation_manager.controllers.analytics import get_dashboard_data
from donation_manager.controllers.analytics import get_donation_analytics
from donation_manager.controllers.analytics import get_donor_analytics
from donation_manager.resources.restful import AuthenticatedResource


class Dashboard( AuthenticatedResource ):
    """Flask-RESTful resource endpoint for the dashboard summary."""

    def get( self ):
        """Overview figures, the monthly trend, payment methods and top campaigns."""

        return get_dashboard_data(), 200


class DonationAnalytics( AuthenticatedResource ):
    """Flask-RESTful resource endpoint for donation analytics."""

    def get( self ):
        """Summary, daily trend and distributions, filtered by the query string."""

        return get_donation_analytics( request.args ), 200


class DonorAnalytics( AuthenticatedResource ):
    """Flask-RESTful resource endpoint for donor analytics."""

    def get( self ):
        """Donor types, retention, top donors and new donor trend."""

        return get_donor_analytics(), 200


class CampaignAnalytics( AuthenticatedResource ):
    """Flask-RESTful resource endpoint for campaign analytics."""

    def get( self ):
        """Statuses, category performance, completion rates and top campaigns."""

        return get_campaign_analytics(), 200
