"""Controllers for Flask-RESTful resources: handle the business logic for the analytics endpoints."""
from donation_manager.helpers.dashboard import campaign_analytics
from donation_manager.helpers.dashboard import dashboard_data
from donation_manager.helpers.dashboard import donation_analytics
from donation_manager.helpers.dashboard import donor_analytics
from donation_manager.helpers.model_serialization import load_query_string
from donation_manager.schemas.query_string import DonationAnalyticsQuerySchema


def get_dashboard_data():
    """The dashboard summary over the trailing window."""

    return dashboard_data()


def get_donation_analytics( request_args ):
    """Donation analytics filtered by the query string.

    Here is an example of the query string: ?startDate=2024-01-01&endDate=2024-03-31&donorType=corporate

    :param request_args: The request.args of the HTTP request.
    :return: The donation analytics report.
    """

    filters = load_query_string( DonationAnalyticsQuerySchema(), request_args )
    return donation_analytics( filters )


def get_donor_analytics():
    """Donor analytics."""

    return donor_analytics()


def get_campaign_analytics():
    """Campaign analytics."""

    return campaign_analytics()
