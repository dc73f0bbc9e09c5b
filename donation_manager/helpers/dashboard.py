"""Builds the analytics reports from the aggregation primitives."""
from datetime import timedelta

from flask import current_app
from sqlalchemy import func

from donation_manager.flask_essentials import database
from donation_manager.helpers.aggregation import category_performance
from donation_manager.helpers.aggregation import COMPLETED
from donation_manager.helpers.aggregation import completion_rates
from donation_manager.helpers.aggregation import count_by
from donation_manager.helpers.aggregation import count_donations
from donation_manager.helpers.aggregation import daily_trend
from donation_manager.helpers.aggregation import donation_conditions
from donation_manager.helpers.aggregation import donation_distribution
from donation_manager.helpers.aggregation import donation_summary
from donation_manager.helpers.aggregation import donor_retention
from donation_manager.helpers.aggregation import monthly_trend
from donation_manager.helpers.aggregation import recent_campaigns
from donation_manager.helpers.aggregation import sum_donations
from donation_manager.helpers.aggregation import top_campaigns
from donation_manager.helpers.aggregation import top_donors
from donation_manager.helpers.general_helper_functions import utc_now
from donation_manager.models.campaign import CampaignModel
from donation_manager.models.donation import DonationModel
from donation_manager.models.donor import DonorModel
from donation_manager.schemas.campaign import CampaignSchema

DEFAULT_RECENT_WINDOW_DAYS = 30
DASHBOARD_TOP_CAMPAIGNS = 5
ANALYTICS_TOP_CAMPAIGNS = 10
SUMMARY_CAMPAIGNS = 5
RANKED_CAMPAIGN_FIELDS = ( 'id', 'name', 'category', 'goal', 'current_amount', 'status', 'start_date', 'end_date' )
DASHBOARD_CAMPAIGN_FIELDS = ( 'id', 'name', 'goal', 'current_amount', 'progress_percentage' )


def count_rows( column, conditions=None ):
    """Count the rows of a table given one of its columns."""

    return database.session.query( func.count( column ) ).filter( *( conditions or [] ) ).scalar() or 0


def dashboard_data( now=None ):
    """The dashboard summary.

    Totals count every donation, amounts only completed ones. The recent figures cover the trailing window set by
    RECENT_WINDOW_DAYS.

    :param datetime now: The time the window ends, naive UTC. Defaults to now.
    :return: A dictionary with the keys overview, monthlyTrend, paymentMethods and topCampaigns.
    """

    now = now or utc_now()
    window_days = current_app.config.get( 'RECENT_WINDOW_DAYS', DEFAULT_RECENT_WINDOW_DAYS )
    window_start = now - timedelta( days=window_days )

    completed = donation_conditions()
    recent = donation_conditions( start_date=window_start, end_date=now )
    active_donors = [ DonorModel.is_active.is_( True ) ]

    overview = {
        'totalDonations': count_donations(),
        'totalAmount': sum_donations( completed ),
        'recentDonations': count_donations( recent ),
        'recentAmount': sum_donations( recent ),
        'totalDonors': count_rows( DonorModel.id, active_donors ),
        'newDonors': count_rows(
            DonorModel.id, active_donors + [ DonorModel.created_at >= window_start, DonorModel.created_at <= now ]
        ),
        'totalCampaigns': count_rows( CampaignModel.id ),
        'activeCampaigns': count_rows( CampaignModel.id, [ CampaignModel.status == 'active' ] )
    }

    campaigns = top_campaigns( DASHBOARD_TOP_CAMPAIGNS )
    return {
        'overview': overview,
        'monthlyTrend': monthly_trend( DonationModel.created_at, completed, DonationModel.amount ),
        'paymentMethods': donation_distribution( DonationModel.payment_method, completed, 'paymentMethod' ),
        'topCampaigns': CampaignSchema( many=True, only=DASHBOARD_CAMPAIGN_FIELDS ).dump( campaigns )
    }


def donation_analytics( filters ):
    """Donation analytics over completed donations.

    :param dict filters: The loaded DonationAnalyticsQuerySchema: start_date, end_date, campaign and donor_type.
    :return: A dictionary with the keys summary, dailyTrend, paymentMethods and currencies.
    """

    conditions = donation_conditions(
        start_date=filters.get( 'start_date' ),
        end_date=filters.get( 'end_date' ),
        campaign_id=filters.get( 'campaign' ),
        donor_type=filters.get( 'donor_type' )
    )
    return {
        'summary': donation_summary( conditions ),
        'dailyTrend': daily_trend( conditions ),
        'paymentMethods': donation_distribution( DonationModel.payment_method, conditions, 'paymentMethod' ),
        'currencies': donation_distribution( DonationModel.currency, conditions, 'currency' )
    }


def donor_analytics():
    """Donor analytics: types, retention, top donors and the new donor trend."""

    active_donors = [ DonorModel.is_active.is_( True ) ]
    return {
        'donorTypes': count_by( DonorModel.donor_type, 'donorType', active_donors ),
        'retention': donor_retention(),
        'topDonors': top_donors(),
        'newDonorTrend': monthly_trend( DonorModel.created_at, active_donors )
    }


def campaign_analytics():
    """Campaign analytics: statuses, category performance, completion rates and top campaigns."""

    campaigns = top_campaigns( ANALYTICS_TOP_CAMPAIGNS )
    return {
        'statusDistribution': count_by( CampaignModel.status, 'status' ),
        'categoryPerformance': category_performance(),
        'completionRates': completion_rates(),
        'topCampaigns': CampaignSchema( many=True, only=RANKED_CAMPAIGN_FIELDS ).dump( campaigns )
    }


def donation_stats_summary():
    """Headline donation figures with the monthly trend and a count per payment status."""

    completed = donation_conditions()
    return {
        'totalDonations': count_donations(),
        'totalAmount': sum_donations( completed ),
        'completedDonations': count_donations( completed ),
        'monthlyStats': monthly_trend( DonationModel.created_at, completed, DonationModel.amount ),
        'statusStats': count_by( DonationModel.payment_status, 'status' )
    }


def campaign_stats_summary():
    """Headline campaign figures with a count per category, the top and the most recent campaigns."""

    schema = CampaignSchema( many=True )
    return {
        'totalCampaigns': count_rows( CampaignModel.id ),
        'activeCampaigns': count_rows( CampaignModel.id, [ CampaignModel.status == 'active' ] ),
        'completedCampaigns': count_rows( CampaignModel.id, [ CampaignModel.status == COMPLETED ] ),
        'draftCampaigns': count_rows( CampaignModel.id, [ CampaignModel.status == 'draft' ] ),
        'categoryStats': count_by( CampaignModel.category, 'category' ),
        'topCampaigns': schema.dump( top_campaigns( SUMMARY_CAMPAIGNS ) ),
        'recentCampaigns': schema.dump( recent_campaigns( SUMMARY_CAMPAIGNS ) )
    }
