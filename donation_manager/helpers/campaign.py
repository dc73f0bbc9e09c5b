"""Derived values for a campaign: progress, days remaining and whether it is running."""
from donation_manager.helpers.general_helper_functions import days_until
from donation_manager.helpers.general_helper_functions import utc_now


def progress_percentage( current_amount, goal ):
    """Percentage of the goal raised, capped at 100. A goal of 0 gives 0.

    :param current_amount: Amount raised so far.
    :param goal: The campaign goal.
    :return: A float in [ 0, 100 ] rounded to two places.
    """

    if not goal:
        return 0.0
    percentage = float( current_amount or 0 ) / float( goal ) * 100
    return round( min( max( percentage, 0.0 ), 100.0 ), 2 )


def days_remaining( end_date, now=None ):
    """Days left before the end date, rounded up; 0 once the campaign has ended."""

    return days_until( end_date, now )


def is_running( start_date, end_date, status, now=None ):
    """True when now falls inside [ start_date, end_date ] and the status is active."""

    now = now or utc_now()
    if start_date is None or end_date is None:
        return False
    return start_date <= now <= end_date and status == 'active'


def campaign_progress_percentage( campaign ):
    """Serialization hook for CampaignSchema.progress_percentage."""

    return progress_percentage( campaign.current_amount, campaign.goal )


def campaign_days_remaining( campaign ):
    """Serialization hook for CampaignSchema.days_remaining."""

    return days_remaining( campaign.end_date )


def campaign_is_active( campaign ):
    """Serialization hook for CampaignSchema.is_active."""

    return is_running( campaign.start_date, campaign.end_date, campaign.status )
