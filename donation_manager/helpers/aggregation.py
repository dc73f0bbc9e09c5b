"""Grouped and windowed statistics over the donation, donor and campaign tables.

Every function here is read only. Amounts come back as Decimal rounded to two places, counts as integers. The
conditions arguments are lists of SQLAlchemy filter expressions, usually built by donation_conditions().
"""
from sqlalchemy import desc
from sqlalchemy import extract
from sqlalchemy import func
from sqlalchemy import select

from donation_manager.flask_essentials import database
from donation_manager.helpers.general_helper_functions import quantize_amount
from donation_manager.helpers.general_helper_functions import safe_percentage
from donation_manager.models.campaign import CampaignModel
from donation_manager.models.donation import DonationModel
from donation_manager.models.donor import DonorModel

COMPLETED = 'completed'
RANKED_CAMPAIGN_STATUSES = ( 'active', 'completed' )
TREND_BUCKETS = 12
TOP_DONORS = 10


def donation_conditions( start_date=None, end_date=None, campaign_id=None, donor_type=None, completed_only=True ):
    """Build the filter expressions for a set of donations.

    Date bounds are inclusive on createdAt. A donor type is matched through the donor table.

    :return: A list of SQLAlchemy expressions.
    """

    conditions = []
    if completed_only:
        conditions.append( DonationModel.payment_status == COMPLETED )
    if start_date is not None:
        conditions.append( DonationModel.created_at >= start_date )
    if end_date is not None:
        conditions.append( DonationModel.created_at <= end_date )
    if campaign_id is not None:
        conditions.append( DonationModel.campaign_id == campaign_id )
    if donor_type is not None:
        conditions.append(
            DonationModel.donor_id.in_( select( DonorModel.id ).where( DonorModel.donor_type == donor_type ) )
        )
    return conditions


def count_donations( conditions=None ):
    """Number of donations matching the conditions."""

    return database.session.query( func.count( DonationModel.id ) ).filter( *( conditions or [] ) ).scalar() or 0


def sum_donations( conditions=None ):
    """Summed amount of the donations matching the conditions."""

    total = database.session.query( func.sum( DonationModel.amount ) ).filter( *( conditions or [] ) ).scalar()
    return quantize_amount( total )


def donation_summary( conditions ):
    """Count, total and average amount over the matching donations; zeros when there are none."""

    count, total = database.session.query(
        func.count( DonationModel.id ), func.sum( DonationModel.amount )
    ).filter( *conditions ).one()
    count = count or 0
    total = quantize_amount( total )
    average = quantize_amount( total / count ) if count else quantize_amount( 0 )
    return { 'count': count, 'totalAmount': total, 'avgAmount': average }


def monthly_trend( created_column, conditions, amount_column=None, buckets=TREND_BUCKETS ):
    """Group rows by ( year, month ) of creation, most recent first, keeping at most `buckets` groups.

    :param created_column: The creation timestamp column, e.g. DonationModel.created_at.
    :param conditions: Filter expressions.
    :param amount_column: When given, each group also has the summed amount.
    :param int buckets: The number of groups to keep.
    :return: [ { 'year': 2024, 'month': 1, 'count': 2, 'amount': Decimal( '75.00' ) }, ... ]
    """

    year = extract( 'year', created_column )
    month = extract( 'month', created_column )
    columns = [ year.label( 'year' ), month.label( 'month' ), func.count().label( 'count' ) ]
    if amount_column is not None:
        columns.append( func.sum( amount_column ).label( 'amount' ) )

    rows = database.session.query( *columns ).filter( *conditions ) \
        .group_by( year, month ) \
        .order_by( desc( year ), desc( month ) ) \
        .limit( buckets ) \
        .all()

    trend = []
    for row in rows:
        bucket = { 'year': int( row.year ), 'month': int( row.month ), 'count': row.count }
        if amount_column is not None:
            bucket[ 'amount' ] = quantize_amount( row.amount )
        trend.append( bucket )
    return trend


def daily_trend( conditions ):
    """Group donations by ( year, month, day ) of creation in ascending order."""

    year = extract( 'year', DonationModel.created_at )
    month = extract( 'month', DonationModel.created_at )
    day = extract( 'day', DonationModel.created_at )
    rows = database.session.query(
        year.label( 'year' ),
        month.label( 'month' ),
        day.label( 'day' ),
        func.count( DonationModel.id ).label( 'count' ),
        func.sum( DonationModel.amount ).label( 'amount' )
    ).filter( *conditions ).group_by( year, month, day ).order_by( year, month, day ).all()

    return [
        {
            'year': int( row.year ),
            'month': int( row.month ),
            'day': int( row.day ),
            'count': row.count,
            'amount': quantize_amount( row.amount )
        } for row in rows
    ]


def donation_distribution( column, conditions, key ):
    """Group donations by a column, e.g. payment method, with count and amount; largest amount first.

    :param column: The grouping column, e.g. DonationModel.currency.
    :param conditions: Filter expressions.
    :param str key: The key the grouping value is reported under, e.g. currency.
    :return: [ { key: 'USD', 'count': 3, 'amount': Decimal( '90.00' ) }, ... ]
    """

    amount = func.sum( DonationModel.amount ).label( 'amount' )
    rows = database.session.query( column, func.count( DonationModel.id ).label( 'count' ), amount ) \
        .filter( *conditions ) \
        .group_by( column ) \
        .order_by( desc( amount ), column ) \
        .all()
    return [ { key: row[ 0 ], 'count': row.count, 'amount': quantize_amount( row.amount ) } for row in rows ]


def count_by( column, key, conditions=None ):
    """Number of rows per distinct value of column, in the order of the values.

    :param column: A model column, e.g. CampaignModel.status.
    :param str key: The key the value is reported under.
    :param conditions: Filter expressions.
    :return: [ { key: 'active', 'count': 4 }, ... ]
    """

    rows = database.session.query( column, func.count().label( 'count' ) ) \
        .filter( *( conditions or [] ) ) \
        .group_by( column ) \
        .order_by( column ) \
        .all()
    return [ { key: row[ 0 ], 'count': row.count } for row in rows ]


def donor_retention():
    """Histogram of how many donors made exactly N completed donations, ascending by N."""

    per_donor = database.session.query(
        DonationModel.donor_id, func.count( DonationModel.id ).label( 'donation_count' )
    ).filter( DonationModel.payment_status == COMPLETED ).group_by( DonationModel.donor_id ).subquery()

    rows = database.session.query(
        per_donor.c.donation_count, func.count().label( 'donor_count' )
    ).group_by( per_donor.c.donation_count ).order_by( per_donor.c.donation_count ).all()

    return [ { 'donationCount': row.donation_count, 'donorCount': row.donor_count } for row in rows ]


def top_donors( limit=TOP_DONORS ):
    """Donors ranked by their completed donation amount, largest first.

    Ties keep a stable order by last name, first name and ID.

    :param int limit: The number of donors to return. Fewer are returned if fewer donors have given.
    :return: [ { 'donorId', 'donorName', 'donorType', 'totalAmount', 'donationCount' }, ... ]
    """

    total_amount = func.sum( DonationModel.amount ).label( 'total_amount' )
    rows = database.session.query(
        DonorModel.id,
        DonorModel.first_name,
        DonorModel.last_name,
        DonorModel.donor_type,
        total_amount,
        func.count( DonationModel.id ).label( 'donation_count' )
    ).join( DonorModel, DonorModel.id == DonationModel.donor_id ) \
        .filter( DonationModel.payment_status == COMPLETED ) \
        .group_by( DonorModel.id, DonorModel.first_name, DonorModel.last_name, DonorModel.donor_type ) \
        .order_by( desc( total_amount ), DonorModel.last_name, DonorModel.first_name, DonorModel.id ) \
        .limit( limit ) \
        .all()

    return [
        {
            'donorId': row.id,
            'donorName': '{} {}'.format( row.first_name, row.last_name ),
            'donorType': row.donor_type,
            'totalAmount': quantize_amount( row.total_amount ),
            'donationCount': row.donation_count
        } for row in rows
    ]


def category_performance():
    """Per category totals over active and completed campaigns, largest amount raised first.

    The success rate is total raised over total goal as a percentage, 0 when the goal total is 0.
    """

    total_raised = func.sum( CampaignModel.current_amount ).label( 'total_raised' )
    rows = database.session.query(
        CampaignModel.category,
        func.count( CampaignModel.id ).label( 'count' ),
        func.sum( CampaignModel.goal ).label( 'total_goal' ),
        total_raised
    ).filter( CampaignModel.status.in_( RANKED_CAMPAIGN_STATUSES ) ) \
        .group_by( CampaignModel.category ) \
        .order_by( desc( total_raised ), CampaignModel.category ) \
        .all()

    return [
        {
            'category': row.category,
            'count': row.count,
            'totalGoal': quantize_amount( row.total_goal ),
            'totalRaised': quantize_amount( row.total_raised ),
            'successRate': safe_percentage( row.total_raised, row.total_goal )
        } for row in rows
    ]


def completion_rates():
    """Average goal and amount raised over completed campaigns; an empty dictionary when there are none."""

    count, total_goal, total_raised = database.session.query(
        func.count( CampaignModel.id ), func.sum( CampaignModel.goal ), func.sum( CampaignModel.current_amount )
    ).filter( CampaignModel.status == 'completed' ).one()

    if not count:
        return {}
    return {
        'totalCompleted': count,
        'avgGoal': quantize_amount( quantize_amount( total_goal ) / count ),
        'avgRaised': quantize_amount( quantize_amount( total_raised ) / count )
    }


def top_campaigns( limit ):
    """Active and completed campaigns ranked by the amount raised.

    :param int limit: The number of campaigns to return.
    :return: A list of CampaignModel.
    """

    return CampaignModel.query.filter( CampaignModel.status.in_( RANKED_CAMPAIGN_STATUSES ) ) \
        .order_by( CampaignModel.current_amount.desc(), CampaignModel.created_at.desc() ) \
        .limit( limit ) \
        .all()


def recent_campaigns( limit ):
    """The most recently created campaigns."""

    return CampaignModel.query.order_by( CampaignModel.created_at.desc() ).limit( limit ).all()
