"""Keep the donor and campaign running totals in step with the donation table.

The totals are a materialized view over the donations. They move forward through atomic increments issued right
after a donation is created, and reconcile_totals() rebuilds them from the donations when they drift, e.g. after an
increment failed.
"""
import logging
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from donation_manager.exceptions.exception_critical_path import CampaignTotalsPathError
from donation_manager.exceptions.exception_critical_path import DonorTotalsPathError
from donation_manager.flask_essentials import database
from donation_manager.helpers.general_helper_functions import quantize_amount
from donation_manager.helpers.general_helper_functions import utc_now
from donation_manager.models.campaign import CampaignModel
from donation_manager.models.donation import DonationModel
from donation_manager.models.donor import DonorModel


def add_to_donor_total( donor_id, amount, donated_at ):
    """Add amount to the donor total and stamp the last donation date in a single UPDATE statement.

    :param donor_id: The donor UUID.
    :param Decimal amount: The donation amount.
    :param datetime donated_at: The donation creation time.
    :return: Number of rows updated.
    """

    rows = DonorModel.query.filter_by( id=donor_id ).update(
        {
            DonorModel.total_donated: DonorModel.total_donated + amount,
            DonorModel.last_donation_date: donated_at
        },
        synchronize_session=False
    )
    database.session.commit()
    return rows


def add_to_campaign_total( campaign_id, amount ):
    """Add amount to the campaign total in a single UPDATE statement.

    :param campaign_id: The campaign UUID.
    :param Decimal amount: The donation amount.
    :return: Number of rows updated.
    """

    rows = CampaignModel.query.filter_by( id=campaign_id ).update(
        { CampaignModel.current_amount: CampaignModel.current_amount + amount },
        synchronize_session=False
    )
    database.session.commit()
    return rows


def increment_donor_total( donor_id, amount, donated_at, transaction_id ):
    """Move the donor total forward for one donation.

    :raises DonorTotalsPathError: When the UPDATE fails; the session is rolled back first.
    """

    try:
        return add_to_donor_total( donor_id, amount, donated_at )
    except SQLAlchemyError as error:
        database.session.rollback()
        raise DonorTotalsPathError( transaction_id ) from error


def increment_campaign_total( campaign_id, amount, transaction_id ):
    """Move the campaign total forward for one donation.

    :raises CampaignTotalsPathError: When the UPDATE fails; the session is rolled back first.
    """

    try:
        return add_to_campaign_total( campaign_id, amount )
    except SQLAlchemyError as error:
        database.session.rollback()
        raise CampaignTotalsPathError( transaction_id ) from error


def apply_donation_totals( donation ):
    """Called once, right after a donation is committed, to move the running totals forward.

    The donation row is already durable. Each increment is attempted separately and a critical path error is logged
    without being raised: the caller still reports the donation as created.

    :param donation: The committed DonationModel.
    :return: True if every increment succeeded, False otherwise.
    """

    donor_id = donation.donor_id
    campaign_id = donation.campaign_id
    amount = donation.amount
    donated_at = donation.created_at or utc_now()
    transaction_id = donation.transaction_id

    succeeded = True
    try:
        increment_donor_total( donor_id, amount, donated_at, transaction_id )
    except DonorTotalsPathError as error:
        logging.exception( error.message )
        succeeded = False

    if campaign_id:
        try:
            increment_campaign_total( campaign_id, amount, transaction_id )
        except CampaignTotalsPathError as error:
            logging.exception( error.message )
            succeeded = False

    return succeeded


def reconcile_totals():
    """Recompute every donor and campaign total from the donations and fix the ones that drifted.

    :return: A dictionary with the number of donors and campaigns that were corrected.
    """

    donor_sums = {
        donor_id: ( total, last_donation_date ) for donor_id, total, last_donation_date in database.session.query(
            DonationModel.donor_id,
            func.sum( DonationModel.amount ),
            func.max( DonationModel.created_at )
        ).group_by( DonationModel.donor_id ).all()
    }
    campaign_sums = dict(
        database.session.query( DonationModel.campaign_id, func.sum( DonationModel.amount ) )
        .filter( DonationModel.campaign_id.isnot( None ) )
        .group_by( DonationModel.campaign_id )
        .all()
    )

    donors_corrected = 0
    for donor in DonorModel.query.all():
        total, last_donation_date = donor_sums.get( donor.id, ( Decimal( '0.00' ), None ) )
        total = quantize_amount( total )
        if quantize_amount( donor.total_donated ) != total or donor.last_donation_date != last_donation_date:
            logging.info( 'Reconciling donor %s: %s -> %s', donor.id, donor.total_donated, total )
            donor.total_donated = total
            donor.last_donation_date = last_donation_date
            donors_corrected += 1

    campaigns_corrected = 0
    for campaign in CampaignModel.query.all():
        total = quantize_amount( campaign_sums.get( campaign.id ) )
        if quantize_amount( campaign.current_amount ) != total:
            logging.info( 'Reconciling campaign %s: %s -> %s', campaign.id, campaign.current_amount, total )
            campaign.current_amount = total
            campaigns_corrected += 1

    database.session.commit()
    return { 'donors': donors_corrected, 'campaigns': campaigns_corrected }
