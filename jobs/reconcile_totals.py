"""Recompute the donor and campaign running totals from the donation table and fix the ones that drifted.

An increment that failed after a donation was recorded leaves a total behind; this job brings it back in step.

python -c "import jobs.reconcile_totals;jobs.reconcile_totals.run_reconciliation()"
"""
import logging
import os

from donation_manager.app import create_app
from donation_manager.helpers.donation_totals import reconcile_totals

# Check for how the application is being run and use that.
# The environment variable is set in the Dockerfile.
app_config_env = os.environ.get( 'APP_ENV', 'DEFAULT' )  # pylint: disable=invalid-name
app = create_app( app_config_env )  # pylint: disable=C0103


def run_reconciliation():
    """A function to be called as a cron job to reconcile the running totals.

    :return: A dictionary with the number of donors and campaigns that were corrected.
    """

    with app.app_context():
        logging.info( '' )
        logging.info( '1. Reconcile the donor and campaign totals.' )
        corrected = reconcile_totals()
        logging.info(
            '2. Donors corrected: %s, campaigns corrected: %s.', corrected[ 'donors' ], corrected[ 'campaigns' ]
        )
    return corrected
