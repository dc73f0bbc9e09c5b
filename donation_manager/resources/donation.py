"""Resources entry point for donation endpoints."""
# pylint: disable=no-self-use
from flask import request

from donation_manager.controllers.donation import create_donation
from donation_manager.controllers.donation import delete_donation
from donation_manager.controllers.donation import get_donation_by_id
from donation_manager.controllers.donation import get_donation_stats_summary
from donation_manager.controllers.donation import get_donations
from donation_manager.controllers.donation import update_donation
from donation_manager.resources.restful import AuthenticatedResource
from donation_manager.resources.restful import ManagerResource


class Donations( ManagerResource ):
    """Flask-RESTful resource endpoints for the DonationModel collection."""

    def get( self ):
        """Donations filtered, sorted and paginated by the query string."""

        return get_donations( request.args ), 200

    def post( self ):
        """Record a donation: the donor and campaign totals are updated afterwards."""

        donation = create_donation( request.get_json( silent=True ) )
        return { 'message': 'Donation created successfully', 'donation': donation }, 201


class DonationById( ManagerResource ):
    """Flask-RESTful resource endpoints for a DonationModel by ID."""

    def get( self, donation_id ):
        """Retrieve a donation by its ID."""

        return { 'donation': get_donation_by_id( donation_id ) }, 200

    def put( self, donation_id ):
        """Update the payment status, notes, tags or receipt flag."""

        donation = update_donation( donation_id, request.get_json( silent=True ) )
        return { 'message': 'Donation updated successfully', 'donation': donation }, 200

    def delete( self, donation_id ):
        """Delete a donation that is not completed."""

        delete_donation( donation_id )
        return { 'message': 'Donation deleted successfully' }, 200


class DonationStatsSummary( AuthenticatedResource ):
    """Flask-RESTful resource endpoint for the donation summary figures."""

    def get( self ):
        """Donation counts and amounts with the monthly trend and a count per status."""

        return get_donation_stats_summary(), 200
