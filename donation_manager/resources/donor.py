"""Resources entry point for donor endpoints."""
# pylint: disable=no-self-use
from flask import request

from donation_manager.controllers.donor import create_donor
from donation_manager.controllers.donor import deactivate_donor
from donation_manager.controllers.donor import get_donor_by_id
from donation_manager.controllers.donor import get_donors
from donation_manager.controllers.donor import update_donor
from donation_manager.resources.restful import ManagerResource


class Donors( ManagerResource ):
    """Flask-RESTful resource endpoints for the DonorModel collection."""

    def get( self ):
        """Donors filtered, sorted and paginated by the query string."""

        return get_donors( request.args ), 200

    def post( self ):
        """Create a donor."""

        donor = create_donor( request.get_json( silent=True ) )
        return { 'message': 'Donor created successfully', 'donor': donor }, 201


class DonorById( ManagerResource ):
    """Flask-RESTful resource endpoints for a DonorModel by ID."""

    def get( self, donor_id ):
        """Retrieve a donor by its ID."""

        return { 'donor': get_donor_by_id( donor_id ) }, 200

    def put( self, donor_id ):
        """Update the fields on the payload."""

        donor = update_donor( donor_id, request.get_json( silent=True ) )
        return { 'message': 'Donor updated successfully', 'donor': donor }, 200

    def delete( self, donor_id ):
        """Deactivate the donor: donors are never removed."""

        deactivate_donor( donor_id )
        return { 'message': 'Donor deactivated successfully' }, 200
