"""Resources entry point to test the health of the application."""
# pylint: disable=too-few-public-methods
# pylint: disable=no-self-use
from flask_restful import Resource

from donation_manager.controllers.app_health import heartbeat


class Heartbeat( Resource ):
    """Flask-RESTful resource endpoint to test the heartbeat of the application."""

    def get( self ):
        """Endpoint to to see if the application is running."""

        return heartbeat(), 200
