"""The module tests the health endpoint, the bearer token tiers and the error responses."""
import json
import unittest

import mock
from sqlalchemy.exc import OperationalError

from donation_manager.app import create_app
from donation_manager.flask_essentials import database
from tests.helpers.default_dictionaries import get_donor_dict
from tests.helpers.jwt_tokens import get_manager_headers
from tests.helpers.jwt_tokens import get_reader_headers


class APIOtherEndpointsTestCase( unittest.TestCase ):
    """This test suite is designed to verify authentication, authorization and the shared error handlers.

    python -m unittest -v tests.test_api_other_endpoints.APIOtherEndpointsTestCase
    """

    def setUp( self ):
        self.app = create_app( 'TEST' )
        self.app.testing = True
        self.test_client = self.app.test_client()
        with self.app.app_context():
            database.drop_all()
            database.create_all()

    def tearDown( self ):
        with self.app.app_context():
            database.session.remove()
            database.drop_all()

    def test_heartbeat( self ):
        """The health endpoint needs no token."""

        with self.app.app_context():
            response = self.test_client.get( '/api/health' )
            self.assertEqual( response.status_code, 200 )
            self.assertEqual( json.loads( response.data.decode( 'utf-8' ) )[ 'status' ], 'OK' )
            self.assertEqual( response.headers[ 'Access-Control-Allow-Origin' ], self.app.config[ 'CORS_ORIGIN' ] )

    def test_unauthenticated( self ):
        """No token, or a token that does not verify, is a 401."""

        with self.app.app_context():
            for url in ( '/api/donors', '/api/campaigns', '/api/donations', '/api/analytics/dashboard' ):
                response = self.test_client.get( url )
                self.assertEqual( response.status_code, 401 )

            headers = { 'Authorization': 'Bearer not.a.token' }
            response = self.test_client.get( '/api/donors', headers=headers )
            self.assertEqual( response.status_code, 401 )

    def test_reader_cannot_write( self ):
        """An authenticated caller without a manager role can read but not write."""

        with self.app.app_context():
            headers = get_reader_headers( self.app )

            response = self.test_client.get( '/api/donors', headers=headers )
            self.assertEqual( response.status_code, 200 )
            response = self.test_client.get( '/api/donations/stats/summary', headers=headers )
            self.assertEqual( response.status_code, 200 )

            response = self.test_client.post( '/api/donors', data=json.dumps( get_donor_dict() ), headers=headers )
            self.assertEqual( response.status_code, 403 )
            self.assertEqual(
                json.loads( response.data.decode( 'utf-8' ) )[ 'message' ], 'Manager access required.'
            )

            response = self.test_client.delete(
                '/api/campaigns/00000000-0000-0000-0000-000000000000', headers=headers
            )
            self.assertEqual( response.status_code, 403 )

    def test_admin_role_is_manager( self ):
        """The admin role counts as a manager."""

        with self.app.app_context():
            from tests.helpers.jwt_tokens import get_headers  # pylint: disable=import-outside-toplevel
            headers = get_headers( self.app, 'admin@example.com', [ 'admin' ] )
            response = self.test_client.post( '/api/donors', data=json.dumps( get_donor_dict() ), headers=headers )
            self.assertEqual( response.status_code, 201 )

    def test_payload_must_be_an_object( self ):
        """A body that is not a JSON object is a validation error."""

        with self.app.app_context():
            headers = get_manager_headers( self.app )
            response = self.test_client.post( '/api/donors', data='[ 1, 2 ]', headers=headers )
            self.assertEqual( response.status_code, 400 )
            errors = json.loads( response.data.decode( 'utf-8' ) )[ 'errors' ]
            self.assertEqual( errors[ 0 ][ 'field' ], 'payload' )

    def test_server_error( self ):
        """A database failure is a 500 with the generic message; outside production the error text is added."""

        with self.app.app_context():
            headers = get_manager_headers( self.app )
            with mock.patch(
                    'donation_manager.controllers.donor.paginate_query',
                    side_effect=OperationalError( 'SELECT', {}, Exception( 'database is locked' ) )
            ):
                response = self.test_client.get( '/api/donors', headers=headers )
            self.assertEqual( response.status_code, 500 )
            data = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data[ 'message' ], 'Server error' )
            self.assertIn( 'database is locked', data[ 'error' ] )

    def test_unknown_route( self ):
        """Routing errors keep their status."""

        with self.app.app_context():
            response = self.test_client.get( '/api/unknown' )
            self.assertEqual( response.status_code, 404 )


if __name__ == '__main__':
    unittest.main()
