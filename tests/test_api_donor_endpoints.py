"""The module tests each Donor API endpoint to ensure a request is successfully made and valid data returned."""
import json
import unittest

from donation_manager.app import create_app
from donation_manager.flask_essentials import database
from donation_manager.models.donor import DonorModel
from donation_manager.schemas.donor import DonorSchema
from tests.helpers.default_dictionaries import get_donor_dict
from tests.helpers.jwt_tokens import get_manager_headers
from tests.helpers.model_helpers import create_donor
from tests.helpers.model_helpers import create_model_list


class APIDonorEndpointsTestCase( unittest.TestCase ):
    """This test suite is designed to verify the basic functionality of the API Donor endpoints.

    python -m unittest discover -v
    python -m unittest -v tests.test_api_donor_endpoints.APIDonorEndpointsTestCase
    python -m unittest -v tests.test_api_donor_endpoints.APIDonorEndpointsTestCase.test_create_donor
    """

    def setUp( self ):
        self.app = create_app( 'TEST' )
        self.app.testing = True
        self.test_client = self.app.test_client()
        self.headers = get_manager_headers( self.app )
        with self.app.app_context():
            database.drop_all()
            database.create_all()

    def tearDown( self ):
        with self.app.app_context():
            database.session.remove()
            database.drop_all()

    def test_create_donor( self ):
        """Create a donor ( methods = [ POST ] ): the running total starts at zero."""

        with self.app.app_context():
            payload = { 'firstName': ' A ', 'lastName': 'B', 'email': 'A@B.com' }
            response = self.test_client.post( '/api/donors', data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 201 )

            data = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data[ 'message' ], 'Donor created successfully' )
            donor = data[ 'donor' ]
            self.assertEqual( donor[ 'firstName' ], 'A' )
            self.assertEqual( donor[ 'email' ], 'a@b.com' )
            self.assertEqual( donor[ 'fullName' ], 'A B' )
            self.assertEqual( donor[ 'totalDonated' ], '0.00' )
            self.assertEqual( donor[ 'donorType' ], 'individual' )
            self.assertTrue( donor[ 'isActive' ] )
            self.assertIsNone( donor[ 'lastDonationDate' ] )

            self.assertEqual( DonorModel.query.count(), 1 )

    def test_create_donor_ignores_total( self ):
        """A client payload cannot write the running total."""

        with self.app.app_context():
            payload = get_donor_dict( { 'totalDonated': '999.00' } )
            response = self.test_client.post( '/api/donors', data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 201 )
            data = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data[ 'donor' ][ 'totalDonated' ], '0.00' )

    def test_create_donor_reports_every_field( self ):
        """All failed fields are reported together."""

        with self.app.app_context():
            payload = { 'firstName': '', 'email': 'not-an-email', 'donorType': 'alien' }
            response = self.test_client.post( '/api/donors', data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 400 )

            errors = json.loads( response.data.decode( 'utf-8' ) )[ 'errors' ]
            fields = { error[ 'field' ] for error in errors }
            self.assertEqual( fields, { 'firstName', 'lastName', 'email', 'donorType' } )
            self.assertEqual( DonorModel.query.count(), 0 )

    def test_create_donor_duplicate_email( self ):
        """The email is unique without regard to case, across active and inactive donors."""

        with self.app.app_context():
            create_donor( { 'email': 'ada@example.com', 'isActive': False } )

            payload = get_donor_dict( { 'email': 'ADA@example.com' } )
            response = self.test_client.post( '/api/donors', data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 409 )
            self.assertEqual( DonorModel.query.count(), 1 )

    def test_get_donor( self ):
        """Retrieve a donor given the ID ( methods = [ GET ] )."""

        with self.app.app_context():
            donor = create_donor()
            url = '/api/donors/{}'.format( donor.id )

            response = self.test_client.get( url, headers=self.headers )
            self.assertEqual( response.status_code, 200 )
            data = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data[ 'donor' ][ 'id' ], str( donor.id ) )
            self.assertEqual( data[ 'donor' ][ 'address' ][ 'zipCode' ], 'SW1Y 4JH' )

    def test_get_donor_errors( self ):
        """A malformed ID is a bad request; an unknown ID is not found."""

        with self.app.app_context():
            response = self.test_client.get( '/api/donors/not-a-uuid', headers=self.headers )
            self.assertEqual( response.status_code, 400 )
            self.assertEqual( json.loads( response.data.decode( 'utf-8' ) )[ 'message' ], 'Invalid donor ID.' )

            response = self.test_client.get(
                '/api/donors/00000000-0000-0000-0000-000000000000', headers=self.headers
            )
            self.assertEqual( response.status_code, 404 )
            self.assertEqual( json.loads( response.data.decode( 'utf-8' ) )[ 'message' ], 'Donor not found.' )

    def test_update_donor( self ):
        """Update only the fields provided ( methods = [ PUT ] )."""

        with self.app.app_context():
            donor = create_donor()
            url = '/api/donors/{}'.format( donor.id )

            payload = { 'phone': '555-0199', 'tags': [ 'board' ] }
            response = self.test_client.put( url, data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 200 )

            data = json.loads( response.data.decode( 'utf-8' ) )[ 'donor' ]
            self.assertEqual( data[ 'phone' ], '555-0199' )
            self.assertEqual( data[ 'tags' ], [ 'board' ] )
            self.assertEqual( data[ 'firstName' ], 'Ada' )

    def test_update_donor_email_in_use( self ):
        """Moving a donor onto the email of another donor is a conflict."""

        with self.app.app_context():
            create_donor( { 'email': 'first@example.com' } )
            second = create_donor( { 'email': 'second@example.com' } )
            url = '/api/donors/{}'.format( second.id )

            payload = { 'email': 'First@Example.com' }
            response = self.test_client.put( url, data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 409 )

            second = DonorModel.query.filter_by( id=second.id ).one()
            self.assertEqual( second.email, 'second@example.com' )

    def test_delete_donor_is_soft( self ):
        """Deleting a donor deactivates it and keeps the record ( methods = [ DELETE ] )."""

        with self.app.app_context():
            donor = create_donor()
            url = '/api/donors/{}'.format( donor.id )

            response = self.test_client.delete( url, headers=self.headers )
            self.assertEqual( response.status_code, 200 )
            self.assertEqual(
                json.loads( response.data.decode( 'utf-8' ) )[ 'message' ], 'Donor deactivated successfully'
            )

            response = self.test_client.get( url, headers=self.headers )
            self.assertEqual( response.status_code, 200 )
            self.assertFalse( json.loads( response.data.decode( 'utf-8' ) )[ 'donor' ][ 'isActive' ] )
            self.assertEqual( DonorModel.query.count(), 1 )

    def test_get_donors_search_and_sort( self ):
        """Search matches first name, last name or email without regard to case; sorted by last then first name."""

        with self.app.app_context():
            create_donor( { 'firstName': 'Zed', 'lastName': 'Alpha', 'email': 'zed@example.com' } )
            create_donor( { 'firstName': 'Amy', 'lastName': 'Alpha', 'email': 'amy@example.com' } )
            create_donor( { 'firstName': 'Bob', 'lastName': 'Beta', 'email': 'bob@smith.org' } )
            create_donor( { 'firstName': 'Cat', 'lastName': 'Smithers', 'email': 'cat@example.com' } )

            response = self.test_client.get( '/api/donors', headers=self.headers )
            names = [ item[ 'fullName' ] for item in json.loads( response.data.decode( 'utf-8' ) )[ 'items' ] ]
            self.assertEqual( names, [ 'Amy Alpha', 'Zed Alpha', 'Bob Beta', 'Cat Smithers' ] )

            response = self.test_client.get( '/api/donors?search=SMITH', headers=self.headers )
            names = [ item[ 'fullName' ] for item in json.loads( response.data.decode( 'utf-8' ) )[ 'items' ] ]
            self.assertEqual( names, [ 'Bob Beta', 'Cat Smithers' ] )

            # Wildcard characters in the term are matched literally.
            for term in ( '%25', '_', '%25_%25' ):
                response = self.test_client.get( '/api/donors?search={}'.format( term ), headers=self.headers )
                data = json.loads( response.data.decode( 'utf-8' ) )
                self.assertEqual( data[ 'pagination' ][ 'totalItems' ], 0 )

            create_donor( { 'firstName': 'Dee', 'lastName': 'Under_Score', 'email': 'dee@example.com' } )
            response = self.test_client.get( '/api/donors?search=r_s', headers=self.headers )
            names = [ item[ 'fullName' ] for item in json.loads( response.data.decode( 'utf-8' ) )[ 'items' ] ]
            self.assertEqual( names, [ 'Dee Under_Score' ] )

    def test_get_donors_filters( self ):
        """Filter by donor type and active flag."""

        with self.app.app_context():
            create_donor( { 'email': 'one@example.com', 'donorType': 'corporate' } )
            create_donor( { 'email': 'two@example.com', 'donorType': 'corporate', 'isActive': False } )
            create_donor( { 'email': 'three@example.com', 'donorType': 'foundation' } )

            response = self.test_client.get( '/api/donors?donorType=corporate&isActive=true', headers=self.headers )
            data = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data[ 'pagination' ][ 'totalItems' ], 1 )
            self.assertEqual( data[ 'items' ][ 0 ][ 'email' ], 'one@example.com' )

    def test_get_donors_pagination( self ):
        """totalPages is the ceiling of totalItems over the page size, and a page past the end is empty."""

        with self.app.app_context():
            donors = create_model_list(
                DonorSchema(), get_donor_dict( { 'email': 'donor{}@example.com' } ), 23, iterate_over_key='email'
            )
            database.session.add_all( donors )
            database.session.commit()

            response = self.test_client.get( '/api/donors?page=3&limit=10', headers=self.headers )
            data = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( len( data[ 'items' ] ), 3 )
            self.assertEqual(
                data[ 'pagination' ],
                { 'currentPage': 3, 'totalPages': 3, 'totalItems': 23, 'itemsPerPage': 10 }
            )

            response = self.test_client.get( '/api/donors?page=4&limit=10', headers=self.headers )
            self.assertEqual( response.status_code, 200 )
            data = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data[ 'items' ], [] )
            self.assertEqual( data[ 'pagination' ][ 'totalPages' ], 3 )

            for limit, total_pages in ( ( 1, 23 ), ( 7, 4 ), ( 23, 1 ), ( 100, 1 ) ):
                response = self.test_client.get( '/api/donors?limit={}'.format( limit ), headers=self.headers )
                pagination = json.loads( response.data.decode( 'utf-8' ) )[ 'pagination' ]
                self.assertEqual( pagination[ 'totalPages' ], total_pages )

    def test_get_donors_improper_query_string( self ):
        """Every improper parameter is listed."""

        with self.app.app_context():
            response = self.test_client.get(
                '/api/donors?page=0&limit=500&donorType=alien&isActive=maybe', headers=self.headers
            )
            self.assertEqual( response.status_code, 400 )
            errors = json.loads( response.data.decode( 'utf-8' ) )[ 'errors' ]
            self.assertEqual(
                { error[ 'field' ] for error in errors }, { 'page', 'limit', 'donorType', 'isActive' }
            )


if __name__ == '__main__':
    unittest.main()
