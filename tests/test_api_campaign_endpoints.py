"""The module tests each Campaign API endpoint to ensure a request is successfully made and valid data returned."""
import json
import unittest
from datetime import datetime
from datetime import timedelta

from donation_manager.app import create_app
from donation_manager.flask_essentials import database
from donation_manager.models.campaign import CampaignModel
from tests.helpers.default_dictionaries import get_campaign_dict
from tests.helpers.jwt_tokens import get_manager_headers
from tests.helpers.jwt_tokens import MANAGER_IDENTITY
from tests.helpers.model_helpers import create_campaign
from tests.helpers.model_helpers import create_donation
from tests.helpers.model_helpers import create_donor


class APICampaignEndpointsTestCase( unittest.TestCase ):
    """This test suite is designed to verify the basic functionality of the API Campaign endpoints.

    python -m unittest discover -v
    python -m unittest -v tests.test_api_campaign_endpoints.APICampaignEndpointsTestCase
    python -m unittest -v tests.test_api_campaign_endpoints.APICampaignEndpointsTestCase.test_create_campaign
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

    def test_create_campaign( self ):
        """Create a campaign ( methods = [ POST ] ): the caller is the organizer."""

        with self.app.app_context():
            payload = get_campaign_dict( { 'currentAmount': '500.00' } )
            response = self.test_client.post( '/api/campaigns', data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 201 )

            data = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data[ 'message' ], 'Campaign created successfully' )
            campaign = data[ 'campaign' ]
            self.assertEqual( campaign[ 'organizer' ], MANAGER_IDENTITY )
            self.assertEqual( campaign[ 'currentAmount' ], '0.00' )
            self.assertEqual( campaign[ 'goal' ], '10000.00' )
            self.assertEqual( campaign[ 'progressPercentage' ], 0.0 )
            self.assertTrue( campaign[ 'isActive' ] )
            self.assertGreater( campaign[ 'daysRemaining' ], 0 )

    def test_create_campaign_dates( self ):
        """A start date after the end date is rejected before anything is stored."""

        with self.app.app_context():
            payload = get_campaign_dict( { 'startDate': '2025-06-01', 'endDate': '2025-01-01' } )
            response = self.test_client.post( '/api/campaigns', data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 400 )

            errors = json.loads( response.data.decode( 'utf-8' ) )[ 'errors' ]
            self.assertEqual( errors, [ { 'field': 'endDate', 'message': 'End date must be after start date.' } ] )
            self.assertEqual( CampaignModel.query.count(), 0 )

    def test_create_campaign_improper_fields( self ):
        """Name, description, goal and category are all checked."""

        with self.app.app_context():
            payload = get_campaign_dict( { 'name': 'ab', 'description': 'short', 'goal': '0', 'category': 'sports' } )
            response = self.test_client.post( '/api/campaigns', data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 400 )

            errors = json.loads( response.data.decode( 'utf-8' ) )[ 'errors' ]
            self.assertEqual(
                { error[ 'field' ] for error in errors }, { 'name', 'description', 'goal', 'category' }
            )

    def test_create_campaign_goal_bounds( self ):
        """A goal with more than two places or too large for the column is rejected, not rounded."""

        with self.app.app_context():
            for goal in ( '1000.001', '99999999999.99' ):
                payload = get_campaign_dict( { 'goal': goal } )
                response = self.test_client.post( '/api/campaigns', data=json.dumps( payload ), headers=self.headers )
                self.assertEqual( response.status_code, 400 )
                errors = json.loads( response.data.decode( 'utf-8' ) )[ 'errors' ]
                self.assertEqual( [ error[ 'field' ] for error in errors ], [ 'goal' ] )
            self.assertEqual( CampaignModel.query.count(), 0 )

            payload = get_campaign_dict( { 'goal': '9999999999.99' } )
            response = self.test_client.post( '/api/campaigns', data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 201 )
            self.assertEqual( json.loads( response.data.decode( 'utf-8' ) )[ 'campaign' ][ 'goal' ], '9999999999.99' )

    def test_update_campaign_checks_merged_dates( self ):
        """A start date moved past the stored end date is rejected ( methods = [ PUT ] )."""

        with self.app.app_context():
            campaign = create_campaign()
            url = '/api/campaigns/{}'.format( campaign.id )

            payload = { 'startDate': '2031-01-01T00:00:00' }
            response = self.test_client.put( url, data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 400 )

            campaign = CampaignModel.query.filter_by( id=campaign.id ).one()
            self.assertEqual( campaign.start_date, datetime( 2024, 1, 1 ) )

            payload = { 'status': 'paused', 'isFeatured': True }
            response = self.test_client.put( url, data=json.dumps( payload ), headers=self.headers )
            self.assertEqual( response.status_code, 200 )
            data = json.loads( response.data.decode( 'utf-8' ) )[ 'campaign' ]
            self.assertEqual( data[ 'status' ], 'paused' )
            self.assertTrue( data[ 'isFeatured' ] )
            self.assertFalse( data[ 'isActive' ] )

    def test_get_campaign( self ):
        """Retrieve a campaign given the ID ( methods = [ GET ] )."""

        with self.app.app_context():
            campaign = create_campaign( current_amount='2500.00' )

            response = self.test_client.get( '/api/campaigns/{}'.format( campaign.id ), headers=self.headers )
            self.assertEqual( response.status_code, 200 )
            data = json.loads( response.data.decode( 'utf-8' ) )[ 'campaign' ]
            self.assertEqual( data[ 'name' ], 'School Library Fund' )
            self.assertEqual( data[ 'progressPercentage' ], 25.0 )

            response = self.test_client.get( '/api/campaigns/123', headers=self.headers )
            self.assertEqual( response.status_code, 400 )

    def test_get_campaigns_filters( self ):
        """Filter by status, category and flags; newest first."""

        with self.app.app_context():
            now = datetime( 2024, 6, 1 )
            create_campaign( { 'name': 'Oldest', 'category': 'arts' }, created_at=now - timedelta( days=3 ) )
            create_campaign( { 'name': 'Middle', 'status': 'draft' }, created_at=now - timedelta( days=2 ) )
            create_campaign( { 'name': 'Newest', 'isFeatured': True }, created_at=now - timedelta( days=1 ) )

            response = self.test_client.get( '/api/campaigns', headers=self.headers )
            names = [ item[ 'name' ] for item in json.loads( response.data.decode( 'utf-8' ) )[ 'items' ] ]
            self.assertEqual( names, [ 'Newest', 'Middle', 'Oldest' ] )

            response = self.test_client.get( '/api/campaigns?status=active&category=education', headers=self.headers )
            names = [ item[ 'name' ] for item in json.loads( response.data.decode( 'utf-8' ) )[ 'items' ] ]
            self.assertEqual( names, [ 'Newest' ] )

            response = self.test_client.get( '/api/campaigns?isFeatured=false', headers=self.headers )
            names = [ item[ 'name' ] for item in json.loads( response.data.decode( 'utf-8' ) )[ 'items' ] ]
            self.assertEqual( names, [ 'Middle', 'Oldest' ] )

    def test_delete_campaign( self ):
        """A campaign with donations cannot be deleted; one without can ( methods = [ DELETE ] )."""

        with self.app.app_context():
            donor = create_donor()
            referenced = create_campaign( { 'name': 'Referenced' } )
            create_donation( donor, referenced, { 'paymentStatus': 'pending' } )
            unreferenced = create_campaign( { 'name': 'Unreferenced' } )

            response = self.test_client.delete( '/api/campaigns/{}'.format( referenced.id ), headers=self.headers )
            self.assertEqual( response.status_code, 409 )

            response = self.test_client.delete( '/api/campaigns/{}'.format( unreferenced.id ), headers=self.headers )
            self.assertEqual( response.status_code, 200 )
            self.assertEqual( [ campaign.name for campaign in CampaignModel.query.all() ], [ 'Referenced' ] )

    def test_campaign_stats_summary( self ):
        """Counts per status and category with the top and recent campaigns."""

        with self.app.app_context():
            create_campaign( { 'name': 'Draft one', 'status': 'draft' } )
            create_campaign( { 'name': 'Done one', 'status': 'completed', 'category': 'arts' }, current_amount='900' )
            create_campaign( { 'name': 'Live one' }, current_amount='100' )

            response = self.test_client.get( '/api/campaigns/stats/summary', headers=self.headers )
            self.assertEqual( response.status_code, 200 )
            data = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data[ 'totalCampaigns' ], 3 )
            self.assertEqual( data[ 'activeCampaigns' ], 1 )
            self.assertEqual( data[ 'completedCampaigns' ], 1 )
            self.assertEqual( data[ 'draftCampaigns' ], 1 )
            self.assertEqual(
                data[ 'categoryStats' ], [ { 'category': 'arts', 'count': 1 }, { 'category': 'education', 'count': 2 } ]
            )
            self.assertEqual( [ item[ 'name' ] for item in data[ 'topCampaigns' ] ], [ 'Done one', 'Live one' ] )
            self.assertEqual( len( data[ 'recentCampaigns' ] ), 3 )


if __name__ == '__main__':
    unittest.main()
