"""The following script will DROP ALL tables and then CREATE ALL.

Use with caution! It will remove all existing data, and then reconstruct the tables with no entries. Other functions
can be added to manage other database tasks. To run a function navigate to the project root and, for example, on the
command line type:

python -c "import scripts.manage_donation_db;scripts.manage_donation_db.drop_all_and_create()"
python -c "import scripts.manage_donation_db;scripts.manage_donation_db.create_database_tables()"
"""
import random
from datetime import timedelta
from decimal import Decimal

from donation_manager.app import create_app
from donation_manager.flask_essentials import database
from donation_manager.helpers.donation_totals import reconcile_totals
from donation_manager.helpers.general_helper_functions import generate_transaction_id
from donation_manager.helpers.general_helper_functions import utc_now
from donation_manager.models.campaign import CAMPAIGN_CATEGORIES
from donation_manager.models.donation import PAYMENT_METHODS
from donation_manager.models.donation import PAYMENT_STATUSES
from donation_manager.models.donor import DONOR_TYPES
from donation_manager.schemas.campaign import CampaignSchema
from donation_manager.schemas.donation import DonationSchema
from donation_manager.schemas.donor import DonorSchema
from tests.helpers.default_dictionaries import get_campaign_dict
from tests.helpers.default_dictionaries import get_donation_dict
from tests.helpers.default_dictionaries import get_donor_dict

app = create_app( 'DEV' )  # pylint: disable=C0103

TOTAL_DONORS = 50
TOTAL_CAMPAIGNS = 8
TOTAL_DONATIONS = 400


def drop_all_and_create():
    """A function to drop and then recreate the database tables."""

    with app.app_context():
        database.reflect()
        database.drop_all()
        database.create_all()


def create_database_tables():
    """Function to create the tables and fill them with donors, campaigns and a year of donations.

    The donations are spread over the last 365 days so that the monthly and daily trends have data. They are built
    directly and the running totals are then rebuilt with reconcile_totals(), which is also what the cron job does.
    """

    drop_all_and_create()

    with app.app_context():
        now = utc_now()

        donors = []
        for i in range( TOTAL_DONORS ):
            donor = DonorSchema().load( get_donor_dict( {
                'firstName': 'Donor{}'.format( i + 1 ),
                'lastName': 'Sample{}'.format( i % 7 ),
                'email': 'donor{}@example.com'.format( i + 1 ),
                'donorType': DONOR_TYPES[ i % len( DONOR_TYPES ) ]
            } ) )
            donor.created_at = now - timedelta( days=random.randint( 0, 365 ) )
            donors.append( donor )

        campaigns = []
        for i in range( TOTAL_CAMPAIGNS ):
            campaign = CampaignSchema().load( get_campaign_dict( {
                'name': 'Sample campaign {}'.format( i + 1 ),
                'goal': str( Decimal( 5000 * ( i + 1 ) ) ),
                'category': CAMPAIGN_CATEGORIES[ i % len( CAMPAIGN_CATEGORIES ) ],
                'status': 'completed' if i % 4 == 0 else 'active',
                'startDate': ( now - timedelta( days=365 ) ).isoformat(),
                'endDate': ( now + timedelta( days=30 * ( i + 1 ) ) ).isoformat()
            } ) )
            campaign.organizer = 'seed-script'
            campaigns.append( campaign )

        database.session.add_all( donors + campaigns )
        database.session.flush()

        for _ in range( TOTAL_DONATIONS ):
            donation = DonationSchema().load( get_donation_dict( {
                'donor': str( random.choice( donors ).id ),
                'campaign': str( random.choice( campaigns ).id ),
                'amount': str( Decimal( random.randint( 500, 50000 ) ) / 100 ),
                'paymentMethod': random.choice( PAYMENT_METHODS ),
                'paymentStatus': random.choice( PAYMENT_STATUSES + ( 'completed', 'completed' ) )
            } ) )
            donation.transaction_id = generate_transaction_id()
            donation.created_at = now - timedelta( days=random.randint( 0, 365 ), minutes=random.randint( 0, 1440 ) )
            donation.processed_by = 'seed-script'
            database.session.add( donation )

        database.session.commit()
        reconcile_totals()
