"""The main application module with create_app(), resources and error handlers."""
import importlib
import logging
from logging.config import dictConfig
import os

from flask import Flask
from flask import jsonify
from flask_restful import Api
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from donation_manager.exceptions.exception_jwt import JWTManagerRequiredError
from donation_manager.exceptions.exception_model import ModelConflictError
from donation_manager.exceptions.exception_model import ModelImproperFieldError
from donation_manager.exceptions.exception_model import ModelNotFoundError
from donation_manager.exceptions.exception_query_string import QueryStringImproperError
from donation_manager.exceptions.exception_uuid import UUIDMalformedError
from donation_manager.flask_essentials import database
from donation_manager.flask_essentials import jwt
from donation_manager.flask_essentials import marshmallow
from donation_manager.helpers.general_helper_functions import json_default
from donation_manager.logging_configuration import get_logging_configuration
from donation_manager.resources.analytics import CampaignAnalytics
from donation_manager.resources.analytics import Dashboard
from donation_manager.resources.analytics import DonationAnalytics
from donation_manager.resources.analytics import DonorAnalytics
from donation_manager.resources.app_health import Heartbeat
from donation_manager.resources.campaign import CampaignById
from donation_manager.resources.campaign import Campaigns
from donation_manager.resources.campaign import CampaignStatsSummary
from donation_manager.resources.donation import DonationById
from donation_manager.resources.donation import Donations
from donation_manager.resources.donation import DonationStatsSummary
from donation_manager.resources.donor import DonorById
from donation_manager.resources.donor import Donors
# pylint: disable=too-many-locals
# pylint: disable=too-many-statements

SERVER_ERROR_MESSAGE = 'Server error'


def create_app( app_config_env=None ):
    """Application factory.

    Allows the application to be instantiated with a specific configuration, e.g. configurations for development,
    testing, and production. Implements a configuration loader to augment the Flask app.config() in loading these
    configurations. Supports YAML and tagged environment variables. Manages the application logging level.

    :param str app_config_env: The configuration name to use in loading the configuration variables.
    :return: The Flask application.
    """

    # Set the ENV variable in the Dockerfile. If we can't find a value set the app_config_env to DEFAULT.
    if not app_config_env:
        app_config_env = os.environ.get( 'APP_ENV', 'DEFAULT' )

    # See if the default logging should be set to DEBUG instead of WARNING.
    override_logging = 'OVERRIDE_LOGGING' in os.environ

    app = Flask( 'donation_manager' )

    configuration_package = importlib.import_module( 'configuration' )
    configuration_module = importlib.import_module( '.config_loader', package='configuration' )
    conf_root = os.path.dirname( configuration_package.__file__ )
    configuration = configuration_module.ConfigLoader()
    configuration.update_from_yaml_file( os.path.join( conf_root, 'conf.yml' ), app_config_env )
    configuration.update_from_env_variables( app_config_env )

    app.config.update( configuration )
    app.config.update( { 'ENV': app_config_env } )

    wsgi_log_level = 'WARNING'
    gunicorn_log_level = 'WARNING'
    # Set the level of the root logger.
    if app.config.get( 'WSGI_LOG_LEVEL' ):
        wsgi_log_level = app.config[ 'WSGI_LOG_LEVEL' ]
    if app.config.get( 'GUNICORN_LOG_LEVEL' ):
        gunicorn_log_level = app.config[ 'GUNICORN_LOG_LEVEL' ]
    if override_logging:
        wsgi_log_level = 'DEBUG'

    # If running gunicorn add gunicorn.error to handlers.
    gunicorn = 'gunicorn' in os.environ.get( 'SERVER_SOFTWARE', '' )

    dictConfig( get_logging_configuration( wsgi_log_level, gunicorn_log_level, gunicorn ) )
    logging.root.log( logging.root.level, '***** Logging is enabled for this level.' )
    logging.root.log( logging.root.level, '***** app.config[ ENV ]                    : %s', app_config_env )
    logging.root.log( logging.root.level, '***** app.config[ MYSQL_DATABASE ]         : %s',
                      app.config.get( 'MYSQL_DATABASE' ) )

    database.init_app( app )
    marshmallow.init_app( app )
    jwt.init_app( app )
    # Absolutely needed for the application error handlers to see exceptions raised inside the resources.
    app.config.update( PROPAGATE_EXCEPTIONS=True )
    app.config.update( RESTFUL_JSON={ 'default': json_default } )

    api = Api( app )

    api.add_resource( Heartbeat, '/api/health' )
    api.add_resource( Donors, '/api/donors' )
    api.add_resource( DonorById, '/api/donors/<string:donor_id>' )
    api.add_resource( Campaigns, '/api/campaigns' )
    api.add_resource( CampaignStatsSummary, '/api/campaigns/stats/summary' )
    api.add_resource( CampaignById, '/api/campaigns/<string:campaign_id>' )
    api.add_resource( Donations, '/api/donations' )
    api.add_resource( DonationStatsSummary, '/api/donations/stats/summary' )
    api.add_resource( DonationById, '/api/donations/<string:donation_id>' )
    api.add_resource( Dashboard, '/api/analytics/dashboard' )
    api.add_resource( DonationAnalytics, '/api/analytics/donations' )
    api.add_resource( DonorAnalytics, '/api/analytics/donors' )
    api.add_resource( CampaignAnalytics, '/api/analytics/campaigns' )

    @app.after_request
    def after_request( response ):  # pylint: disable=unused-variable
        """A handler for defining response headers.

        :param response: an HTTP response object
        :return:
        """

        response.headers.add( 'Access-Control-Allow-Origin', app.config.get( 'CORS_ORIGIN', '*' ) )
        response.headers.add( 'Access-Control-Allow-Headers', 'Content-Type, Authorization' )
        response.headers.add( 'Access-Control-Allow-Methods', 'GET, PUT, POST, DELETE' )
        response.headers.add( 'Access-Control-Allow-Credentials', 'true' )
        return response

    @jwt.unauthorized_loader
    def handle_missing_token( reason ):  # pylint: disable=unused-variable
        """No bearer token on the request."""

        logging.info( 'Unauthenticated request: %s', reason )
        return jsonify( { 'message': 'Authentication required.' } ), 401

    @jwt.invalid_token_loader
    def handle_invalid_token( reason ):  # pylint: disable=unused-variable
        """A bearer token that cannot be decoded or verified."""

        logging.info( 'Invalid token: %s', reason )
        return jsonify( { 'message': 'Invalid token.' } ), 401

    @jwt.expired_token_loader
    def handle_expired_token( jwt_header, jwt_payload ):  # pylint: disable=unused-variable,unused-argument
        """A bearer token past its expiry."""

        return jsonify( { 'message': 'Token has expired.' } ), 401

    @app.errorhandler( ModelImproperFieldError )
    @app.errorhandler( QueryStringImproperError )
    def handle_400_validation( error ):  # pylint: disable=unused-variable
        """HTTP status 400 ( bad request ) error handler for payloads and query strings that fail validation.

        :param error: Error raised by exception, with the list of field errors.
        :return:
        """

        logging.info( '%s %s', error.message, error.errors )
        response = jsonify( { 'message': error.message, 'errors': error.errors } )
        response.status_code = 400
        return response

    @app.errorhandler( UUIDMalformedError )
    def handle_400( error ):  # pylint: disable=unused-variable
        """HTTP status 400 ( bad request ) error handler.

         :param error: Error message raised by exception.
         :return:
         """

        response = jsonify( { 'message': handle_error_message( error ) } )
        response.status_code = 400
        return response

    @app.errorhandler( JWTManagerRequiredError )
    def handle_403( error ):  # pylint: disable=unused-variable
        """HTTP status 403 ( forbidden ) error handler.

         :param error: Error message raised by exception.
         :return:
         """

        response = jsonify( { 'message': handle_error_message( error ) } )
        response.status_code = 403
        return response

    @app.errorhandler( ModelNotFoundError )
    def handle_404( error ):  # pylint: disable=unused-variable
        """HTTP status 404 ( not found ) error handler.

        :param error: Error message raised by exception.
        :return:
        """

        response = jsonify( { 'message': handle_error_message( error ) } )
        response.status_code = 404
        return response

    @app.errorhandler( ModelConflictError )
    def handle_409( error ):  # pylint: disable=unused-variable
        """HTTP status 409 ( conflict ) error handler.

        :param error: Error message raised by exception.
        :return:
        """

        response = jsonify( { 'message': handle_error_message( error ) } )
        response.status_code = 409
        return response

    @app.errorhandler( HTTPException )
    def handle_http_exception( error ):  # pylint: disable=unused-variable
        """Routing errors raised by Flask, e.g. 404 for an unknown route or 405 for a method not allowed.

        :param error: The werkzeug HTTPException.
        :return:
        """

        response = jsonify( { 'message': error.description } )
        response.status_code = error.code
        return response

    @app.errorhandler( SQLAlchemyError )
    @app.errorhandler( Exception )
    def handle_500( error ):  # pylint: disable=unused-variable
        """HTTP status 500 ( internal server error ) error handler.

        The traceback is logged. Outside of production the response also carries the error text.

        :param error: Error message raised by exception.
        :return:
        """

        logging.exception( error )
        body = { 'message': SERVER_ERROR_MESSAGE }
        if app.config[ 'ENV' ] != 'PRODUCTION':
            body[ 'error' ] = str( error )
        response = jsonify( body )
        response.status_code = 500
        return response

    def handle_error_message( error ):
        """Used by error handlers for handling error and error.message.

        :param error: The error raised by the exception.
        :return: return the error message.
        """

        if hasattr( error, 'message' ):
            logging.info( error.message )
            return error.message
        logging.info( error.args )
        return str( error )

    return app
