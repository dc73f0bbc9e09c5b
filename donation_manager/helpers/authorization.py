"""Classify the caller from the bearer token: unauthenticated, authenticated or manager."""
from functools import wraps

from flask_jwt_extended import get_jwt
from flask_jwt_extended import get_jwt_identity
from flask_jwt_extended import verify_jwt_in_request

from donation_manager.exceptions.exception_jwt import JWTManagerRequiredError

MANAGER_ROLES = ( 'manager', 'admin' )


def is_manager():
    """True when the roles claim of the verified token holds a manager role."""

    roles = get_jwt().get( 'roles' ) or []
    if isinstance( roles, str ):
        roles = [ roles ]
    return any( role in MANAGER_ROLES for role in roles )


def get_actor():
    """The identity of the verified token: recorded as processed_by and organizer on writes."""

    identity = get_jwt_identity()
    return str( identity ) if identity is not None else None


def authenticated_required( function ):
    """Decorator for endpoints that any authenticated caller may use."""

    @wraps( function )
    def wrapper( *args, **kwargs ):
        verify_jwt_in_request()
        return function( *args, **kwargs )

    return wrapper


def manager_required( function ):
    """Decorator for endpoints that only a manager may use."""

    @wraps( function )
    def wrapper( *args, **kwargs ):
        verify_jwt_in_request()
        if not is_manager():
            raise JWTManagerRequiredError()
        return function( *args, **kwargs )

    return wrapper
