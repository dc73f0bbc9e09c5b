"""Flask-RESTful resource base classes that apply the bearer token checks to their methods."""
# pylint: disable=too-few-public-methods
from flask_restful import Resource

from donation_manager.helpers.authorization import authenticated_required
from donation_manager.helpers.authorization import manager_required


class AuthenticatedResource( Resource ):
    """Every method needs a valid bearer token."""

    method_decorators = [ authenticated_required ]


class ManagerResource( Resource ):
    """Reads need a valid bearer token, writes need a manager token."""

    method_decorators = {
        'get': [ authenticated_required ],
        'post': [ manager_required ],
        'put': [ manager_required ],
        'delete': [ manager_required ]
    }
