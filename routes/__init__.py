"""
Flask blueprints for the AIDOI portal API.
"""

from flask import Blueprint

# Create blueprints
auth_bp = Blueprint('auth', __name__)
portal_bp = Blueprint('portal', __name__)
admin_bp = Blueprint('admin', __name__)
# Import routes to register them
from . import auth
from . import aidois
from . import organizations
from . import account
from . import admin
