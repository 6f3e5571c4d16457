"""
Routes module for CarLedger Flask blueprints.
"""

from .consumption import consumption_bp

__all__ = [
    "consumption_bp",
]


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(consumption_bp, url_prefix="/api")
