"""
CarLedger - Flask Application

Serves fuel/energy consumption reports computed from ledger rows
supplied by the reporting layer.
"""

import logging
import os

from flask import Flask, jsonify

from .config import Config
from .extensions import cache, limiter
from .routes import register_blueprints
from .utils.error_codes import ErrorCode

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)
Config.validate()
app.config.from_object(Config)


def init_cache(app):
    """Initialize cache based on environment."""
    if app.config.get('TESTING') or os.environ.get('FLASK_TESTING'):
        cache.init_app(app, config={'CACHE_TYPE': 'NullCache'})
    else:
        cache.init_app(app, config={
            'CACHE_TYPE': 'SimpleCache',
            'CACHE_DEFAULT_TIMEOUT': Config.CACHE_TIMEOUT_SECONDS
        })


init_cache(app)
limiter.init_app(app)
register_blueprints(app)


@app.route('/health', methods=['GET'])
@limiter.exempt
def health():
    """Liveness check."""
    return jsonify({'status': 'ok'})


@app.errorhandler(404)
def not_found(error):
    return jsonify({'error': 'Not found'}), 404


@app.errorhandler(500)
def internal_error(error):
    logger.error(f"Unhandled error: {error}")
    return jsonify({'error': 'Internal server error', 'error_code': ErrorCode.E500_INTERNAL_SERVER_ERROR.value}), 500


if __name__ == '__main__':
    app.run(host=Config.FLASK_HOST, port=Config.FLASK_PORT, debug=Config.DEBUG)
