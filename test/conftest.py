"""
Pytest configuration and fixtures for testing.
"""
import os

import pytest
from flask import Blueprint, jsonify

from csrfguard import create_app
from csrfguard.security import csrf_exempt, generate_csrf, get_session_secret, get_verdict

SIGNING_KEY = 'sfndsfojoriwew09rjfjndsknfkj'
BASE_URL = 'http://localhost:3000'


def build_app(**overrides):
    """Create an application with a few views behind CSRF protection."""
    os.environ['FLASK_ENV'] = 'testing'
    os.environ['SECRET_KEY'] = SIGNING_KEY

    test_config = {
        'TESTING': True,
        'CSRF_SIGNING_KEY': SIGNING_KEY,
        # The test client talks plain HTTP
        'CSRF_COOKIE_SECURE': False,
        'CSRF_TRUSTED_ORIGINS': [],
        'CSRF_EXEMPT_PATHS': ['/webhooks/*'],
    }
    test_config.update(overrides)
    app = create_app(test_config)
    app.config['HANDLER_CALLS'] = []

    @app.route('/form', methods=['GET'])
    def render_form():
        return jsonify({'token': generate_csrf()})

    @app.route('/submit', methods=['POST', 'PUT', 'DELETE', 'PATCH'])
    def submit():
        app.config['HANDLER_CALLS'].append('submit')
        return jsonify({
            'success': True,
            'has_secret': get_session_secret() is not None,
            'verdict': get_verdict().reason,
        })

    @app.route('/webhooks/payment', methods=['POST'])
    def payment_webhook():
        app.config['HANDLER_CALLS'].append('payment_webhook')
        return jsonify({'success': True})

    @app.route('/hooks/decorated', methods=['POST'])
    @csrf_exempt
    def decorated_hook():
        app.config['HANDLER_CALLS'].append('decorated_hook')
        return jsonify({'success': True})

    partner_bp = Blueprint('partner', __name__)

    @partner_bp.route('/notify', methods=['POST'])
    def partner_notify():
        app.config['HANDLER_CALLS'].append('partner_notify')
        return jsonify({'success': True})

    csrf_exempt(partner_bp)
    app.register_blueprint(partner_bp, url_prefix='/partner')

    return app


@pytest.fixture(scope='function')
def app():
    """Create application for testing."""
    yield build_app()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def token(client):
    """Load the form once so the client holds a CSRF cookie, and return a token."""
    response = client.get('/form', base_url=BASE_URL)
    assert response.status_code == 200
    return response.get_json()['token']


@pytest.fixture
def make_app():
    """Factory for applications with extra configuration."""
    return build_app
