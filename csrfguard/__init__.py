from flask import Flask
from dotenv import load_dotenv

# Load environment variables early so config is available at import time
load_dotenv()

from csrfguard.config import config
from csrfguard.security import CSRFProtection

csrf = CSRFProtection()


def create_app(test_config: dict | None = None) -> Flask:
    """
    Application factory for the Flask app.
    Loads environment variables, configures CSRF protection,
    and registers the token blueprint.
    """
    # Re-initialize config to ensure latest .env values are loaded
    from csrfguard.config import Config
    global config
    config = Config()
    
    # Validate configuration
    config.validate()

    app = Flask(__name__)

    # Load configuration from config module
    app.config.update(config.as_flask_config())
    app.config["SECRET_KEY"] = config.SECRET_KEY or config.CSRF_SIGNING_KEY
    if test_config:
        app.config.update(test_config)

    # Initialize security features
    from csrfguard.security import init_security
    init_security(app, csrf)

    # Register blueprints
    from csrfguard.routes import csrf_bp
    from csrfguard.security.csrf import EXTENSION_KEY
    settings = app.extensions[EXTENSION_KEY].settings
    app.register_blueprint(csrf_bp, url_prefix=settings.token_route_prefix)

    return app
