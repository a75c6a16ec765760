"""Flask application factory."""
import os
import traceback

from flask import Flask, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from linkhub.database import init_db


def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into 'field: reason; ...'."""
    messages = []
    for err in error.errors():
        field = '.'.join(str(part) for part in err.get('loc', ()))
        message = err.get('msg', 'Invalid value')
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        messages.append(f"{field}: {message}" if field else message)
    return '; '.join(messages)


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Initialize Sentry for error tracking in production
    if app.config.get('SENTRY_DSN') and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            environment=app.config.get('ENV', 'production'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Edge config (reserved slugs, beta features) and background tasks
    from linkhub.services.edge_config import init_edge_config
    from linkhub.services.background import init_background_tasks
    init_edge_config(app)
    init_background_tasks(app)

    # Prometheus metrics instrumentation
    from linkhub.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # Production: Enable ProxyFix for HTTPS behind a reverse proxy
    if app.config.get('ENV') == 'production':
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    # Initialize database
    init_db(app)

    from linkhub.utils.icons import card_discover
    app.jinja_env.globals['card_discover'] = card_discover

    # Load the authenticated user before each request
    from linkhub.auth import load_user

    @app.before_request
    def before_request_handler():
        load_user()

    # Error Handlers
    from linkhub.exceptions import ApiError, SaasError

    @app.errorhandler(SaasError)
    def handle_saas_error(error):
        """Handle custom application exceptions."""
        if error.status_code >= 500:
            app.logger.error(f"SaasError [{error.status_code}]: {error.message}")
        else:
            app.logger.info(f"SaasError [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        api_error = ApiError('unprocessable_entity', format_validation_error(error))
        return jsonify(api_error.to_dict()), api_error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        api_error = ApiError('not_found', 'The requested endpoint does not exist.')
        return jsonify(api_error.to_dict()), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        api_error = ApiError('bad_request', f"Method {request.method} is not allowed on this endpoint.")
        return jsonify(api_error.to_dict()), 405

    @app.errorhandler(500)
    @app.errorhandler(Exception)
    def internal_error(error):
        from linkhub.exceptions import internal_error as wrap_internal_error
        if isinstance(error, HTTPException) and error.code < 500:
            return jsonify(ApiError('bad_request', error.description).to_dict()), error.code
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        api_error = wrap_internal_error(error)
        return jsonify(api_error.to_dict()), 500

    # Register blueprints
    from linkhub.blueprints.workspaces import workspaces_bp
    from linkhub.blueprints.partners import partners_bp
    from linkhub.blueprints.programs import programs_bp
    from linkhub.blueprints.metrics import metrics_bp

    app.register_blueprint(workspaces_bp)
    app.register_blueprint(partners_bp)
    app.register_blueprint(programs_bp)
    app.register_blueprint(metrics_bp)

    # Register CLI commands
    from linkhub.cli_commands import init_cli_commands
    init_cli_commands(app)

    return app
