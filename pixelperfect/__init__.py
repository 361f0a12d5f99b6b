"""
PixelPerfect Graphix Application Factory
"""
import logging
from datetime import datetime, timezone

from flask import Flask, jsonify
from werkzeug.exceptions import InternalServerError, MethodNotAllowed

from pixelperfect.config import Settings, get_config


def configure_logging(app):
    """Set the package log level and quiet chatty client libraries"""
    level = str(app.config.get('LOG_LEVEL', 'INFO')).upper()
    app.logger.setLevel(getattr(logging, level, logging.INFO))

    for logger_name in ('boto3', 'botocore', 'urllib3'):
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def create_app(config_name='default', test_config=None, gateway=None, notifier=None, store=None):
    """
    Build the Flask app.

    ``gateway``, ``notifier`` and ``store`` replace the default collaborators
    (Razorpay client, logging notifier, no event store).
    """
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    if test_config:
        app.config.update(test_config)

    configure_logging(app)

    settings = Settings.from_mapping(app.config)
    for warning in settings.validate():
        app.logger.warning(warning)

    from pixelperfect.api import create_api_blueprint
    from pixelperfect.razorpay_webhook import create_webhook_blueprint
    from pixelperfect.services.notification_service import LoggingNotifier
    from pixelperfect.services.razorpay_service import RazorpayClient
    from pixelperfect.webhooks import EventDispatcher, WebhookReceiver

    notifier = notifier or LoggingNotifier()
    gateway = gateway or RazorpayClient(settings.gateway)
    receiver = WebhookReceiver(settings.webhook, EventDispatcher(), notifier, store=store)

    app.extensions['pixelperfect'] = settings

    # Register blueprints
    app.register_blueprint(create_api_blueprint(settings, gateway, notifier))
    app.register_blueprint(create_webhook_blueprint(receiver))

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(e):
        body = {'error': 'Method not allowed'}
        allowed = set(e.valid_methods or ()) - {'OPTIONS'}
        if allowed == {'POST'}:
            body['message'] = 'Only POST requests are allowed'
        return jsonify(body), 405

    @app.errorhandler(InternalServerError)
    def internal_error(e):
        return jsonify({
            'error': 'Internal server error',
            'timestamp': datetime.now(timezone.utc).isoformat()
        }), 500

    # Health check endpoint
    @app.route('/healthz')
    def healthz():
        """Health check for load balancers and monitoring"""
        return jsonify({
            "status": "ok",
            "version": app.config['APP_VERSION'],
            "payments": "configured" if settings.gateway.configured else "not configured",
            "webhook": "configured" if settings.webhook.secret else "not configured",
            "timestamp": datetime.now(timezone.utc).isoformat()
        })

    # Version endpoint
    @app.route('/version')
    def version():
        """Version and build info"""
        return jsonify({
            "version": app.config['APP_VERSION'],
            "build_time": app.config['BUILD_TIME'],
            "git_commit": app.config['GIT_COMMIT'],
            "features": {
                "subscriptions": True,
                "webhooks": True,
                "contact_form": True,
                "payment_confirmation": True,
            }
        })

    return app
