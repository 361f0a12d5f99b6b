"""
Razorpay webhook handler
"""
from flask import Blueprint, jsonify, request

from pixelperfect.webhooks import WebhookReceiver

ALL_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def create_webhook_blueprint(receiver: WebhookReceiver) -> Blueprint:
    """Blueprint serving POST /api/webhook through ``receiver``"""
    webhook_bp = Blueprint('webhook', __name__)

    def razorpay_webhook():
        """Handle Razorpay webhook events"""
        # Raw bytes: the signature covers the body exactly as sent
        body, status = receiver.handle(request.method, request.headers, request.get_data())
        return jsonify(body), status

    # Every method reaches the receiver so non-POST gets its JSON 405
    razorpay_webhook.provide_automatic_options = False
    webhook_bp.add_url_rule('/api/webhook', view_func=razorpay_webhook, methods=ALL_METHODS)

    return webhook_bp
