"""
API Blueprint - contact form, subscription checkout and checkout config

Endpoints called by the site's JavaScript:
- POST /api/contact
- POST /api/create-subscription
- POST /api/payment-confirmation
- GET  /api/checkout-config
"""
import logging
import re
from datetime import datetime, timezone

from flask import Blueprint, jsonify, request

from pixelperfect.config import Settings
from pixelperfect.errors import ConfigurationError, GatewayError
from pixelperfect.models import ContactSubmission
from pixelperfect.services.notification_service import Notifier
from pixelperfect.services.razorpay_service import SubscriptionGateway
from pixelperfect.webhooks.signature import verify_payment_signature

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def _now():
    return datetime.now(timezone.utc).isoformat()


def _json_object():
    """Request body as a dict; anything else counts as an empty body"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _client_ip():
    return request.headers.get('X-Forwarded-For') or request.remote_addr


def create_api_blueprint(settings: Settings, gateway: SubscriptionGateway, notifier: Notifier) -> Blueprint:
    api_bp = Blueprint('api', __name__, url_prefix='/api')

    # ============ Contact ============

    @api_bp.route('/contact', methods=['POST'])
    def contact():
        """Contact form submission"""
        data = _json_object()
        name = str(data.get('name') or '').strip()
        email = str(data.get('email') or '').strip()
        message = str(data.get('message') or '').strip()

        if not name or not email or not message:
            return jsonify({
                'error': 'Missing required fields',
                'message': 'Name, email, and message are required'
            }), 400

        if not EMAIL_RE.match(email):
            return jsonify({
                'error': 'Invalid email format',
                'message': 'Please provide a valid email address'
            }), 400

        submission = ContactSubmission(name=name, email=email, message=message, ip_address=_client_ip())
        try:
            logger.info('Contact form data: %s', submission.summary())
            notifier.notify('contact_submission', submission.summary(limit=2000))
        except Exception:
            logger.exception('Contact form processing error')
            return jsonify({
                'error': 'Internal server error',
                'message': 'Failed to send message. Please try again or contact us directly.',
                'timestamp': _now()
            }), 500

        return jsonify({
            'success': True,
            'message': 'Your message has been sent successfully. We will get back to you soon!',
            'timestamp': _now()
        })

    # ============ Subscriptions ============

    @api_bp.route('/create-subscription', methods=['POST'])
    def create_subscription():
        """Create a Razorpay subscription for the checkout widget"""
        if not settings.gateway.configured:
            logger.error('Razorpay credentials not configured')
            return jsonify({
                'error': 'Configuration error',
                'message': 'Payment system not properly configured'
            }), 500

        data = _json_object()
        plan_id = data.get('plan_id')
        plan_type = data.get('plan_type')
        if not plan_id and isinstance(plan_type, str):
            plan_id = settings.plan_id_for(plan_type)
        if not plan_id or not isinstance(plan_id, str):
            return jsonify({
                'error': 'Missing plan_id',
                'message': 'Plan ID is required to create subscription'
            }), 400

        notes = {
            'created_by': f'{settings.company_name} Website',
            'website': request.host or settings.site_host,
            'timestamp': _now(),
        }
        if isinstance(data.get('notes'), dict):
            notes.update(data['notes'])
        options = {
            'customer_notify': data.get('customer_notify', 1),
            'total_count': settings.gateway.total_count,
            'notes': notes,
        }

        logger.info('Creating subscription for plan %s', plan_id)
        try:
            subscription = gateway.create_subscription(plan_id, options)
        except GatewayError as e:
            logger.error('Razorpay API error %s: %s', e.status_code, e.description)
            return jsonify({
                'error': 'Razorpay API Error',
                'message': e.description,
                'code': e.code,
                'details': e.error
            }), e.status_code
        except Exception:
            logger.exception('Subscription creation error')
            return jsonify({
                'error': 'Internal server error',
                'message': 'Failed to create subscription. Please try again.',
                'timestamp': _now()
            }), 500

        logger.info('Subscription created successfully: %s', subscription.get('id'))
        return jsonify({
            'success': True,
            'subscription_id': subscription.get('id'),
            'status': subscription.get('status'),
            'plan_id': subscription.get('plan_id'),
            'customer_notify': subscription.get('customer_notify'),
            'created_at': subscription.get('created_at'),
            'notes': subscription.get('notes')
        })

    @api_bp.route('/payment-confirmation', methods=['POST'])
    def payment_confirmation():
        """Verify the signature the checkout widget hands back after payment"""
        data = _json_object()
        payment_id = data.get('payment_id')
        subscription_id = data.get('subscription_id')
        signature = data.get('signature')

        fields = (payment_id, subscription_id, signature)
        if not all(field and isinstance(field, str) for field in fields):
            return jsonify({
                'error': 'Missing required fields',
                'message': 'payment_id, subscription_id and signature are required'
            }), 400

        try:
            verified = verify_payment_signature(
                payment_id, subscription_id, signature, settings.gateway.key_secret
            )
        except ConfigurationError as e:
            logger.error('Payment confirmation rejected: %s', e)
            return jsonify({'error': 'Configuration error', 'message': str(e)}), 500

        if not verified:
            logger.warning('Invalid payment signature for %s', payment_id)
            return jsonify({'error': 'Invalid payment signature'}), 400

        logger.info('Payment %s confirmed for subscription %s (%s plan)',
                    payment_id, subscription_id, data.get('plan_type') or 'unknown')
        return jsonify({
            'success': True,
            'verified': True,
            'payment_id': payment_id,
            'subscription_id': subscription_id,
            'plan_type': data.get('plan_type'),
            'timestamp': _now()
        })

    @api_bp.route('/checkout-config', methods=['GET'])
    def checkout_config():
        """Public values the checkout page needs"""
        return jsonify({
            'key_id': settings.gateway.key_id,
            'company_name': settings.company_name,
            'company_email': settings.company_email,
            'webhook_url': '/api/webhook',
            'plans': [plan.to_dict() for plan in settings.plans.values()]
        })

    return api_bp
