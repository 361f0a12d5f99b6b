"""
Test Configuration and Fixtures
"""
import json

import pytest

from pixelperfect import create_app
from pixelperfect.webhooks.signature import compute_signature

WEBHOOK_SECRET = 'test-webhook-secret'


class RecordingNotifier:
    """Notifier that keeps what it was given"""

    def __init__(self):
        self.sent = []

    def notify(self, kind, data):
        self.sent.append((kind, dict(data)))


class FakeGateway:
    """Stands in for the Razorpay client"""

    def __init__(self):
        self.calls = []
        self.error = None

    def create_subscription(self, plan_id, options):
        self.calls.append((plan_id, options))
        if self.error is not None:
            raise self.error
        return {
            'id': 'sub_test_001',
            'status': 'created',
            'plan_id': plan_id,
            'customer_notify': options.get('customer_notify'),
            'created_at': 1700000000,
            'notes': options.get('notes'),
        }


class RecordingStore:
    def __init__(self):
        self.saved = []

    def save(self, event, payload):
        self.saved.append((event, payload))


def sign(body, secret=WEBHOOK_SECRET):
    """Razorpay-style signature for a raw body"""
    return compute_signature(secret, body)


def webhook_body(event, payload=None, created_at=1700000000):
    return json.dumps({'event': event, 'payload': payload or {}, 'created_at': created_at}).encode('utf-8')


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def config_overrides():
    """Overrides applied on top of TestingConfig"""
    return {
        'WEBHOOK_SECRET': WEBHOOK_SECRET,
        'PLANS': {
            'monthly': {
                'plan_id': 'plan_monthly_test',
                'name': 'Monthly Graphics Plan',
                'description': 'Monthly subscription for premium templates',
                'amount': 4900,
            },
            'annual': {
                'plan_id': '',
                'name': 'Annual Graphics Plan',
                'description': 'Annual subscription for premium templates',
                'amount': 29900,
            },
        },
    }


@pytest.fixture
def app(config_overrides, gateway, notifier, store):
    """Create application for testing"""
    app = create_app('testing', test_config=config_overrides, gateway=gateway, notifier=notifier, store=store)
    yield app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def post_webhook(client):
    """POST a raw body to the webhook with the given signature"""
    def _post(body, signature=None, method='POST'):
        headers = {'Content-Type': 'application/json'}
        if signature is not None:
            headers['X-Razorpay-Signature'] = signature
        return client.open('/api/webhook', method=method, data=body, headers=headers)
    return _post
