"""
Event Dispatcher Tests
"""
import pytest

from pixelperfect.models import HandlerResult, HandlerStatus
from pixelperfect.webhooks.dispatcher import (
    SUBSCRIPTION_HANDLERS,
    EventDispatcher,
    handle_subscription_activated,
    handle_subscription_charged,
)

KNOWN_EVENTS = [
    'subscription.authenticated',
    'subscription.activated',
    'subscription.charged',
    'subscription.paused',
    'subscription.resumed',
    'subscription.pending',
    'subscription.halted',
    'subscription.cancelled',
    'subscription.completed',
    'subscription.updated',
]

PAYLOAD = {
    'subscription': {'entity': {'id': 'sub_123', 'status': 'active'}},
    'payment': {'entity': {'id': 'pay_789', 'amount': 4900}},
}


class TestRegistry:
    """Registry of known events"""

    def test_registry_covers_known_events(self):
        assert sorted(SUBSCRIPTION_HANDLERS) == sorted(KNOWN_EVENTS)

    def test_default_dispatcher_uses_registry(self):
        assert sorted(EventDispatcher().events) == sorted(KNOWN_EVENTS)

    def test_dispatchers_do_not_share_registry(self):
        first = EventDispatcher()
        first.register('payment.captured', lambda payload: None)
        assert 'payment.captured' not in EventDispatcher().events
        assert 'payment.captured' not in SUBSCRIPTION_HANDLERS


class TestDispatch:
    """Dispatch is total over event names"""

    @pytest.mark.parametrize('event', KNOWN_EVENTS)
    def test_known_events_succeed(self, event):
        result = EventDispatcher().dispatch(event, PAYLOAD)
        assert result.status == HandlerStatus.SUCCESS
        assert result.subscription_id == 'sub_123'

    @pytest.mark.parametrize('event', ['subscription.unknown_event', 'payment.captured', '', 'SUBSCRIPTION.ACTIVATED'])
    def test_unknown_events_ignored(self, event):
        result = EventDispatcher().dispatch(event, {})
        assert result.status == HandlerStatus.IGNORED
        assert result.to_dict() == {
            'status': 'ignored',
            'message': f'Event {event} received but not handled',
        }

    def test_registered_handler_is_used(self):
        dispatcher = EventDispatcher()
        dispatcher.register('payment.captured', lambda payload: HandlerResult(
            status=HandlerStatus.SUCCESS, message='captured', payment_id=payload['id']))

        result = dispatcher.dispatch('payment.captured', {'id': 'pay_1'})
        assert result.to_dict() == {'status': 'success', 'message': 'captured', 'payment_id': 'pay_1'}

    def test_custom_registry(self):
        dispatcher = EventDispatcher(handlers={})
        assert dispatcher.dispatch('subscription.activated', PAYLOAD).status == HandlerStatus.IGNORED


class TestHandlers:
    """Individual handlers"""

    def test_activated(self):
        result = handle_subscription_activated(PAYLOAD)
        assert result.to_dict() == {
            'status': 'success',
            'message': 'Subscription activated successfully',
            'subscription_id': 'sub_123',
        }

    def test_charged_reports_payment_and_amount_in_rupees(self):
        result = handle_subscription_charged(PAYLOAD)
        assert result.payment_id == 'pay_789'
        assert result.subscription_id == 'sub_123'
        assert result.amount == 49.0
        assert result.message == 'Payment recorded successfully'

    def test_charged_requires_payment_entity(self):
        with pytest.raises(KeyError):
            handle_subscription_charged({'subscription': PAYLOAD['subscription']})

    def test_missing_subscription_raises(self):
        with pytest.raises(KeyError):
            handle_subscription_activated({})
