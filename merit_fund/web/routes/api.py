from flask import Blueprint, jsonify, request
import logging

from ..services.app_services import AppServices, get_services
from ..utils.error_handlers import ServiceError

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


def state_payload(services: AppServices) -> dict:
    return {
        'screen': services.navigation.current_screen.value,
        'showHistory': services.navigation.show_history,
        'session': services.session.goal.to_dict(),
        'pulses': len(services.feedback.pulses),
    }


@api_bp.route('/state')
def get_state():
    """Current screen and session."""
    return jsonify(state_payload(get_services()))


@api_bp.route('/events/<event>', methods=['POST'])
def post_event(event: str):
    """Dispatch a screen event; the JSON body carries form fields."""
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        raise ServiceError("Event payload must be a JSON object")

    services = get_services()
    accepted = services.navigation.dispatch(event, **payload)
    return jsonify({'success': True, 'accepted': accepted, **state_payload(services)})


@api_bp.route('/save', methods=['POST'])
def post_save():
    """Shortcut for the save event."""
    return post_event('save')


@api_bp.route('/history')
def get_history():
    history = get_services().history
    summary = history.summary()
    return jsonify({
        'entries': [entry.to_dict() for entry in history.all()],
        'summary': {
            'count': summary.count,
            'totalAmount': summary.total_amount,
            'totalDays': summary.total_days,
        }
    })


@api_bp.route('/history/<entry_id>', methods=['DELETE'])
def delete_history_entry(entry_id: str):
    if not get_services().navigation.remove_history_entry(entry_id):
        raise ServiceError(f"History entry not found: {entry_id}", 404)
    return jsonify({'success': True})
