from flask import Blueprint, render_template, request, redirect, url_for, current_app
import logging

from ..constants.icons import ICONS, DEFAULT_ICON, get_icon_glyph
from ..services.app_services import get_services
from ..services.navigation_service import Screen

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)

SCREEN_TEMPLATES = {
    Screen.WELCOME: 'welcome.html',
    Screen.SETUP: 'setup.html',
    Screen.SAVING: 'saving.html',
    Screen.SUCCESS: 'success.html',
}


@main_bp.app_context_processor
def inject_helpers():
    return {
        'app_title': current_app.config.get('APP_TITLE', ''),
        'icon_glyph': get_icon_glyph,
    }


@main_bp.route('/')
def index() -> str:
    """Render whichever screen is current, with the history sheet on top if open."""
    services = get_services()
    navigation = services.navigation
    screen = navigation.current_screen

    context = {
        'screen': screen.value,
        'goal': services.session.goal,
        'show_history': navigation.show_history,
    }

    if screen == Screen.SETUP:
        context.update(icons=ICONS, default_icon=DEFAULT_ICON,
                       default_amount=current_app.config.get('DEFAULT_DAILY_AMOUNT', 100))
    elif screen == Screen.SAVING:
        context['pulses'] = services.feedback.pulses

    if navigation.show_history:
        context.update(history=services.history.all(), summary=services.history.summary())

    return render_template(SCREEN_TEMPLATES[screen], **context)


@main_bp.route('/event/<event>', methods=['POST'])
def dispatch_event(event: str):
    """Apply a button press from a form and go back to the current screen."""
    get_services().navigation.dispatch(event, **request.form.to_dict())
    return redirect(url_for('main.index'))


@main_bp.route('/history/<entry_id>/delete', methods=['POST'])
def delete_history_entry(entry_id: str):
    if not get_services().navigation.remove_history_entry(entry_id):
        logger.info(f"Delete requested for unknown history entry {entry_id}")
    return redirect(url_for('main.index'))
