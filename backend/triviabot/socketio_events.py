from flask_socketio import emit

from triviabot import socketio
from triviabot.errors import NotFound
from triviabot.services.trivia.rounds import get_current_round


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_current_question(data=None):
    # Displays ask for the running question right after connecting
    try:
        question, answers = get_current_round()
    except NotFound as exc:
        emit('error', exc.to_dict())
        return
    emit('current_question', {
        'question': question.to_dict(),
        'answers': [a.text for a in answers],
    })


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('current_question', handle_current_question, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('current_question', handle_current_question, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
