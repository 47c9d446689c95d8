import hmac

from flask import Blueprint, jsonify, request, current_app

from triviabot.errors import InvalidToken, TriviaError, ValidationError
from triviabot.services.trivia.directory import resolve_external_user
from triviabot.services.trivia.leaderboard import get_user, get_users_top
from triviabot.services.trivia.media import add_message, get_latest_image, get_messages
from triviabot.services.trivia.rounds import get_current_round
from triviabot.slack_commands import handle_tv_command


trivia = Blueprint('trivia', __name__)


@trivia.errorhandler(TriviaError)
def handle_trivia_error(exc: TriviaError):
    if exc.status_code >= 500:
        current_app.logger.error(f"[api-error] path={request.path} kind={exc.kind} err={exc.message}")
    return jsonify(exc.to_dict()), exc.status_code


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f'{name} must be an integer')


def _token_matches(config_key: str, token) -> bool:
    expected = current_app.config.get(config_key) or ''
    return hmac.compare_digest(str(token or '').encode(), str(expected).encode())


@trivia.route('/questions/current', methods=['GET'])
def current_question():
    question, answers = get_current_round()
    return jsonify({
        'question': question.to_dict(),
        'answers': [a.text for a in answers],
    })


@trivia.route('/users/top', methods=['GET'])
def users_top():
    count = _int_arg('count', int(current_app.config.get('TOP_USERS_DEFAULT', 6)))
    return jsonify([u.to_dict() for u in get_users_top(count)])


@trivia.route('/users/<int:user_id>', methods=['GET'])
def user_detail(user_id):
    return jsonify(get_user(user_id).to_dict())


@trivia.route('/images/latest', methods=['GET'])
def latest_image():
    return jsonify(get_latest_image().to_dict())


@trivia.route('/messages', methods=['GET'])
def list_messages():
    count = _int_arg('count', 20)
    return jsonify([m.to_dict() for m in get_messages(count)])


@trivia.route('/messages/slack', methods=['POST'])
def slack_message():
    """Slack outgoing webhook: store a channel message for the display."""
    form = request.form
    if not _token_matches('SLACK_OUTGOING_TOKEN', form.get('token')):
        raise InvalidToken()
    posted_at = None
    if form.get('timestamp'):
        try:
            posted_at = float(form['timestamp'])
        except ValueError:
            raise ValidationError('Invalid timestamp') from None
    user = resolve_external_user(form.get('user_id'))
    message = add_message(user.id, form.get('text', ''), posted_at)
    return jsonify(message.to_dict()), 201


@trivia.route('/slack/commands/tv', methods=['POST'])
def slack_command_tv():
    form = request.form
    if not _token_matches('SLACK_COMMAND_TOKEN', form.get('token')):
        raise InvalidToken()
    user = resolve_external_user(form.get('user_id'))
    text = handle_tv_command(form.get('text', ''), user)
    return jsonify({'text': text})
