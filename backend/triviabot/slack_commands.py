"""Translation of the ``/tv`` Slack slash command into trivia operations."""
import re
from typing import Callable, Dict, List

from triviabot.errors import (
    InvalidAnswerIndex,
    NoActiveRound,
    NotFound,
    TriviaError,
    ValidationError,
)
from triviabot.models import User
from triviabot.services.trivia.leaderboard import get_user, get_users_top
from triviabot.services.trivia.ledger import record_answer
from triviabot.services.trivia.media import add_image
from triviabot.services.trivia.questions import create_question
from triviabot.services.trivia.rounds import get_current_round

COMMAND_USAGE = 'Valid commands: help, question, answer, image, status.'
STATUS_TOP_COUNT = 6

_ARGS_RE = re.compile(r"'[^']+'|\"[^\"]+\"|\S+")


def split_args(text: str) -> List[str]:
    """Split on whitespace, keeping quoted groups together without their quotes."""
    args = []
    for token in _ARGS_RE.findall(text or ''):
        if len(token) >= 2 and token[0] == token[-1] and token[0] in ('"', "'"):
            token = token[1:-1]
        args.append(token)
    return args


def command_help(args: List[str], user: User) -> str:
    return COMMAND_USAGE


def command_question(args: List[str], user: User) -> str:
    if not args:
        return COMMAND_USAGE
    if len(args) < 4 or len(args) > 6:
        count = max(len(args) - 2, 0)
        return f"Error: Can't set {count} answers: Minimum 2 answers and maximum 4 answers"
    try:
        correct_index = int(args[1])
    except ValueError:
        return 'Error: Invalid right answer index'
    try:
        create_question(user.id, args[0], args[2:], correct_index)
    except ValidationError as exc:
        return f'Error: {exc.message}'
    return 'Your question has been submitted. Thank You!'


def command_answer(args: List[str], user: User) -> str:
    if not args:
        return COMMAND_USAGE
    try:
        question, answers = get_current_round()
    except NotFound:
        return 'Error: There is no question running right now.'
    try:
        index = int(args[0])
    except ValueError:
        index = 0
    try:
        _, answer = record_answer(user.id, question.id, index)
    except InvalidAnswerIndex as exc:
        return (
            f'Invalid answer index.\nThere are {exc.count} possible answers.\n'
            'See help and status for more details'
        )
    except NoActiveRound:
        return 'Error: This question just closed, check status for the new one.'
    return f'Answer Added.\n{question.text} {answer.text}'


def command_status(args: List[str], user: User) -> str:
    try:
        question, answers = get_current_round()
    except NotFound:
        return 'Error: There is no question running right now.'
    try:
        author_name = get_user(question.author_id).display_name
    except NotFound:
        author_name = 'someone'
    lines = [f'Question from {author_name}:', question.text]
    lines.append(', '.join(f'{i}. {answer.text}' for i, answer in enumerate(answers, start=1)))
    lines.append('')
    lines.append('Top:')
    for top_user in get_users_top(STATUS_TOP_COUNT):
        lines.append(f'{top_user.display_name}: {top_user.points} points')
    return '\n'.join(lines)


def command_image(args: List[str], user: User) -> str:
    if not args:
        return COMMAND_USAGE
    try:
        add_image(user.id, args[0])
    except ValidationError:
        return 'Error: Invalid image URL'
    return 'Image added successfully!'


COMMANDS: Dict[str, Callable[[List[str], User], str]] = {
    'help': command_help,
    'question': command_question,
    'answer': command_answer,
    'status': command_status,
    'image': command_image,
}


def handle_tv_command(text: str, user: User) -> str:
    """Run one ``/tv`` command line and return the reply text."""
    text = (text or '').strip()
    name, _, rest = text.partition(' ')
    handler = COMMANDS.get(name)
    if handler is None:
        return f'Invalid command "{name}".\n{COMMAND_USAGE}'
    try:
        return handler(split_args(rest), user)
    except TriviaError as exc:
        return f'Error: {exc.message}'
