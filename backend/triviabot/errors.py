"""Error values raised by the trivia services.

Every error carries a ``kind`` (its class name) and a message. Transport
layers decide how to show them: the API blueprint maps ``status_code`` to an
HTTP response and the Slack command layer turns them into chat text.
"""


class TriviaError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {'error': self.message, 'kind': self.kind}


class ValidationError(TriviaError):
    status_code = 400


class NotFound(TriviaError):
    status_code = 404


class NoActiveRound(TriviaError):
    status_code = 409

    def __init__(self, message: str = 'No active round for this question'):
        super().__init__(message)


class InvalidAnswerIndex(TriviaError):
    status_code = 400

    def __init__(self, count: int):
        super().__init__(f'Invalid answer index: there are {count} possible answers')
        self.count = count

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload['count'] = self.count
        return payload


class NoQuestionAvailable(TriviaError):
    status_code = 409

    def __init__(self, message: str = 'No question available'):
        super().__init__(message)


class StorageError(TriviaError):
    status_code = 500


class DirectoryError(TriviaError):
    status_code = 502


class InvalidToken(TriviaError):
    status_code = 400

    def __init__(self, message: str = 'Invalid token'):
        super().__init__(message)
