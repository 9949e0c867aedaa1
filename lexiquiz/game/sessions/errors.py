class GameSessionError(Exception):
    pass


class SessionNotFoundError(GameSessionError):
    pass


class StaleQuestionError(GameSessionError):
    pass


class InvalidAnswerOptionError(GameSessionError):
    pass


class PoolInsufficientError(GameSessionError):
    pass
