# app/errors.py


class AppError(Exception):
    """Base class for errors that abort startup."""


class ConfigError(AppError):
    pass


class WordSourceError(AppError):
    pass


class InsufficientWords(WordSourceError):
    def __init__(self, available: int, requested: int):
        super().__init__(
            f"word list has {available} words, {requested} requested"
        )
        self.available = available
        self.requested = requested
