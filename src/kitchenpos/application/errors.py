from __future__ import annotations


class InvalidInputError(Exception):
    pass


class NotFoundError(Exception):
    pass


class StateConflictError(Exception):
    pass


class InvalidOrderRequestError(InvalidInputError):
    pass


class InvalidOrderTableRequestError(InvalidInputError):
    pass


class MenuNotFoundError(NotFoundError):
    pass


class OrderNotFoundError(NotFoundError):
    pass


class OrderTableNotFoundError(NotFoundError):
    pass


class MenuNotDisplayedError(StateConflictError):
    pass


class OrderTableNotOccupiedError(StateConflictError):
    pass


class InvalidOrderTransitionError(StateConflictError):
    pass


class OrderConflictError(StateConflictError):
    pass


class OrderTableClearBlockedError(StateConflictError):
    def __init__(self, message: str, reason: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.details = {"reason": reason}
