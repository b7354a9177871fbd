class RPNError(Exception):
    '''
    Base of every user-facing calculator error.

    Carries a descriptive message. The stack is back as it was by the time
    one is raised.
    '''


class StackUnderflow(RPNError):
    pass


class TypeMismatch(RPNError):
    pass


class DomainError(RPNError):
    pass


class UnknownToken(RPNError):
    pass


class KeyNotFound(RPNError):
    pass


class StateUnavailable(RPNError):
    pass
