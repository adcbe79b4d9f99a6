"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidFrequencyError(DomainException):
    """Frequency string is not one of the supported recurrence steps"""

    pass


class InvalidInputError(DomainException):
    """Financial record is malformed and cannot be projected"""

    pass
