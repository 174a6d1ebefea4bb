"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidTermsError(DomainException):
    """Loan terms are missing or violate numeric preconditions"""

    pass


class InconsistentTermsError(InvalidTermsError):
    """Explicit periodic payment cannot repay the principal"""

    pass


class InvalidRecordError(DomainException):
    """Storage row is structurally unusable"""

    pass
