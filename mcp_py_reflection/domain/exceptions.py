"""Domain exception hierarchy."""


class DomainException(Exception):
    pass


class InvalidLookupException(DomainException):
    pass


class TypeNotFoundException(DomainException):
    pass


class MemberNotFoundException(DomainException):
    pass
