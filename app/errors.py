# app/errors.py


class TypealongError(Exception):
    """Base class for every error raised by Typealong."""


class ContractViolation(TypealongError):
    """A caller broke the usage contract of an alignment engine."""


class InvalidModeError(ContractViolation):
    pass


class EmptyUndoError(ContractViolation):
    pass


class EmptyReferenceError(TypealongError, ValueError):
    pass


class SettingsError(TypealongError, ValueError):
    pass


class ReferenceLoadError(TypealongError):
    pass
