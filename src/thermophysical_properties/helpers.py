class ThermophysicalError(Exception):
    pass

class RegistrationError(ThermophysicalError):
    pass

class UnknownCorrelationType(ThermophysicalError):
    pass

class UnknownMaterialType(ThermophysicalError):
    pass

class MalformedCoefficients(ThermophysicalError):
    pass

class UndefinedFunction(ThermophysicalError):
    pass

class DomainError(ThermophysicalError):
    pass

class IncompatibleCorrelationFamilies(ThermophysicalError):
    pass
