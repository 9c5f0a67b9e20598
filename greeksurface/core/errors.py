class OptionError(ValueError):
    """Base class for rejected option inputs; `field` names the culprit."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class InvalidParameter(OptionError):
    pass


class InvalidOptionKind(OptionError):
    pass


class InvalidArity(OptionError, TypeError):
    pass


class UnknownQuantity(OptionError):
    pass
