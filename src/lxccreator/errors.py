"""Domain errors for lxc-creator."""


class CreatorError(RuntimeError):
    """Raised when provisioning cannot continue safely."""

    category = "error"


class ValidationFailure(CreatorError):
    """Operator input was rejected; the prompt is shown again."""

    category = "validation"

    def __init__(self, message_key: str, value: str = ""):
        super().__init__(message_key)
        self.message_key = message_key
        self.value = value


class OperatorCancelled(CreatorError):
    category = "cancelled"


class PrivilegeError(CreatorError):
    category = "privilege"


class ResourceExhausted(CreatorError):
    category = "resource_exhausted"


class NoFreeIdentifier(ResourceExhausted):
    pass


class NotFound(CreatorError):
    category = "not_found"


class NoTemplatesFound(NotFound):
    pass


class UnrecognizedInput(CreatorError):
    category = "unrecognized_input"


class UnrecognizedOsType(UnrecognizedInput):
    pass


class ExternalCommandFailed(CreatorError):
    """A control-plane or in-container command exited non-zero."""

    category = "external_command"

    def __init__(self, message: str, returncode: int = 1):
        super().__init__(message)
        self.returncode = returncode


class CommandTimeout(ExternalCommandFailed):
    category = "timeout"
