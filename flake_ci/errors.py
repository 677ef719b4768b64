class ConfigurationError(ValueError):
    """A required configuration field is missing, empty or malformed."""

    def __init__(self, field: str, message: str | None = None):
        self.field: str = field
        super().__init__(message or f"{field} is required and cannot be empty")


class ToolExecutionError(RuntimeError):
    """An external command failed or did not produce what it should have."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str | None = None):
        self.command: list[str] = command
        self.returncode: int | None = returncode
        self.stderr: str | None = stderr
        if returncode is None:
            message = f"Command '{' '.join(command)}' failed"
        else:
            message = f"Command '{' '.join(command)}' failed with code {returncode}"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message)


class RelocationError(Exception):
    """The container archive could not be handed over between agents."""


class RegistryPushError(Exception):
    """Pushing the image to one of the deployment targets failed."""

    def __init__(self, target_name: str, cause: Exception):
        self.target_name: str = target_name
        self.cause: Exception = cause
        super().__init__(f"Docker push to {target_name} failed: {cause}")
