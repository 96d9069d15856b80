"""
Exception hierarchy shared by the API, repository layer and dev task.
"""


class AppError(Exception):
    """Base class for every error raised by this application."""


class ContainerError(AppError):
    """The DI container is missing a registration. Fatal at startup."""


class RepositoryError(AppError):
    """Database connectivity or query failure."""


class RecordNotFound(RepositoryError):
    def __init__(self, record_id: int):
        super().__init__(f"No data with id={record_id}")
        self.record_id = record_id


class ServiceError(AppError):
    """Service-level wrapper around a repository failure."""


class SeedError(AppError):
    """Schema creation or seeding failed."""


class DevTaskError(AppError):
    """Base for dev task (docker / database setup) failures."""


class CommandNotFound(DevTaskError):
    def __init__(self, command: str, reason: str = ""):
        message = f"{command} not found on this system"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.command = command


class CommandExitError(DevTaskError):
    def __init__(self, command: str, status: int):
        super().__init__(f"Command `{command}` did not exit successfully: exit status {status}")
        self.command = command
        self.status = status
