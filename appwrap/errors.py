class AppwrapError(Exception):
    exit_code: int = 1

    def __init__(self, message: str):
        super().__init__(message)


class ConfigError(AppwrapError):
    exit_code = 2


class ProvisionError(AppwrapError):
    exit_code = 10


class BuildError(AppwrapError):
    exit_code = 20


class AssembleError(BuildError):
    exit_code = 21


class OptimizeError(BuildError):
    exit_code = 22


class PackageError(BuildError):
    exit_code = 23
