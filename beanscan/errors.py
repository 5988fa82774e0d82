class BeanscanError(Exception):
    exit_code: int = 1

    def __init__(self, message: str):
        super().__init__(message)


class ConfigError(BeanscanError):
    exit_code = 2


class ArchiveError(BeanscanError):
    exit_code = 3


class DiscoveryError(BeanscanError):
    exit_code = 20


class ClassScanError(DiscoveryError):
    exit_code = 21


class DescriptorRegistrationError(DiscoveryError):
    exit_code = 22
