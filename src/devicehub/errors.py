"""Exceptions raised by the device-type registry."""


class DeviceHubError(Exception):
    """Base class for fatal registry errors."""


class DuplicateDeviceTypeError(DeviceHubError, ValueError):
    """A device type with the same name is already registered."""

    def __init__(self, device_type: str):
        self.device_type = device_type
        super().__init__(f"Device type already registered: {device_type}")


class RegistrationClosedError(DeviceHubError, RuntimeError):
    """A device type was registered after dispatch had started."""

    def __init__(self, device_type: str):
        self.device_type = device_type
        super().__init__(
            f"Cannot register {device_type}: registry is closed after the first dispatch"
        )


class DuplicateDeviceIdError(DeviceHubError, ValueError):
    """Two device records hold the same identifier."""

    def __init__(self, device_id: str):
        self.device_id = device_id
        super().__init__(f"ID has to be unique for all devices, found duplicate: {device_id}")


class TranslationConflictError(DeviceHubError, ValueError):
    """Two device types translate the same phrase differently."""

    def __init__(self, language: str, phrase: str, existing: str, conflicting: str):
        self.language = language
        self.phrase = phrase
        self.existing = existing
        self.conflicting = conflicting
        super().__init__(
            f"Different translations {conflicting!r} + {existing!r} "
            f"for original {phrase!r} ({language}) were found"
        )


class RepairNotConvergedError(DeviceHubError, RuntimeError):
    """Identifier repair kept writing changes and never reached a fixed point."""

    def __init__(self, passes: int):
        self.passes = passes
        super().__init__(f"Identifier repair did not converge after {passes} passes")
