"""Domain-specific errors for homegw."""

from __future__ import annotations

from collections.abc import Iterable

VALIDATION_FAILED = "VALIDATION_FAILED"
NOT_FOUND = "NOT_FOUND"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
DEVICE_ALREADY_ADDED = "DEVICE_ALREADY_ADDED"
DUPLICATE_DEVICE_NAME = "DUPLICATE_DEVICE_NAME"


class GatewayError(Exception):
    """Base error for homegw."""

    reason = INTERNAL_SERVER_ERROR


class DispatchError(GatewayError):
    """Base error for command dispatch failures."""


class ValidationFailed(DispatchError):
    """Raised when a required call parameter is missing."""

    reason = VALIDATION_FAILED


class OutOfRange(DispatchError):
    """Raised when a numeric argument falls outside its bounds."""

    reason = VALIDATION_FAILED

    def __init__(self, minimum: int, maximum: int) -> None:
        super().__init__(f"Value out of range. Value must be {minimum} <= value <= {maximum}")
        self.minimum = minimum
        self.maximum = maximum


class InvalidArgument(DispatchError):
    """Raised when a value is not a member of an enumerated domain."""

    reason = VALIDATION_FAILED

    def __init__(self, values: Iterable[str]) -> None:
        self.values = tuple(values)
        super().__init__(f"Invalid value. Value must be any of [{', '.join(self.values)}]")


class ArgumentFormat(DispatchError):
    """Raised when a value fails a structural format check."""

    reason = VALIDATION_FAILED

    def __init__(self, formats: Iterable[str]) -> None:
        self.formats = tuple(formats)
        super().__init__(
            f"Invalid format of value. Format must be any of [{', '.join(self.formats)}]"
        )


class UnknownAction(DispatchError):
    """Raised when an action is not in the device's capability table."""

    reason = VALIDATION_FAILED

    def __init__(self, action: str, available: Iterable[str]) -> None:
        self.action = action
        self.available = tuple(available)
        super().__init__(
            f"Action '{action}' is not supported by this device. Available: {', '.join(self.available)}"
        )


class DeviceNotFound(DispatchError):
    """Raised when an identifier is not in the known-device catalog."""

    reason = NOT_FOUND

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Device '{identifier}' was not found on the network")


class UnknownDeviceType(DispatchError):
    """Raised when a catalog entry carries a type tag outside the known set."""

    def __init__(self, type_tag: object) -> None:
        self.type_tag = type_tag
        super().__init__(f"Unknown device type '{type_tag}'")


class ConfigError(GatewayError):
    """Base configuration error."""


class ConfigLoadError(ConfigError):
    """Raised when reading a configuration file fails."""


class ConfigValidationError(ConfigError):
    """Raised when a configuration file does not conform to schema or semantics."""


class StoreError(GatewayError):
    """Raised when the device store cannot be read or written."""


class DeviceAlreadyAdded(StoreError):
    """Raised when a device identifier is already stored."""

    reason = DEVICE_ALREADY_ADDED

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Device '{identifier}' is already added")


class DuplicateDeviceName(StoreError):
    """Raised when a device name is already taken."""

    reason = DUPLICATE_DEVICE_NAME

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A device named '{name}' already exists")


class RecordNotFound(StoreError):
    """Raised when a device is not present in the store."""

    reason = NOT_FOUND


class RecordValidationError(StoreError):
    """Raised when a device record fails schema validation."""

    reason = VALIDATION_FAILED
