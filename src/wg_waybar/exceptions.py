"""Custom exception hierarchy for wg-waybar.

All exceptions that cross layer boundaries must inherit from
:class:`WgWaybarError`.  Raw OS and subprocess exceptions must NEVER
propagate beyond the infrastructure layer — they must be caught and
re-raised as a typed subclass defined here.

Hierarchy
---------
WgWaybarError
├── ConfigError
│   ├── ConfigReadError
│   ├── ConfigSyntaxError
│   ├── MissingSectionError
│   ├── MissingPropertyError
│   ├── InvalidFormatError
│   └── PeerConfigError
│       ├── InvalidPublicKeyError
│       └── InvalidEndpointError
├── InterfaceManagerError
├── SignalError
│   ├── SignalOutOfRangeError
│   ├── ProcessNotFoundError
│   └── SignalDeliveryError
│       ├── SignalTargetGoneError
│       └── SignalPermissionError
├── StateError
├── HomeDirNotFoundError
├── UserResolutionError
└── UncaughtError
"""

from __future__ import annotations


class WgWaybarError(Exception):
    """Base exception for all wg-waybar errors.

    The string form of every subclass is what ends up in the state file
    and in the Waybar tooltip, so messages must be short and readable.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration file ----------------------------------------------------

class ConfigError(WgWaybarError):
    """Raised when the WireGuard configuration cannot be loaded."""


class ConfigReadError(ConfigError):
    """Raised when the configuration file cannot be read from disk."""


class ConfigSyntaxError(ConfigError):
    """Raised when the configuration text is not valid INI."""


class MissingSectionError(ConfigError):
    """Raised when a mandatory section is absent."""

    def __init__(self, section: str) -> None:
        super().__init__(
            f"Missing section {section} in WireGuard configuration file",
        )
        self.section: str = section


class MissingPropertyError(ConfigError):
    """Raised when a mandatory key is absent or empty."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Missing property: {message}")


class InvalidFormatError(ConfigError):
    """Raised when a value does not have the expected shape."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid format: {message}")


class PeerConfigError(ConfigError):
    """Raised for errors scoped to a single ``[Peer]`` section."""


class InvalidPublicKeyError(PeerConfigError):
    """Raised when a peer public key does not decode to 32 bytes."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid public key: {message}")


class InvalidEndpointError(PeerConfigError):
    """Raised when a peer ``Endpoint`` is not a ``host:port`` pair."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Endpoint parsing error: {message}")


# --- Interface manager -----------------------------------------------------

class InterfaceManagerError(WgWaybarError):
    """Raised when the tunnel interface cannot be created, changed or queried.

    The message is whatever the underlying tool reported; callers branch
    on the type, not on the text.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(f"WireGuard API error: {message}", hint=hint)
        self.detail: str = message


# --- Waybar notification ---------------------------------------------------

class SignalError(WgWaybarError):
    """Raised when the status bar cannot be signalled."""


class SignalOutOfRangeError(SignalError):
    """Raised when the signal offset is outside the real-time window."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Signal out of allowed range: {message}")


class ProcessNotFoundError(SignalError):
    """Raised when no status-bar process is running."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Process not found: {message}")


class SignalDeliveryError(SignalError):
    """Raised when ``kill(2)`` fails for a reason not covered below."""

    def __init__(self, message: str) -> None:
        super().__init__(f"OS error: {message}")


class SignalTargetGoneError(SignalDeliveryError):
    """Raised when the target process exited between lookup and signal."""


class SignalPermissionError(SignalDeliveryError):
    """Raised when the caller may not signal the target process."""


# --- State file / environment ----------------------------------------------

class StateError(WgWaybarError):
    """Raised when the state file cannot be read, decoded or written."""


class HomeDirNotFoundError(WgWaybarError):
    """Raised when no home directory can be resolved for the state home."""


class UserResolutionError(WgWaybarError):
    """Raised when ``SUDO_USER`` names a user unknown to the system."""

    def __init__(self, username: str) -> None:
        super().__init__(f"UserNotFound error: {username}")
        self.username: str = username


class UncaughtError(WgWaybarError):
    """Raised when an environment value cannot be converted to text."""
