"""
Exceptions raised by the blocker.

Everything that must abort a run derives from BlockerError so main.py can
turn it into a single ERROR log line and a non-zero exit code. Per-address
problems (bad address, failed firewall call) are NOT exceptions; they are
logged and the batch continues.
"""


class BlockerError(Exception):
    """Base class for fatal blocker errors."""


class ConfigError(BlockerError):
    """config.env is missing or holds an invalid value."""


class SetupError(BlockerError):
    """First-run setup was declined or cannot proceed non-interactively."""


class InputError(BlockerError):
    """The input CSV cannot be read."""


class StateError(BlockerError):
    """The offense state file is corrupt or cannot be written."""


class ApplyError(BlockerError):
    """The firewall applier cannot connect or reject a directive."""
