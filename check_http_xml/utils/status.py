"""Check status enumeration."""

from enum import IntEnum


class Status(IntEnum):
    """Nagios plugin status, ordered so that a greater value is worse."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def exit_code(self) -> int:
        """
        Process exit code for this status.

        Returns:
            int: 0 for OK, 1 for WARNING, 2 for CRITICAL, 3 for UNKNOWN
        """
        return int(self.value)

    def to_word(self) -> str:
        """
        Convert status to the word printed at the start of the status line.

        Returns:
            str: Upper-case status word
        """
        return self.name
