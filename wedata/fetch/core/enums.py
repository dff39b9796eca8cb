"""Core enumerations shared by the aggregators, the transport and the CLI.

Design Decisions:
    - String enums: values round-trip through argparse and log records
"""

from enum import Enum


class FetchMode(str, Enum):
    """Strategy used to walk the remaining pages of a collection.

    PARALLEL fetches every remaining page concurrently and materializes the
    whole collection before writing it. SEQUENTIAL fetches one page at a time
    and streams each page to the sink as it arrives.
    """

    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"

    @classmethod
    def from_flag(cls, sequential: bool) -> "FetchMode":
        """Map the boolean ``--sequential`` switch to a mode."""
        return cls.SEQUENTIAL if sequential else cls.PARALLEL


class SortDirection(str, Enum):
    """Sort direction for the stable key the collection is ordered by."""

    ASC = "asc"
    DESC = "desc"


class Command(str, Enum):
    """Output command selected on the command line."""

    SAVE = "save"
    PRINT = "print"

    @property
    def verb(self) -> str:
        """Past-tense verb used in the summary line."""
        return "Saved" if self is Command.SAVE else "Fetched"
