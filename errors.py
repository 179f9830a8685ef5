# SchoolDesk - error taxonomy
#
# Lookup misses (update/remove of an unknown id) are not errors and have no
# exception type: those operations are silent no-ops.


class SchoolDeskError(Exception):
    """Base class for failures reported to the user as one message."""


class StorageCorruptError(SchoolDeskError):
    """Persisted snapshot is unreadable. Never leaves the store: treated as absence."""


class ValidationError(SchoolDeskError):
    """Externally supplied data is not a usable snapshot or record set."""


class ParseError(SchoolDeskError):
    """CSV or JSON text could not be parsed."""
