"""
Configuration for the permission policy filters and scan reports.
"""

# Characters accepted at each position of a 3-character permission group
READ_CHAR = "r"
WRITE_CHAR = "w"
EXECUTE_CHAR = "x"
UNSET_CHAR = "-"
WILDCARD_CHAR = "*"

PERMISSION_GROUP_LENGTH = 3
PERMISSION_PATTERN_LENGTH = 3 * PERMISSION_GROUP_LENGTH

# Policy text separators and owner markers
CLAUSE_SEPARATOR = ","
USER_MARKER = "u"
GROUP_MARKER = "g"

# POSIX uid_t / gid_t are unsigned 32-bit
MAX_OWNER_ID = 2**32 - 1

# Leading character of a report line, by entry type
ENTRY_TYPE_DIRECTORY = "d"
ENTRY_TYPE_FILE = "-"
ENTRY_TYPE_SYMLINK = "l"

# Minimum width of the right-justified uid/gid columns
OWNER_FIELD_WIDTH = 5

REPORT_LINE_FORMAT = "{entry_type}{permissions} {owner:>{width}} {group:>{width}} {path}"
