"""
Permission codec.

Converts the permission bits of an ``st_mode`` value into a structured
``PermissionBlock`` and renders blocks back into the familiar ``rwxr-x---``
notation. Blocks decoded from metadata only ever hold SET/UNSET states;
WILDCARD is reserved for blocks written by hand in a policy.
"""

from dataclasses import dataclass
from enum import Enum

from .config import (
    EXECUTE_CHAR,
    PERMISSION_GROUP_LENGTH,
    READ_CHAR,
    UNSET_CHAR,
    WILDCARD_CHAR,
    WRITE_CHAR,
)
from .exceptions import FilterParseError


class PermissionState(Enum):
    """State of a single permission bit."""

    SET = "set"
    UNSET = "unset"
    WILDCARD = "wildcard"


@dataclass(frozen=True)
class PartialPermissionBlock:
    """Read/write/execute states for one class of users (one octal digit)."""

    read: PermissionState
    write: PermissionState
    execute: PermissionState

    @classmethod
    def from_mode_digit(cls, digit: int) -> "PartialPermissionBlock":
        """
        Decode one octal digit of a mode.

        Raises:
            ValueError: if the digit is not in [0, 7]. Valid metadata never
                produces such a digit.
        """
        if not 0 <= digit <= 7:
            raise ValueError(f"{digit} is > 7 and therefore invalid in the st_mode value")

        return cls(
            read=_state_from_bit(digit & 0o4),
            write=_state_from_bit(digit & 0o2),
            execute=_state_from_bit(digit & 0o1),
        )

    @classmethod
    def from_chars(cls, chars: str) -> "PartialPermissionBlock":
        """
        Decode a 3-character group such as ``r-x`` or ``rw*``.

        Position 0 accepts ``r``, position 1 ``w`` and position 2 ``x``; every
        position also accepts ``-`` (unset) and ``*`` (wildcard).

        Raises:
            FilterParseError: on non-ASCII input, a group that is not exactly
                3 characters long, or a character not allowed at its position.
        """
        if not chars.isascii():
            raise FilterParseError("Non-ascii characters provided.")

        if len(chars) != PERMISSION_GROUP_LENGTH:
            raise FilterParseError(
                f"Permission block has an invalid number of characters "
                f"(!= {PERMISSION_GROUP_LENGTH})."
            )

        states = []
        for position, (character, letter) in enumerate(
            zip(chars, (READ_CHAR, WRITE_CHAR, EXECUTE_CHAR))
        ):
            if character == letter:
                states.append(PermissionState.SET)
            elif character == UNSET_CHAR:
                states.append(PermissionState.UNSET)
            elif character == WILDCARD_CHAR:
                states.append(PermissionState.WILDCARD)
            else:
                raise FilterParseError(
                    f'Invalid character "{character}" at position {position} '
                    f'in permission block "{chars}".'
                )

        return cls(*states)

    def is_compatible(self, other: "PartialPermissionBlock") -> bool:
        for mine, theirs in (
            (self.read, other.read),
            (self.write, other.write),
            (self.execute, other.execute),
        ):
            if PermissionState.WILDCARD in (mine, theirs):
                continue
            if mine != theirs:
                return False
        return True

    def __str__(self) -> str:
        return "".join(
            _render_state(state, letter)
            for state, letter in (
                (self.read, READ_CHAR),
                (self.write, WRITE_CHAR),
                (self.execute, EXECUTE_CHAR),
            )
        )


@dataclass(frozen=True)
class PermissionBlock:
    """Full 9-bit permission state: user, group and other."""

    user: PartialPermissionBlock
    group: PartialPermissionBlock
    other: PartialPermissionBlock

    def is_compatible(self, other: "PermissionBlock") -> bool:
        """True when every non-wildcard position of both blocks agrees."""
        return (
            self.user.is_compatible(other.user)
            and self.group.is_compatible(other.group)
            and self.other.is_compatible(other.other)
        )

    def __str__(self) -> str:
        return f"{self.user}{self.group}{self.other}"


def decode(mode: int) -> PermissionBlock:
    """
    Decode the permission bits of ``mode`` into a PermissionBlock.

    Only the low nine bits are read; file type and setuid/setgid/sticky bits
    are ignored.

    Args:
        mode: ``st_mode`` value or a bare permission value such as ``0o644``

    Returns:
        PermissionBlock holding only SET/UNSET states
    """
    return PermissionBlock(
        user=PartialPermissionBlock.from_mode_digit((mode >> 6) & 0o7),
        group=PartialPermissionBlock.from_mode_digit((mode >> 3) & 0o7),
        other=PartialPermissionBlock.from_mode_digit(mode & 0o7),
    )


def render(block: PermissionBlock) -> str:
    """Render a block as its 9-character symbolic string."""
    return str(block)


def _state_from_bit(bit: int) -> PermissionState:
    return PermissionState.SET if bit else PermissionState.UNSET


def _render_state(state: PermissionState, letter: str) -> str:
    if state is PermissionState.SET:
        return letter
    if state is PermissionState.WILDCARD:
        return WILDCARD_CHAR
    return UNSET_CHAR
