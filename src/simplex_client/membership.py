"""
Membership Lookups

The chat server knows which groups the user belongs to and which contacts
exist, but the client has no way to ask it yet. MembershipOracle is the
seam where such a lookup plugs in. Answers are tri-state: True, False, or
None when unknown.
"""

from typing import Optional


class MembershipOracle:
    """
    Interface for lookups of server-side group membership and contacts.

    Subclasses must implement both methods.
    """

    def is_group_member(self, group: str) -> Optional[bool]:
        """Return True if the user is a member of ``group``, None if unknown."""
        raise NotImplementedError("Subclasses must implement is_group_member")

    def is_contact(self, contact: str) -> Optional[bool]:
        """Return True if ``contact`` is a known contact, None if unknown."""
        raise NotImplementedError("Subclasses must implement is_contact")


class UnknownMembership(MembershipOracle):
    """
    Default oracle used when the caller does not inject one.

    It knows nothing and answers None for everything, so recipients
    without a sigil are addressed as direct targets.
    """

    def is_group_member(self, group: str) -> Optional[bool]:
        return None

    def is_contact(self, contact: str) -> Optional[bool]:
        return None
