"""Partial-Update Merge: builds the merged record for PATCH-style updates.

Invariants:
    - The input record is never mutated; the merge works on a copy
    - Only slots provided in the UserUpdate change; everything else is kept verbatim
    - No validation happens here (the service checks date_of_birth before merging)
"""

from users_api.core.user import User, UserUpdate


def merge_user_update(user: User, update: UserUpdate) -> User:
    """Return a copy of `user` with every provided update slot applied."""
    merged = user.copy()
    for name, value in update.provided().items():
        setattr(merged, name, value)
    return merged
