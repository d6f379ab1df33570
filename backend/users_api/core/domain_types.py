"""Domain Types — identity type for the User entity.

Invariants:
    - UserId wraps the storage-assigned integer primary key
    - Ids fit in a signed 64-bit integer (same range the path parser accepts)
"""

from typing import NewType

UserId = NewType("UserId", int)

MIN_USER_ID = -(2**63)
MAX_USER_ID = 2**63 - 1
