"""Record identifiers.

Records are keyed by 24 lowercase hex characters (12 random bytes), the format
the storefront's public URLs have always used. Route handlers reject anything
else before touching the repository.
"""

import re
import secrets

_OBJECT_ID = re.compile(r"^[0-9a-fA-F]{24}$")


def object_id() -> str:
    return secrets.token_hex(12)


def is_object_id(value) -> bool:
    return isinstance(value, str) and bool(_OBJECT_ID.match(value))
