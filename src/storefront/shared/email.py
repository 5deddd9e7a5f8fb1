"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


@storefront.value_object
class EmailAddress:
    """A structurally valid email address, stored lower-cased.

    Requires exactly one @, non-empty local and domain parts, a dotted domain
    without leading or trailing dots or hyphens, no whitespace, no
    consecutive dots and none of the characters mail systems reject.
    """

    address = String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address or ""
        if not _is_valid(email):
            raise ValidationError({"email": ["Please fill a valid email address"]})

    @classmethod
    def parse(cls, value: str) -> "EmailAddress":
        return cls(address=(value or "").strip().lower())


def _is_valid(email: str) -> bool:
    if any(ch.isspace() for ch in email) or email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False
    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False
    if "." not in domain_part or ".." in email:
        return False
    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return False
    return not any(ch in email for ch in _FORBIDDEN)
