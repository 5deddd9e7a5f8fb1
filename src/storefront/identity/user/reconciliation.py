"""Lazy user mirroring.

Webhook delivery from the identity provider can lag behind a buyer's first
request. Any code path that needs the local user record goes through
:func:`ensure_user`, which creates the mirror from the session claims when the
webhook has not arrived yet.
"""

import structlog
from protean.utils.globals import current_domain

from storefront.identity.session import Identity
from storefront.identity.user.user import User

logger = structlog.get_logger(__name__)


def find_user(external_id: str) -> User | None:
    return current_domain.repository_for(User).find_by_external_id(external_id)


def ensure_user(identity: Identity) -> User:
    """Return the mirrored user for ``identity``, creating it if absent.

    The caller is responsible for persisting the returned user after changing
    it; a freshly created mirror is already added to the repository.
    """
    user = find_user(identity.subject)
    if user is not None:
        return user

    user = User.mirror(
        external_id=identity.subject,
        email=identity.email,
        name=identity.full_name,
        phone=identity.phone,
        image_url=identity.image_url,
    )
    current_domain.repository_for(User).add(user)
    logger.info("user_mirrored_lazily", external_id=identity.subject)
    return user
