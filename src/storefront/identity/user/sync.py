"""SyncUser / RemoveUser: apply identity-provider account events to the mirror.

Both are idempotent: syncing an unknown account creates it, syncing a known one
overwrites its profile fields, and removing an unknown account is a no-op.
"""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class SyncUser:
    external_id = String(required=True, max_length=255)
    email = String(max_length=254)
    name = String(max_length=255)
    phone = String(max_length=30)
    image_url = String(max_length=1000)


@storefront.command(part_of="User")
class RemoveUser:
    external_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class UserSyncHandler:
    @handle(SyncUser)
    def sync_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_external_id(command.external_id)

        if user is None:
            user = User.mirror(
                external_id=command.external_id,
                email=command.email,
                name=command.name,
                phone=command.phone,
                image_url=command.image_url,
            )
            logger.info("user_mirror_created", external_id=command.external_id)
        else:
            user.refresh(
                email=command.email,
                name=command.name,
                phone=command.phone,
                image_url=command.image_url,
            )
            logger.info("user_mirror_updated", external_id=command.external_id)

        repo.add(user)
        return str(user.id)

    @handle(RemoveUser)
    def remove_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_external_id(command.external_id)
        if user is None:
            logger.info("user_mirror_absent", external_id=command.external_id)
            return None

        repo._dao.delete(user)
        logger.info("user_mirror_removed", external_id=command.external_id)
        return str(user.id)
