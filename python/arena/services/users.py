"""User service layer."""

from arena.logging import get_logger
from arena.schemas.chat import UserOut
from arena.store import InMemoryStore

logger = get_logger(__name__)


def create_user(store: InMemoryStore) -> UserOut:
    """Create an anonymous user with an empty chat list."""
    user = store.create_user()
    logger.info("user_created", user_id=str(user.id))
    return UserOut(id=user.id, created_at=user.created_at)
