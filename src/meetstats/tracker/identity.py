"""Stable per-installation user id."""

from pathlib import Path
from uuid import uuid4

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

logger = structlog.get_logger(__name__)


class Identity(BaseModel):
    user_id: str


def get_or_create_user_id(path: Path) -> str:
    """Return the stored user id, generating and saving a random UUID v4 on first use."""
    if path.exists():
        try:
            return Identity.model_validate_json(path.read_text(encoding="utf-8")).user_id
        except PydanticValidationError:
            logger.warning("identity_unreadable_regenerating", path=str(path))

    identity = Identity(user_id=str(uuid4()))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(identity.model_dump_json(), encoding="utf-8")
    logger.info("identity_created", user_id=identity.user_id)
    return identity.user_id
