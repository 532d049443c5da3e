"""
Profile service
Own profile fields and avatar image
"""
from typing import Optional
import logging
from sqlalchemy.orm import Session
from hotelres.config import settings
from hotelres.database import commit_or_rollback
from hotelres.exceptions import NotFoundError, PermissionDeniedError, PersistenceError, ValidationError
from hotelres.models.ontology import Profile
from hotelres.models.schemas import ProfileUpdate
from hotelres.security.policies import Caller, Action, PROFILES, authorize, can_write_avatar
from hotelres.services.avatar_storage import AvatarStorage

logger = logging.getLogger(__name__)

AVATAR_BASENAME = "avatar"

# content type -> file extension
AVATAR_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def avatar_path(user_id: str, extension: str) -> str:
    return f"{user_id}/{AVATAR_BASENAME}.{extension}"


class ProfileService:
    """Profile service"""

    def __init__(self, db: Session, storage: Optional[AvatarStorage] = None):
        self.db = db
        self.storage = storage or AvatarStorage(settings.AVATAR_DIR, settings.AVATAR_BASE_URL)

    def get_profile(self, caller: Caller, user_id: Optional[str] = None) -> Profile:
        authorize(caller, Action.SELECT, PROFILES)
        profile = self.db.query(Profile).filter(Profile.id == (user_id or caller.user_id)).first()
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    def update_profile(self, caller: Caller, data: ProfileUpdate) -> Profile:
        """Update name and phone; email cannot change"""
        profile = self.get_profile(caller)
        authorize(caller, Action.UPDATE, PROFILES, profile)

        update_data = data.model_dump(exclude_unset=True)
        if 'name' in update_data:
            if not update_data['name'] or not update_data['name'].strip():
                raise ValidationError("Name is required", field="name")
            profile.name = update_data['name'].strip()
        if 'phone' in update_data:
            profile.phone = update_data['phone'].strip() if update_data['phone'] else None

        commit_or_rollback(self.db, "save the profile")
        self.db.refresh(profile)
        return profile

    def upload_avatar(self, caller: Caller, content: bytes, content_type: Optional[str]) -> Profile:
        """
        Store a new avatar and point the profile at it

        The file is rolled back when the profile cannot be saved. Earlier
        avatars under other extensions are removed once the profile is saved.

        Raises:
            ValidationError: not an image, empty, or larger than the size limit
            PersistenceError: the profile could not be saved
        """
        content_type = (content_type or "").split(";")[0].strip().lower()
        if not content_type.startswith("image/"):
            raise ValidationError("Avatar must be an image", field="avatar")
        if not content:
            raise ValidationError("Avatar file is empty", field="avatar")
        if len(content) > settings.AVATAR_MAX_BYTES:
            raise ValidationError(
                f"Avatar must be at most {settings.AVATAR_MAX_BYTES // (1024 * 1024)} MB",
                field="avatar",
            )

        extension = AVATAR_EXTENSIONS.get(content_type, content_type.split("/", 1)[1] or "img")
        path = avatar_path(caller.user_id, extension)
        if not can_write_avatar(caller, path):
            raise PermissionDeniedError("Not allowed to write this avatar")

        profile = self.get_profile(caller)
        authorize(caller, Action.UPDATE, PROFILES, profile)

        previous = self.storage.read(path)
        self.storage.upload(path, content, upsert=True)
        profile.avatar_url = self.storage.get_public_url(path)
        try:
            commit_or_rollback(self.db, "update the avatar")
        except PersistenceError:
            if previous is None:
                self.storage.remove([path])
            else:
                self.storage.upload(path, previous, upsert=True)
            raise

        self.storage.remove(p for p in self._stored_avatars(caller.user_id) if p != path)
        self.db.refresh(profile)
        logger.info(f"Avatar updated for {caller.user_id}")
        return profile

    def delete_avatar(self, caller: Caller) -> Profile:
        """Clear the avatar URL, then remove every stored avatar file"""
        profile = self.get_profile(caller)
        authorize(caller, Action.UPDATE, PROFILES, profile)
        profile.avatar_url = None
        commit_or_rollback(self.db, "remove the avatar")
        self.storage.remove(self._stored_avatars(caller.user_id))
        self.db.refresh(profile)
        return profile

    def _stored_avatars(self, user_id: str):
        return self.storage.list_objects(user_id, f"{AVATAR_BASENAME}.*")
