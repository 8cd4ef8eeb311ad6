from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from matrimony.models import *
from matrimony.core import config
from matrimony.core.errors import Conflict, InvalidArgument, NotFound
from matrimony.core.redis_client import RedisClient
from matrimony.core.s3_client import S3Client
from typing import Dict, List, Optional, Any
import logging
from datetime import datetime

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["full_name", "gender", "religion", "city"]
PREFERENCE_FIELDS = ["marital_status", "religion", "education", "countries", "age_min", "age_max",
                     "drinking", "smoking", "residency", "diet"]
PHOTO_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp")


class ProfileService:
    def __init__(self, redis_client: Optional[RedisClient] = None, s3_client: Optional[S3Client] = None):
        self.redis_client = redis_client or RedisClient()
        self._s3_client = s3_client
        logger.info("Profile service initialized")

    @property
    def s3_client(self) -> S3Client:
        if self._s3_client is None:
            self._s3_client = S3Client()
        return self._s3_client

    def create_profile(self, session: Session, user_id: int, profile_data: Dict[str, Any]) -> Profile:
        """Create the single profile owned by a user"""
        if not session.query(User).filter_by(id=user_id).first():
            raise NotFound(f"User {user_id} not found")
        if session.query(Profile).filter_by(user_id=user_id).first():
            raise Conflict("Profile already exists for this user")

        data = self._validate(profile_data, partial=False)
        if not data.get("photo_url"):
            data["photo_url"] = config.DEFAULT_AVATARS.get(data["gender"].lower())

        try:
            profile = Profile(user_id=user_id, **data)
            session.add(profile)
            session.commit()
            logger.info(f"Created profile {profile.id} for user {user_id}")
            return profile
        except IntegrityError as e:
            session.rollback()
            logger.error(f"Integrity error creating profile for user {user_id}: {e}")
            raise Conflict("Profile already exists for this user")
        except Exception as e:
            session.rollback()
            logger.error(f"Error creating profile for user {user_id}: {e}")
            raise

    def update_profile(self, session: Session, user_id: int, profile_data: Dict[str, Any]) -> Profile:
        """Partially update the profile owned by user_id"""
        profile = self.get_profile_by_user_id(session, user_id)
        data = self._validate(profile_data, partial=True)

        try:
            for field, value in data.items():
                setattr(profile, field, value)
            profile.updated_at = datetime.utcnow()
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Error updating profile {profile.id}: {e}")
            raise

        self.redis_client.delete_profile(profile.id)
        logger.info(f"Updated profile {profile.id}")
        return profile

    def set_photo(self, session: Session, user_id: int, photo_data: bytes, content_type: str = "image/jpeg") -> Profile:
        """Upload a photo to object storage and point the profile at it"""
        if content_type not in PHOTO_CONTENT_TYPES:
            raise InvalidArgument(f"Unsupported photo type {content_type}", field="photo")
        if not photo_data:
            raise InvalidArgument("Photo is empty", field="photo")
        if len(photo_data) > config.MAX_PHOTO_SIZE:
            raise InvalidArgument("Photo is too large", field="photo")

        profile = self.get_profile_by_user_id(session, user_id)
        s3_path = self.s3_client.upload_photo(photo_data, content_type)
        if not s3_path:
            raise RuntimeError("Photo upload failed")

        return self.update_profile(session, user_id, {"photo_url": self.s3_client.get_photo_url(s3_path)})

    def get_profile(self, session: Session, profile_id: int) -> Profile:
        profile = session.query(Profile).filter_by(id=profile_id).first()
        if not profile:
            raise NotFound(f"Profile {profile_id} not found")
        return profile

    def get_profile_by_user_id(self, session: Session, user_id: int) -> Profile:
        profile = session.query(Profile).filter_by(user_id=user_id).first()
        if not profile:
            raise NotFound("Profile not found")
        return profile

    def get_profile_data(self, session: Session, profile_id: int) -> Dict[str, Any]:
        """Serialized profile, served from the cache when possible"""
        cached_profile = self.redis_client.get_cached_profile(profile_id)
        if cached_profile:
            return cached_profile

        result = self.serialize(self.get_profile(session, profile_id))
        self.redis_client.cache_profile(profile_id, result)
        logger.debug(f"Retrieved profile {profile_id}")
        return result

    def list_profiles(self, session: Session, filters: Optional[Dict[str, Any]] = None) -> List[Profile]:
        """Browse profiles by exact attributes and an inclusive age range"""
        filters = filters or {}
        query = session.query(Profile)

        for field in ("gender", "religion", "city"):
            if filters.get(field):
                query = query.filter(getattr(Profile, field) == filters[field])
        if filters.get("age_min") is not None:
            query = query.filter(Profile.age >= filters["age_min"])
        if filters.get("age_max") is not None:
            query = query.filter(Profile.age <= filters["age_max"])
        if filters.get("exclude_user_id") is not None:
            query = query.filter(Profile.user_id != filters["exclude_user_id"])

        profiles = query.order_by(Profile.created_at.desc(), Profile.id.desc()).all()
        logger.debug(f"Listed {len(profiles)} profiles with filters {filters}")
        return profiles

    @staticmethod
    def serialize(profile: Profile) -> Dict[str, Any]:
        result = {
            "id": profile.id,
            "user_id": profile.user_id,
            "full_name": profile.full_name,
            "age": profile.age,
            "gender": profile.gender,
            "religion": profile.religion,
            "city": profile.city,
            "is_verified": bool(profile.is_verified),
            "partner_preferences": profile.partner_preferences,
            "created_at": profile.created_at.isoformat() if profile.created_at else None,
        }
        for field in DETAIL_FIELDS:
            result[field] = getattr(profile, field)
        return result

    def _validate(self, profile_data: Dict[str, Any], partial: bool) -> Dict[str, Any]:
        allowed = set(REQUIRED_FIELDS) | set(DETAIL_FIELDS) | {"age", "partner_preferences"}
        data = {k: v for k, v in profile_data.items() if k in allowed}

        for field in REQUIRED_FIELDS:
            if field not in data and partial:
                continue
            value = data.get(field)
            if not isinstance(value, str) or not value.strip():
                raise InvalidArgument(f"{field} is required", field=field)
            data[field] = value.strip()

        if "age" in data or not partial:
            age = data.get("age")
            if not isinstance(age, int) or isinstance(age, bool):
                raise InvalidArgument("age must be a whole number", field="age")
            if age < config.MIN_AGE:
                raise InvalidArgument(f"age must be at least {config.MIN_AGE}", field="age")

        if data.get("partner_preferences") is not None:
            data["partner_preferences"] = self._validate_preferences(data["partner_preferences"])

        return data

    @staticmethod
    def _validate_preferences(preferences: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(preferences, dict):
            raise InvalidArgument("partner_preferences must be an object", field="partner_preferences")
        cleaned = {k: v for k, v in preferences.items() if k in PREFERENCE_FIELDS and v is not None}
        age_min, age_max = cleaned.get("age_min"), cleaned.get("age_max")
        if age_min is not None and age_max is not None and age_min > age_max:
            raise InvalidArgument("age_min must not exceed age_max", field="partner_preferences.age_min")
        return cleaned
