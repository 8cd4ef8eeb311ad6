from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, JSON, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base

# Optional attributes collected by the profile wizard, in display order.
DETAIL_FIELDS = [
    "caste", "profession", "bio", "photo_url", "dob", "education", "country",
    "profile_created_for", "marital_status", "living_in_india_since", "place_of_birth",
    "nationality", "visa_status", "ethnicity", "income", "state", "living_with_family",
    "height", "weight", "body_type", "family_status", "complexion", "diet", "drink", "smoke",
]

class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    full_name = Column(String(150), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(20), nullable=False)
    religion = Column(String(50), nullable=False)
    city = Column(String(100), nullable=False)
    caste = Column(String(50))
    profession = Column(String(100))
    bio = Column(Text)
    photo_url = Column(String(500))
    is_verified = Column(Boolean, default=False)

    dob = Column(String(20))
    education = Column(String(100))
    country = Column(String(100))
    profile_created_for = Column(String(50))
    marital_status = Column(String(50))
    living_in_india_since = Column(String(50))
    place_of_birth = Column(String(100))
    nationality = Column(String(100))
    visa_status = Column(String(50))
    ethnicity = Column(String(50))
    income = Column(String(50))
    state = Column(String(100))
    living_with_family = Column(Boolean)
    height = Column(String(20))
    weight = Column(String(20))
    body_type = Column(String(50))
    family_status = Column(String(50))
    complexion = Column(String(50))
    diet = Column(String(50))
    drink = Column(String(50))
    smoke = Column(String(50))

    partner_preferences = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="profile")
