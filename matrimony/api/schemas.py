from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Literal
from datetime import datetime


class CamelModel(BaseModel):
    """Wire format is camelCase; attribute names stay snake_case"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Credentials(CamelModel):
    username: str = Field(..., min_length=1, max_length=100, description="Login name")
    password: str = Field(..., min_length=1, description="Plain text password")

class UserResponse(CamelModel):
    id: int
    username: str
    is_admin: bool = False
    created_at: Optional[datetime] = None

class AuthResponse(CamelModel):
    user: UserResponse
    token: str

class PartnerPreferences(CamelModel):
    marital_status: Optional[str] = None
    religion: Optional[str] = None
    education: Optional[str] = None
    countries: Optional[List[str]] = None
    age_min: Optional[int] = Field(None, ge=18, le=100)
    age_max: Optional[int] = Field(None, ge=18, le=100)
    drinking: Optional[str] = None
    smoking: Optional[str] = None
    residency: Optional[str] = None
    diet: Optional[str] = None

class ProfileDetails(CamelModel):
    caste: Optional[str] = None
    profession: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=2000)
    photo_url: Optional[str] = None
    dob: Optional[str] = None
    education: Optional[str] = None
    country: Optional[str] = None
    profile_created_for: Optional[str] = None
    marital_status: Optional[str] = None
    living_in_india_since: Optional[str] = None
    place_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    visa_status: Optional[str] = None
    ethnicity: Optional[str] = None
    income: Optional[str] = None
    state: Optional[str] = None
    living_with_family: Optional[bool] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    body_type: Optional[str] = None
    family_status: Optional[str] = None
    complexion: Optional[str] = None
    diet: Optional[str] = None
    drink: Optional[str] = None
    smoke: Optional[str] = None
    partner_preferences: Optional[PartnerPreferences] = None

class ProfileCreate(ProfileDetails):
    full_name: str = Field(..., min_length=1, max_length=150, description="Full name")
    age: int = Field(..., ge=18, le=100, description="Age in years")
    gender: str = Field(..., min_length=1, description="male/female")
    religion: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)

class ProfileUpdate(ProfileDetails):
    full_name: Optional[str] = Field(None, min_length=1, max_length=150)
    age: Optional[int] = Field(None, ge=18, le=100)
    gender: Optional[str] = Field(None, min_length=1)
    religion: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = Field(None, min_length=1)

class ProfileResponse(ProfileDetails):
    id: int
    user_id: int
    full_name: str
    age: int
    gender: str
    religion: str
    city: str
    is_verified: bool = False
    created_at: Optional[datetime] = None

class InterestCreate(CamelModel):
    receiver_id: int = Field(..., description="User the interest is sent to")

class InterestUpdate(CamelModel):
    status: Literal["accepted", "rejected"]

class InterestResponse(CamelModel):
    id: int
    sender_id: int
    receiver_id: int
    status: str
    created_at: Optional[datetime] = None

class InterestWithProfile(CamelModel):
    interest: InterestResponse
    profile: ProfileResponse

class MessageCreate(CamelModel):
    receiver_id: int
    content: str = Field(..., max_length=5000)

class MessageResponse(CamelModel):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    created_at: Optional[datetime] = None

class AdminUserEntry(CamelModel):
    user: UserResponse
    profile: Optional[ProfileResponse] = None

class StatsResponse(BaseModel):
    total_users: int
    total_profiles: int
    total_interests: int
    pending_interests: int
    accepted_interests: int
    total_messages: int
