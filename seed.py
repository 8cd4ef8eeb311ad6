#!/usr/bin/env python3
"""Populate an empty database with an admin account and a handful of sample profiles.

Every sample account uses the password ``password123``.
"""
import logging
import sys
from matrimony.core import config
from matrimony.models import init_db
from matrimony.models.database import Session
from matrimony.services.auth_service import AuthService
from matrimony.services.profile_service import ProfileService
from matrimony.services.user_service import UserService

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

PASSWORD = "password123"

SAMPLE_PROFILES = [
    {
        "username": "rohit_verma",
        "full_name": "Rohit Verma",
        "age": 28,
        "gender": "male",
        "religion": "Hindu",
        "caste": "Brahmin",
        "city": "Mumbai",
        "profession": "Software Engineer",
        "bio": "I am a simple, down-to-earth person looking for a partner who values family and career.",
    },
    {
        "username": "priya_sharma",
        "full_name": "Priya Sharma",
        "age": 26,
        "gender": "female",
        "religion": "Hindu",
        "caste": "Khatri",
        "city": "Delhi",
        "profession": "Doctor",
        "bio": "Passionate about my work and love traveling. Looking for someone with a good sense of humor.",
    },
    {
        "username": "arjun_singh",
        "full_name": "Arjun Singh",
        "age": 30,
        "gender": "male",
        "religion": "Sikh",
        "city": "Chandigarh",
        "profession": "Architect",
        "bio": "Family oriented, fond of music and weekend treks.",
    },
    {
        "username": "ayesha_khan",
        "full_name": "Ayesha Khan",
        "age": 27,
        "gender": "female",
        "religion": "Muslim",
        "city": "Hyderabad",
        "profession": "Chartered Accountant",
        "bio": "Numbers by day, novels by night.",
    },
]


def seed():
    init_db()
    session = Session()
    profile_service = ProfileService()
    try:
        if UserService.get_user_by_username(session, "admin"):
            logger.info("Database already seeded, nothing to do")
            return 0

        AuthService.register(session, "admin", PASSWORD, is_admin=True)
        logger.info("Created admin user")

        for sample in SAMPLE_PROFILES:
            data = dict(sample)
            user, _ = AuthService.register(session, data.pop("username"), PASSWORD)
            profile = profile_service.create_profile(session, user.id, data)
            profile.is_verified = True
            session.commit()
            logger.info(f"Created sample profile for {user.username}")

        return 0
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(seed())
