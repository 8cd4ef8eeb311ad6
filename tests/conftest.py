import os
import tempfile

_db_file = tempfile.NamedTemporaryFile(delete=False, suffix='.db')
_db_file.close()
os.environ["DATABASE_URL"] = f"sqlite:///{_db_file.name}"
os.environ["CACHE_ENABLED"] = "false"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from matrimony.models import Base, User, Profile


@pytest.fixture(scope="session")
def test_db_engine():
    engine = create_engine(os.environ["DATABASE_URL"], connect_args={"check_same_thread": False})

    yield engine

    engine.dispose()
    os.unlink(_db_file.name)


@pytest.fixture
def test_session(test_db_engine):
    Base.metadata.drop_all(test_db_engine)
    Base.metadata.create_all(test_db_engine)
    Session = sessionmaker(bind=test_db_engine)
    session = Session()

    yield session

    session.rollback()
    session.close()


@pytest.fixture
def sample_user_data():
    return {
        "username": "test_user",
        "password": "secret-pass"
    }


@pytest.fixture
def sample_profile_data():
    return {
        "full_name": "Rohit Verma",
        "age": 28,
        "gender": "male",
        "religion": "Hindu",
        "city": "Mumbai",
        "caste": "Brahmin",
        "profession": "Software Engineer",
        "bio": "Down-to-earth, family oriented.",
        "partner_preferences": {"age_min": 24, "age_max": 30, "religion": "Hindu"}
    }


@pytest.fixture
def make_user(test_session, sample_profile_data):
    """Create a user, with a profile unless with_profile=False"""
    def _make_user(username, with_profile=True, **profile_overrides):
        user = User(username=username, password="not-a-real-hash")
        test_session.add(user)
        test_session.commit()

        if with_profile:
            data = dict(sample_profile_data, full_name=username.title(), **profile_overrides)
            test_session.add(Profile(user_id=user.id, **data))
            test_session.commit()
        return user
    return _make_user
