import pytest
from unittest.mock import MagicMock
from matrimony.core import config
from matrimony.core.errors import Conflict, InvalidArgument, NotFound
from matrimony.services.profile_service import ProfileService
from matrimony.models import *


@pytest.fixture
def profile_service():
    return ProfileService(redis_client=MagicMock(**{"get_cached_profile.return_value": {}}), s3_client=MagicMock())


class TestProfileService:

    def test_create_profile_success(self, test_session, make_user, sample_profile_data, profile_service):
        user = make_user("rohit", with_profile=False)

        profile = profile_service.create_profile(test_session, user.id, sample_profile_data)

        assert profile.id is not None
        assert profile.user_id == user.id
        assert profile.full_name == sample_profile_data["full_name"]
        assert profile.age == 28
        assert profile.is_verified is False
        assert profile.partner_preferences == {"age_min": 24, "age_max": 30, "religion": "Hindu"}
        assert test_session.query(Profile).filter_by(user_id=user.id).count() == 1

    def test_create_profile_default_avatar(self, test_session, make_user, sample_profile_data, profile_service):
        user = make_user("priya", with_profile=False)
        data = dict(sample_profile_data, gender="Female")

        profile = profile_service.create_profile(test_session, user.id, data)

        assert profile.photo_url == config.DEFAULT_AVATARS["female"]

    def test_create_profile_keeps_given_photo(self, test_session, make_user, sample_profile_data, profile_service):
        user = make_user("rohit", with_profile=False)
        data = dict(sample_profile_data, photo_url="https://example.com/me.jpg")

        profile = profile_service.create_profile(test_session, user.id, data)

        assert profile.photo_url == "https://example.com/me.jpg"

    def test_create_profile_duplicate_user(self, test_session, make_user, sample_profile_data, profile_service):
        user = make_user("rohit", with_profile=False)
        profile_service.create_profile(test_session, user.id, sample_profile_data)

        with pytest.raises(Conflict):
            profile_service.create_profile(test_session, user.id, sample_profile_data)

    def test_create_profile_unknown_user(self, test_session, sample_profile_data, profile_service):
        with pytest.raises(NotFound):
            profile_service.create_profile(test_session, 424242, sample_profile_data)

    @pytest.mark.parametrize("age", [17, 0, "25", None])
    def test_create_profile_rejects_bad_age(self, test_session, make_user, sample_profile_data, profile_service, age):
        user = make_user("young", with_profile=False)

        with pytest.raises(InvalidArgument) as exc_info:
            profile_service.create_profile(test_session, user.id, dict(sample_profile_data, age=age))

        assert exc_info.value.field == "age"
        assert test_session.query(Profile).count() == 0

    @pytest.mark.parametrize("field", ["full_name", "gender", "religion", "city"])
    def test_create_profile_requires_field(self, test_session, make_user, sample_profile_data, profile_service, field):
        user = make_user("incomplete", with_profile=False)
        data = dict(sample_profile_data)
        data[field] = "  "

        with pytest.raises(InvalidArgument) as exc_info:
            profile_service.create_profile(test_session, user.id, data)

        assert exc_info.value.field == field

    def test_create_profile_rejects_inverted_preference_range(self, test_session, make_user, sample_profile_data,
                                                              profile_service):
        user = make_user("picky", with_profile=False)
        data = dict(sample_profile_data, partner_preferences={"age_min": 35, "age_max": 25})

        with pytest.raises(InvalidArgument):
            profile_service.create_profile(test_session, user.id, data)

    def test_update_profile(self, test_session, make_user, profile_service):
        user = make_user("rohit")

        profile = profile_service.update_profile(test_session, user.id, {"city": "Pune", "diet": "Vegetarian"})

        assert profile.city == "Pune"
        assert profile.diet == "Vegetarian"
        assert profile.religion == "Hindu"
        profile_service.redis_client.delete_profile.assert_called_once_with(profile.id)

    def test_update_profile_validates(self, test_session, make_user, profile_service):
        user = make_user("rohit")

        with pytest.raises(InvalidArgument):
            profile_service.update_profile(test_session, user.id, {"age": 16})

        assert user.profile.age == 28

    def test_update_profile_ignores_protected_fields(self, test_session, make_user, profile_service):
        user = make_user("rohit")

        profile = profile_service.update_profile(test_session, user.id, {"is_verified": True, "user_id": 99})

        assert profile.is_verified is False
        assert profile.user_id == user.id

    def test_update_missing_profile(self, test_session, make_user, profile_service):
        user = make_user("nobody", with_profile=False)

        with pytest.raises(NotFound):
            profile_service.update_profile(test_session, user.id, {"city": "Pune"})

    def test_list_profiles_filters(self, test_session, make_user, profile_service):
        make_user("asha", gender="female", age=25, city="Delhi")
        make_user("meera", gender="female", age=31, city="Delhi")
        make_user("ravi", gender="male", age=29, city="Delhi")
        make_user("sara", gender="female", age=27, city="Pune", religion="Christian")

        names = lambda profiles: sorted(p.full_name for p in profiles)

        assert names(profile_service.list_profiles(test_session, {"gender": "female"})) == ["Asha", "Meera", "Sara"]
        assert names(profile_service.list_profiles(test_session, {"city": "Delhi", "age_max": 30})) == ["Asha", "Ravi"]
        assert names(profile_service.list_profiles(test_session, {"age_min": 27, "age_max": 29})) == ["Ravi", "Sara"]
        assert names(profile_service.list_profiles(test_session, {"religion": "Christian"})) == ["Sara"]
        assert len(profile_service.list_profiles(test_session)) == 4

    def test_list_profiles_excludes_user(self, test_session, make_user, profile_service):
        me = make_user("me")
        make_user("other")

        profiles = profile_service.list_profiles(test_session, {"exclude_user_id": me.id})

        assert [p.full_name for p in profiles] == ["Other"]

    def test_get_profile_data_uses_cache(self, test_session, make_user, profile_service):
        profile = make_user("rohit").profile

        data = profile_service.get_profile_data(test_session, profile.id)

        assert data["full_name"] == "Rohit"
        assert data["user_id"] == profile.user_id
        profile_service.redis_client.cache_profile.assert_called_once_with(profile.id, data)

        profile_service.redis_client.get_cached_profile.return_value = {"id": profile.id, "full_name": "Cached"}
        assert profile_service.get_profile_data(test_session, profile.id)["full_name"] == "Cached"

    def test_get_profile_missing(self, test_session, profile_service):
        with pytest.raises(NotFound):
            profile_service.get_profile(test_session, 12345)

    def test_set_photo(self, test_session, make_user, profile_service):
        user = make_user("rohit")
        profile_service.s3_client.upload_photo.return_value = "photos/abc.png"
        profile_service.s3_client.get_photo_url.return_value = "http://localhost:9000/matrimony/photos/abc.png"

        profile = profile_service.set_photo(test_session, user.id, b"\x89PNG...", "image/png")

        profile_service.s3_client.upload_photo.assert_called_once_with(b"\x89PNG...", "image/png")
        assert profile.photo_url == "http://localhost:9000/matrimony/photos/abc.png"

    def test_set_photo_rejects_unsupported_type(self, test_session, make_user, profile_service):
        user = make_user("rohit")

        with pytest.raises(InvalidArgument):
            profile_service.set_photo(test_session, user.id, b"GIF89a", "image/gif")

        profile_service.s3_client.upload_photo.assert_not_called()
