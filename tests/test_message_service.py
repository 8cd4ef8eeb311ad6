import pytest
from matrimony.core.errors import Forbidden, InvalidArgument, NotFound
from matrimony.services.interest_service import InterestService
from matrimony.services.message_service import MessageService
from matrimony.models import *


@pytest.fixture
def matched_pair(test_session, make_user):
    one = make_user("one")
    two = make_user("two")
    interest = InterestService.send_interest(test_session, one.id, two.id)
    InterestService.resolve_interest(test_session, interest.id, two.id, ACCEPTED)
    return one, two


class TestMessageService:

    def test_send_message(self, test_session, matched_pair):
        one, two = matched_pair

        message = MessageService().send_message(test_session, one.id, two.id, "  hi  ")

        assert message.id is not None
        assert message.content == "hi"
        assert message.sender_id == one.id
        assert message.receiver_id == two.id
        assert message.created_at is not None

    @pytest.mark.parametrize("content", ["", "   ", None])
    def test_empty_message_rejected(self, test_session, matched_pair, content):
        one, two = matched_pair

        with pytest.raises(InvalidArgument) as exc_info:
            MessageService().send_message(test_session, one.id, two.id, content)

        assert exc_info.value.field == "content"
        assert test_session.query(Message).count() == 0

    def test_message_to_self_rejected(self, test_session, make_user):
        me = make_user("me")

        with pytest.raises(InvalidArgument):
            MessageService(require_match=False).send_message(test_session, me.id, me.id, "hello me")

    def test_message_to_unknown_user(self, test_session, make_user):
        me = make_user("me")

        with pytest.raises(NotFound):
            MessageService(require_match=False).send_message(test_session, me.id, 4040, "anyone there?")

    def test_unmatched_users_cannot_message(self, test_session, make_user):
        a = make_user("a")
        b = make_user("b")
        InterestService.send_interest(test_session, a.id, b.id)

        with pytest.raises(Forbidden):
            MessageService(require_match=True).send_message(test_session, a.id, b.id, "hello")

    def test_gate_can_be_disabled(self, test_session, make_user):
        a = make_user("a")
        b = make_user("b")

        message = MessageService(require_match=False).send_message(test_session, a.id, b.id, "hello")

        assert message.id is not None

    def test_removed_match_closes_conversation(self, test_session, matched_pair):
        one, two = matched_pair
        service = MessageService(require_match=True)
        service.send_message(test_session, one.id, two.id, "hi")
        interest = test_session.query(Interest).filter_by(sender_id=one.id).first()
        InterestService.remove_match(test_session, interest.id, two.id)

        with pytest.raises(Forbidden):
            service.send_message(test_session, two.id, one.id, "still there?")

        assert len(MessageService.list_messages(test_session, one.id, two.id)) == 1

    def test_list_messages_is_symmetric_and_chronological(self, test_session, matched_pair, make_user):
        one, two = matched_pair
        other = make_user("other")
        service = MessageService(require_match=False)
        service.send_message(test_session, one.id, two.id, "hello")
        service.send_message(test_session, two.id, one.id, "hi!")
        service.send_message(test_session, one.id, other.id, "unrelated")
        service.send_message(test_session, one.id, two.id, "how are you?")

        forward = MessageService.list_messages(test_session, one.id, two.id)
        backward = MessageService.list_messages(test_session, two.id, one.id)

        assert [m.content for m in forward] == ["hello", "hi!", "how are you?"]
        assert [m.id for m in forward] == [m.id for m in backward]
        timestamps = [m.created_at for m in forward]
        assert timestamps == sorted(timestamps)

    def test_conversations_include_both_sides(self, test_session, matched_pair):
        one, two = matched_pair

        MessageService().send_message(test_session, one.id, two.id, "hi")

        assert [p.user_id for p in MessageService.list_conversations(test_session, one.id)] == [two.id]
        assert [p.user_id for p in MessageService.list_conversations(test_session, two.id)] == [one.id]

    def test_conversations_distinct_latest_first(self, test_session, make_user):
        me = make_user("me")
        early = make_user("early")
        late = make_user("late")
        service = MessageService(require_match=False)
        service.send_message(test_session, me.id, early.id, "one")
        service.send_message(test_session, early.id, me.id, "two")
        service.send_message(test_session, late.id, me.id, "three")

        profiles = MessageService.list_conversations(test_session, me.id)

        assert [p.full_name for p in profiles] == ["Late", "Early"]

    def test_conversations_skip_users_without_profile(self, test_session, make_user):
        me = make_user("me")
        ghost = make_user("ghost", with_profile=False)
        MessageService(require_match=False).send_message(test_session, me.id, ghost.id, "boo")

        assert MessageService.list_conversations(test_session, me.id) == []

    def test_no_conversations(self, test_session, make_user):
        me = make_user("me")

        assert MessageService.list_conversations(test_session, me.id) == []
