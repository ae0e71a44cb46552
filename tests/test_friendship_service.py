import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import StorageError
from app.core.outcomes import FriendRequestOutcome
from app.models.social import Friendship, FriendshipStatus, Message
from app.services.friendship_service import FriendshipService


@pytest.fixture
def service(db_session):
    return FriendshipService(db_session, cascade_delete_messages=False)


def _rows(db_session):
    return db_session.query(Friendship).all()


def test_reciprocal_request_accepts_friendship(service, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")

    assert service.create_friend_request(alice.id, bob.id) == FriendRequestOutcome.SENT
    assert service.create_friend_request(bob.id, alice.id) == FriendRequestOutcome.ACCEPTED

    assert [u.id for u in service.get_friends(alice.id)] == [bob.id]
    assert [u.id for u in service.get_friends(bob.id)] == [alice.id]


def test_accepted_row_keeps_original_requester(service, db_session, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")

    service.create_friend_request(alice.id, bob.id)
    service.create_friend_request(bob.id, alice.id)

    rows = _rows(db_session)
    assert len(rows) == 1
    assert (rows[0].user_id, rows[0].user_id_friend) == (alice.id, bob.id)
    assert rows[0].status == FriendshipStatus.ACCEPTED


def test_self_request_creates_nothing(service, db_session, make_user):
    alice = make_user("Alice")

    assert service.create_friend_request(alice.id, alice.id) == FriendRequestOutcome.CANNOT_SELF_REQUEST
    assert _rows(db_session) == []


def test_repeated_request_is_already_sent(service, db_session, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")

    assert service.create_friend_request(alice.id, bob.id) == FriendRequestOutcome.SENT
    assert service.create_friend_request(alice.id, bob.id) == FriendRequestOutcome.ALREADY_SENT
    assert len(_rows(db_session)) == 1


def test_request_between_friends(service, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")
    service.create_friend_request(alice.id, bob.id)
    service.accept_friend_request(bob.id, alice.id)

    assert service.create_friend_request(alice.id, bob.id) == FriendRequestOutcome.ALREADY_FRIENDS
    assert service.create_friend_request(bob.id, alice.id) == FriendRequestOutcome.ALREADY_FRIENDS


def test_accept_by_recipient(service, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")
    service.create_friend_request(alice.id, bob.id)

    assert service.accept_friend_request(bob.id, alice.id) == FriendRequestOutcome.ACCEPTED
    assert service.are_friends(alice.id, bob.id)


def test_requester_cannot_accept_own_request(service, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")
    service.create_friend_request(alice.id, bob.id)

    assert service.accept_friend_request(alice.id, bob.id) == FriendRequestOutcome.CANNOT_SELF_ACCEPT
    assert service.find_pair_row(alice.id, bob.id).status == FriendshipStatus.PENDING


def test_accept_missing_and_already_friends(service, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")

    assert service.accept_friend_request(bob.id, alice.id) == FriendRequestOutcome.NOT_FOUND

    service.create_friend_request(alice.id, bob.id)
    service.accept_friend_request(bob.id, alice.id)
    assert service.accept_friend_request(bob.id, alice.id) == FriendRequestOutcome.ALREADY_FRIENDS


@pytest.mark.parametrize("accepted", [False, True])
def test_delete_pending_or_accepted(service, make_user, accepted):
    alice, bob = make_user("Alice"), make_user("Bob")
    service.create_friend_request(alice.id, bob.id)
    if accepted:
        service.accept_friend_request(bob.id, alice.id)

    assert service.delete_friend_request_or_friendship(bob.id, alice.id) == FriendRequestOutcome.DELETED
    assert service.find_pair_row(alice.id, bob.id) is None
    assert service.delete_friend_request_or_friendship(alice.id, bob.id) == FriendRequestOutcome.NOT_FOUND


def test_request_after_delete_starts_over(service, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")
    service.create_friend_request(alice.id, bob.id)
    service.delete_friend_request_or_friendship(bob.id, alice.id)

    assert service.create_friend_request(bob.id, alice.id) == FriendRequestOutcome.SENT
    assert service.find_pair_row(alice.id, bob.id).user_id == bob.id


def test_potential_friends_are_incoming_pending_only(service, make_user):
    alice, bob, carol, dave = (make_user(n) for n in ("Alice", "Bob", "Carol", "Dave"))

    service.create_friend_request(bob.id, alice.id)
    service.create_friend_request(carol.id, alice.id)
    service.create_friend_request(alice.id, dave.id)
    service.accept_friend_request(alice.id, carol.id)

    assert [u.id for u in service.get_potential_friends(alice.id)] == [bob.id]
    assert [u.id for u in service.get_potential_friends(dave.id)] == [alice.id]


def test_get_friends_lists_every_accepted_friend(service, make_user):
    alice, bob, carol, dave = (make_user(n) for n in ("Alice", "Bob", "Carol", "Dave"))

    service.create_friend_request(alice.id, bob.id)
    service.accept_friend_request(bob.id, alice.id)
    service.create_friend_request(carol.id, alice.id)
    service.accept_friend_request(alice.id, carol.id)
    service.create_friend_request(alice.id, dave.id)

    assert [u.id for u in service.get_friends(alice.id)] == [bob.id, carol.id]
    assert [u.id for u in service.get_friends(dave.id)] == []


def _exchange_messages(db_session, a, b, c):
    db_session.add_all([
        Message(content="hi", user_id_send=a, user_id_received=b),
        Message(content="hey", user_id_send=b, user_id_received=a),
        Message(content="unrelated", user_id_send=a, user_id_received=c),
    ])
    db_session.commit()


def test_delete_keeps_messages_by_default(db_session, make_user):
    alice, bob, carol = make_user("Alice"), make_user("Bob"), make_user("Carol")
    service = FriendshipService(db_session, cascade_delete_messages=False)
    service.create_friend_request(alice.id, bob.id)
    _exchange_messages(db_session, alice.id, bob.id, carol.id)

    service.delete_friend_request_or_friendship(alice.id, bob.id)

    assert db_session.query(Message).count() == 3


def test_delete_cascades_messages_when_enabled(db_session, make_user):
    alice, bob, carol = make_user("Alice"), make_user("Bob"), make_user("Carol")
    service = FriendshipService(db_session, cascade_delete_messages=True)
    service.create_friend_request(alice.id, bob.id)
    _exchange_messages(db_session, alice.id, bob.id, carol.id)

    service.delete_friend_request_or_friendship(bob.id, alice.id)

    remaining = db_session.query(Message).all()
    assert [m.content for m in remaining] == ["unrelated"]


def test_concurrent_reverse_insert_is_reconciled(service, db_session, make_user, monkeypatch):
    alice_id, bob_id = make_user("Alice").id, make_user("Bob").id

    # Bob's request lands between Alice's lookup and her insert
    db_session.add(Friendship(user_id=bob_id, user_id_friend=alice_id, status=FriendshipStatus.PENDING))
    db_session.commit()
    db_session.expunge_all()

    lookups = []
    real_find = service.find_pair_row

    def stale_find(user_id, other_user_id):
        lookups.append((user_id, other_user_id))
        return None if len(lookups) == 1 else real_find(user_id, other_user_id)

    monkeypatch.setattr(service, "find_pair_row", stale_find)

    assert service.create_friend_request(alice_id, bob_id) == FriendRequestOutcome.ACCEPTED
    rows = _rows(db_session)
    assert len(rows) == 1
    assert rows[0].user_id == bob_id
    assert rows[0].status == FriendshipStatus.ACCEPTED


def test_query_failure_raises_storage_error(service, db_session, make_user, monkeypatch):
    alice, bob = make_user("Alice"), make_user("Bob")
    alice_id, bob_id = alice.id, bob.id

    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    monkeypatch.setattr(db_session, "query", broken_query)

    with pytest.raises(StorageError) as exc_info:
        service.create_friend_request(alice_id, bob_id)

    assert isinstance(exc_info.value.original, OperationalError)
    assert isinstance(exc_info.value.__cause__, OperationalError)


def test_outcomes_carry_message_and_status():
    assert FriendRequestOutcome.SENT.status == "pending"
    assert FriendRequestOutcome.ALREADY_FRIENDS.status == "accepted"
    assert FriendRequestOutcome.NOT_FOUND.message == "Friend request or friendship not found"
