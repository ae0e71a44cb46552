from app.models.assistance import Assistance


def test_join_event_twice(client, make_user, make_event, auth_headers):
    owner, guest = make_user("Owner"), make_user("Guest")
    event = make_event(owner)

    response = client.post(f"/api/v1/assistances/{event.id}", headers=auth_headers(guest))
    assert response.status_code == 200
    assert response.json() == {"outcome": "joined", "status": "joined", "message": "Assistance created"}

    response = client.post(f"/api/v1/assistances/{event.id}", headers=auth_headers(guest))
    assert response.status_code == 200
    assert response.json()["outcome"] == "already_joined"


def test_join_unknown_event(client, make_user, auth_headers):
    guest = make_user("Guest")

    response = client.post("/api/v1/assistances/404", headers=auth_headers(guest))

    assert response.status_code == 404


def test_get_assistance(client, make_user, make_event, auth_headers):
    owner, guest = make_user("Owner"), make_user("Guest")
    event = make_event(owner)
    url = f"/api/v1/assistances/{guest.id}/{event.id}"

    assert client.get(url, headers=auth_headers(owner)).status_code == 404

    client.post(f"/api/v1/assistances/{event.id}", headers=auth_headers(guest))
    response = client.get(url, headers=auth_headers(owner))

    assert response.status_code == 200
    assert response.json() == {
        "user_id": guest.id, "event_id": event.id, "punctuation": None, "comment": None
    }


def test_rate_finished_event(client, db_session, make_user, finished_event, auth_headers):
    owner, guest = make_user("Owner"), make_user("Guest")
    event = finished_event(owner)
    client.post(f"/api/v1/assistances/{event.id}", headers=auth_headers(guest))

    response = client.put(
        f"/api/v1/assistances/{event.id}",
        json={"punctuation": 8, "comment": "fun"},
        headers=auth_headers(guest)
    )

    assert response.status_code == 200
    assert response.json()["outcome"] == "rated"
    stored = db_session.query(Assistance).filter_by(user_id=guest.id, event_id=event.id).one()
    assert (stored.punctuation, stored.comment) == (8, "fun")


def test_rate_with_null_keeps_previous_rating(client, db_session, make_user, finished_event, auth_headers):
    owner, guest = make_user("Owner"), make_user("Guest")
    event = finished_event(owner)
    url = f"/api/v1/assistances/{event.id}"
    client.post(url, headers=auth_headers(guest))
    client.put(url, json={"punctuation": 8, "comment": "fun"}, headers=auth_headers(guest))

    response = client.put(
        url,
        json={"punctuation": None, "comment": "edited"},
        headers=auth_headers(guest)
    )

    assert response.status_code == 200
    db_session.expire_all()
    stored = db_session.query(Assistance).filter_by(user_id=guest.id, event_id=event.id).one()
    assert (stored.punctuation, stored.comment) == (8, "edited")


def test_rate_before_event_ends_is_rejected(client, db_session, make_user, make_event, auth_headers):
    owner, guest = make_user("Owner"), make_user("Guest")
    event = make_event(owner)
    client.post(f"/api/v1/assistances/{event.id}", headers=auth_headers(guest))

    response = client.put(
        f"/api/v1/assistances/{event.id}",
        json={"punctuation": 8},
        headers=auth_headers(guest)
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Event has not finished yet"
    stored = db_session.query(Assistance).filter_by(user_id=guest.id, event_id=event.id).one()
    assert stored.punctuation is None


def test_rate_out_of_range(client, make_user, finished_event, auth_headers):
    owner, guest = make_user("Owner"), make_user("Guest")
    event = finished_event(owner)
    client.post(f"/api/v1/assistances/{event.id}", headers=auth_headers(guest))

    response = client.put(
        f"/api/v1/assistances/{event.id}",
        json={"punctuation": 11},
        headers=auth_headers(guest)
    )

    assert response.status_code == 422


def test_rate_without_assistance(client, make_user, finished_event, auth_headers):
    owner, stranger = make_user("Owner"), make_user("Stranger")
    event = finished_event(owner)

    response = client.put(
        f"/api/v1/assistances/{event.id}",
        json={"punctuation": 3},
        headers=auth_headers(stranger)
    )

    assert response.status_code == 404


def test_owner_removes_assistant(client, make_user, make_event, auth_headers):
    owner, guest = make_user("Owner"), make_user("Guest")
    event = make_event(owner)
    client.post(f"/api/v1/assistances/{event.id}", headers=auth_headers(guest))
    url = f"/api/v1/assistances/{guest.id}/{event.id}"

    response = client.delete(url, headers=auth_headers(guest))
    assert response.status_code == 401

    response = client.delete(url, headers=auth_headers(owner))
    assert response.status_code == 200
    assert response.json()["outcome"] == "left"

    assert client.get(url, headers=auth_headers(owner)).status_code == 404


def test_leave_event(client, make_user, make_event, auth_headers):
    owner, guest = make_user("Owner"), make_user("Guest")
    event = make_event(owner)
    client.post(f"/api/v1/assistances/{event.id}", headers=auth_headers(guest))

    response = client.delete(f"/api/v1/events/{event.id}/assistances", headers=auth_headers(guest))
    assert response.status_code == 200
    assert response.json()["outcome"] == "left"

    response = client.delete(f"/api/v1/events/{event.id}/assistances", headers=auth_headers(guest))
    assert response.status_code == 404


def test_event_assistances(client, make_user, finished_event, auth_headers):
    owner, ann, ben = make_user("Owner"), make_user("Ann"), make_user("Ben")
    event = finished_event(owner)
    client.post(f"/api/v1/assistances/{event.id}", headers=auth_headers(ann))
    client.post(f"/api/v1/assistances/{event.id}", headers=auth_headers(ben))
    client.put(f"/api/v1/assistances/{event.id}", json={"punctuation": 9}, headers=auth_headers(ann))

    response = client.get(f"/api/v1/events/{event.id}/assistances", headers=auth_headers(owner))

    assert response.status_code == 200
    body = response.json()
    assert body["total_count"] == 2
    assert [(a["id"], a["punctuation"]) for a in body["assistants"]] == [(ann.id, 9), (ben.id, None)]

    response = client.get(f"/api/v1/events/{event.id}/assistances/{ann.id}", headers=auth_headers(owner))
    assert response.json()["punctuation"] == 9

    response = client.get(f"/api/v1/events/{event.id}/assistances/{owner.id}", headers=auth_headers(owner))
    assert response.status_code == 404
