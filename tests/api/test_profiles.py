# tests/api/test_profiles.py
from tests.factories import auth, make_profile


def test_users_sorted_by_display_name(client, db_session):
    me = make_profile(db_session, "u1", display_name="zed")
    make_profile(db_session, "u2", display_name="Amy")
    make_profile(db_session, "u3", display_name=None)
    db_session.commit()

    r = client.get("/api/users", headers=auth(me))
    assert r.status_code == 200
    assert [p["id"] for p in r.json()] == ["u2", "u1", "u3"]


def test_get_own_profile(client, db_session):
    me = make_profile(db_session, "u1", display_name="Ada", biography="Birder")
    db_session.commit()

    r = client.get("/api/profile", headers=auth(me))
    assert r.status_code == 200
    assert r.json()["biography"] == "Birder"
    assert client.get("/api/profile").status_code == 401


def test_update_profile(client, db_session):
    me = make_profile(db_session)
    db_session.commit()

    r = client.patch(
        "/api/profile",
        json={"display_name": " Grace ", "biography": "Loves owls"},
        headers=auth(me),
    )
    assert r.status_code == 200
    assert r.json()["display_name"] == "Grace"
    assert r.json()["biography"] == "Loves owls"


def test_update_profile_validation(client, db_session):
    me = make_profile(db_session)
    db_session.commit()

    too_short = client.patch("/api/profile", json={"display_name": "A"}, headers=auth(me))
    assert too_short.status_code == 422
    too_long = client.patch("/api/profile", json={"display_name": "x" * 31}, headers=auth(me))
    assert too_long.status_code == 422
    long_bio = client.patch(
        "/api/profile", json={"display_name": "Ada", "biography": "b" * 161}, headers=auth(me)
    )
    assert long_bio.status_code == 422
