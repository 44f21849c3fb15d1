"""Tests for the FastAPI routes."""

from pathlib import Path

from nwcommunity.auth.store import MemberStore

ADMIN_CODE = "NWC-test-code"
ADMIN_EMAIL = "admin@nwcommunity.test"

ADMIN_HEADERS = {"x-admin-code": ADMIN_CODE}


def _flag_something(client, text="you retard", content_type="post"):
    resp = client.post(
        "/api/content/check",
        json={"text": text, "context": "comment", "content_type": content_type, "content_id": "c-1"},
    )
    assert resp.status_code == 200
    return resp.json()


def _session_token(settings, email: str) -> str:
    store = MemberStore(Path(settings.data_dir) / "auth")
    member = store.get_or_create_member(email)
    return store.create_session(member.id).token


# --- Meta ---


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


# --- Admin authorization ---


def test_admin_routes_reject_anonymous(client):
    resp = client.get("/api/admin/flagged")
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Unauthorized"}


def test_admin_routes_reject_wrong_code(client):
    resp = client.get("/api/admin/flagged", headers={"x-admin-code": "nope"})
    assert resp.status_code == 401


def test_admin_code_header_authorizes(client):
    resp = client.get("/api/admin/me", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    assert resp.json() == {"is_admin": True, "via": "header"}


def test_admin_session_authorizes(client, settings):
    client.cookies.set("nwc_session", _session_token(settings, ADMIN_EMAIL.upper()))
    resp = client.get("/api/admin/me")
    assert resp.status_code == 200
    assert resp.json()["via"] == "session"


def test_member_session_is_not_admin(client, settings):
    client.cookies.set("nwc_session", _session_token(settings, "member@nwcommunity.test"))
    assert client.get("/api/admin/me").status_code == 401


def test_header_code_ignores_bad_session(client):
    client.cookies.set("nwc_session", "not-a-real-token")
    assert client.get("/api/admin/me", headers=ADMIN_HEADERS).status_code == 200


# --- Flag review workflow ---


def test_flag_review_workflow(client):
    result = _flag_something(client)
    assert result["allowed"] is False
    assert result["flag_reason"] == "slur"

    flags = client.get("/api/admin/flagged", params={"status": "pending"}, headers=ADMIN_HEADERS).json()
    assert len(flags) == 1
    flag_id = flags[0]["id"]
    assert flags[0]["content_type"] == "post"
    assert flags[0]["content_id"] == "c-1"

    bad = client.patch("/api/admin/flagged", json={"id": flag_id, "status": "archived"}, headers=ADMIN_HEADERS)
    assert bad.status_code == 400
    assert bad.json()["detail"]["fields"] == ["status"]
    still = client.get("/api/admin/flagged", headers=ADMIN_HEADERS).json()
    assert still[0]["status"] == "pending"

    ok = client.patch("/api/admin/flagged", json={"id": flag_id, "status": "reviewed"}, headers=ADMIN_HEADERS)
    assert ok.status_code == 200
    assert ok.json()["status"] == "reviewed"
    assert ok.json()["reviewed_by"] == "admin-code"

    back = client.patch("/api/admin/flagged", json={"id": flag_id, "status": "pending"}, headers=ADMIN_HEADERS)
    assert back.status_code == 400

    history = client.get("/api/admin/audit", params={"flag_id": flag_id}, headers=ADMIN_HEADERS).json()
    assert len(history) == 1
    assert history[0]["flag_id"] == flag_id
    assert history[0]["actor"] == "admin-code"
    assert (history[0]["from_status"], history[0]["to_status"]) == ("pending", "reviewed")
    assert client.get("/api/admin/audit", params={"flag_id": "other"}, headers=ADMIN_HEADERS).json() == []


def test_session_admin_is_recorded_as_actor(client, settings):
    _flag_something(client)
    client.cookies.set("nwc_session", _session_token(settings, ADMIN_EMAIL))
    flag_id = client.get("/api/admin/flagged").json()[0]["id"]
    resp = client.patch("/api/admin/flagged", json={"id": flag_id, "status": "resolved"})
    assert resp.json()["reviewed_by"] == ADMIN_EMAIL


def test_broken_member_record_is_401_not_500(client, settings):
    token = _session_token(settings, ADMIN_EMAIL)
    (Path(settings.data_dir) / "auth" / "members.json").write_text('[{"id": "no-email"}]')
    client.cookies.set("nwc_session", token)
    assert client.get("/api/admin/me").status_code == 401


def test_update_on_unreadable_flag_file_is_503(client, settings):
    _flag_something(client)
    flag_id = client.get("/api/admin/flagged", headers=ADMIN_HEADERS).json()[0]["id"]
    path = Path(settings.data_dir) / "moderation" / "flagged_content.json"
    path.write_text(path.read_text()[:-4])

    resp = client.patch("/api/admin/flagged", json={"id": flag_id, "status": "reviewed"}, headers=ADMIN_HEADERS)
    assert resp.status_code == 503


def test_update_unknown_flag_is_404(client):
    resp = client.patch("/api/admin/flagged", json={"id": "missing", "status": "reviewed"}, headers=ADMIN_HEADERS)
    assert resp.status_code == 404


def test_list_with_unknown_status_is_400(client):
    resp = client.get("/api/admin/flagged", params={"status": "removed"}, headers=ADMIN_HEADERS)
    assert resp.status_code == 400


def test_flag_summary(client):
    _flag_something(client)
    _flag_something(client, text="what the fuck", content_type="message")
    summary = client.get("/api/admin/flagged/summary", headers=ADMIN_HEADERS).json()
    assert summary == {"counts": {"pending": 2, "reviewed": 0, "resolved": 0}, "total": 2}


# --- Content ---


def test_clean_text_is_not_flagged(client):
    assert _flag_something(client, text="Lovely farmers market")["allowed"] is True
    assert client.get("/api/admin/flagged", headers=ADMIN_HEADERS).json() == []


def test_check_rejects_unknown_content_type(client):
    resp = client.post("/api/content/check", json={"text": "hi", "context": "comment", "content_type": "blog"})
    assert resp.status_code == 400


def test_listing_check_flags_store_item(client):
    resp = client.post(
        "/api/content/listings/check",
        json={"title": "Vintage campaign buttons", "content_id": "item-4", "author_id": "seller-1"},
    )
    assert resp.json()["flag_reason"] == "prohibited_category"
    flags = client.get("/api/admin/flagged", headers=ADMIN_HEADERS).json()
    assert flags[0]["content_type"] == "store_item"
    assert flags[0]["author_id"] == "seller-1"


def test_sanitize_endpoint(client):
    resp = client.post("/api/content/sanitize", json={"html": "<p>hi<script>alert(1)</script></p>"})
    assert resp.json() == {"html": "<p>hi</p>"}
    resp = client.post("/api/content/sanitize", json={"text": "a\nb"})
    assert resp.json() == {"html": "a<br>b"}


def test_cities_endpoint(client):
    resp = client.post("/api/content/cities", json={"cities": ["Coeur D'Alene", "coeur d'alene", "Spokane", None, ""]})
    assert resp.json() == {"cities": ["Coeur d'Alene", "Spokane"]}


# --- Sign-in and rate limiting ---


def test_signup_and_me(client):
    resp = client.post("/api/auth/signup", json={"email": "New@Member.test", "display_name": "New"})
    assert resp.status_code == 200
    assert resp.json()["member"]["email"] == "new@member.test"

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["email"] == "new@member.test"

    client.post("/api/auth/signout")
    assert client.get("/api/auth/me").status_code == 401


def test_signup_duplicate_email(client):
    client.post("/api/auth/signup", json={"email": "dup@member.test"})
    assert client.post("/api/auth/signup", json={"email": "dup@member.test"}).status_code == 409


def test_signin_is_rate_limited_per_client(client):
    headers = {"x-forwarded-for": "203.0.113.5, 10.0.0.1"}
    for _ in range(5):
        resp = client.post("/api/auth/signin", json={"email": "nobody@member.test"}, headers=headers)
        assert resp.status_code == 401

    blocked = client.post("/api/auth/signin", json={"email": "nobody@member.test"}, headers=headers)
    assert blocked.status_code == 429
    assert int(blocked.headers["retry-after"]) > 0

    other = client.post(
        "/api/auth/signin",
        json={"email": "nobody@member.test"},
        headers={"x-forwarded-for": "198.51.100.9"},
    )
    assert other.status_code == 401
