import logging
from urllib.parse import unquote

import store
from conftest import ADMIN_PASSWORD, login, register
from database import get_connection


def test_register_logs_the_new_user_in(client, db_path):
    resp = register(client, "alice")

    assert resp.status_code == 302
    assert resp.headers["Location"] == "/"
    set_cookie = resp.headers["Set-Cookie"]
    assert set_cookie.startswith("user=alice.")
    assert "HttpOnly" not in set_cookie

    conn = get_connection(db_path)
    user = store.get_user_by_name(conn, "alice")
    conn.close()
    assert not user.is_admin
    assert not user.blue

    page = client.get("/")
    assert b"Hi, <a" in page.data
    assert b"alice" in page.data


def test_duplicate_registration_reports_error_in_fragment(client):
    register(client, "alice")
    client.post("/logout")

    resp = register(client, "alice", "other")

    assert resp.status_code == 302
    location = resp.headers["Location"]
    assert location.startswith("/register#failed%20to%20add%20user")
    assert unquote(location) == "/register#failed to add user: user with name alice already exists"


def test_register_while_logged_in_is_a_noop(client, db_path):
    register(client, "alice")

    resp = register(client, "bob")

    assert resp.headers["Location"] == "/"
    conn = get_connection(db_path)
    assert [u.name for u in store.get_users(conn)] == ["admin", "alice"]
    conn.close()


def test_register_and_login_pages_redirect_when_logged_in(client):
    assert client.get("/register").status_code == 200
    assert client.get("/login").status_code == 200

    register(client, "alice")

    assert client.get("/register").headers["Location"] == "/"
    assert client.get("/login").headers["Location"] == "/"


def test_login_with_bad_credentials(client):
    register(client, "alice", "right")
    client.post("/logout")

    for username, password in [("alice", "wrong"), ("nobody", "right")]:
        resp = login(client, username, password)
        assert resp.status_code == 302
        assert resp.headers["Location"] == "/login?err=incorrect%20username%2Fpassword"

    page = client.get("/login?err=incorrect%20username%2Fpassword")
    assert b"incorrect username/password" in page.data


def test_login_sets_cookie(client):
    resp = login(client, "admin", ADMIN_PASSWORD)

    assert resp.headers["Location"] == "/"
    assert resp.headers["Set-Cookie"].startswith("user=admin.")


def test_logout_clears_cookie(client):
    register(client, "alice")

    resp = client.post("/logout")

    assert resp.headers["Location"] == "/"
    assert client.get_cookie("user") is None
    assert client.get("/settings").headers["Location"] == "/login"


def test_logout_by_get_clears_cookie(client):
    register(client, "alice")

    resp = client.get("/logout")

    assert resp.headers["Location"] == "/"
    assert client.get_cookie("user") is None


def test_assets_are_served(client):
    resp = client.get("/assets/style.css")

    assert resp.status_code == 200
    assert "text/css" in resp.content_type


def test_account_events_are_logged(tweeter_app, client, caplog):
    caplog.set_level(logging.DEBUG, logger=tweeter_app.logger.name)
    register(client, "alice", "right")
    client.post("/logout")

    login(client, "alice", "wrong")

    messages = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert (logging.INFO, "Registered user alice (id 2)") in messages
    assert any(level == logging.WARNING and msg.startswith("Failed login for alice") for level, msg in messages)
    assert (logging.DEBUG, "POST /login -> 302") in messages


def test_forged_cookie_is_ignored(client):
    client.set_cookie("user", "admin")

    assert client.get("/settings").headers["Location"] == "/login"
    assert client.get("/admin").status_code == 401


def test_missing_form_fields_are_bad_requests(client):
    assert client.post("/register", data={"username": "alice"}).status_code == 400
    assert client.post("/login", data={"password": "x"}).status_code == 400
