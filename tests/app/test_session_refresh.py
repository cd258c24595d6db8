import time

from jose import jwt


def test_valid_session_is_refreshed(client, register_user, settings):
    """A request carrying a valid cookie receives a renewed token."""
    register_user(client)
    original = client.cookies["access_token"]
    time.sleep(1)

    response = client.get("/api/templates")

    assert response.status_code == 200
    refreshed = response.cookies["access_token"]
    assert refreshed != original
    old_exp = jwt.decode(original, settings.secret_key, algorithms=[settings.algorithm])["exp"]
    new_exp = jwt.decode(refreshed, settings.secret_key, algorithms=[settings.algorithm])["exp"]
    assert new_exp > old_exp


def test_no_cookie_passes_through(client):
    response = client.get("/api/templates")

    assert response.status_code == 200
    assert "set-cookie" not in response.headers


def test_invalid_cookie_is_left_to_auth(client):
    client.cookies.set("access_token", "garbage")

    templates = client.get("/api/templates")
    user = client.get("/api/user")

    assert templates.status_code == 200
    assert "set-cookie" not in templates.headers
    assert user.status_code == 401


def test_logout_is_not_overridden_by_refresh(client, register_user):
    """The cookie cleared by logout is not replaced by a refreshed token."""
    register_user(client)

    response = client.post("/api/logout")

    set_cookies = response.headers.get_list("set-cookie")
    assert len(set_cookies) == 1
    assert "access_token" not in response.cookies
