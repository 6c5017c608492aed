from datetime import datetime

from edux.services import auth_service
from tests.conftest import auth_headers, call_tool, error_text, get_token, tool_call


def test_login_success(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "admin@edux.io"})
    assert resp.status_code == 200
    data = resp.json()
    assert "accessToken" in data
    assert "refreshToken" in data
    assert data["tokenType"] == "bearer"
    assert data["user"]["role"] == "admin"


def test_login_email_is_case_insensitive(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "  Editor@EDUX.io "})
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == "u-editor"


def test_login_unknown_email(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "nobody@edux.io"})
    assert resp.status_code == 401


def test_login_inactive_user(client, db, seed_users):
    seed_users["viewer"].is_active = False
    db.commit()
    resp = client.post("/api/auth/login", json={"email": "viewer@edux.io"})
    assert resp.status_code == 401


def test_me_authenticated(client, seed_users):
    headers = auth_headers(client, "admin@edux.io")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "admin@edux.io"


def test_me_unauthenticated(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code in (401, 403)  # HTTPBearer raises 401 or 403 depending on version


def test_me_with_refresh_token_rejected(client, seed_users):
    refresh = auth_service.create_refresh_token(seed_users["admin"])
    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {refresh}"})
    assert resp.status_code == 401


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_logout(client, seed_users):
    headers = auth_headers(client, "admin@edux.io")
    resp = client.post("/api/auth/logout", headers=headers)
    assert resp.status_code == 200


def test_token_roundtrip(seed_users):
    user = seed_users["editor"]
    payload = auth_service.verify_token(auth_service.create_access_token(user))
    assert payload.user_id == "u-editor"
    assert payload.role == "editor"
    assert auth_service.verify_refresh_token(auth_service.create_refresh_token(user)).user_id == "u-editor"


def test_access_token_is_not_refresh_token(seed_users):
    access = auth_service.create_access_token(seed_users["editor"])
    try:
        auth_service.verify_refresh_token(access)
    except auth_service.AuthError as exc:
        assert "리프레시" in exc.message
    else:
        raise AssertionError("access token accepted as refresh token")


def test_user_login_tool(client, seed_users):
    data = tool_call(client, "user.login", email="kim@edux.io")
    assert data["user"]["role"] == "instructor"
    me = tool_call(client, "user.me", token=data["accessToken"])
    assert me["id"] == "u-kim"
    assert me["phone"] == "010-3333-4444"


def test_user_me_tool_with_invalid_token(client, seed_users):
    result = call_tool(client, "user.me", token="not-a-jwt")
    assert result["errorCode"] == "AUTH_FAILED"
    assert error_text(result).startswith("[AUTH_FAILED]")


def test_user_me_tool_deleted_user(client, db, seed_users):
    token = get_token(client, "guest@edux.io")
    seed_users["guest"].deleted_at = datetime(2026, 1, 1)
    db.commit()
    result = call_tool(client, "user.me", token=token)
    assert result["errorCode"] == "AUTH_FAILED"
    assert "유효한 사용자 계정" in error_text(result)


def test_tool_list_and_unknown_tool(client):
    resp = client.get("/api/tools")
    assert resp.status_code == 200
    names = {row["name"] for row in resp.json()}
    assert {"brochure.create", "brochure.get", "document.list", "template.previewHtml"} <= names

    resp = client.post("/api/tools/unknown.tool", json={})
    assert resp.status_code == 404


def test_tool_missing_arguments(client):
    result = call_tool(client, "user.me")
    assert result["errorCode"] == "VALIDATION"
    assert "token" in error_text(result)
