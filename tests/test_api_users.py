"""회원가입/로그인/프로필 API 테스트"""
import pytest

from conftest import auth_headers


@pytest.mark.asyncio
async def test_signup_and_signin(client):
    signup = await client.post(
        "/api/users/signup",
        json={"name": "Asha", "email": "Asha@Example.com", "password": "secret123"},
    )
    assert signup.status_code == 201
    body = signup.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["email"] == "asha@example.com"
    assert body["user"]["subscriptionStatus"] == "Free"
    assert body["user"]["isAdmin"] is False
    assert body["token"]

    duplicate = await client.post(
        "/api/users/signup",
        json={"email": "asha@example.com", "password": "another123"},
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"] == "User with this email already exists"

    wrong_password = await client.post(
        "/api/users/signin",
        json={"email": "asha@example.com", "password": "wrong-password"},
    )
    assert wrong_password.status_code == 401
    assert wrong_password.json()["detail"] == "Invalid credentials"

    signin = await client.post("/api/users/signin", json={"email": "asha@example.com", "password": "secret123"})
    assert signin.status_code == 200
    assert signin.json()["message"] == "Signed in successfully"
    assert signin.json()["user"]["lastLogin"] is not None

    profile = await client.get(
        "/api/users/profile",
        headers={"Authorization": f"Bearer {signin.json()['token']}"},
    )
    assert profile.status_code == 200
    assert profile.json()["name"] == "Asha"


@pytest.mark.asyncio
async def test_signup_validation(client):
    short_password = await client.post("/api/users/signup", json={"email": "a@example.com", "password": "123"})
    assert short_password.status_code == 422

    bad_email = await client.post("/api/users/signup", json={"email": "not-an-email", "password": "secret123"})
    assert bad_email.status_code == 422


@pytest.mark.asyncio
async def test_signin_unknown_email(client):
    response = await client.post("/api/users/signin", json={"email": "ghost@example.com", "password": "secret123"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_profile_requires_valid_token(client):
    missing = await client.get("/api/users/profile")
    assert missing.status_code == 401

    invalid = await client.get("/api/users/profile", headers={"Authorization": "Bearer abc.def.ghi"})
    assert invalid.status_code == 401
    assert invalid.json()["detail"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_update_profile_partial(client, normal_user):
    headers = auth_headers(normal_user)
    response = await client.put(
        "/api/users/profile",
        json={"mobileNumber": "9999999999", "profilePictureURL": "https://cdn.example.com/me.png"},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["mobileNumber"] == "9999999999"
    assert body["profilePictureURL"] == "https://cdn.example.com/me.png"
    # 요청에 없는 필드는 유지
    assert body["name"] == "student"
