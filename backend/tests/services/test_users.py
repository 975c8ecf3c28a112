"""User routes — registration with identity mint, login, profile and dashboard reads.

Tests:
    - POST /users stores the row and mints MyNFT.mintNFT(email, identity URI)
    - receipt fields written to identity_token_id / identity_tx_hash
    - email normalized, wallet checksummed, password never echoed
    - duplicate email → 409, bad wallet → 400, contract failure → 502 and no row
    - login: right password 200, wrong password / unknown email 401
    - dashboard reads: courses, certificate eligibility, fees, bookings
"""

from sqlalchemy import func, select

from portal.core.errors import ContractCallError
from portal.models.user import User
from portal.infrastructure.passwords import verify_password
from tests.services.fake_chain import CHECKSUM_WALLET, PASSWORD, WALLET


def _user_body(**overrides):
    body = {
        "roll_number": "CS-100",
        "name": "Barbara Liskov",
        "email": "Barbara@Uni.edu",
        "password": PASSWORD,
        "dob": "2002-11-07",
        "wallet_address": WALLET,
    }
    body.update(overrides)
    return body


async def test_register_user_mints_identity(client, fake_chain, test_session_factory):
    res = await client.post("/api/v1/users", json=_user_body())

    assert res.status_code == 201
    data = res.json()
    assert data["success"] is True
    user = data["user"]
    assert user["email"] == "barbara@uni.edu"
    assert user["wallet_address"] == CHECKSUM_WALLET
    assert user["identity_token_id"] == 1
    assert user["identity_tx_hash"] == data["receipt"]["transaction_hash"]
    assert "password" not in user and "password_hash" not in user

    call = fake_chain.calls[0]
    assert call["contract"] == "MyNFT"
    assert call["method"] == "mintNFT"
    assert call["args"] == (
        "barbara@uni.edu",
        f"http://portal.test/api/metadata/identity/{user['user_id']}",
    )

    async with test_session_factory() as db:
        row = await db.get(User, user["user_id"])
        assert row.identity_tx_hash == data["receipt"]["transaction_hash"]
        assert verify_password(PASSWORD, row.password_hash)


async def test_register_user_duplicate_email_returns_409(client, seed_user, fake_chain):
    res = await client.post("/api/v1/users", json=_user_body(email="ADA@uni.edu"))

    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_RECORD"
    assert fake_chain.calls == []


async def test_register_user_rejects_malformed_wallet(client, fake_chain):
    res = await client.post("/api/v1/users", json=_user_body(wallet_address="0x1234"))

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert fake_chain.calls == []


async def test_register_user_rejects_short_password(client):
    res = await client.post("/api/v1/users", json=_user_body(password="short"))
    assert res.status_code == 400


async def test_register_user_contract_failure_persists_nothing(
    client, fake_chain, test_session_factory,
):
    fake_chain.fail_with = ContractCallError("reverted: paused", "MyNFT", "mintNFT")

    res = await client.post("/api/v1/users", json=_user_body())

    assert res.status_code == 502
    assert res.json()["error"]["code"] == "CONTRACT_CALL_FAILED"
    async with test_session_factory() as db:
        total = (await db.execute(select(func.count(User.user_id)))).scalar_one()
        assert total == 0


async def test_login_user_success(client, seed_user):
    res = await client.post(
        "/api/v1/users/login", json={"email": "ada@uni.edu", "password": PASSWORD},
    )
    assert res.status_code == 200
    assert res.json() == {"success": True, "user_id": seed_user.user_id, "name": "Ada Lovelace"}


async def test_login_user_wrong_password_returns_401(client, seed_user):
    res = await client.post(
        "/api/v1/users/login", json={"email": "ada@uni.edu", "password": "nope-nope"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_CREDENTIALS"


async def test_login_unknown_email_returns_401(client):
    res = await client.post(
        "/api/v1/users/login", json={"email": "nobody@uni.edu", "password": PASSWORD},
    )
    assert res.status_code == 401


async def test_get_user_not_found(client):
    res = await client.get("/api/v1/users/999")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_user_courses_lists_registrations(client, seed_registration, ended_course):
    res = await client.get(f"/api/v1/users/{seed_registration.user_id}/courses")

    assert res.status_code == 200
    courses = res.json()["courses"]
    assert len(courses) == 1
    assert courses[0]["course_name"] == "Compilers"
    assert courses[0]["grade"] is None


async def test_certificate_eligibility_flags_ended_course(
    client, seed_registration, ended_course,
):
    res = await client.get(
        f"/api/v1/users/{seed_registration.user_id}/certificates/eligible",
    )

    assert res.status_code == 200
    [course] = res.json()["courses"]
    assert course["course_id"] == ended_course.course_id
    assert course["eligible"] is True
    assert course["issued"] is False


async def test_fee_summary_marks_unpaid_semester(client, seed_user, seed_semester):
    res = await client.get(f"/api/v1/users/{seed_user.user_id}/fees")

    assert res.status_code == 200
    data = res.json()
    assert data["user"]["roll_number"] == "CS-001"
    [semester] = data["semesters"]
    assert semester["paid"] is False
    assert semester["transaction_hash"] is None


async def test_user_bookings_empty(client, seed_user):
    res = await client.get(f"/api/v1/users/{seed_user.user_id}/bookings")
    assert res.json() == {"user_id": seed_user.user_id, "rooms": [], "events": []}
