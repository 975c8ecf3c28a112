"""Course registration — DB row + MyCourseReg.registerCourse(wallet, course_id).

Tests:
    - happy path: 201, registration row carries the receipt tx hash
    - chain call receives the checksummed wallet on file and the course id
    - explicit wallet_address in the body wins over the one on file
    - already registered → 409, no second chain call
    - course already ended → 400 COURSE_ENDED
    - user without identity token → 403
    - contract failure → 502 and no registration row
"""

from sqlalchemy import func, select

from portal.core.errors import ContractCallError
from portal.models.registration import Registration
from tests.services.fake_chain import CHECKSUM_WALLET


async def test_register_course_records_tx_hash(
    client, fake_chain, seed_user, open_course, test_session_factory,
):
    res = await client.post("/api/v1/registrations", json={
        "user_id": seed_user.user_id, "course_id": open_course.course_id,
    })

    assert res.status_code == 201
    data = res.json()
    tx_hash = data["receipt"]["transaction_hash"]
    assert data["registration"]["transaction_hash"] == tx_hash
    assert fake_chain.calls == [{
        "contract": "MyCourseReg",
        "method": "registerCourse",
        "args": (CHECKSUM_WALLET, open_course.course_id),
        "value_wei": 0,
    }]
    async with test_session_factory() as db:
        row = await db.get(Registration, data["registration"]["registration_id"])
        assert row.transaction_hash == tx_hash


async def test_register_course_uses_requested_wallet(client, fake_chain, seed_user, open_course):
    other = "0xffcf8fdee72ac11b5c542428b35eef5769c409f0"
    res = await client.post("/api/v1/registrations", json={
        "user_id": seed_user.user_id,
        "course_id": open_course.course_id,
        "wallet_address": other,
    })

    assert res.status_code == 201
    assert fake_chain.calls[0]["args"][0].lower() == other


async def test_register_course_twice_returns_409(client, fake_chain, seed_user, open_course):
    body = {"user_id": seed_user.user_id, "course_id": open_course.course_id}
    first = await client.post("/api/v1/registrations", json=body)
    second = await client.post("/api/v1/registrations", json=body)

    assert first.status_code == 201
    assert second.status_code == 409
    assert len(fake_chain.calls) == 1


async def test_register_for_ended_course_rejected(client, fake_chain, seed_user, ended_course):
    res = await client.post("/api/v1/registrations", json={
        "user_id": seed_user.user_id, "course_id": ended_course.course_id,
    })

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "COURSE_ENDED"
    assert fake_chain.calls == []


async def test_register_course_requires_identity(
    client, seed_user_without_identity, open_course,
):
    res = await client.post("/api/v1/registrations", json={
        "user_id": seed_user_without_identity.user_id,
        "course_id": open_course.course_id,
    })

    assert res.status_code == 403
    assert res.json()["error"]["code"] == "IDENTITY_REQUIRED"


async def test_register_course_unknown_course(client, seed_user):
    res = await client.post("/api/v1/registrations", json={
        "user_id": seed_user.user_id, "course_id": 404,
    })
    assert res.status_code == 404


async def test_contract_failure_leaves_no_registration(
    client, fake_chain, seed_user, open_course, test_session_factory,
):
    fake_chain.fail_with = ContractCallError("reverted: closed", "MyCourseReg", "registerCourse")

    res = await client.post("/api/v1/registrations", json={
        "user_id": seed_user.user_id, "course_id": open_course.course_id,
    })

    assert res.status_code == 502
    async with test_session_factory() as db:
        total = (await db.execute(select(func.count(Registration.registration_id)))).scalar_one()
        assert total == 0
