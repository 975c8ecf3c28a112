"""Catalog routes — semesters, courses, rooms, events (DB only, no chain calls).

Tests:
    - create + list round trip for each reference type
    - semester end before start → 400; duplicate semester / room name → 409
    - course with unknown faculty → 404
    - course list filtered by semester_id
    - events listed with joined counts
    - room bookings filtered by date
"""

from datetime import date, time, timedelta

from portal.models.booking import Booking


async def test_create_and_list_semesters(client, fake_chain):
    res = await client.post("/api/v1/semesters", json={
        "name": "Spring", "start_date": "2027-01-10", "end_date": "2027-05-20",
    })

    assert res.status_code == 201
    assert res.json()["fee_amount"] == "0.05"

    listed = await client.get("/api/v1/semesters")
    assert [s["name"] for s in listed.json()["semesters"]] == ["Spring"]
    assert fake_chain.calls == []


async def test_semester_dates_must_be_ordered(client):
    res = await client.post("/api/v1/semesters", json={
        "name": "Backwards", "start_date": "2027-05-20", "end_date": "2027-01-10",
    })
    assert res.status_code == 400


async def test_duplicate_semester_name_returns_409(client, seed_semester):
    res = await client.post("/api/v1/semesters", json={
        "name": "Fall", "start_date": "2027-08-01", "end_date": "2027-12-15",
    })
    assert res.status_code == 409


async def test_create_course_unknown_faculty_returns_404(client):
    res = await client.post("/api/v1/courses", json={
        "course_name": "Databases", "end_date": "2027-06-01", "faculty_id": 42,
    })
    assert res.status_code == 404


async def test_list_courses_filtered_by_semester(client, open_course, ended_course, seed_semester):
    res = await client.get(f"/api/v1/courses?semester_id={seed_semester.semester_id}")

    assert res.status_code == 200
    assert [c["course_name"] for c in res.json()["courses"]] == ["Distributed Systems"]

    everything = await client.get("/api/v1/courses")
    assert len(everything.json()["courses"]) == 2


async def test_get_course(client, open_course):
    res = await client.get(f"/api/v1/courses/{open_course.course_id}")
    assert res.json()["course_name"] == "Distributed Systems"


async def test_create_room_and_duplicate(client):
    first = await client.post("/api/v1/rooms", json={"name": "Lab 1", "capacity": 30})
    again = await client.post("/api/v1/rooms", json={"name": "Lab 1", "capacity": 12})

    assert first.status_code == 201
    assert again.status_code == 409


async def test_room_capacity_must_be_positive(client):
    res = await client.post("/api/v1/rooms", json={"name": "Closet", "capacity": 0})
    assert res.status_code == 400


async def test_create_event_unknown_room_returns_404(client):
    res = await client.post("/api/v1/events", json={
        "title": "Hackathon", "event_date": "2027-03-03", "room_id": 9, "capacity": 50,
    })
    assert res.status_code == 404


async def test_list_events_includes_joined_count(client, test_db, seed_event, seed_user):
    test_db.add(Booking(
        user_id=seed_user.user_id, event_id=seed_event.event_id,
        booking_date=seed_event.event_date,
    ))
    await test_db.commit()

    res = await client.get("/api/v1/events")

    [event] = res.json()["events"]
    assert event["title"] == "Blockchain Meetup"
    assert event["joined"] == 1
    assert event["capacity"] == 2


async def test_room_bookings_filtered_by_date(client, test_db, seed_room, seed_user):
    day = date.today() + timedelta(days=3)
    test_db.add_all([
        Booking(user_id=seed_user.user_id, room_id=seed_room.room_id, booking_date=day,
                start_time=time(9), end_time=time(10)),
        Booking(user_id=seed_user.user_id, room_id=seed_room.room_id,
                booking_date=day + timedelta(days=1),
                start_time=time(9), end_time=time(10)),
    ])
    await test_db.commit()

    res = await client.get(
        f"/api/v1/rooms/{seed_room.room_id}/bookings", params={"date": day.isoformat()},
    )

    assert res.status_code == 200
    bookings = res.json()["bookings"]
    assert len(bookings) == 1
    assert bookings[0]["start_time"] == "09:00:00"
