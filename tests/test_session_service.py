from datetime import datetime, timezone

import pytest

from skateroom.schemas.skate_session import SkateSessionCreate, SkateSessionRead, SkateSessionUpdate
from skateroom.services.session_service import (
    SessionNotFoundError,
    create_session,
    delete_session,
    fetch_sessions,
    filter_sessions,
    update_session,
)


USER = "user-1"


def _session(place: str, when: datetime, address: str | None = None, review: str | None = None) -> SkateSessionRead:
    return SkateSessionRead(
        id=place, user_id=USER, place_name=place, address=address, session_date=when, review=review
    )


def test_filter_matches_place_name_case_insensitively() -> None:
    sessions = [_session("Downtown Plaza", datetime(2024, 5, 1)), _session("Westside Park", datetime(2024, 5, 2))]

    assert [s.place_name for s in filter_sessions(sessions, "plaza")] == ["Downtown Plaza"]
    assert [s.place_name for s in filter_sessions(sessions, "PLAZA")] == ["Downtown Plaza"]


def test_filter_matches_address_and_review() -> None:
    sessions = [
        _session("Spot A", datetime(2024, 5, 1), address="123 Main St"),
        _session("Spot B", datetime(2024, 5, 2), review="Landed my first KICKFLIP"),
        _session("Spot C", datetime(2024, 5, 3)),
    ]

    assert [s.place_name for s in filter_sessions(sessions, "main st")] == ["Spot A"]
    assert [s.place_name for s in filter_sessions(sessions, "kickflip")] == ["Spot B"]
    assert filter_sessions(sessions, "") == sessions
    assert filter_sessions(sessions, None) == sessions


def test_fetch_orders_by_session_date_descending(store) -> None:
    for place, day in [("middle", 10), ("oldest", 1), ("newest", 20)]:
        create_session(store, USER, SkateSessionCreate(place_name=place, session_date=datetime(2024, 3, day)))

    assert [s.place_name for s in fetch_sessions(store, USER)] == ["newest", "middle", "oldest"]


def test_create_returns_refetched_list(store) -> None:
    result = create_session(
        store, USER, SkateSessionCreate(place_name="  Downtown Plaza ", session_date=datetime(2024, 3, 1))
    )

    assert [s.place_name for s in result] == ["Downtown Plaza"]
    assert result[0].user_id == USER


def test_update_patches_only_sent_fields(store) -> None:
    created = create_session(
        store, USER, SkateSessionCreate(place_name="Plaza", address="1 Main", session_date=datetime(2024, 3, 1))
    )

    result = update_session(store, USER, created[0].id, SkateSessionUpdate(review="windy"))

    assert result[0].review == "windy"
    assert result[0].address == "1 Main"


def test_update_cannot_clear_place_name() -> None:
    with pytest.raises(ValueError):
        SkateSessionUpdate(place_name="  ")


def test_delete_and_ownership(store) -> None:
    created = create_session(store, USER, SkateSessionCreate(place_name="Plaza", session_date=datetime(2024, 3, 1)))
    session_id = created[0].id

    with pytest.raises(SessionNotFoundError):
        delete_session(store, "intruder", session_id)

    assert delete_session(store, USER, session_id) == []


def test_naive_session_dates_are_read_as_utc() -> None:
    session = _session("Plaza", datetime(2024, 5, 1, 10))
    assert session.session_date.tzinfo is timezone.utc
