from datetime import date, timedelta

import pytest

from leettrack.streaks import compute_points, compute_streak_update, days_between
from tests.conftest import auth

TODAY = date(2025, 3, 10)
YESTERDAY = TODAY - timedelta(days=1)


def _update(previous_total, last, streak, max_streak, new_total, easy=0, medium=0, hard=0, today=TODAY):
    return compute_streak_update(
        previous_total=previous_total,
        last_solved_date=last,
        current_streak=streak,
        max_streak=max_streak,
        new_total=new_total,
        easy=easy,
        medium=medium,
        hard=hard,
        today=today,
    )


def test_days_between_uses_calendar_dates():
    assert days_between(YESTERDAY, TODAY) == 1
    assert days_between(TODAY, TODAY) == 0
    assert days_between(date(2024, 12, 31), date(2025, 1, 2)) == 2
    # leap day
    assert days_between(date(2024, 2, 28), date(2024, 3, 1)) == 2


def test_points_formula():
    assert compute_points(easy=4, medium=3, hard=2, current_streak=1) == 4 + 6 + 6 + 5


def test_first_solve_starts_streak_at_one():
    result = _update(0, None, 0, 0, 1, easy=1)
    assert result.current_streak == 1
    assert result.max_streak == 1
    assert result.last_solved_date == TODAY
    assert result.total_points == 1 + 5
    assert result.solved_new


def test_consecutive_day_extends_streak():
    result = _update(5, YESTERDAY, 3, 3, 8)
    assert result.current_streak == 4
    assert result.max_streak == 4


def test_same_day_recheck_does_not_inflate():
    first = _update(5, YESTERDAY, 3, 3, 8)
    second = _update(8, first.last_solved_date, first.current_streak, first.max_streak, 8)
    assert second.current_streak == 4
    assert not second.solved_new

    # more solves on the same day also keep the streak
    third = _update(8, first.last_solved_date, first.current_streak, first.max_streak, 10)
    assert third.current_streak == 4


def test_same_day_solve_with_zero_streak_becomes_one():
    result = _update(3, TODAY, 0, 2, 4)
    assert result.current_streak == 1
    assert result.max_streak == 2


@pytest.mark.parametrize("gap", [2, 3, 30])
def test_gap_resets_to_exactly_one_on_new_solve(gap):
    result = _update(50, TODAY - timedelta(days=gap), 42, 42, 51)
    assert result.current_streak == 1
    assert result.max_streak == 42


def test_inactivity_resets_streak_and_bonus():
    result = _update(10, TODAY - timedelta(days=2), 6, 9, 10, easy=10)
    assert result.current_streak == 0
    assert result.max_streak == 9
    assert result.total_points == 10
    assert result.last_solved_date == TODAY - timedelta(days=2)
    assert not result.solved_new


def test_no_new_solves_within_a_day_keeps_state():
    result = _update(10, YESTERDAY, 6, 9, 10, easy=10)
    assert result.current_streak == 6
    assert result.max_streak == 9
    assert result.total_points == 10 + 6 * 5


def test_no_history_and_no_solves_keeps_zero():
    result = _update(0, None, 0, 0, 0)
    assert result.current_streak == 0
    assert result.last_solved_date is None


def test_max_streak_never_decreases():
    state = {"total": 0, "last": None, "streak": 0, "max": 0}
    day = TODAY
    seen_max = 0
    # solve, solve, skip two days, recheck, solve, solve
    plan = [(0, 1), (1, 1), (3, 0), (0, 1), (1, 1)]
    for step_days, solved in plan:
        day = day + timedelta(days=step_days)
        result = _update(state["total"], state["last"], state["streak"], state["max"],
                         state["total"] + solved, today=day)
        assert result.max_streak >= seen_max
        seen_max = result.max_streak
        state = {
            "total": state["total"] + solved,
            "last": result.last_solved_date,
            "streak": result.current_streak,
            "max": result.max_streak,
        }
    assert seen_max == 2


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

def test_post_streak_scenario(client, register, set_user, get_user):
    token, user_id = register()
    set_user(
        user_id,
        total_solved=5,
        last_solved_date=date.today() - timedelta(days=1),
        current_streak=3,
        max_streak=3,
    )

    res = client.post(
        "/api/streaks",
        json={"problemsSolved": 8, "easySolved": 5, "mediumSolved": 2, "hardSolved": 1},
        headers=auth(token),
    )
    assert res.status_code == 200
    body = res.get_json()
    assert body["message"] == "Streak updated"
    assert body["currentStreak"] == 4
    assert body["maxStreak"] == 4
    assert body["totalPoints"] == 5 + 4 + 3 + 20

    res = client.post("/api/streaks", json={"problemsSolved": 8}, headers=auth(token))
    assert res.get_json()["currentStreak"] == 4
    assert res.get_json()["message"] == "No new problems solved"

    user = get_user(user_id)
    assert user["current_streak"] == 4
    assert user["total_solved"] == 8
    assert user["total_points"] == 5 + 4 + 3 + 20


def test_post_streak_reports_inactivity_reset(client, register, set_user):
    token, user_id = register()
    set_user(
        user_id,
        total_solved=5,
        easy_solved=5,
        last_solved_date=date.today() - timedelta(days=3),
        current_streak=3,
        max_streak=3,
    )

    res = client.post("/api/streaks", json={"problemsSolved": 5}, headers=auth(token))
    body = res.get_json()
    assert body["message"] == "Streak reset due to inactivity"
    assert body["currentStreak"] == 0
    assert body["maxStreak"] == 3
    assert body["totalPoints"] == 5


def test_post_streak_validation(client, register):
    token, _ = register()
    assert client.post("/api/streaks", json={}, headers=auth(token)).status_code == 400
    res = client.post("/api/streaks", json={"problemsSolved": "8"}, headers=auth(token))
    assert res.status_code == 400
    assert res.get_json()["error"] == "validation"


def test_get_streak(client, register, set_user):
    token, user_id = register()
    set_user(user_id, current_streak=2, max_streak=5, total_solved=12, last_solved_date=date(2025, 1, 1))

    body = client.get("/api/streaks", headers=auth(token)).get_json()
    assert body == {
        "currentStreak": 2,
        "maxStreak": 5,
        "lastSolvedDate": "2025-01-01",
        "totalSolved": 12,
        "totalPoints": 0,
    }
