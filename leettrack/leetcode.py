# backend/leettrack/leetcode.py
"""
Thin client for LeetCode's public GraphQL endpoint.

Every failure (transport error, non-200, unknown user, odd payload) comes back
as ``None`` so callers can treat it as "no data" rather than zero solved.
"""
import re
from collections import namedtuple

import httpx
from flask import current_app

USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")

SolveCounts = namedtuple("SolveCounts", ["total", "easy", "medium", "hard"])

SOLVED_COUNTS_QUERY = """
query userProfile($username: String!) {
  matchedUser(username: $username) {
    username
    submitStats {
      acSubmissionNum {
        difficulty
        count
      }
    }
  }
}
"""

PROFILE_QUERY = """
query userProfile($username: String!) {
  matchedUser(username: $username) {
    username
    profile {
      realName
      aboutMe
      userAvatar
      location
      websites
      skillTags
      company
      school
      ranking
    }
    submitStats {
      acSubmissionNum {
        difficulty
        count
      }
      totalSubmissionNum {
        difficulty
        count
      }
    }
    badges {
      id
      displayName
      icon
      creationDate
    }
    activeBadge {
      displayName
      icon
    }
  }
}
"""


def is_valid_username(username) -> bool:
    return isinstance(username, str) and bool(USERNAME_RE.match(username.strip()))


def _post_query(query: str, username: str):
    url = current_app.config["LEETCODE_GRAPHQL_URL"]
    timeout = current_app.config["LEETCODE_TIMEOUT_SECONDS"]

    try:
        response = httpx.post(
            url,
            json={"query": query, "variables": {"username": username}},
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except httpx.HTTPError as e:
        current_app.logger.warning(f"[leetcode] request failed for '{username}': {e}")
        return None

    if response.status_code != 200:
        current_app.logger.warning(
            f"[leetcode] '{username}' -> HTTP {response.status_code}"
        )
        return None

    try:
        payload = response.json()
    except ValueError:
        current_app.logger.warning(f"[leetcode] non-JSON response for '{username}'")
        return None

    data = payload.get("data") if isinstance(payload, dict) else None
    matched = (data or {}).get("matchedUser")
    if not matched:
        current_app.logger.info(f"[leetcode] no matched user '{username}'")
        return None
    return matched


def parse_solve_counts(matched_user: dict):
    stats = (matched_user.get("submitStats") or {}).get("acSubmissionNum") or []
    by_difficulty = {}
    for row in stats:
        try:
            by_difficulty[row["difficulty"]] = int(row["count"])
        except (KeyError, TypeError, ValueError):
            continue

    if "All" not in by_difficulty:
        return None

    return SolveCounts(
        total=by_difficulty["All"],
        easy=by_difficulty.get("Easy", 0),
        medium=by_difficulty.get("Medium", 0),
        hard=by_difficulty.get("Hard", 0),
    )


def fetch_solved_counts(username: str):
    matched = _post_query(SOLVED_COUNTS_QUERY, username)
    if matched is None:
        return None
    return parse_solve_counts(matched)


def fetch_profile(username: str):
    return _post_query(PROFILE_QUERY, username)
