"""Assertion helper utilities for tests."""

from __future__ import annotations


def assert_json_keys(data: dict, required: set[str]) -> None:
    """Ensure that all required keys are present in ``data``.

    Raises
    ------
    AssertionError
        If any required key is missing.
    """

    missing = required - data.keys()
    assert not missing, f"Missing keys: {', '.join(sorted(missing))}"


def assert_problem(response, status: int, code: str) -> dict:
    """Assert an RFC 7807 problem response and return its body."""

    assert response.status_code == status, response.get_data(as_text=True)
    assert response.mimetype == "application/problem+json"
    body = response.get_json()
    assert body["status"] == status
    assert body["code"] == code
    return body


def assert_pagination(body: dict) -> None:
    """Validate a ``{data, meta}`` paginated response."""

    assert_json_keys(body, {"data", "meta"})
    assert isinstance(body["data"], list)
    assert_json_keys(body["meta"], {"total", "page", "limit", "hasPrev", "hasNext"})
