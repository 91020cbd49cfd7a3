import pytest
import requests

from contrib_cards.github import GraphQLClient


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self.payload


class FakeSession:
    """Stands in for requests.Session; `handler(query, variables)` answers each POST."""

    def __init__(self, handler):
        self.headers = {}
        self.handler = handler
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        result = self.handler(json["query"], json["variables"])
        if isinstance(result, Exception):
            raise result
        if isinstance(result, FakeResponse):
            return result
        return FakeResponse(result)


def build_calendar_payload(days):
    """days: list of (iso_date, count); packed into a single week."""
    return {
        "data": {
            "user": {
                "contributionsCollection": {
                    "contributionCalendar": {
                        "totalContributions": sum(c for _, c in days),
                        "weeks": [
                            {"contributionDays": [{"date": d, "contributionCount": c} for d, c in days]},
                        ],
                    }
                }
            }
        }
    }


def build_repos_payload(entries):
    """entries: list of (nameWithOwner, contributions, stars, is_private)."""
    return {
        "data": {
            "user": {
                "contributionsCollection": {
                    "commitContributionsByRepository": [
                        {
                            "repository": {
                                "nameWithOwner": name,
                                "url": f"https://github.com/{name}",
                                "stargazerCount": stars,
                                "isPrivate": private,
                            },
                            "contributions": {"totalCount": count},
                        }
                        for name, count, stars, private in entries
                    ]
                }
            }
        }
    }


def build_created_at_payload(created_at):
    return {"data": {"user": {"createdAt": created_at}}}


@pytest.fixture
def make_client():
    def _make(handler):
        return GraphQLClient("test-token", endpoint="https://example.test/graphql", session=FakeSession(handler))
    return _make


@pytest.fixture
def calendar_payload():
    return build_calendar_payload


@pytest.fixture
def repos_payload():
    return build_repos_payload


@pytest.fixture
def created_at_payload():
    return build_created_at_payload


@pytest.fixture
def fake_response():
    return FakeResponse
