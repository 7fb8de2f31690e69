# This file tests the cost aggregation endpoint over date periods.
# It exists to pin the inclusive period-overlap rule and the optional user and service filters.

from __future__ import annotations

from tests.api.support import API, USER_A, USER_B, api_test_client, create_subscription


def _cost(client, **body: object) -> dict[str, object]:
    response = client.post(f"{API}/subscriptions/cost", json=body)
    assert response.status_code == 200, response.text
    return response.json()


def test_cost_without_matches_is_zero(sqlite_url: str) -> None:
    with api_test_client(database_url=sqlite_url) as client:
        payload = _cost(client, start_period="2024-01-01", end_period="2024-12-31")

    assert payload == {"total_cost": 0, "period": "2024-01-01 - 2024-12-31"}


def test_cost_period_overlap_boundaries(sqlite_url: str) -> None:
    with api_test_client(database_url=sqlite_url) as client:
        create_subscription(client, price=1000, start_date="2024-01-01", end_date="2024-03-31")

        overlapping = _cost(client, start_period="2024-03-01", end_period="2024-04-01")
        after_end = _cost(client, start_period="2024-04-01", end_period="2024-05-01")
        touching_end = _cost(client, start_period="2024-03-31", end_period="2024-04-30")
        touching_start = _cost(client, start_period="2023-12-01", end_period="2024-01-01")
        before_start = _cost(client, start_period="2023-11-01", end_period="2023-12-31")

    assert overlapping["total_cost"] == 1000
    assert after_end["total_cost"] == 0
    assert touching_end["total_cost"] == 1000
    assert touching_start["total_cost"] == 1000
    assert before_start["total_cost"] == 0


def test_open_ended_subscription_counts_for_any_later_period(sqlite_url: str) -> None:
    with api_test_client(database_url=sqlite_url) as client:
        create_subscription(client, price=300, start_date="2024-05-01")

        far_future = _cost(client, start_period="2099-01-01", end_period="2099-12-31")
        ending_on_start = _cost(client, start_period="2024-01-01", end_period="2024-05-01")
        ending_before_start = _cost(client, start_period="2024-01-01", end_period="2024-04-30")

    assert far_future["total_cost"] == 300
    assert ending_on_start["total_cost"] == 300
    assert ending_before_start["total_cost"] == 0


def test_cost_filters_by_user_and_service_substring(sqlite_url: str) -> None:
    with api_test_client(database_url=sqlite_url) as client:
        create_subscription(client, service_name="Netflix Premium", price=1500)
        create_subscription(client, service_name="Spotify", price=500)
        create_subscription(client, service_name="NETFLIX Basic", price=700, user_id=USER_B)

        everything = _cost(client, start_period="2024-01-01", end_period="2024-12-31")
        netflix = _cost(
            client, start_period="2024-01-01", end_period="2024-12-31", service_name="netflix"
        )
        user_a_netflix = _cost(
            client,
            startPeriod="2024-01-01",
            endPeriod="2024-12-31",
            userId=USER_A,
            serviceName="netflix",
        )
        user_b = _cost(client, start_period="2024-01-01", end_period="2024-12-31", user_id=USER_B)

    assert everything["total_cost"] == 2700
    assert netflix["total_cost"] == 2200
    assert netflix["service_name"] == "netflix"
    assert user_a_netflix == {
        "total_cost": 1500,
        "period": "2024-01-01 - 2024-12-31",
        "user_id": USER_A,
        "service_name": "netflix",
    }
    assert user_b["total_cost"] == 700
    assert "service_name" not in user_b


def test_service_filter_treats_wildcards_literally(sqlite_url: str) -> None:
    with api_test_client(database_url=sqlite_url) as client:
        create_subscription(client, service_name="Plan_100%", price=100)
        create_subscription(client, service_name="Plan A", price=200)

        literal = _cost(
            client, start_period="2024-01-01", end_period="2024-12-31", service_name="_100%"
        )
        wildcard_chars = _cost(
            client, start_period="2024-01-01", end_period="2024-12-31", service_name="%"
        )

    assert literal["total_cost"] == 100
    assert wildcard_chars["total_cost"] == 100


def test_cost_rejects_invalid_bodies(sqlite_url: str) -> None:
    bodies = [
        {"end_period": "2024-12-31"},
        {"start_period": "2024-01-01"},
        {"start_period": "2024-12-31", "end_period": "2024-01-01"},
        {"start_period": "2024-01", "end_period": "2024-12-31"},
        {"start_period": "2024-01-01", "end_period": "2024-12-31", "user_id": "bad"},
    ]
    with api_test_client(database_url=sqlite_url) as client:
        responses = [client.post(f"{API}/subscriptions/cost", json=body) for body in bodies]

    assert [response.status_code for response in responses] == [400] * len(bodies)
