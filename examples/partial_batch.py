"""Partial-result batch example.

Fetches a handful of user profiles from a flaky in-memory source, keeps
whatever loaded, and prints the GraphQL-style response.

Usage:
    python examples/partial_batch.py
"""

import json
import logging

from src.tryresult import (
    FetchError,
    TryResultConfig,
    fetch_all,
    to_error_info,
    to_response_shape,
)

PROFILES = {
    "1": {"name": "Ada", "role": "admin"},
    "2": {"name": "Grace", "role": "editor"},
}


def load_profile(user_id: str) -> dict[str, str]:
    if user_id == "3":
        raise FetchError(f"Profile service timed out for user {user_id}", code=504)
    if user_id not in PROFILES:
        raise FetchError(f"No such user: {user_id}", code=404)
    return PROFILES[user_id]


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    # 1. One independent fetcher per requested id
    user_ids = ["1", "2", "3", "4"]
    fetchers = {uid: (lambda uid=uid: load_profile(uid)) for uid in user_ids}

    # 2. Run them; failures come back as data instead of aborting the batch
    aggregated = fetch_all(fetchers, config=TryResultConfig(max_workers=2))
    print(f"{len(aggregated.successes)} loaded, {len(aggregated.failures)} failed")

    # 3. Project onto the response shape
    response = to_response_shape(aggregated, error_mapper=to_error_info)
    print(json.dumps(response.to_dict(), indent=2))


if __name__ == "__main__":
    main()
