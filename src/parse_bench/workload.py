"""Generate synthetic social-network documents for parser benchmarking."""

import math
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import orjson


@dataclass(frozen=True)
class WorkloadSpec:
    """Cardinalities for one workload size class."""

    name: str
    users: int
    posts_per_user: int
    comments_per_post: int


SIZES = {
    "small": WorkloadSpec("small", users=100, posts_per_user=5, comments_per_post=3),
    "medium": WorkloadSpec("medium", users=500, posts_per_user=10, comments_per_post=5),
    "large": WorkloadSpec("large", users=1000, posts_per_user=20, comments_per_post=10),
    "xlarge": WorkloadSpec("xlarge", users=2000, posts_per_user=30, comments_per_post=15),
}

DEFAULT_SIZE = "medium"

# Comment k carries k % REPLY_FANOUT replies.
REPLY_FANOUT = 3
METRIC_DAYS = 30

FEATURES = ["comments", "likes", "shares", "tags"]


def resolve_size(name: Any) -> WorkloadSpec:
    """Look up a size class, falling back to the default for unknown names."""
    if isinstance(name, str) and name in SIZES:
        return SIZES[name]
    return SIZES[DEFAULT_SIZE]


def _timestamp(now: datetime, rng, max_age_ms: int) -> str:
    """ISO timestamp up to max_age_ms in the past."""
    return (now - timedelta(milliseconds=rng.random() * max_age_ms)).isoformat()


def _reply(rng, now: datetime, workload: WorkloadSpec, i: int, j: int, k: int, r: int) -> dict:
    return {
        "id": f"reply_{i}_{j}_{k}_{r}",
        "userId": f"user_{(i + k + r + 2) % workload.users}",
        "text": f"Reply {r} to comment {k}",
        "createdAt": _timestamp(now, rng, 2_000_000_000),
        "likes": rng.randrange(20),
    }


def _comment(rng, now: datetime, workload: WorkloadSpec, i: int, j: int, k: int) -> dict:
    return {
        "id": f"comment_{i}_{j}_{k}",
        "userId": f"user_{(i + k + 1) % workload.users}",
        "text": f"This is comment {k} on post {j}. Very insightful content here. " * 3,
        "createdAt": _timestamp(now, rng, 5_000_000_000),
        "likes": rng.randrange(100),
        "replies": [
            _reply(rng, now, workload, i, j, k, r) for r in range(k % REPLY_FANOUT)
        ],
    }


def _post(rng, now: datetime, workload: WorkloadSpec, i: int, j: int, username: str) -> dict:
    return {
        "id": f"post_{i}_{j}",
        "title": f"Post {j} by {username}",
        "content": f"This is the content of post {j}. Lorem ipsum dolor sit amet. " * 10,
        "createdAt": _timestamp(now, rng, 10_000_000_000),
        "tags": [f"tag{j % 10}", f"tag{(j + 1) % 10}", f"tag{(j + 2) % 10}"],
        "metadata": {
            "views": rng.randrange(10000),
            "likes": rng.randrange(1000),
            "shares": rng.randrange(100),
            "bookmarks": rng.randrange(500),
            "avgReadTime": rng.randrange(300),
        },
        "comments": [
            _comment(rng, now, workload, i, j, k) for k in range(workload.comments_per_post)
        ],
    }


def _user(rng, now: datetime, workload: WorkloadSpec, i: int) -> dict:
    username = f"user{i}"
    return {
        "id": f"user_{i}",
        "username": username,
        "email": f"{username}@example.com",
        "profile": {
            "firstName": f"First{i}",
            "lastName": f"Last{i}",
            "age": 18 + (i % 50),
            "bio": f"This is a bio for user {i}" * 3,
            "avatar": f"https://example.com/avatar/{i}.jpg",
            "coordinates": {
                "lat": 40.7128 + rng.random(),
                "lng": -74.0060 + rng.random(),
            },
            "settings": {
                "notifications": {"email": True, "push": i % 2 == 0, "sms": False},
                "privacy": {"publicProfile": i % 3 == 0, "showEmail": False},
                "preferences": {
                    "theme": "dark" if i % 2 == 0 else "light",
                    "language": "en",
                },
            },
        },
        "stats": {
            "followers": rng.randrange(10000),
            "following": rng.randrange(5000),
            "posts": workload.posts_per_user,
            "totalLikes": rng.randrange(50000),
            "engagement": rng.random() * 100,
        },
        "posts": [
            _post(rng, now, workload, i, j, username) for j in range(workload.posts_per_user)
        ],
    }


def generate_document(size: str | None = DEFAULT_SIZE, rng: random.Random | None = None) -> dict:
    """
    Generate a nested document for the given size class.

    The shape (field names, nesting, and cardinalities) depends only on the
    resolved size class. Scores, counts, and timestamps are drawn from ``rng``,
    or from a freshly seeded generator when none is passed.

    Args:
        size: Size class name. Unknown names fall back to ``DEFAULT_SIZE``.
        rng: Optional ``random.Random`` for reproducible content.

    Returns:
        A dictionary with ``metadata``, ``users`` and ``analytics`` blocks.
    """
    workload = resolve_size(size)
    if rng is None:
        rng = random.Random()
    now = datetime.now(timezone.utc)

    return {
        "metadata": {
            "generatedAt": now.isoformat(),
            "version": "2.0.1",
            "totalUsers": workload.users,
            "features": list(FEATURES),
            "config": {
                "maxDepth": 5,
                "enableCache": True,
                "timeout": 30000,
                "retries": 3,
            },
        },
        "users": [_user(rng, now, workload, i) for i in range(workload.users)],
        "analytics": {
            "dailyActiveUsers": math.floor(workload.users * 0.7),
            "monthlyActiveUsers": math.floor(workload.users * 0.9),
            "metrics": [
                {
                    "date": (now - timedelta(days=day)).date().isoformat(),
                    "activeUsers": rng.randrange(workload.users),
                    "newPosts": rng.randrange(workload.users * 2),
                    "engagement": rng.random() * 100,
                    "revenue": rng.random() * 10000,
                }
                for day in range(METRIC_DAYS)
            ],
        },
    }


def encode_document(document: dict) -> str:
    """Serialize a document to compact JSON text."""
    return orjson.dumps(document).decode("utf-8")


def generate_encoded(size: str | None = DEFAULT_SIZE, rng: random.Random | None = None) -> str:
    """Generate a document and return its encoded text."""
    return encode_document(generate_document(size, rng))


def document_shape(document: dict) -> dict:
    """Summarize the structural cardinalities of a generated document."""
    users = document["users"]
    posts = [post for user in users for post in user["posts"]]
    comments = [comment for post in posts for comment in post["comments"]]
    return {
        "users": len(users),
        "posts_per_user": sorted({len(user["posts"]) for user in users}),
        "comments_per_post": sorted({len(post["comments"]) for post in posts}),
        "posts": len(posts),
        "comments": len(comments),
        "replies": sum(len(comment["replies"]) for comment in comments),
    }
