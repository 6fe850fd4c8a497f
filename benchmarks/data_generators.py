"""
Test data generators for truncation benchmarks.

Creates JSON payloads shaped like what loggers typically emit:
- Small request/response records
- Large records with many medium-length strings
- Deeply nested structures
- String-heavy content with escape sequences
- Records carrying a few very long text fields
"""

import json
import random
import string
from typing import Any

_ESCAPE_PROBABILITY = 0.3
_LONG_TEXT_LENGTH = 4096


def generate_test_data(data_type: str) -> bytes:
    """Generates a JSON document of the given type as UTF-8 bytes."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
        "long_text": _generate_long_text,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return json.dumps(generators[data_type]()).encode("utf-8")


DATA_TYPES = [
    "small_object",
    "large_object",
    "nested_structure",
    "string_heavy",
    "long_text",
]


def _generate_small_object() -> dict[str, Any]:
    """Generates a small request log record (< 1KB)."""
    return {
        "id": 12345,
        "method": "POST",
        "path": "/api/v1/users",
        "status": 201,
        "duration_ms": 12.5,
        "request": {"name": "Alice Johnson", "email": "alice@example.com"},
    }


def _generate_large_object() -> dict[str, Any]:
    """Generates a large record (> 10KB) with many string fields."""
    return {
        "user_id": random.randint(1000000, 9999999),
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(random.uniform(1.0, 1000.0), 2),
                "currency": random.choice(["USD", "EUR", "GBP", "JPY"]),
                "description": f"Payment for {_random_string(60)}",
                "status": random.choice(["completed", "pending", "failed"]),
            }
            for i in range(50)
        ],
        "activity_log": [
            {
                "action": random.choice(["login", "logout", "purchase"]),
                "ip_address": ".".join(
                    str(random.randint(1, 255)) for _ in range(4)
                ),
                "user_agent": f"Mozilla/5.0 ({_random_string(80)})",
            }
            for _ in range(30)
        ],
    }


def _generate_nested_structure() -> dict[str, Any]:
    """Generates a deeply nested structure."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(40)}

        return {
            "level": depth,
            "data": _random_string(50),
            "items": [create_nested_dict(depth - 1) for _ in range(3)],
        }

    return create_nested_dict(6)


def _generate_string_heavy() -> dict[str, Any]:
    """Generates strings full of escaped quotes and backslashes."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(120):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(random.choice(['"', "\\", "\n", "\t"]))
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "strings": [create_escaped_string() for _ in range(100)],
        "paths": {
            f"key_{i}": f"C:\\Users\\{_random_string(8)}\\file_{i}.txt"
            for i in range(50)
        },
    }


def _generate_long_text() -> dict[str, Any]:
    """Generates records where a few fields dwarf everything else."""
    return {
        "events": [
            {
                "id": i,
                "level": "info",
                "body": _random_string(_LONG_TEXT_LENGTH),
                "stack": _random_string(_LONG_TEXT_LENGTH // 2),
            }
            for i in range(20)
        ]
    }


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters + " ", k=length))
