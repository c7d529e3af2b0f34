"""
Test data generators for JSONC conversion benchmarks.

Creates JSONC documents shaped like the files people actually write:
- Commented configuration objects with trailing commas
- Large annotated arrays
- Deeply nested structures
- String-heavy content full of comment markers and escapes
"""

import json
import random
import string
from typing import Any

# Probability that an array element or object member gets a comment
_COMMENT_PROBABILITY = 0.3
_ESCAPE_PROBABILITY = 0.3


def generate_test_data(data_type: str) -> str:
    """Generates JSONC test data based on specified type."""
    generators = {
        "small_config": _generate_small_config,
        "large_config": _generate_large_config,
        "annotated_array": _generate_annotated_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type]()


def to_jsonc(value: Any, indent: int = 0) -> str:
    """
    Serializes a value as pretty-printed JSONC.

    Every container gets a trailing comma and members are randomly
    annotated with line or block comments.
    """
    pad = " " * (indent + 4)
    close = " " * indent

    if isinstance(value, dict):
        if not value:
            return "{}"
        lines = [
            f"{pad}{_maybe_block_comment()}{json.dumps(key)}: "
            f"{to_jsonc(item, indent + 4)},{_maybe_line_comment()}"
            for key, item in value.items()
        ]
        return "{\n" + "\n".join(lines) + f"\n{close}}}"

    if isinstance(value, list):
        if not value:
            return "[]"
        lines = [
            f"{pad}{to_jsonc(item, indent + 4)},{_maybe_line_comment()}"
            for item in value
        ]
        return "[\n" + "\n".join(lines) + f"\n{close}]"

    return json.dumps(value, ensure_ascii=False)


def _maybe_line_comment() -> str:
    if random.random() < _COMMENT_PROBABILITY:
        return f" // {_random_string(12)}"
    return ""


def _maybe_block_comment() -> str:
    if random.random() < _COMMENT_PROBABILITY:
        return f"/* {_random_string(8)} */ "
    return ""


def _generate_small_config() -> str:
    """Generates a small settings file (< 1KB)."""
    data = {
        "editor.fontSize": 14,
        "editor.tabSize": 4,
        "editor.rulers": [80, 120],
        "files.exclude": {"**/.git": True, "**/__pycache__": True},
        "python.defaultInterpreterPath": "/usr/bin/python3",
        "terminal.integrated.env.linux": {"PYTHONPATH": "${workspaceFolder}"},
    }
    return "// workspace settings\n" + to_jsonc(data) + "\n"


def _generate_large_config() -> str:
    """Generates a large configuration document (> 10KB)."""
    data = {
        "compilerOptions": {
            "target": "ES2022",
            "strict": True,
            "paths": {
                f"@{_random_string(6)}/*": [f"src/{_random_string(8)}/*"]
                for _ in range(40)
            },
        },
        "tasks": [
            {
                "label": f"task_{i:04d}",
                "type": random.choice(["shell", "process", "npm"]),
                "command": f"{_random_string(10)} --{_random_string(5)}",
                "args": [_random_string(6) for _ in range(3)],
                "dependsOn": [f"task_{j:04d}" for j in range(max(0, i - 2), i)],
                "isBackground": random.choice([True, False]),
                "problemMatcher": [],
            }
            for i in range(60)
        ],
    }
    return to_jsonc(data)


def _generate_annotated_array() -> str:
    """Generates a long array of mixed values, many of them commented."""
    array: list[Any] = []
    for i in range(400):
        array.append(
            random.choice(
                [
                    random.randint(-1000, 1000),
                    round(random.uniform(-100.0, 100.0), 3),
                    _random_string(random.randint(5, 30)),
                    random.choice([True, False]),
                    None,
                    {"index": i, "value": _random_string(10)},
                ]
            )
        )
    return to_jsonc(array)


def _generate_nested_structure() -> str:
    """Generates deeply nested JSONC structure."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "data": _random_string(15),
            "items": [create_nested_dict(depth - 1) for _ in range(3)],
            "nested": create_nested_dict(depth - 1),
        }

    return to_jsonc(create_nested_dict(6))


def _generate_string_heavy() -> str:
    """Generates strings packed with comment markers, commas and escapes."""

    def create_tricky_string() -> str:
        parts = []
        for _ in range(40):
            if random.random() < _ESCAPE_PROBABILITY:
                parts.append(
                    random.choice(
                        ["//", "/*", "*/", ",]", ",}", '"', "\\", "\n"]
                    )
                )
            else:
                parts.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(parts)

    data = {
        "strings": [create_tricky_string() for _ in range(150)],
        "urls": [
            f"https://{_random_string(8)}.example.com/{_random_string(5)}"
            for _ in range(50)
        ],
        "paths": {
            f"key_{i}": f"C:\\Users\\{_random_string(8)}\\file_{i}.txt"
            for i in range(30)
        },
    }
    return to_jsonc(data)


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
