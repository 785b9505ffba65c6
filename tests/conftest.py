"""Pytest fixtures for pairwiseqa tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from pairwiseqa.models import Step, Tag, Value


def make_step(name: str, values: Sequence[str | tuple[str, Tag]] = ()) -> Step:
    """Build a step from plain payloads or (payload, tag) tuples."""
    built = []
    for raw in values:
        if isinstance(raw, tuple):
            payload, tag = raw
            built.append(Value(value=payload, tag=tag))
        else:
            built.append(Value(value=raw))
    return Step(name=name, values=built)


@pytest.fixture
def browser_os_steps() -> list[Step]:
    """Two steps with two values each."""
    return [
        make_step("Browser", [("Chrome", Tag.GREEN), ("Firefox", Tag.RED)]),
        make_step("OS", ["Windows", "Mac"]),
    ]


@pytest.fixture
def three_steps() -> list[Step]:
    """Three steps with two values each (8 combinations)."""
    return [
        make_step("Browser", ["Chrome", "Firefox"]),
        make_step("OS", ["Windows", "Mac"]),
        make_step("Lang", ["en", "fr"]),
    ]


@pytest.fixture
def steps_yaml(tmp_path):
    """A YAML step definition file."""
    path = tmp_path / "steps.yaml"
    path.write_text(
        "steps:\n"
        "  - name: Browser\n"
        "    values:\n"
        "      - value: Chrome\n"
        "        color: green\n"
        "      - Firefox\n"
        "  - name: OS\n"
        "    values: [Windows, Mac]\n"
        "  - name: Login\n",
        encoding="utf-8",
    )
    return path
