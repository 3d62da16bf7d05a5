"""Pytest configuration and shared fixtures for floor-plan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from apartment_planner.domain.entities import FloorPlan, FurnitureItem, Wall, WallKind
from apartment_planner.domain.services import FloorPlanModel
from apartment_planner.domain.value_objects import Point2D

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures for a simple square floor plan
# =============================================================================


@pytest.fixture
def square_outline() -> tuple[Point2D, ...]:
    """A 10 x 10 floor outline with its corner at the origin."""
    return (Point2D(0, 0), Point2D(10, 0), Point2D(10, 10), Point2D(0, 10))


@pytest.fixture
def divider_wall() -> Wall:
    """An interior wall splitting the square plan at x = 5."""
    return Wall(
        id="divider",
        kind=WallKind.INTERIOR,
        polyline=(Point2D(5, 0), Point2D(5, 10)),
        thickness=0.3,
    )


@pytest.fixture
def square_plan(square_outline: tuple[Point2D, ...], divider_wall: Wall) -> FloorPlan:
    """Square plan with one interior divider and a 0.2 collision gap."""
    return FloorPlan(
        outline=square_outline,
        walls=(divider_wall,),
        ceiling_height=8.0,
        collision_gap=0.2,
    )


@pytest.fixture
def square_model(square_plan: FloorPlan) -> FloorPlanModel:
    """Resolved model of the square plan."""
    return FloorPlanModel.build(square_plan)


@pytest.fixture
def desk() -> FurnitureItem:
    """A 4 x 3 item placed clear of the divider."""
    return FurnitureItem(id="desk", name="Desk", width=4.0, depth=3.0, height=2.5, x=2.0, z=5.0)


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding JSON fixture files."""
    return FIXTURES_DIR
