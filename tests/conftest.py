"""Shared test fixtures for the painting cost estimator."""

import sys
from pathlib import Path

import pytest

# Ensure project root is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from paintcost.models import (
    BusinessConfig,
    CompositeCrew,
    LaborConfig,
    MaterialConfig,
    ProjectConfig,
    SimpleWage,
    StageSpec,
)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def simple_labor() -> LaborConfig:
    """200/day over 8 hours -> 25/hour, no burden."""
    return LaborConfig(rate=SimpleWage(daily_wage=200), working_hours=8, labor_burden=0)


@pytest.fixture
def crew_labor() -> LaborConfig:
    return LaborConfig(
        rate=CompositeCrew(
            painter_daily=220,
            helper_daily=160,
            foreman_daily=350,
            admin_daily=100,
            transport_daily=80,
            r_helper=0.30,
            r_foreman=0.15,
        ),
        working_hours=8,
    )


@pytest.fixture
def no_materials() -> MaterialConfig:
    return MaterialConfig(include_materials=False)


@pytest.fixture
def no_markup() -> BusinessConfig:
    return BusinessConfig(overhead=0, profit_margin=0)


@pytest.fixture
def primer_project() -> ProjectConfig:
    """Walls, interior, 100 sqm, a single primer coat."""
    return ProjectConfig(
        surface_type="walls",
        work_environment="interior",
        area=100,
        stages=[StageSpec(name="primer", coats=1)],
    )
