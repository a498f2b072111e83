"""Quick runtime checks for the painting cost estimator.
Run: python scripts/quickcheck.py
Exits with code 0 on success, non-zero on failure.
"""
from paintcost.calculator import estimate, hourly_rate
from paintcost.models import (
    BusinessConfig,
    CompositeCrew,
    LaborConfig,
    MaterialConfig,
    ProjectConfig,
    SimpleWage,
    StageSpec,
)
from paintcost.physics import dew_point_safety, price_from_engineering


def approx(a, b, tol=1e-6):
    return abs(a - b) <= tol


def main():
    labor = LaborConfig(rate=SimpleWage(daily_wage=200), working_hours=8)
    project = ProjectConfig(area=100, stages=[StageSpec(name="primer")])
    res = estimate(labor, MaterialConfig(include_materials=False), project, BusinessConfig())

    assert approx(res.total_hours, 0.08)
    assert approx(res.hourly_rate, 25.0)
    assert approx(res.labor_cost_per_sqm, 2.0)
    assert approx(res.suggested_price_per_sqm, 2.0)
    assert approx(res.total_project_cost, 200.0)

    crew = LaborConfig(
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
    assert approx(hourly_rate(crew), 62.5625)

    assert abs(price_from_engineering(0.4, 35, "roller", 70) - 190.4) < 0.1

    assert dew_point_safety(30, 55).safe
    assert not dew_point_safety(20, 95).safe

    print("Quickcheck OK")


if __name__ == '__main__':
    main()
