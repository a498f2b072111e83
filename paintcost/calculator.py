from __future__ import annotations

import logging

from .models import (
    BusinessConfig,
    CompositeCrew,
    CostBreakdown,
    CostResult,
    LaborConfig,
    MaterialConfig,
    ProjectConfig,
    StageResult,
    StageSpec,
)
from .rules import effective_waste_factor, scientific_hours_per_sqm

logger = logging.getLogger(__name__)

CREW_FALLBACK_WORKING_HOURS = 8.0


def hourly_rate(labor: LaborConfig) -> float:
    """Вартість години роботи маляра (з бригадою, якщо composite)."""
    rate = labor.rate
    if isinstance(rate, CompositeCrew):
        h = labor.working_hours if labor.working_hours > 0 else CREW_FALLBACK_WORKING_HOURS
        return (
            rate.painter_daily / h
            + rate.r_helper * rate.helper_daily / h
            + rate.r_foreman * rate.foreman_daily / h
            + rate.admin_daily / h
            + rate.transport_daily / h
        )

    if labor.working_hours <= 0:
        return 0.0
    return rate.daily_wage / labor.working_hours


def _coats_label(coats: int) -> str:
    return f"{coats} coat" if coats == 1 else f"{coats} coats"


def stage_hours(stage: StageSpec, labor: LaborConfig, project: ProjectConfig) -> tuple[float, str]:
    """
    Годин на м² для однієї стадії + опис джерела продуктивності.

    hourly / daily: реальна продуктивність оператора, без коефіцієнтів умов.
    Якщо override не задано -> scientific.
    """
    mode = labor.productivity_mode
    per_hour = stage.custom_productivity_hour or 0.0
    per_day = stage.custom_productivity_day or 0.0

    if mode == "hourly" and per_hour > 0:
        hours_per_sqm = 1 / per_hour
        return hours_per_sqm * stage.coats, f"{per_hour:g} sqm/hour - {hours_per_sqm:.3f} h/sqm"

    if mode == "daily" and per_day > 0:
        hours_per_sqm = labor.working_hours / per_day
        return hours_per_sqm * stage.coats, f"{per_day:g} sqm/day - {hours_per_sqm:.3f} h/sqm"

    hours = scientific_hours_per_sqm(stage.name, stage.coats, project.surface_type, project.work_environment)
    return hours, f"scientific standard - {hours:.3f} h/sqm"


def estimate(
    labor: LaborConfig,
    material: MaterialConfig,
    project: ProjectConfig,
    business: BusinessConfig,
) -> CostResult:
    notes: list[str] = []
    rate = hourly_rate(labor)
    if rate <= 0:
        notes.append("Hourly labor rate is zero.")

    # Stages
    stage_breakdown: list[StageResult] = []
    total_hours = 0.0
    for stage in project.enabled_stages:
        hours, source = stage_hours(stage, labor, project)
        total_hours += hours
        stage_breakdown.append(
            StageResult(
                stage=stage.label,
                hours=hours,
                cost=hours * rate,
                description=f"{_coats_label(stage.coats)} - {source}",
            )
        )

    # Labor
    basic_labor = total_hours * rate
    labor_burden = basic_labor * (labor.labor_burden / 100)
    labor_cost_per_sqm = basic_labor + labor_burden

    # Materials: кожна увімкнена стадія додає свої шари
    total_coats = sum(s.coats for s in project.enabled_stages)
    if material.include_materials:
        price_per_coat = material.pricing.price_per_sqm_per_coat()
        material_cost_per_sqm = price_per_coat * effective_waste_factor(material.waste_percentage) * total_coats
    else:
        material_cost_per_sqm = 0.0
        notes.append("Materials excluded.")

    # Overhead + profit (послідовно, складний відсоток)
    total_cost_per_sqm = labor_cost_per_sqm + material_cost_per_sqm
    overhead = total_cost_per_sqm * (business.overhead / 100)
    cost_with_overhead = total_cost_per_sqm + overhead
    profit = cost_with_overhead * (business.profit_margin / 100)
    suggested_price_per_sqm = cost_with_overhead + profit

    # Productivity
    daily_productivity: float | None
    days_required: float | None
    if total_hours <= 0:
        daily_productivity = None
        days_required = None
        if project.enabled_stages:
            notes.append("Enabled stages take no labor hours: productivity not applicable.")
        else:
            notes.append("No enabled stages: productivity not applicable.")
    elif labor.working_hours <= 0:
        daily_productivity = 0.0
        days_required = None
        notes.append("Working hours not set: days required not applicable.")
    else:
        daily_productivity = labor.working_hours / total_hours
        days_required = project.area / daily_productivity

    result = CostResult(
        stage_breakdown=tuple(stage_breakdown),
        total_hours=total_hours,
        hourly_rate=rate,
        total_coats=total_coats,
        labor_cost_per_sqm=labor_cost_per_sqm,
        material_cost_per_sqm=material_cost_per_sqm,
        total_cost_per_sqm=total_cost_per_sqm,
        suggested_price_per_sqm=suggested_price_per_sqm,
        total_project_cost=suggested_price_per_sqm * project.area,
        daily_productivity=daily_productivity,
        days_required=days_required,
        breakdown=CostBreakdown(
            basic_labor=basic_labor,
            labor_burden=labor_burden,
            materials=material_cost_per_sqm,
            overhead=overhead,
            profit=profit,
        ),
        notes=tuple(notes),
    )

    logger.debug(
        "Estimate: %d stages, %.3f h/sqm @ %.2f/h, price %.2f/sqm, total %.2f",
        len(stage_breakdown),
        total_hours,
        rate,
        suggested_price_per_sqm,
        result.total_project_cost,
    )
    return result
