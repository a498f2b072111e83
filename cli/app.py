# cli/app.py
# CLI = тимчасовий UI. Його можна замінити на Web/iOS, не чіпаючи paintcost.

from __future__ import annotations

import argparse
import json
import logging
import math
import os
from pathlib import Path

from pydantic import ValidationError

from paintcost.calculator import estimate
from paintcost.models import (
    BusinessConfig,
    CompositeCrew,
    CostResult,
    LaborConfig,
    MaterialConfig,
    ProjectConfig,
    SimpleWage,
    StageSpec,
)
from paintcost.physics import EngineeringReport, engineering_report
from paintcost.rules import (
    BRAND_COVERAGE,
    PRODUCTIVITY_MODES,
    SURFACE_TYPES,
    WORK_ENVIRONMENTS,
    coverage_for_brand,
)

logger = logging.getLogger(__name__)

DEFAULTS_ENV = "PAINTCOST_DEFAULTS"
# лежить поруч з модулем, ставиться разом з пакетом (package-data)
DEFAULTS_PATH = Path(__file__).resolve().parent / "defaults.json"


# ---------- ДОПОМІЖНІ ФУНКЦІЇ ВВОДУ ----------

def coerce_float(raw: str | None, default: float = 0.0) -> float:
    """Порожній або некоректний ввід -> default (як у формі: parseFloat(...) || 0)."""
    text = (raw or "").strip().replace(",", ".")
    if not text:
        return default
    try:
        value = float(text)
    except ValueError:
        return default
    if not math.isfinite(value):
        return default
    return value


def coerce_int(raw: str | None, default: int = 1) -> int:
    value = coerce_float(raw, float(default))
    return int(value) if value >= 1 else default


def ask_float_default(
    prompt: str,
    default: float,
    *,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """Ввід числа з дефолтом: Enter -> default. inf / nan не приймаються."""
    while True:
        raw = input(f"{prompt} [{default:g}]: ").strip()
        if raw == "":
            value = float(default)
        else:
            raw = raw.replace(",", ".")
            try:
                value = float(raw)
            except ValueError:
                print("❌ Enter a number or press Enter")
                continue

        if not math.isfinite(value):
            print("❌ Enter a finite number")
            continue
        if min_value is not None and value < min_value:
            print(f"❌ Value must be >= {min_value}")
            continue
        if max_value is not None and value > max_value:
            print(f"❌ Value must be <= {max_value}")
            continue
        return value


def ask_yes_no(prompt: str, default: bool | None = None) -> bool:
    """Безпечний ввід так/ні: повертає True або False."""
    while True:
        raw = input(prompt + " (y/n): ").strip().lower()
        if raw in ("y", "yes"):
            return True
        if raw in ("n", "no"):
            return False
        if raw == "" and default is not None:
            return default
        print("❌ Enter y or n")


def ask_choice(prompt: str, options: tuple[str, ...], default: str) -> str:
    while True:
        raw = input(f"{prompt} {'/'.join(options)} [{default}]: ").strip().lower()
        if raw == "":
            return default
        if raw in options:
            return raw
        print(f"❌ Choose one of: {', '.join(options)}")


def money(x: float) -> str:
    """Формат грошей (AED)."""
    return f"{x:,.2f} AED"


# ---------- ЗАВАНТАЖЕННЯ DEFAULTS З JSON ----------

def load_defaults(path: str | Path | None = None) -> dict:
    """Читає cli/defaults.json (або шлях з PAINTCOST_DEFAULTS)."""
    if path is None:
        path = os.getenv(DEFAULTS_ENV) or DEFAULTS_PATH
    data_path = Path(path)
    logger.debug("Loading defaults from %s", data_path)
    return json.loads(data_path.read_text(encoding="utf-8"))


def snapshots_from_defaults(
    defaults: dict,
) -> tuple[LaborConfig, MaterialConfig, ProjectConfig, BusinessConfig]:
    labor_cfg = defaults.get("labor", {})
    material_cfg = dict(defaults.get("material", {}))
    project_cfg = defaults.get("project", {})

    labor = LaborConfig.model_validate(
        {
            "rate": labor_cfg.get("rate", {"kind": "simple", "daily_wage": labor_cfg.get("daily_wage", 0)}),
            "working_hours": labor_cfg.get("working_hours", 8),
            "labor_burden": labor_cfg.get("labor_burden", 0),
            "productivity_mode": labor_cfg.get("productivity_mode", "scientific"),
        }
    )
    material = MaterialConfig.from_form(**material_cfg)
    project = ProjectConfig(
        surface_type=project_cfg.get("surface_type", "walls"),
        work_environment=project_cfg.get("work_environment", "interior"),
        area=project_cfg.get("area", 0),
        stages=tuple(StageSpec(name=name) for name in project_cfg.get("stages", [])),
    )
    business = BusinessConfig.model_validate(defaults.get("business", {}))
    return labor, material, project, business


# ---------- РЕДАГУВАННЯ СПИСКУ СТАДІЙ ----------

def add_custom_stage(stages: tuple[StageSpec, ...], description: str = "") -> tuple[StageSpec, ...]:
    return stages + (StageSpec(name="custom", description=description),)


def remove_stage(stages: tuple[StageSpec, ...], index: int) -> tuple[StageSpec, ...]:
    if not 0 <= index < len(stages):
        return stages
    return stages[:index] + stages[index + 1:]


def move_stage(stages: tuple[StageSpec, ...], src: int, dst: int) -> tuple[StageSpec, ...]:
    """Перетягування: вийняти з src, вставити на dst."""
    if src == dst or not 0 <= src < len(stages) or not 0 <= dst < len(stages):
        return stages
    items = list(stages)
    stage = items.pop(src)
    items.insert(dst, stage)
    return tuple(items)


def update_stage(stages: tuple[StageSpec, ...], index: int, **changes) -> tuple[StageSpec, ...]:
    if not 0 <= index < len(stages):
        return stages
    updated = StageSpec.model_validate({**stages[index].model_dump(), **changes})
    return stages[:index] + (updated,) + stages[index + 1:]


def print_stages(stages: tuple[StageSpec, ...]) -> None:
    for i, s in enumerate(stages):
        mark = "x" if s.enabled else " "
        extra = ""
        if s.custom_productivity_hour:
            extra += f", {s.custom_productivity_hour:g} sqm/h"
        if s.custom_productivity_day:
            extra += f", {s.custom_productivity_day:g} sqm/day"
        print(f" {i}. [{mark}] {s.label} ({s.name}, {s.coats} coat(s){extra})")


def edit_stages(stages: tuple[StageSpec, ...]) -> tuple[StageSpec, ...]:
    help_line = "t N=toggle  c N K=coats  h N V=sqm/hour  d N V=sqm/day  a NAME=add  r N=remove  m N M=move  q=done"
    while True:
        print("\nStages:")
        print_stages(stages)
        print(help_line)
        parts = input("> ").strip().split(maxsplit=2)
        if not parts or parts[0] == "q":
            return stages

        cmd, args = parts[0], parts[1:]
        idx = int(coerce_float(args[0], -1)) if args else -1
        if cmd == "a":
            stages = add_custom_stage(stages, " ".join(args))
        elif cmd == "r":
            if 0 <= idx < len(stages) and stages[idx].name == "custom":
                stages = remove_stage(stages, idx)
            else:
                print("❌ Only custom stages can be removed")
        elif cmd == "t" and 0 <= idx < len(stages):
            stages = update_stage(stages, idx, enabled=not stages[idx].enabled)
        elif cmd == "c" and len(args) == 2:
            stages = update_stage(stages, idx, coats=coerce_int(args[1], 1))
        elif cmd == "h" and len(args) == 2:
            stages = update_stage(stages, idx, custom_productivity_hour=max(coerce_float(args[1]), 0.0))
        elif cmd == "d" and len(args) == 2:
            stages = update_stage(stages, idx, custom_productivity_day=max(coerce_float(args[1]), 0.0))
        elif cmd == "m" and len(args) == 2:
            stages = move_stage(stages, idx, int(coerce_float(args[1], -1)))
        else:
            print("❌ Unknown command")


# ---------- ВИВІД ----------

def render_result(result: CostResult, area: float) -> str:
    lines = ["", "--- Stages ---"]
    for s in result.stage_breakdown:
        lines.append(f"{s.stage:<34} {s.hours:>7.3f} h/sqm  {money(s.cost):>14}   {s.description}")

    lines += [
        "",
        "--- Breakdown (per sqm) ---",
        f"Hourly rate:           {money(result.hourly_rate)}",
        f"Basic labor:           {money(result.breakdown.basic_labor)}",
        f"Labor burden:          {money(result.breakdown.labor_burden)}",
        f"Materials:             {money(result.breakdown.materials)} ({result.total_coats} coats)",
        f"Total cost:            {money(result.total_cost_per_sqm)}",
        f"Overhead:              {money(result.breakdown.overhead)}",
        f"Profit:                {money(result.breakdown.profit)}",
        f"Suggested price:       {money(result.suggested_price_per_sqm)}",
        "",
        f"Area:                  {area:,.2f} sqm",
        f"TOTAL:                 {money(result.total_project_cost)}",
    ]

    if result.daily_productivity is None:
        lines.append("Daily productivity:    n/a")
    else:
        lines.append(f"Daily productivity:    {result.daily_productivity:,.2f} sqm/day")
    if result.days_required is None:
        lines.append("Days required:         n/a")
    else:
        lines.append(f"Days required:         {result.days_required:,.1f}")

    if result.notes:
        lines.append("\nNotes:")
        lines += [f" - {n}" for n in result.notes]
    return "\n".join(lines)


def render_engineering(report: EngineeringReport) -> str:
    dew = report.dew_point
    if dew.safe:
        dew_line = f"SAFE: margin {dew.margin:.1f}°C (dew point {dew.dew_point:.1f}°C)"
    elif math.isnan(dew.margin):
        dew_line = "CONDENSATION RISK: invalid temperature / humidity"
    else:
        dew_line = f"CONDENSATION RISK: margin {dew.margin:.1f}°C < 3°C (dew point {dew.dew_point:.1f}°C)"

    return "\n".join(
        [
            "",
            "--- Engineering (DFT / VS / WFT) ---",
            f"Method:                {report.application_method} (loss factor {report.loss_factor:.2f})",
            f"TSR:                   {report.theoretical_spread_rate:.3f} sqm/L",
            f"PSR:                   {report.practical_spread_rate:.3f} sqm/L (after losses)",
            f"Liters/sqm/coat:       {report.liters_per_sqm_per_coat:.3f}",
            f"WFT:                   {report.wet_film_thickness:.0f} µm",
            f"Gallon cost/sqm:       {money(report.gallon_cost_per_sqm)}",
            f"Engineering price:     {money(report.price_per_sqm_per_coat)} per sqm per coat",
            f"Dew point:             {dew_line}",
        ]
    )


# ---------- ОСНОВНИЙ CLI СЦЕНАРІЙ ----------

def ask_labor(labor: LaborConfig, defaults: dict) -> LaborConfig:
    mode = ask_choice("Productivity mode", PRODUCTIVITY_MODES, labor.productivity_mode)
    working_hours = ask_float_default("Working hours per day", labor.working_hours, min_value=0)

    rate: SimpleWage | CompositeCrew
    if ask_yes_no("Use composite crew rate?", default=isinstance(labor.rate, CompositeCrew)):
        crew = labor.rate if isinstance(labor.rate, CompositeCrew) else CompositeCrew()
        rate = CompositeCrew(
            painter_daily=ask_float_default("Painter daily", crew.painter_daily, min_value=0),
            helper_daily=ask_float_default("Helper daily", crew.helper_daily, min_value=0),
            foreman_daily=ask_float_default("Foreman daily", crew.foreman_daily, min_value=0),
            admin_daily=ask_float_default("Site admin daily", crew.admin_daily, min_value=0),
            transport_daily=ask_float_default("Transport daily", crew.transport_daily, min_value=0),
            r_helper=ask_float_default("Helper hours per painter hour", crew.r_helper, min_value=0),
            r_foreman=ask_float_default("Foreman hours per painter hour", crew.r_foreman, min_value=0),
        )
    else:
        default_wage = float(defaults.get("labor", {}).get("daily_wage", 0))
        rate = SimpleWage(daily_wage=ask_float_default("Daily wage", default_wage, min_value=0))

    burden = ask_float_default("Labor burden %", labor.labor_burden, min_value=0)
    return LaborConfig(rate=rate, working_hours=working_hours, labor_burden=burden, productivity_mode=mode)


def ask_material(defaults: dict) -> MaterialConfig:
    m = defaults.get("material", {})
    if not ask_yes_no("Include materials?", default=bool(m.get("include_materials", True))):
        return MaterialConfig.from_form(include_materials=False)

    default_mode = "engineering" if m.get("use_engineering_materials") else (
        "gallon" if m.get("use_gallon_calculator") else "direct"
    )
    mode = ask_choice("Material pricing", ("engineering", "gallon", "direct"), default_mode)
    waste = ask_float_default("Waste %", float(m.get("waste_percentage", 0)), min_value=0)

    if mode == "engineering":
        return MaterialConfig.from_form(
            waste_percentage=waste,
            use_engineering_materials=True,
            vs=ask_float_default("Volume solids VS (0-1)", float(m.get("vs", 0.4)), min_value=0, max_value=1),
            dft=ask_float_default("Dry film thickness DFT (µm)", float(m.get("dft", 35)), min_value=0),
            application_method=ask_choice("Application method", ("airless", "roller", "brush"),
                                          m.get("application_method", "roller")),
            gallon_price=ask_float_default("Gallon price", float(m.get("gallon_price", 0)), min_value=0),
        )

    if mode == "gallon":
        brand = ask_choice("Paint brand", tuple(BRAND_COVERAGE), m.get("paint_brand", "jotun"))
        return MaterialConfig.from_form(
            waste_percentage=waste,
            use_gallon_calculator=True,
            paint_brand=brand,
            gallon_price=ask_float_default("Gallon price", float(m.get("gallon_price", 0)), min_value=0),
            coverage_per_gallon=ask_float_default("Coverage (sqm per gallon)", coverage_for_brand(brand),
                                                  min_value=0),
        )

    return MaterialConfig.from_form(
        waste_percentage=waste,
        price_per_sqm=ask_float_default("Material price per sqm per coat", float(m.get("price_per_sqm", 0)),
                                        min_value=0),
    )


def run_engineering_panel(defaults: dict) -> None:
    m = defaults.get("material", {})
    e = defaults.get("engineering", {})
    report = engineering_report(
        volume_solids=ask_float_default("Volume solids VS (0-1)", float(m.get("vs", 0.4))),
        dft_microns=ask_float_default("Dry film thickness DFT (µm)", float(m.get("dft", 35))),
        application_method=ask_choice("Application method", ("airless", "roller", "brush"),
                                      m.get("application_method", "roller")),
        surface_temp_c=ask_float_default("Surface temperature °C", float(e.get("surface_temp_c", 30))),
        relative_humidity=ask_float_default("Relative humidity %", float(e.get("relative_humidity", 55))),
        gallon_price=ask_float_default("Gallon price", float(m.get("gallon_price", 0))),
        coverage_per_gallon=ask_float_default("Coverage (sqm per gallon)", float(e.get("coverage_per_gallon", 40))),
    )
    print(render_engineering(report))


def run_cli(defaults: dict | None = None) -> None:
    print("\n=== Painting Cost Estimator (CLI) ===\n")

    defaults = defaults or load_defaults()
    labor, material, project, business = snapshots_from_defaults(defaults)

    # --- Проєкт ---
    area = ask_float_default("Total area (sqm)", project.area, min_value=0)
    surface = ask_choice("Surface type", SURFACE_TYPES, project.surface_type)
    environment = ask_choice("Work environment", WORK_ENVIRONMENTS, project.work_environment)
    stages = project.stages
    if ask_yes_no("Edit stages?", default=False):
        stages = edit_stages(stages)

    # --- Ставки (повтор, поки знімки не пройдуть валідацію) ---
    while True:
        try:
            labor = ask_labor(labor, defaults)
            material = ask_material(defaults)
            business = BusinessConfig(
                overhead=ask_float_default("Overhead %", business.overhead, min_value=0),
                profit_margin=ask_float_default("Profit margin %", business.profit_margin, min_value=0),
            )
            project = ProjectConfig(surface_type=surface, work_environment=environment, area=area, stages=stages)
        except ValidationError as e:
            print(f"❌ Invalid input: {e}")
            print("Try again.\n")
            continue
        break

    # --- Розрахунок через paintcost ---
    result = estimate(labor, material, project, business)
    print(render_result(result, project.area))

    if ask_yes_no("\nOpen engineering panel (spread rate / dew point)?", default=False):
        run_engineering_panel(defaults)


def main() -> None:
    parser = argparse.ArgumentParser(description="Painting Cost Estimator")
    parser.add_argument("--defaults", type=str, help="Path to defaults JSON (default: cli/defaults.json)")
    parser.add_argument("--engineering", action="store_true", help="Only run the engineering panel")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    defaults = load_defaults(args.defaults)
    try:
        if args.engineering:
            run_engineering_panel(defaults)
        else:
            run_cli(defaults)
    except (KeyboardInterrupt, EOFError):
        print("\nBye.")


if __name__ == "__main__":
    main()
