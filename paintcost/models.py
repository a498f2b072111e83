from __future__ import annotations

import logging
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .physics import LOSS_FACTORS, price_from_engineering, price_from_gallon
from .rules import (
    DEFAULT_STAGE_ORDER,
    PRODUCTIVITY_MODES,
    STAGE_LABELS,
    STAGE_NAMES,
    SURFACE_TYPES,
    WORK_ENVIRONMENTS,
    ApplicationMethod,
    ProductivityMode,
    StageName,
    SurfaceType,
    WorkEnvironment,
    coverage_for_brand,
)

logger = logging.getLogger(__name__)


def _known_or_default(value: object, allowed: tuple[str, ...], default: str, what: str) -> object:
    # невідоме значення enum-а -> дефолт, без ValidationError
    if not isinstance(value, str):
        return value
    key = value.strip().lower()
    if key in allowed:
        return key
    logger.warning("Unknown %s %r, using %r", what, value, default)
    return default


class Snapshot(BaseModel):
    """Незмінний знімок конфігурації (UI збирає новий на кожну зміну)."""

    # inf / nan у вхідних числах -> ValidationError
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


# ---------- STAGES ----------

class StageSpec(Snapshot):
    name: StageName = "custom"
    enabled: bool = True
    coats: int = Field(default=1, ge=1)
    description: str = ""

    # м²/год та м²/день; None або 0 = не задано
    custom_productivity_hour: float | None = Field(default=None, ge=0)
    custom_productivity_day: float | None = Field(default=None, ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def _stage_name(cls, v: object) -> object:
        return _known_or_default(v, STAGE_NAMES, "custom", "stage name")

    @property
    def label(self) -> str:
        return self.description or STAGE_LABELS[self.name]


def default_stages() -> tuple[StageSpec, ...]:
    return tuple(StageSpec(name=name) for name in DEFAULT_STAGE_ORDER)


# ---------- LABOR ----------

class SimpleWage(Snapshot):
    kind: Literal["simple"] = "simple"
    daily_wage: float = Field(default=0, ge=0)


class CompositeCrew(Snapshot):
    """Бригада: маляр + частка помічника і бригадира + адмін + транспорт."""

    kind: Literal["composite"] = "composite"
    painter_daily: float = Field(default=0, ge=0)
    helper_daily: float = Field(default=0, ge=0)
    foreman_daily: float = Field(default=0, ge=0)
    admin_daily: float = Field(default=0, ge=0)
    transport_daily: float = Field(default=0, ge=0)

    # годин помічника / бригадира на 1 годину маляра
    r_helper: float = Field(default=0.30, ge=0)
    r_foreman: float = Field(default=0.15, ge=0)


LaborRate = Annotated[SimpleWage | CompositeCrew, Field(discriminator="kind")]


class LaborConfig(Snapshot):
    rate: LaborRate = Field(default_factory=SimpleWage)
    working_hours: float = Field(default=8, ge=0)
    labor_burden: float = Field(default=0, ge=0)
    productivity_mode: ProductivityMode = "scientific"

    @field_validator("productivity_mode", mode="before")
    @classmethod
    def _mode(cls, v: object) -> object:
        return _known_or_default(v, PRODUCTIVITY_MODES, "scientific", "productivity mode")


# ---------- MATERIALS ----------

class EngineeringPricing(Snapshot):
    kind: Literal["engineering"] = "engineering"
    vs: float = Field(default=0.4, ge=0, le=1)
    dft: float = Field(default=35, ge=0)
    application_method: ApplicationMethod = "roller"
    gallon_price: float = Field(default=0, ge=0)

    @field_validator("application_method", mode="before")
    @classmethod
    def _method(cls, v: object) -> object:
        return _known_or_default(v, tuple(LOSS_FACTORS), "roller", "application method")

    def price_per_sqm_per_coat(self) -> float:
        return price_from_engineering(self.vs, self.dft, self.application_method, self.gallon_price)


class GallonPricing(Snapshot):
    kind: Literal["gallon"] = "gallon"
    gallon_price: float = Field(default=0, ge=0)
    coverage_per_gallon: float = Field(default=0, ge=0)
    paint_brand: str | None = None

    def price_per_sqm_per_coat(self) -> float:
        return price_from_gallon(self.gallon_price, self.coverage_per_gallon)


class DirectPricing(Snapshot):
    kind: Literal["direct"] = "direct"
    price_per_sqm: float = Field(default=0, ge=0)

    def price_per_sqm_per_coat(self) -> float:
        return self.price_per_sqm


MaterialPricing = Annotated[
    EngineeringPricing | GallonPricing | DirectPricing,
    Field(discriminator="kind"),
]


class MaterialConfig(Snapshot):
    include_materials: bool = True
    waste_percentage: float = Field(default=0, ge=0)
    pricing: MaterialPricing = Field(default_factory=DirectPricing)

    @classmethod
    def from_form(
        cls,
        *,
        include_materials: bool = True,
        waste_percentage: float = 0.0,
        use_engineering_materials: bool = False,
        use_gallon_calculator: bool = False,
        price_per_sqm: float = 0.0,
        gallon_price: float = 0.0,
        coverage_per_gallon: float = 0.0,
        paint_brand: str | None = None,
        vs: float = 0.0,
        dft: float = 0.0,
        application_method: str = "roller",
    ) -> MaterialConfig:
        """
        Збирає стратегію ціни з прапорців форми.
        Пріоритет: engineering -> gallon calculator -> пряма ціна за м².
        """
        pricing: EngineeringPricing | GallonPricing | DirectPricing
        if use_engineering_materials and vs > 0 and dft > 0 and gallon_price > 0:
            pricing = EngineeringPricing(
                vs=vs, dft=dft, application_method=application_method, gallon_price=gallon_price
            )
        elif use_gallon_calculator and gallon_price > 0:
            coverage = coverage_per_gallon
            if coverage <= 0 and paint_brand:
                coverage = coverage_for_brand(paint_brand)
            if coverage > 0:
                pricing = GallonPricing(
                    gallon_price=gallon_price, coverage_per_gallon=coverage, paint_brand=paint_brand
                )
            else:
                pricing = DirectPricing(price_per_sqm=price_per_sqm)
        else:
            pricing = DirectPricing(price_per_sqm=price_per_sqm)

        return cls(include_materials=include_materials, waste_percentage=waste_percentage, pricing=pricing)


# ---------- PROJECT / BUSINESS ----------

class ProjectConfig(Snapshot):
    surface_type: SurfaceType = "walls"
    work_environment: WorkEnvironment = "interior"
    area: float = Field(default=0, ge=0)
    stages: tuple[StageSpec, ...] = ()

    @field_validator("surface_type", mode="before")
    @classmethod
    def _surface(cls, v: object) -> object:
        return _known_or_default(v, SURFACE_TYPES, "walls", "surface type")

    @field_validator("work_environment", mode="before")
    @classmethod
    def _environment(cls, v: object) -> object:
        return _known_or_default(v, WORK_ENVIRONMENTS, "interior", "work environment")

    @property
    def enabled_stages(self) -> list[StageSpec]:
        return [s for s in self.stages if s.enabled]


class BusinessConfig(Snapshot):
    overhead: float = Field(default=0, ge=0)
    profit_margin: float = Field(default=0, ge=0)


# ---------- RESULT ----------

class Result(BaseModel):
    model_config = ConfigDict(frozen=True)


class StageResult(Result):
    stage: str
    hours: float
    cost: float
    description: str


class CostBreakdown(Result):
    basic_labor: float
    labor_burden: float
    materials: float
    overhead: float
    profit: float


class CostResult(Result):
    stage_breakdown: tuple[StageResult, ...]
    total_hours: float
    hourly_rate: float
    total_coats: int

    labor_cost_per_sqm: float
    material_cost_per_sqm: float
    total_cost_per_sqm: float
    suggested_price_per_sqm: float
    total_project_cost: float

    # None = не застосовно (немає годин роботи)
    daily_productivity: float | None
    days_required: float | None

    breakdown: CostBreakdown
    notes: tuple[str, ...] = ()
