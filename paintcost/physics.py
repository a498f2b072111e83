# paintcost/physics.py
# Фізика покриттів: spread rate, WFT, точка роси, ціна матеріалу на м².
# Чисті функції: некоректний вхід -> 0 (або NaN для точки роси), без винятків.

from __future__ import annotations

import math

from pydantic import BaseModel

GALLON_TO_LITERS = 3.785

# Magnus formula constants
MAGNUS_A = 17.62
MAGNUS_B = 243.12

DEW_POINT_MIN_MARGIN_C = 3.0
DEFAULT_LOSS_FACTOR = 0.85

LOSS_FACTORS: dict[str, float] = {
    "airless": 0.90,
    "roller": 0.85,
    "brush": 0.82,
}


def _positive(*values: float) -> bool:
    return all(math.isfinite(v) and v > 0 for v in values)


def loss_factor_for(application_method: str | None) -> float:
    """Втрати за методом нанесення. Невідомий метод -> roller."""
    return LOSS_FACTORS.get((application_method or "").strip().lower(), LOSS_FACTORS["roller"])


def theoretical_spread_rate(volume_solids: float, dft_microns: float) -> float:
    """TSR у м²/л: (VS * 10) / DFT."""
    if not _positive(volume_solids, dft_microns):
        return 0.0
    return (volume_solids * 10) / dft_microns


def practical_spread_rate(theoretical_rate: float, loss_factor: float) -> float:
    """PSR = TSR * loss factor; loss factor поза (0, 1] -> 0.85."""
    if not _positive(theoretical_rate):
        return 0.0
    lf = loss_factor if math.isfinite(loss_factor) and 0 < loss_factor <= 1 else DEFAULT_LOSS_FACTOR
    return theoretical_rate * lf


def liters_per_sqm_per_coat(practical_rate: float) -> float:
    if not _positive(practical_rate):
        return 0.0
    return 1 / practical_rate


def wet_film_thickness(dft_microns: float, volume_solids: float) -> float:
    """WFT = DFT / VS."""
    if not _positive(dft_microns, volume_solids):
        return 0.0
    return dft_microns / volume_solids


def dew_point_celsius(temp_c: float, relative_humidity: float) -> float:
    """Точка роси (Magnus). RH поза (0, 100] -> NaN."""
    if not (math.isfinite(temp_c) and math.isfinite(relative_humidity)):
        return math.nan
    if relative_humidity <= 0 or relative_humidity > 100 or MAGNUS_B + temp_c <= 0:
        return math.nan
    gamma = (MAGNUS_A * temp_c) / (MAGNUS_B + temp_c) + math.log(relative_humidity / 100)
    if gamma == MAGNUS_A:
        return math.nan
    return (MAGNUS_B * gamma) / (MAGNUS_A - gamma)


class DewPointCheck(BaseModel):
    safe: bool
    dew_point: float
    margin: float


def dew_point_safety(surface_temp_c: float, relative_humidity: float) -> DewPointCheck:
    """Поверхня має бути щонайменше на 3°C тепліша за точку роси."""
    dp = dew_point_celsius(surface_temp_c, relative_humidity)
    if not math.isfinite(dp):
        return DewPointCheck(safe=False, dew_point=math.nan, margin=math.nan)
    margin = surface_temp_c - dp
    return DewPointCheck(safe=margin >= DEW_POINT_MIN_MARGIN_C, dew_point=dp, margin=margin)


def material_cost_per_sqm(gallon_price: float, coverage_per_gallon: float) -> float:
    if not (math.isfinite(gallon_price) and math.isfinite(coverage_per_gallon)):
        return 0.0
    if coverage_per_gallon <= 0:
        return 0.0
    return gallon_price / coverage_per_gallon


def price_from_gallon(gallon_price: float, coverage_per_gallon: float) -> float:
    return material_cost_per_sqm(gallon_price, coverage_per_gallon)


def price_from_engineering(
    volume_solids: float,
    dft_microns: float,
    application_method: str | None,
    gallon_price: float,
) -> float:
    """Ціна матеріалу на м² на один шар з VS/DFT і ціни галона."""
    if not _positive(gallon_price):
        return 0.0
    tsr = theoretical_spread_rate(volume_solids, dft_microns)
    psr = practical_spread_rate(tsr, loss_factor_for(application_method))
    price_per_liter = gallon_price / GALLON_TO_LITERS
    return price_per_liter * liters_per_sqm_per_coat(psr)


class EngineeringReport(BaseModel):
    application_method: str
    loss_factor: float
    theoretical_spread_rate: float
    practical_spread_rate: float
    liters_per_sqm_per_coat: float
    wet_film_thickness: float
    dew_point: DewPointCheck
    gallon_cost_per_sqm: float
    price_per_sqm_per_coat: float


def engineering_report(
    volume_solids: float,
    dft_microns: float,
    application_method: str | None,
    surface_temp_c: float,
    relative_humidity: float,
    gallon_price: float = 0.0,
    coverage_per_gallon: float = 0.0,
) -> EngineeringReport:
    """Усі інженерні показники разом (DFT / VS / WFT + точка роси)."""
    method = (application_method or "").strip().lower()
    if method not in LOSS_FACTORS:
        method = "roller"
    lf = loss_factor_for(method)
    tsr = theoretical_spread_rate(volume_solids, dft_microns)
    psr = practical_spread_rate(tsr, lf)

    return EngineeringReport(
        application_method=method,
        loss_factor=lf,
        theoretical_spread_rate=tsr,
        practical_spread_rate=psr,
        liters_per_sqm_per_coat=liters_per_sqm_per_coat(psr),
        wet_film_thickness=wet_film_thickness(dft_microns, volume_solids),
        dew_point=dew_point_safety(surface_temp_c, relative_humidity),
        gallon_cost_per_sqm=material_cost_per_sqm(gallon_price, coverage_per_gallon),
        price_per_sqm_per_coat=price_from_engineering(volume_solids, dft_microns, method, gallon_price),
    )
