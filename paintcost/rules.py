# paintcost/rules.py
# Норми виробітку (годин на м²) та коефіцієнти умов роботи.

from __future__ import annotations

from typing import Literal, get_args

StageName = Literal[
    "sanding",
    "sealer",
    "primer",
    "skimcoat1",
    "skimcoat2",
    "basecoat",
    "topcoat",
    "finishing",
    "custom",
]
SurfaceType = Literal["walls", "ceilings", "timber", "metal", "textured"]
WorkEnvironment = Literal["interior", "exterior", "exterior_height"]
ProductivityMode = Literal["scientific", "hourly", "daily"]
ApplicationMethod = Literal["airless", "roller", "brush"]

STAGE_NAMES: tuple[str, ...] = get_args(StageName)
SURFACE_TYPES: tuple[str, ...] = get_args(SurfaceType)
WORK_ENVIRONMENTS: tuple[str, ...] = get_args(WorkEnvironment)
PRODUCTIVITY_MODES: tuple[str, ...] = get_args(ProductivityMode)

# Колонки таблиці норм. timber / metal беруть рядок walls.
RATE_COLUMNS = ("walls", "ceilings", "textured")
DEFAULT_RATE_COLUMN = "walls"

# hours per sqm, one coat
PRODUCTION_RATES: dict[str, dict[str, float]] = {
    "sanding":   {"walls": 0.20, "ceilings": 0.25, "textured": 0.30},
    "sealer":    {"walls": 0.10, "ceilings": 0.15, "textured": 0.18},
    "primer":    {"walls": 0.08, "ceilings": 0.12, "textured": 0.15},
    "skimcoat1": {"walls": 0.25, "ceilings": 0.30, "textured": 0.35},
    "skimcoat2": {"walls": 0.20, "ceilings": 0.25, "textured": 0.30},
    "basecoat":  {"walls": 0.12, "ceilings": 0.18, "textured": 0.22},
    "topcoat":   {"walls": 0.10, "ceilings": 0.15, "textured": 0.18},
    "finishing": {"walls": 0.05, "ceilings": 0.08, "textured": 0.10},
    "custom":    {"walls": 0.10, "ceilings": 0.15, "textured": 0.18},
}

SURFACE_FACTORS: dict[str, float] = {
    "walls": 1.0,
    "ceilings": 1.25,
    "timber": 1.20,
    "metal": 1.30,
    "textured": 1.45,
}

ENVIRONMENT_FACTORS: dict[str, float] = {
    "interior": 1.0,
    "exterior": 1.35,
    "exterior_height": 1.60,
}

# Повторні шари фінішу йдуть швидше
TOPCOAT_REPEAT_FACTOR = 0.8

STAGE_LABELS: dict[str, str] = {
    "sanding": "Sanding (surface preparation)",
    "sealer": "Sealer",
    "primer": "Primer (base coat)",
    "skimcoat1": "Skim coat #1 (first levelling)",
    "skimcoat2": "Skim coat #2 (second levelling)",
    "basecoat": "Base coat",
    "topcoat": "Top coat (main finish)",
    "finishing": "Finishing (final touch-up)",
    "custom": "New stage",
}

DEFAULT_STAGE_ORDER = ("primer", "skimcoat1", "skimcoat2", "sanding", "topcoat", "finishing")

# sqm per gallon
BRAND_COVERAGE: dict[str, dict[str, float]] = {
    "jotun":  {"primer": 12, "topcoat": 16, "gloss": 14},
    "dulux":  {"primer": 11, "topcoat": 15, "gloss": 13},
    "nippon": {"primer": 13, "topcoat": 17, "gloss": 15},
    "asian":  {"primer": 10, "topcoat": 14, "gloss": 12},
    "berger": {"primer": 11, "topcoat": 15, "gloss": 13},
}
DEFAULT_COVERAGE_PER_GALLON = 16.0


def _check_tables() -> None:
    """Таблиці мають покривати всі значення enum-ів."""
    missing_rows = set(STAGE_NAMES) - set(PRODUCTION_RATES)
    if missing_rows:
        raise RuntimeError(f"PRODUCTION_RATES missing stages: {sorted(missing_rows)}")
    for stage, row in PRODUCTION_RATES.items():
        missing_cols = set(RATE_COLUMNS) - set(row)
        if missing_cols:
            raise RuntimeError(f"PRODUCTION_RATES[{stage!r}] missing columns: {sorted(missing_cols)}")
    for name, table, keys in (
        ("SURFACE_FACTORS", SURFACE_FACTORS, SURFACE_TYPES),
        ("ENVIRONMENT_FACTORS", ENVIRONMENT_FACTORS, WORK_ENVIRONMENTS),
        ("STAGE_LABELS", STAGE_LABELS, STAGE_NAMES),
    ):
        missing = set(keys) - set(table)
        if missing:
            raise RuntimeError(f"{name} missing keys: {sorted(missing)}")


_check_tables()


def base_rate(stage_name: str, surface_type: str) -> float:
    """Годин на м² за один шар. Невідомі значення -> рядок custom / колонка walls."""
    row = PRODUCTION_RATES.get(stage_name, PRODUCTION_RATES["custom"])
    return row.get(surface_type, row[DEFAULT_RATE_COLUMN])


def coats_multiplier(stage_name: str, coats: int) -> float:
    """Скільки "повних" шарів у сумі. Для topcoat кожен наступний шар = 80%."""
    if stage_name == "topcoat" and coats > 1:
        return 1 + (coats - 1) * TOPCOAT_REPEAT_FACTOR
    return float(coats)


def surface_factor(surface_type: str) -> float:
    return SURFACE_FACTORS.get(surface_type, 1.0)


def environment_factor(work_environment: str) -> float:
    return ENVIRONMENT_FACTORS.get(work_environment, 1.0)


def scientific_hours_per_sqm(stage_name: str, coats: int, surface_type: str, work_environment: str) -> float:
    rate = base_rate(stage_name, surface_type)
    return (
        rate
        * coats_multiplier(stage_name, coats)
        * surface_factor(surface_type)
        * environment_factor(work_environment)
    )


def coverage_for_brand(brand: str | None, product: str = "topcoat") -> float:
    """Покриття м²/галон для бренду. Невідомий бренд чи продукт -> 16."""
    table = BRAND_COVERAGE.get((brand or "").strip().lower())
    if not table:
        return DEFAULT_COVERAGE_PER_GALLON
    return float(table.get(product, DEFAULT_COVERAGE_PER_GALLON))


def effective_waste_factor(waste_pct: float) -> float:
    """Множник матеріалу = 1 + waste%."""
    return 1 + waste_pct / 100.0
