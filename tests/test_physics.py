"""Tests for the coating physics functions."""

import math

import pytest

from paintcost.physics import (
    GALLON_TO_LITERS,
    dew_point_celsius,
    dew_point_safety,
    engineering_report,
    liters_per_sqm_per_coat,
    loss_factor_for,
    material_cost_per_sqm,
    practical_spread_rate,
    price_from_engineering,
    price_from_gallon,
    theoretical_spread_rate,
    wet_film_thickness,
)


class TestSpreadRate:
    def test_theoretical_formula(self):
        assert theoretical_spread_rate(0.4, 35) == pytest.approx(0.4 * 10 / 35)
        assert theoretical_spread_rate(1.0, 50) == pytest.approx(0.2)

    def test_theoretical_decreasing_in_dft(self):
        assert theoretical_spread_rate(0.4, 30) > theoretical_spread_rate(0.4, 35) > theoretical_spread_rate(0.4, 80)

    def test_theoretical_increasing_in_vs(self):
        assert theoretical_spread_rate(0.3, 35) < theoretical_spread_rate(0.5, 35) < theoretical_spread_rate(1.0, 35)

    @pytest.mark.parametrize(
        "vs, dft",
        [(0, 35), (0.4, 0), (-0.4, 35), (0.4, -10), (math.nan, 35), (0.4, math.inf)],
    )
    def test_theoretical_invalid_is_zero(self, vs, dft):
        assert theoretical_spread_rate(vs, dft) == 0.0

    def test_practical_applies_loss_factor(self):
        assert practical_spread_rate(0.2, 0.9) == pytest.approx(0.18)
        assert practical_spread_rate(0.2, 1.0) == pytest.approx(0.2)

    @pytest.mark.parametrize("lf", [0, -0.5, 1.01, 1.5, math.nan, math.inf])
    def test_practical_out_of_range_loss_falls_back(self, lf):
        assert practical_spread_rate(0.2, lf) == 0.2 * 0.85

    @pytest.mark.parametrize("tsr", [0, -1, math.nan, math.inf])
    def test_practical_invalid_rate_is_zero(self, tsr):
        assert practical_spread_rate(tsr, 0.9) == 0.0

    def test_liters_is_reciprocal(self):
        assert liters_per_sqm_per_coat(0.5) == pytest.approx(2.0)
        assert liters_per_sqm_per_coat(0) == 0.0
        assert liters_per_sqm_per_coat(math.nan) == 0.0

    @pytest.mark.parametrize("vs, dft, lf", [(0.4, 35, 0.85), (0.55, 60, 0.9), (0.3, 25, 2.0)])
    def test_liters_chain(self, vs, dft, lf):
        tsr = theoretical_spread_rate(vs, dft)
        lf_effective = lf if 0 < lf <= 1 else 0.85
        liters = liters_per_sqm_per_coat(practical_spread_rate(tsr, lf))
        assert liters == pytest.approx(1 / (tsr * lf_effective))


class TestWetFilm:
    def test_wft_from_dft(self):
        assert wet_film_thickness(35, 0.4) == pytest.approx(87.5)

    def test_wft_invalid(self):
        assert wet_film_thickness(0, 0.4) == 0.0
        assert wet_film_thickness(35, 0) == 0.0
        assert wet_film_thickness(math.nan, 0.4) == 0.0


class TestDewPoint:
    def test_saturated_air_dew_point_equals_temperature(self):
        assert dew_point_celsius(20, 100) == pytest.approx(20.0)

    def test_typical_value(self):
        # 30°C, 55% RH -> ~19.97°C
        assert dew_point_celsius(30, 55) == pytest.approx(19.97, abs=0.05)

    @pytest.mark.parametrize("temp, rh", [(20, 0), (20, -5), (20, 100.5), (math.nan, 50), (20, math.inf)])
    def test_invalid_is_nan(self, temp, rh):
        assert math.isnan(dew_point_celsius(temp, rh))

    def test_safe_when_margin_large(self):
        check = dew_point_safety(30, 55)
        assert check.margin >= 3
        assert check.safe is True
        assert check.margin == pytest.approx(30 - check.dew_point)

    def test_unsafe_when_margin_small(self):
        check = dew_point_safety(20, 95)
        assert check.margin < 3
        assert check.safe is False

    def test_invalid_input_is_unsafe(self):
        check = dew_point_safety(20, 0)
        assert check.safe is False
        assert math.isnan(check.dew_point)
        assert math.isnan(check.margin)


class TestMaterialPrice:
    def test_loss_factor_lookup(self):
        assert loss_factor_for("airless") == 0.90
        assert loss_factor_for("Roller") == 0.85
        assert loss_factor_for("brush") == 0.82
        assert loss_factor_for("spray-can") == 0.85
        assert loss_factor_for(None) == 0.85

    def test_cost_from_gallon(self):
        assert material_cost_per_sqm(70, 16) == pytest.approx(4.375)
        assert price_from_gallon(70, 16) == pytest.approx(4.375)

    @pytest.mark.parametrize("price, coverage", [(70, 0), (70, -1), (math.nan, 16), (70, math.inf)])
    def test_cost_from_gallon_invalid(self, price, coverage):
        assert material_cost_per_sqm(price, coverage) == 0.0

    def test_engineering_price(self):
        # tsr 0.1143, psr 0.0971, 10.294 L/sqm, 18.495 per liter
        price = price_from_engineering(0.4, 35, "roller", 70)
        assert price == pytest.approx(190.4, abs=0.1)
        assert price == pytest.approx((70 / GALLON_TO_LITERS) * 35 / (0.4 * 10 * 0.85))

    def test_engineering_price_cheaper_with_airless(self):
        assert price_from_engineering(0.4, 35, "airless", 70) < price_from_engineering(0.4, 35, "brush", 70)

    def test_engineering_price_invalid(self):
        assert price_from_engineering(0, 35, "roller", 70) == 0.0
        assert price_from_engineering(0.4, 35, "roller", 0) == 0.0


class TestEngineeringReport:
    def test_report_values(self):
        report = engineering_report(0.4, 35, "roller", 30, 55, gallon_price=70, coverage_per_gallon=40)
        assert report.loss_factor == 0.85
        assert report.theoretical_spread_rate == pytest.approx(0.4 * 10 / 35)
        assert report.practical_spread_rate == pytest.approx(0.4 * 10 / 35 * 0.85)
        assert report.wet_film_thickness == pytest.approx(87.5)
        assert report.gallon_cost_per_sqm == pytest.approx(1.75)
        assert report.price_per_sqm_per_coat == pytest.approx(190.4, abs=0.1)
        assert report.dew_point.safe is True

    def test_unknown_method_reported_as_roller(self):
        report = engineering_report(0.4, 35, "spray", 20, 95)
        assert report.application_method == "roller"
        assert report.dew_point.safe is False
        assert report.price_per_sqm_per_coat == 0.0
