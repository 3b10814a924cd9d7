from __future__ import annotations

from goaltime.utils.savings_models import SavingsPlan, ValidationReport

MAX_TYPICAL_RETURN = 20.0
MAX_TYPICAL_INFLATION = 15.0
MAX_HORIZON_YEARS = 50.0


def validate_plan_values(
    current_savings: float,
    monthly_deposit: float,
    annual_return_rate: float,
    annual_inflation_rate: float,
    years: float,
) -> ValidationReport:
    """
    Non-raising range check for plan parameters.

    The engine itself accepts anything; callers use this to surface problems
    before rendering results.
    """
    report = ValidationReport()

    if current_savings < 0:
        report.add_error("Current savings cannot be negative.", field="current_savings")
    if monthly_deposit < 0:
        report.add_error("Monthly deposit cannot be negative.", field="monthly_deposit")
    if annual_return_rate < 0:
        report.add_error("Expected return cannot be negative.", field="annual_return_rate")
    if annual_inflation_rate < 0:
        report.add_error("Inflation rate cannot be negative.", field="annual_inflation_rate")
    if years <= 0:
        report.add_error("Time horizon must be positive.", field="years")

    if annual_return_rate > MAX_TYPICAL_RETURN:
        report.add_warning(f"Expected return {annual_return_rate:.1f}% is above the typical 0-{MAX_TYPICAL_RETURN:.0f}% range.", field="annual_return_rate")
    if annual_inflation_rate > MAX_TYPICAL_INFLATION:
        report.add_warning(f"Inflation {annual_inflation_rate:.1f}% is above the typical 0-{MAX_TYPICAL_INFLATION:.0f}% range.", field="annual_inflation_rate")
    if years > MAX_HORIZON_YEARS:
        report.add_warning(f"Horizon of {years:g} years exceeds the {MAX_HORIZON_YEARS:.0f}-year planning cap.", field="years")
    if current_savings == 0 and monthly_deposit == 0:
        report.add_warning("Nothing is being saved: both current savings and monthly deposit are 0.")

    return report.finalize()


def validate_plan(plan: SavingsPlan) -> ValidationReport:
    return validate_plan_values(
        plan.current_savings,
        plan.monthly_deposit,
        plan.annual_return_rate,
        plan.annual_inflation_rate,
        plan.years,
    )
