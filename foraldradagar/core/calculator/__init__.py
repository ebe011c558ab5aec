"""
Calculator module - beräkningsmotorn för föräldrapenning.

Rena funktioner utan sidoeffekter: (familj + regeltabell) -> saldon,
belopp, deadlines och planprojektioner.
"""

from .compensation import (
    calculate_income,
    daily_rate_for,
    daily_sgi_payment,
    daily_vab_payment,
    leave_income_percentage,
    max_daily_sgi,
    max_daily_vab,
    monthly_on_leave,
    monthly_with_top_up,
)
from .days import calculate_days, excess_over_reserved, reserved_remaining, reserved_used
from .deadlines import (
    all_days_expiry_date,
    all_deadlines,
    days_until,
    double_days_expiry_date,
    next_deadline,
    save_limit_date,
)
from .scenario import clear_projection_cache, project_months, summarize

__all__ = [
    # compensation
    "daily_sgi_payment",
    "daily_vab_payment",
    "monthly_on_leave",
    "monthly_with_top_up",
    "leave_income_percentage",
    "max_daily_sgi",
    "max_daily_vab",
    "daily_rate_for",
    "calculate_income",
    # days
    "calculate_days",
    "reserved_used",
    "reserved_remaining",
    "excess_over_reserved",
    # deadlines
    "save_limit_date",
    "all_days_expiry_date",
    "double_days_expiry_date",
    "days_until",
    "next_deadline",
    "all_deadlines",
    # scenario
    "project_months",
    "summarize",
    "clear_projection_cache",
]
