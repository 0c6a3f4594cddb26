"""Analytics schemas"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyticsSummary(_CamelModel):
    total_quotes: int
    this_month_quotes: int
    this_week_quotes: int
    total_quoted_value: Decimal
    accepted_value: Decimal
    conversion_rate: Decimal  # percent, one decimal place
    avg_quote_value: Decimal


class MonthlyTrendPoint(_CamelModel):
    month: str  # "Oct 26"
    total_quotes: int
    accepted_quotes: int
    revenue: Decimal


class AnalyticsResponse(_CamelModel):
    summary: AnalyticsSummary
    # Keyed by quote status, so the keys are not camelCased
    status_breakdown: dict[str, int]
    monthly_trend: list[MonthlyTrendPoint]
    generated_at: datetime
