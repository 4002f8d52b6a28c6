"""Financial calculators: tax, payoff, frequency, mortgage, roadmap, withdrawal."""

from .frequency import (
    DebtFrequencyBreakdown,
    FrequencyMode,
    FrequencyResult,
    PaymentFrequency,
    analyze_per_debt_frequency,
    compare_payment_frequencies,
)
from .interest import DAYS_PER_MONTH, calculate_monthly_interest, calculate_period_interest
from .mortgage import (
    DebtPayoffImpact,
    HouseAffordabilityResult,
    HouseInputs,
    calculate_affordability,
    calculate_debt_payoff_impact,
    calculate_monthly_payment,
)
from .payoff import (
    MAX_PAYOFF_MONTHS,
    PayDelay,
    PayoffResult,
    PayoffScheduleEntry,
    PayoffStrategy,
    StrategyComparison,
    compare_strategies,
    simulate_payoff,
)
from .roadmap import (
    PhaseInfo,
    PhaseStatus,
    ProjectionPoint,
    RoadmapAssumptions,
    RoadmapResult,
    calculate_roadmap,
    get_recommended_allocation,
)
from .tax import (
    FilingComparisonRow,
    TaxBreakdownResult,
    calculate_income_tax,
    calculate_tax_breakdown,
    compare_filing_statuses,
)
from .tax_tables import FEDERAL_BRACKETS, STANDARD_DEDUCTIONS, TaxBracket
from .withdrawal import WithdrawalAnalysisResult, WithdrawalInputs, WithdrawalScenario, analyze_withdrawal

__all__ = [
    "DAYS_PER_MONTH",
    "FEDERAL_BRACKETS",
    "MAX_PAYOFF_MONTHS",
    "STANDARD_DEDUCTIONS",
    "DebtFrequencyBreakdown",
    "DebtPayoffImpact",
    "FilingComparisonRow",
    "FrequencyMode",
    "FrequencyResult",
    "HouseAffordabilityResult",
    "HouseInputs",
    "PayDelay",
    "PaymentFrequency",
    "PayoffResult",
    "PayoffScheduleEntry",
    "PayoffStrategy",
    "PhaseInfo",
    "PhaseStatus",
    "ProjectionPoint",
    "RoadmapAssumptions",
    "RoadmapResult",
    "StrategyComparison",
    "TaxBracket",
    "TaxBreakdownResult",
    "WithdrawalAnalysisResult",
    "WithdrawalInputs",
    "WithdrawalScenario",
    "analyze_per_debt_frequency",
    "analyze_withdrawal",
    "calculate_affordability",
    "calculate_debt_payoff_impact",
    "calculate_income_tax",
    "calculate_monthly_interest",
    "calculate_monthly_payment",
    "calculate_period_interest",
    "calculate_roadmap",
    "calculate_tax_breakdown",
    "compare_filing_statuses",
    "compare_payment_frequencies",
    "compare_strategies",
    "get_recommended_allocation",
    "simulate_payoff",
]
