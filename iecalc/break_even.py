"""
Break-even (cost-volume-profit) analysis.

    Revenue    = P × Q
    Total cost = FC + VC × Q
    Q*         = FC / (P − VC)

A non-positive contribution margin (P − VC ≤ 0) is a legitimate business
outcome, not an error: the result is flagged non-viable with an explanation
and infinite break-even quantity.

Reference: Niebel & Freivalds, "Methods, Standards, and Work Design", Ch. 2.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreakEvenInputs:
    fixed_costs: float
    variable_cost_per_unit: float
    selling_price_per_unit: float
    target_profit: Optional[float] = None


@dataclass(frozen=True)
class BreakEvenResult:
    break_even_quantity: float
    break_even_revenue: float
    contribution_margin: float
    contribution_margin_ratio: float   # percent of price
    is_viable: bool
    analysis: str
    target_profit_quantity: Optional[float] = None
    target_profit_revenue: Optional[float] = None


@dataclass(frozen=True)
class CostScenario:
    name: str
    fixed_costs: float
    variable_cost_per_unit: float


@dataclass(frozen=True)
class ScenarioComparison:
    crossover_quantity: float
    prefer_first_below: bool
    analysis: str


def calculate_break_even(inputs: BreakEvenInputs) -> BreakEvenResult:
    """
    Break-even quantity and revenue, plus the volume needed for a target profit.

    The target-profit fields are only filled for a viable model with a
    positive target profit.
    """
    price = inputs.selling_price_per_unit
    margin = price - inputs.variable_cost_per_unit
    margin_ratio = (margin / price) * 100 if price > 0 else 0.0

    if margin <= 0:
        if margin == 0:
            analysis = "Selling price equals variable cost. No profit possible regardless of volume."
        else:
            analysis = "Variable cost exceeds selling price. Every unit sold increases losses."
        logger.warning("Break-even not viable: contribution margin %.2f", margin)
        return BreakEvenResult(
            break_even_quantity=math.inf,
            break_even_revenue=math.inf,
            contribution_margin=margin,
            contribution_margin_ratio=margin_ratio,
            is_viable=False,
            analysis=analysis,
        )

    quantity = inputs.fixed_costs / margin
    revenue = quantity * price

    target_quantity = None
    target_revenue = None
    if inputs.target_profit is not None and inputs.target_profit > 0:
        target_quantity = (inputs.fixed_costs + inputs.target_profit) / margin
        target_revenue = target_quantity * price

    analysis = (
        f"Break-even at {math.ceil(quantity):,} units. "
        f"Each unit contributes ${margin:.2f} toward fixed costs and profit. "
    )
    if margin_ratio >= 50:
        analysis += "Strong contribution margin ratio indicates good pricing power."
    elif margin_ratio >= 25:
        analysis += "Moderate contribution margin. Consider ways to reduce variable costs."
    else:
        analysis += "Low contribution margin requires high volume to be profitable."

    return BreakEvenResult(
        break_even_quantity=quantity,
        break_even_revenue=revenue,
        contribution_margin=margin,
        contribution_margin_ratio=margin_ratio,
        is_viable=True,
        analysis=analysis,
        target_profit_quantity=target_quantity,
        target_profit_revenue=target_revenue,
    )


def profit_at_quantity(inputs: BreakEvenInputs, quantity: float) -> float:
    revenue = quantity * inputs.selling_price_per_unit
    total_cost = inputs.fixed_costs + quantity * inputs.variable_cost_per_unit
    return revenue - total_cost


def margin_of_safety(current_quantity: float, break_even_quantity: float) -> float:
    """Percent by which current sales exceed break-even (0 for no sales)."""
    if current_quantity <= 0:
        return 0.0
    return ((current_quantity - break_even_quantity) / current_quantity) * 100


def compare_scenarios(first: CostScenario, second: CostScenario) -> ScenarioComparison:
    """
    Make-versus-buy style comparison of two cost structures.

    The crossover is where FC1 + VC1·Q = FC2 + VC2·Q. Parallel cost lines
    never cross; a negative crossover means one option wins at every
    positive volume.
    """
    fixed_diff = second.fixed_costs - first.fixed_costs
    var_diff = first.variable_cost_per_unit - second.variable_cost_per_unit

    if var_diff == 0:
        prefer_first = first.fixed_costs < second.fixed_costs
        winner = first.name if prefer_first else second.name
        return ScenarioComparison(
            crossover_quantity=math.inf,
            prefer_first_below=prefer_first,
            analysis=f"{winner} is always preferred (same variable costs, lower fixed costs).",
        )

    crossover = fixed_diff / var_diff

    if crossover < 0:
        prefer_first = (
            first.fixed_costs + first.variable_cost_per_unit
            < second.fixed_costs + second.variable_cost_per_unit
        )
        winner = first.name if prefer_first else second.name
        return ScenarioComparison(
            crossover_quantity=0.0,
            prefer_first_below=prefer_first,
            analysis=f"{winner} is always preferred at positive quantities.",
        )

    prefer_first_below = first.variable_cost_per_unit > second.variable_cost_per_unit
    below, above = (first, second) if prefer_first_below else (second, first)
    return ScenarioComparison(
        crossover_quantity=crossover,
        prefer_first_below=prefer_first_below,
        analysis=(
            f"Below {math.ceil(crossover):,} units, {below.name} is cheaper. "
            f"Above that, {above.name} is preferred."
        ),
    )
