"""Taker fee on instant fills and win fee on positive payout profit."""


def calc_taker_fee(total_cost: float, taker_fee_rate: float) -> float:
    """Taker fee on spent notional. Limit (maker) orders pass rate 0."""
    if total_cost <= 0 or taker_fee_rate <= 0:
        return 0.0
    return total_cost * taker_fee_rate


def calc_potential_profit(
    filled_qty: float, total_cost: float, fee: float, win_fee_rate: float
) -> float:
    """Profit if the outcome resolves true (each share pays $1.00).

    Win fee applies to positive pre-tax profit only; losses are not charged.
    """
    pre_tax = filled_qty * 1.0 - total_cost - fee
    if pre_tax > 0:
        return pre_tax - win_fee_rate * pre_tax
    return pre_tax


def calc_roi_percent(potential_profit: float, total_cost: float) -> float:
    if total_cost == 0:
        return 0.0
    return 100 * potential_profit / total_cost
