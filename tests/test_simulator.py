from datetime import datetime, timedelta, timezone

import pytest

from fgi_rebalancer.simulator import (
    InvalidInputError,
    NonPositivePriceError,
    Sample,
    SimulationConfig,
    simulate,
)


START = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _samples(prices, sentiments):
    return [
        Sample(timestamp=START + timedelta(hours=4 * index), price=price, sentiment=sentiment)
        for index, (price, sentiment) in enumerate(zip(prices, sentiments))
    ]


def _choppy_samples():
    prices = [100.0, 96.0, 104.0, 111.0, 98.0, 87.0, 93.0, 120.0, 118.0, 125.0, 101.0, 109.0]
    sentiments = [50, 35, 62, 71, 44, 18, 27, 83, 76, 66, 39, 58]
    return _samples(prices, sentiments)


def test_buy_when_sentiment_crosses_threshold():
    result = simulate(_samples([100.0, 200.0], [10, 90]), threshold=50)

    assert result.num_trades == 1
    assert result.winning_trades == 0
    assert result.win_rate == 0.0
    assert result.ending_stable_balance == 0.0
    assert result.ending_volatile_balance == pytest.approx(7.497725)
    assert result.total_value == pytest.approx(1499.545)
    assert result.strategy_return == pytest.approx(49.9545)
    assert result.baseline_return == pytest.approx(100.0)
    assert result.outperformance == pytest.approx(49.9545 - 100.0)


def test_sell_stops_at_reserve_floor():
    result = simulate(_samples([100.0, 110.0, 120.0], [10, 10, 10]), threshold=50)

    assert result.num_trades == 1
    assert result.winning_trades == 1
    assert result.win_rate == 100.0
    assert result.ending_volatile_balance == 0.01
    assert result.ending_stable_balance == pytest.approx(1048.403242475)
    assert result.total_value == pytest.approx(1049.603242475)
    assert result.strategy_return == pytest.approx(4.9603242475)
    assert result.baseline_return == pytest.approx(20.0)


def test_cheaper_buy_counts_as_win():
    result = simulate(_samples([100.0, 90.0], [10, 90]), threshold=50)

    assert result.num_trades == 1
    assert result.winning_trades == 1


def test_repeated_signal_on_same_side_trades_once():
    result = simulate(_samples([100.0, 105.0, 110.0, 95.0], [10, 90, 90, 90]), threshold=50)

    assert result.num_trades == 1
    assert result.ending_stable_balance == 0.0


def test_single_sample_is_zero_length_run():
    result = simulate(_samples([3.0], [75]), threshold=50)

    assert result.num_trades == 0
    assert result.win_rate == 0.0
    assert result.start_time == result.end_time
    assert result.start_price == result.end_price == 3.0
    assert result.strategy_return == pytest.approx(0.0)
    assert result.baseline_return == pytest.approx(0.0)


@pytest.mark.parametrize("samples", [[], None])
def test_empty_input_rejected(samples):
    with pytest.raises(InvalidInputError):
        simulate(samples)


@pytest.mark.parametrize("bad_price", [0.0, -5.0, float("nan"), float("inf")])
def test_non_positive_price_rejected(bad_price):
    samples = _samples([100.0, bad_price, 110.0], [10, 90, 10])

    with pytest.raises(NonPositivePriceError):
        simulate(samples)
    with pytest.raises(ValueError):
        simulate(samples)


def test_input_order_does_not_matter():
    samples = _choppy_samples()
    shuffled = samples[5:] + samples[:5][::-1]
    snapshot = list(shuffled)

    assert simulate(shuffled, 55) == simulate(samples, 55)
    assert shuffled == snapshot


def test_equal_timestamps_keep_input_order():
    first = Sample(timestamp=START, price=100.0, sentiment=10)
    low = Sample(timestamp=START + timedelta(hours=4), price=120.0, sentiment=90)
    high = Sample(timestamp=START + timedelta(hours=4), price=80.0, sentiment=90)

    assert simulate([first, low, high], 50).end_price == 80.0
    assert simulate([first, high, low], 50).end_price == 120.0
    assert simulate([high, first, low], 50) == simulate([first, high, low], 50)


def test_repeated_runs_are_identical():
    samples = _choppy_samples()

    first = simulate(samples, 47)
    second = simulate(samples, 47)

    assert first == second
    assert first.threshold == 47


def test_balances_and_trade_counts_hold_for_all_thresholds():
    samples = _choppy_samples()

    for threshold in range(0, 101, 5):
        result = simulate(samples, threshold)
        assert result.ending_volatile_balance >= 0
        assert result.ending_stable_balance >= 0
        assert result.num_trades >= result.winning_trades >= 0
        if result.num_trades == 0:
            assert result.win_rate == 0
        else:
            assert result.win_rate == pytest.approx(result.winning_trades / result.num_trades * 100)


def test_rebalancing_without_fees_preserves_value():
    config = SimulationConfig(initial_capital=1000.0, reserve_amount=0.0, platform_fee_rate=0.0, flat_fee=0.0)
    samples = _samples([100.0] * 6, [80, 20, 80, 20, 80, 20])

    result = simulate(samples, 50, config)

    assert result.num_trades == 5
    assert result.total_value == pytest.approx(1000.0)


def test_fees_are_the_only_drag_at_flat_prices():
    samples = _samples([100.0] * 6, [80, 20, 80, 20, 80, 20])

    result = simulate(samples, 50)

    assert result.num_trades == 5
    assert result.total_value < 1000.0
    assert result.total_value > 990.0
    assert result.baseline_return == pytest.approx(0.0)


def test_config_overrides_starting_capital():
    config = SimulationConfig(initial_capital=5000.0)

    result = simulate(_samples([100.0, 100.0], [50, 50]), 50, config)

    assert result.ending_stable_balance == 0.0
    assert result.total_value == pytest.approx(5000.0 - 2500.0 * 0.0009 - 0.000025 * 100.0)
