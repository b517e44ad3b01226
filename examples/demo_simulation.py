from datetime import datetime, timedelta, timezone

from fgi_rebalancer.report import format_summary
from fgi_rebalancer.simulator import Sample, find_optimal_threshold, simulate


start = datetime(2024, 6, 1, tzinfo=timezone.utc)
prices = [150.0, 142.0, 131.0, 138.0, 155.0, 171.0, 166.0, 149.0, 158.0, 175.0]
sentiments = [55, 38, 22, 30, 61, 78, 72, 41, 52, 69]

samples = [
    Sample(timestamp=start + timedelta(hours=4 * index), price=price, sentiment=sentiment)
    for index, (price, sentiment) in enumerate(zip(prices, sentiments))
]

threshold = find_optimal_threshold(samples)
print("Optimal threshold:", threshold)

result = simulate(samples, threshold)
print("\n".join(format_summary(result, asset="SOL")))

fixed = simulate(samples, 50)
print("Threshold 50 return:", round(fixed.strategy_return, 2))
