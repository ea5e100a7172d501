import unittest

from liftsim.metrics import Statistics, StatisticsAggregator, combine, combined_average
from liftsim.passenger import CompletionRecord


class StatisticsAggregatorTest(unittest.TestCase):
    def test_basic_statistics(self):
        aggregator = StatisticsAggregator()
        aggregator.record(CompletionRecord(wait_ticks=2, travel_ticks=3))
        aggregator.record(CompletionRecord(wait_ticks=4, travel_ticks=1))
        stats = aggregator.statistics()
        self.assertEqual(stats.completed_count, 2)
        self.assertEqual(stats.total_wait_ticks, 6)
        self.assertEqual(stats.total_travel_ticks, 4)
        self.assertAlmostEqual(stats.average_total_time, 5.0)
        self.assertAlmostEqual(stats.average_wait, 3.0)
        self.assertAlmostEqual(stats.average_travel, 2.0)

    def test_empty_run_has_no_averages(self):
        stats = StatisticsAggregator().statistics()
        self.assertEqual(stats, Statistics())
        self.assertIsNone(stats.average_total_time)
        self.assertIsNone(stats.average_wait)
        self.assertIsNone(stats.average_travel)
        self.assertIsNone(stats.to_dict()["average_total_time"])

    def test_percentiles(self):
        aggregator = StatisticsAggregator()
        aggregator.record_all(
            CompletionRecord(wait_ticks=w, travel_ticks=t) for w, t in [(2, 1), (4, 1), (6, 4)]
        )
        self.assertAlmostEqual(aggregator.percentile("wait", 50), 4.0)
        self.assertAlmostEqual(aggregator.percentile("wait", 75), 5.0)
        self.assertAlmostEqual(aggregator.percentile("travel", 100), 4.0)
        self.assertAlmostEqual(aggregator.percentile("total", 0), 3.0)
        self.assertEqual(StatisticsAggregator().percentile("wait", 95), 0.0)
        with self.assertRaises(ValueError):
            aggregator.percentile("energy", 50)


class CombinationTest(unittest.TestCase):
    def test_combined_average_weights_by_completions(self):
        stats = [
            Statistics(completed_count=2, total_wait_ticks=6, total_travel_ticks=4),
            Statistics(completed_count=1, total_wait_ticks=10, total_travel_ticks=0),
            Statistics(),
        ]
        self.assertAlmostEqual(combined_average(stats), 20.0 / 3.0)

    def test_combined_average_without_completions(self):
        self.assertIsNone(combined_average([Statistics(), Statistics()]))
        self.assertIsNone(combined_average([]))

    def test_combine_sums_totals(self):
        total = combine([
            Statistics(completed_count=2, total_wait_ticks=6, total_travel_ticks=4),
            Statistics(completed_count=1, total_wait_ticks=10, total_travel_ticks=0),
        ])
        self.assertEqual(total, Statistics(completed_count=3, total_wait_ticks=16, total_travel_ticks=4))
        self.assertAlmostEqual(total.average_total_time, 20.0 / 3.0)


if __name__ == "__main__":
    unittest.main()
