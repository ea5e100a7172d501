import unittest

from liftpolicy import FirstInFirstOutPolicy, HeuristicPolicy, MoveInstruction, ScanPolicy
from liftsim.building import Building
from liftsim.config import SimulationConfig
from liftsim.errors import OutOfRangeMoveError
from liftsim.metrics import Statistics
from liftsim.simulation import SimulationEngine


class DoorsOnlyPolicy:
    """Never leaves the floor it starts on."""

    name = "doors_only"

    def decide(self, snapshot):
        return MoveInstruction.OPEN_DOORS


class SinkingPolicy:
    name = "sinking"

    def decide(self, snapshot):
        return MoveInstruction.MOVE_DOWN


def all_policies():
    return [FirstInFirstOutPolicy(), ScanPolicy(), HeuristicPolicy()]


class SimulationEngineTest(unittest.TestCase):
    def test_full_density_single_tick_completes_every_request(self):
        engine = SimulationEngine(Building(0, 3))
        for policy in all_policies():
            with self.subTest(policy=policy.name):
                result = engine.run(policy, seed=1, generation_window_ticks=1, density=1.0)
                self.assertEqual(result.generated_count, 4)
                self.assertEqual(result.statistics.completed_count, 4)
                self.assertFalse(result.drain_cap_exceeded)
                self.assertTrue(result.completed)
                self.assertEqual(result.pending_remaining, 0)
                self.assertEqual(result.riders_remaining, 0)
                self.assertEqual(result.ticks_elapsed, 1 + result.drain_ticks)

    def test_zero_density_terminates_after_window(self):
        engine = SimulationEngine(Building(0, 1))
        for policy in all_policies():
            with self.subTest(policy=policy.name):
                result = engine.run(policy, seed=9, generation_window_ticks=15, density=0.0)
                self.assertEqual(result.generated_count, 0)
                self.assertEqual(result.statistics.completed_count, 0)
                self.assertIsNone(result.statistics.average_total_time)
                self.assertEqual(result.drain_ticks, 0)
                self.assertEqual(result.ticks_elapsed, 15)
                self.assertFalse(result.drain_cap_exceeded)

    def test_runs_are_reproducible(self):
        config = SimulationConfig()
        for policy_cls in (FirstInFirstOutPolicy, ScanPolicy, HeuristicPolicy):
            with self.subTest(policy=policy_cls.name):
                first = SimulationEngine.from_config(config).run(
                    policy_cls(), config.seed, config.generation_window_ticks, config.density
                )
                second = SimulationEngine.from_config(config).run(
                    policy_cls(), config.seed, config.generation_window_ticks, config.density
                )
                self.assertEqual(first, second)
                self.assertEqual(first.to_dict(), second.to_dict())

    def test_forced_two_floor_run_has_known_statistics(self):
        # At full density a two-floor building has exactly one possible request
        # per floor, so the outcome is fixed whatever the seed.
        engine = SimulationEngine(Building(0, 1))
        for seed in (42017, 1):
            with self.subTest(seed=seed):
                result = engine.run(FirstInFirstOutPolicy(), seed, generation_window_ticks=2, density=1.0)
                self.assertEqual(
                    result.statistics,
                    Statistics(completed_count=4, total_wait_ticks=6, total_travel_ticks=8),
                )
                self.assertEqual(result.generated_count, 4)
                self.assertEqual(result.drain_ticks, 5)
                self.assertEqual(result.ticks_elapsed, 7)
                self.assertEqual(result.final_floor, 1)
                self.assertAlmostEqual(result.statistics.average_total_time, 3.5)

    def test_invariants_hold_every_tick(self):
        config = SimulationConfig(max_floor=7, generation_window_ticks=40, density=0.25)
        for policy in all_policies():
            with self.subTest(policy=policy.name):
                engine = SimulationEngine.from_config(config)
                floors = []
                records = []
                engine.on_event("tick", lambda event: floors.append(event.floor))
                engine.on_event("completion", lambda payload: records.append(payload["record"]))

                result = engine.run(policy, 12345, config.generation_window_ticks, config.density)

                self.assertEqual(len(floors), result.ticks_elapsed)
                self.assertTrue(all(0 <= floor <= 7 for floor in floors))
                self.assertEqual(len(records), result.statistics.completed_count)
                self.assertLessEqual(result.statistics.completed_count, result.generated_count)
                self.assertTrue(all(r.wait_ticks >= 0 and r.travel_ticks >= 0 for r in records))
                self.assertFalse(result.drain_cap_exceeded)
                self.assertEqual(result.statistics.completed_count, result.generated_count)

    def test_tick_events_report_phase(self):
        engine = SimulationEngine(Building(0, 3))
        phases = []
        engine.on_event("tick", lambda event: phases.append(event.phase))
        result = engine.run(FirstInFirstOutPolicy(), seed=1, generation_window_ticks=1, density=1.0)
        self.assertEqual(phases[0], "generation")
        self.assertEqual(phases.count("drain"), result.drain_ticks)

    def test_drain_cap_flags_partial_run(self):
        engine = SimulationEngine(Building(0, 3), drain_cap_ticks=50)
        result = engine.run(DoorsOnlyPolicy(), seed=1, generation_window_ticks=1, density=1.0)
        self.assertTrue(result.drain_cap_exceeded)
        self.assertFalse(result.completed)
        self.assertEqual(result.drain_ticks, 50)
        self.assertEqual(result.ticks_elapsed, 51)
        self.assertEqual(result.pending_remaining, 3)
        self.assertEqual(result.riders_remaining, 1)
        self.assertEqual(result.statistics.completed_count, 0)

    def test_out_of_range_move_fails_the_run(self):
        engine = SimulationEngine(Building(0, 3))
        with self.assertRaises(OutOfRangeMoveError) as ctx:
            engine.run(SinkingPolicy(), seed=77, generation_window_ticks=5, density=0.5)
        error = ctx.exception
        self.assertEqual(error.policy, "sinking")
        self.assertEqual(error.seed, 77)
        self.assertEqual(error.tick, 0)
        self.assertIn("sinking", str(error))

    def test_empty_window(self):
        engine = SimulationEngine(Building(0, 5))
        result = engine.run(HeuristicPolicy(), seed=1, generation_window_ticks=0, density=1.0)
        self.assertEqual(result.ticks_elapsed, 0)
        self.assertEqual(result.final_floor, 0)

    def test_rejects_bad_arguments(self):
        with self.assertRaises(ValueError):
            SimulationEngine(Building(0, 3), drain_cap_ticks=0)
        engine = SimulationEngine(Building(0, 3))
        with self.assertRaises(ValueError):
            engine.run(FirstInFirstOutPolicy(), seed=1, generation_window_ticks=-1, density=0.5)
        with self.assertRaises(ValueError):
            engine.run(FirstInFirstOutPolicy(), seed=1, generation_window_ticks=3, density=2.0)

    def test_run_seeds_matches_individual_runs(self):
        engine = SimulationEngine(Building(0, 5))
        policy = ScanPolicy()
        batch = engine.run_seeds(policy, [1, 2, 3], generation_window_ticks=10, density=0.3)
        self.assertEqual([r.seed for r in batch], [1, 2, 3])
        self.assertEqual(batch[1], engine.run(policy, 2, 10, 0.3))


if __name__ == "__main__":
    unittest.main()
