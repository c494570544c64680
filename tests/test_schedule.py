import random
import unittest

from tripwise.errors import EmptyRoute, InvalidStartIndex
from tripwise.models import Waypoint
from tripwise.schedule import (
    SelectedStop,
    day_to_sec,
    format_itinerary_text,
    sec_to_day,
    summarise_walk,
    walk_itinerary,
)
from tripwise.sequence import OrderedSequence


def make_route(n, cost=10.0, duration=1.0, edge_duration=1.0):
    return OrderedSequence(
        Waypoint(f"P{i}", (0.0, float(i)), visit_duration=duration, visit_cost=cost,
                 edge_distance_to_next=1000.0, edge_duration_to_next=edge_duration)
        for i in range(n)
    )


def names(walk):
    return [stop.name for stop in walk]


class TestWalkItinerary(unittest.TestCase):
    def test_overshooting_stop_is_dropped(self):
        walk = walk_itinerary(make_route(3), 0, 25, 100)
        self.assertEqual(names(walk), ["P0", "P1"])

    def test_zero_budget_gives_empty_walk(self):
        self.assertEqual(walk_itinerary(make_route(3), 1, 0, 100), [])

    def test_negative_ceiling_gives_empty_walk(self):
        self.assertEqual(walk_itinerary(make_route(3), 0, 100, -1), [])

    def test_ceiling_is_inclusive(self):
        # the loop continues at exactly the ceiling, so the next stop is the one dropped
        walk = walk_itinerary(make_route(3), 0, 10, 100)
        self.assertEqual(names(walk), ["P0"])

    def test_time_ceiling(self):
        # each stop takes 2 time units
        walk = walk_itinerary(make_route(5), 0, 1000, 5)
        self.assertEqual(names(walk), ["P0", "P1"])

    def test_wraps_around(self):
        walk = walk_itinerary(make_route(3), 2, 25, 100)
        self.assertEqual(names(walk), ["P2", "P0"])

    def test_stops_after_one_full_cycle(self):
        walk = walk_itinerary(make_route(4), 1, 1e9, 1e9)
        self.assertEqual(names(walk), ["P1", "P2", "P3", "P0"])

    def test_all_zero_costs_terminate(self):
        route = make_route(3, cost=0.0, duration=0.0, edge_duration=0.0)
        walk = walk_itinerary(route, 0, 10, 10)
        self.assertEqual(len(walk), 3)

    def test_length_bounds(self):
        rng = random.Random(3)
        for _ in range(50):
            n = rng.randint(1, 8)
            route = OrderedSequence(
                Waypoint(f"W{i}", (0.0, 0.0), visit_duration=rng.uniform(0, 5), visit_cost=rng.uniform(0, 5))
                for i in range(n)
            )
            walk = walk_itinerary(route, rng.randrange(n), rng.uniform(0, 30), rng.uniform(0, 30))
            self.assertLessEqual(len(walk), n)

    def test_invalid_start_index(self):
        route = make_route(3)
        for index in (-1, 3, 10):
            with self.assertRaises(InvalidStartIndex):
                walk_itinerary(route, index, 100, 100)

    def test_empty_route(self):
        with self.assertRaises(EmptyRoute):
            walk_itinerary(OrderedSequence(), 0, 100, 100)

    def test_snapshot_carries_coordinate(self):
        walk = walk_itinerary(make_route(3), 1, 15, 100)
        self.assertEqual(walk[0].coordinate, (0.0, 1.0))

    def test_walk_is_a_snapshot(self):
        route = make_route(3)
        walk = walk_itinerary(route, 0, 25, 100)
        route.get(0).visit_cost = 99.0
        route.remove_at(1)
        self.assertEqual(walk[0].visit_cost, 10.0)
        self.assertEqual(names(walk), ["P0", "P1"])


class TestSummary(unittest.TestCase):
    def test_summarise_walk(self):
        walk = [
            SelectedStop("A", day_to_sec(1), 100.0, 5000.0, 3600.0),
            SelectedStop("B", day_to_sec(0.5), 50.0, 0.0, 0.0),
        ]
        summary = summarise_walk(walk)
        self.assertEqual(summary.total_cost, 150.0)
        self.assertEqual(summary.total_distance, 5000.0)
        self.assertAlmostEqual(sec_to_day(summary.total_duration), 1.5 + 1 / 24)
        text = format_itinerary_text(walk)
        self.assertIn("1. A", text)
        self.assertIn("Total budget: 150.00 USD", text)
        self.assertIn("5.0 km", text)

    def test_empty_walk_text(self):
        self.assertIn("No stop", format_itinerary_text([]))
        self.assertEqual(summarise_walk([]).total_cost, 0)


if __name__ == "__main__":
    unittest.main()
