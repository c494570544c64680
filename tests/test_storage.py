import tempfile
import unittest
from pathlib import Path

from tripwise.errors import DatabaseFormatError
from tripwise.models import Waypoint
from tripwise.storage import format_waypoint_line, load_waypoints, parse_waypoint_line, save_waypoints


class TestParseLine(unittest.TestCase):
    def test_full_record(self):
        w = parse_waypoint_line('"Liberty Bell"_39.9496_-75.1503_/7200.0/15.0/#540.0#3120.0')
        self.assertEqual(w.name, "Liberty Bell")
        self.assertEqual(w.coordinate, (39.9496, -75.1503))
        self.assertEqual(w.visit_duration, 7200.0)
        self.assertEqual(w.visit_cost, 15.0)
        self.assertEqual(w.edge_duration_to_next, 540.0)
        self.assertEqual(w.edge_distance_to_next, 3120.0)

    def test_record_without_legs(self):
        w = parse_waypoint_line('"Grand Canyon"_36.1_-112.1_/86400/200/')
        self.assertEqual(w.edge_distance_to_next, 0.0)
        self.assertEqual(w.edge_duration_to_next, 0.0)

    def test_missing_coordinate_is_geocoded(self):
        w = parse_waypoint_line('"Chicago"/86400/100/', geocoder=lambda name: (41.88, -87.62))
        self.assertEqual(w.coordinate, (41.88, -87.62))

    def test_missing_coordinate_without_geocoder(self):
        with self.assertRaises(DatabaseFormatError):
            parse_waypoint_line('"Chicago"/86400/100/')
        with self.assertRaises(DatabaseFormatError):
            parse_waypoint_line('"Chicago"/86400/100/', geocoder=lambda name: None)

    def test_malformed_records(self):
        bad = [
            'Chicago_41.88_-87.62_/1/1/',
            '"Chicago"_41.88_-87.62_',
            '"Chicago"_abc_-87.62_/1/1/',
            '"Chicago"_141.88_-87.62_/1/1/',
            '"Chicago"_41.88_-87.62_/-1/1/',
        ]
        for line in bad:
            with self.assertRaises(DatabaseFormatError, msg=line):
                parse_waypoint_line(line, line_no=7)

    def test_format_round_trips(self):
        w = Waypoint("Venice Beach", (33.985, -118.4695), 3600.0, 0.0, 12.5, 30.0)
        parsed = parse_waypoint_line(format_waypoint_line(w))
        self.assertEqual(parsed.name, w.name)
        self.assertEqual(parsed.coordinate, w.coordinate)
        self.assertEqual(parsed.edge_duration_to_next, 30.0)


    def test_quotes_and_backslashes_in_names(self):
        w = Waypoint('The "Rocky" Steps \\ East', (39.96, -75.18), 3600.0)
        line = format_waypoint_line(w)
        self.assertTrue(line.startswith('"The \\"Rocky\\" Steps \\\\ East"_'))
        self.assertEqual(parse_waypoint_line(line).name, 'The "Rocky" Steps \\ East')


class TestDatabaseFile(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "db.txt"

    def tearDown(self):
        self.tmp.cleanup()

    def test_save_then_load_keeps_order(self):
        route = [
            Waypoint("B", (1.0, 1.0), 10.0, 1.0, 100.0, 5.0),
            Waypoint("A", (0.0, 0.0), 20.0, 2.0),
        ]
        save_waypoints(route, self.path)
        self.assertTrue(self.path.read_text().startswith("2 "))
        loaded = load_waypoints(self.path)
        self.assertEqual([w.name for w in loaded], ["B", "A"])
        self.assertEqual(loaded.get(0).edge_distance_to_next, 100.0)
        self.assertEqual(loaded.get(1).visit_cost, 2.0)

    def test_quoted_name_survives_save_and_load(self):
        save_waypoints([Waypoint('The "Rocky" Steps', (39.96, -75.18), 3600.0)], self.path)
        loaded = load_waypoints(self.path)
        self.assertEqual(loaded.get(0).name, 'The "Rocky" Steps')
        self.assertEqual(loaded.get(0).coordinate, (39.96, -75.18))

    def test_count_mismatch_is_logged(self):
        self.path.write_text('5   header\n"A"_0_0_/1/1/\n')
        with self.assertLogs("tripwise.storage", level="WARNING"):
            loaded = load_waypoints(self.path)
        self.assertEqual(loaded.size(), 1)

    def test_bad_files(self):
        self.path.write_text("")
        with self.assertRaises(DatabaseFormatError):
            load_waypoints(self.path)
        self.path.write_text('header\n"A"_0_0_/1/1/\n')
        with self.assertRaises(DatabaseFormatError):
            load_waypoints(self.path)

    def test_empty_database(self):
        self.path.write_text("0   header\n")
        self.assertTrue(load_waypoints(self.path).is_empty())


if __name__ == "__main__":
    unittest.main()
