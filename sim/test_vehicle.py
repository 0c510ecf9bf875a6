#!/usr/bin/env python3
"""
Tests for the per-vehicle motion step and lane-change bookkeeping.
"""

from __future__ import annotations

import unittest

from sim.geometry import TWO_PI
from sim.traffic_policy import TrafficPolicy, lane_offset
from sim.vehicle import Vehicle

_DT = 1.0 / 60.0


class VehicleDefaultsTests(unittest.TestCase):
    def test_post_init_fills_defaults(self) -> None:
        car = Vehicle(id="CAR_A", angle=TWO_PI + 0.5, base_speed=0.7, lane=1, lateral_offset=0.0)
        self.assertAlmostEqual(car.angle, 0.5)
        self.assertEqual(car.speed, 0.7)
        self.assertEqual(car.target_lane, 1)
        self.assertEqual(car.target_offset, 0.0)
        self.assertFalse(car.is_changing_lane)

    def test_request_overwrites_pending_change(self) -> None:
        car = Vehicle(id="CAR_A", angle=0.0, base_speed=0.7, lane=1, lateral_offset=0.0)
        car.request_lane_change(0, -30.0, now=1.0)
        car.request_lane_change(2, 30.0, now=4.0)
        self.assertEqual(car.target_lane, 2)
        self.assertEqual(car.target_offset, 30.0)
        self.assertEqual(car.last_lane_change_time, 4.0)
        self.assertTrue(car.is_changing_lane)

    def test_cooldown_check(self) -> None:
        car = Vehicle(id="CAR_A", angle=0.0, base_speed=0.7, lane=0, lateral_offset=0.0)
        car.last_lane_change_time = 1.0
        self.assertFalse(car.can_change_lane(3.0, 2.0))
        self.assertTrue(car.can_change_lane(3.01, 2.0))


class VehicleMotionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.policy = TrafficPolicy()

    def test_free_vehicle_moves_full_distance(self) -> None:
        car = Vehicle(id="CAR_A", angle=1.0, base_speed=0.9, lane=0, lateral_offset=0.0)
        car.update(0.5, None, 1.5, self.policy)
        self.assertAlmostEqual(car.angle, 1.0 + 0.9 * 0.5 * 1.5)

    def test_motion_clamped_behind_leader(self) -> None:
        car = Vehicle(id="CAR_A", angle=1.0, base_speed=1.0, lane=0, lateral_offset=0.0)
        car.update(1.0, 1.3, 1.0, self.policy)
        self.assertAlmostEqual(car.angle, 1.1)

    def test_no_motion_inside_min_gap(self) -> None:
        car = Vehicle(id="CAR_A", angle=1.0, base_speed=1.0, lane=0, lateral_offset=0.0)
        car.update(1.0, 1.1, 1.0, self.policy)
        self.assertEqual(car.angle, 1.0)

    def test_angle_wraps_on_overflow(self) -> None:
        car = Vehicle(id="CAR_A", angle=TWO_PI - 0.05, base_speed=1.0, lane=0, lateral_offset=0.0)
        car.update(0.1, None, 1.0, self.policy)
        self.assertAlmostEqual(car.angle, 0.05)
        self.assertLess(car.angle, TWO_PI)

    def test_leader_across_zero(self) -> None:
        car = Vehicle(id="CAR_A", angle=TWO_PI - 0.1, base_speed=1.0, lane=0, lateral_offset=0.0)
        car.update(1.0, 0.4, 1.0, self.policy)
        self.assertAlmostEqual(car.angle, 0.2)

    def test_zero_speed_multiplier_freezes_position(self) -> None:
        car = Vehicle(id="CAR_A", angle=2.0, base_speed=1.0, lane=0, lateral_offset=0.0)
        car.update(_DT, None, 0.0, self.policy)
        self.assertEqual(car.angle, 2.0)

    def test_lane_commits_only_after_offset_converges(self) -> None:
        lanes = 2
        car = Vehicle(
            id="CAR_A", angle=0.0, base_speed=1.0, lane=0,
            lateral_offset=lane_offset(0, lanes, 30.0),
        )
        car.request_lane_change(1, lane_offset(1, lanes, 30.0), now=0.0)
        ticks = 0
        committed = False
        while not committed and ticks < 200:
            committed = car.update(_DT, None, 1.0, self.policy)
            ticks += 1
            if not committed:
                self.assertEqual(car.lane, 0)
        self.assertTrue(committed)
        self.assertEqual(car.lane, 1)
        self.assertLess(abs(car.lateral_offset - car.target_offset), 1.0)
        # 30 units of offset shrink by 10 % per frame: 0.9**33 * 30 < 1
        self.assertEqual(ticks, 33)

    def test_commit_is_monotonic(self) -> None:
        car = Vehicle(id="CAR_A", angle=0.0, base_speed=1.0, lane=0, lateral_offset=-15.0)
        car.request_lane_change(1, 15.0, now=0.0)
        for _ in range(100):
            car.update(_DT, None, 1.0, self.policy)
        self.assertEqual(car.lane, 1)
        for _ in range(100):
            self.assertFalse(car.update(_DT, None, 1.0, self.policy))
            self.assertEqual(car.lane, car.target_lane)

    def test_as_dict_exposes_render_state(self) -> None:
        car = Vehicle(id="CAR_A", angle=0.3, base_speed=1.0, lane=0,
                      lateral_offset=-15.0, color=(1, 2, 3))
        payload = car.as_dict()
        for key in ("id", "angle", "lane", "lateral_offset", "color"):
            self.assertIn(key, payload)
        self.assertEqual(payload["color"], (1, 2, 3))


if __name__ == "__main__":
    unittest.main()
