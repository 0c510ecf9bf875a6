#!/usr/bin/env python3
"""
Tests for lane grouping, speed targets and lane-change selection.
"""

from __future__ import annotations

import unittest
from typing import List

from sim.congestion import (
    apply_traffic_rules,
    group_by_lane,
    lane_is_safe,
    leader_angles,
    target_speed,
    try_lane_change,
)
from sim.geometry import TWO_PI
from sim.traffic_policy import TrafficPolicy, lane_offset
from sim.vehicle import Vehicle

_DT = 1.0 / 60.0


def _car(car_id: str, angle: float, lane: int, lane_count: int = 3,
         base_speed: float = 1.0, last_change: float = -10.0) -> Vehicle:
    vehicle = Vehicle(
        id=car_id,
        angle=angle,
        base_speed=base_speed,
        lane=lane,
        lateral_offset=lane_offset(lane, lane_count, 30.0),
    )
    vehicle.last_lane_change_time = last_change
    return vehicle


class GroupingTests(unittest.TestCase):
    def test_groups_sorted_by_angle(self) -> None:
        cars = [_car("A", 3.0, 0), _car("B", 1.0, 0), _car("C", 2.0, 1), _car("D", 0.5, 0)]
        groups = group_by_lane(cars, 3)
        self.assertEqual([c.id for c in groups[0]], ["D", "B", "A"])
        self.assertEqual([c.id for c in groups[1]], ["C"])
        self.assertEqual(groups[2], [])

    def test_leader_wraps_to_first(self) -> None:
        cars = [_car("A", 0.2, 0), _car("B", 6.0, 0)]
        leaders = leader_angles(group_by_lane(cars, 1))
        self.assertAlmostEqual(leaders["B"], 0.2)
        self.assertAlmostEqual(leaders["A"], 6.0)

    def test_lone_vehicle_has_no_leader(self) -> None:
        leaders = leader_angles(group_by_lane([_car("A", 1.0, 2)], 3))
        self.assertIsNone(leaders["A"])

    def test_grouping_uses_committed_lane(self) -> None:
        car = _car("A", 1.0, 0)
        car.request_lane_change(1, lane_offset(1, 3, 30.0), now=0.0)
        groups = group_by_lane([car], 3)
        self.assertEqual([c.id for c in groups[0]], ["A"])
        self.assertEqual(groups[1], [])


class TargetSpeedTests(unittest.TestCase):
    def setUp(self) -> None:
        self.policy = TrafficPolicy()

    def test_threshold_is_hard(self) -> None:
        car = _car("A", 0.0, 0, base_speed=0.8)
        self.assertAlmostEqual(target_speed(car, 0.39, self.policy), 0.24)
        self.assertAlmostEqual(target_speed(car, 0.4, self.policy), 0.8)
        self.assertAlmostEqual(target_speed(car, None, self.policy), 0.8)


class LaneSafetyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.policy = TrafficPolicy()

    def test_empty_lane_is_safe(self) -> None:
        self.assertTrue(lane_is_safe(_car("A", 1.0, 1), [], self.policy.safe_gap))

    def test_close_leader_makes_lane_unsafe(self) -> None:
        me = _car("A", 1.0, 1)
        others = [_car("X", 1.5, 0)]
        self.assertFalse(lane_is_safe(me, others, self.policy.safe_gap))

    def test_close_follower_makes_lane_unsafe(self) -> None:
        me = _car("A", 1.0, 1)
        others = [_car("X", 0.5, 0)]
        self.assertFalse(lane_is_safe(me, others, self.policy.safe_gap))

    def test_vehicle_level_with_me_is_unsafe(self) -> None:
        me = _car("A", 1.0, 1)
        self.assertFalse(lane_is_safe(me, [_car("X", 1.0, 0)], self.policy.safe_gap))

    def test_follower_across_zero(self) -> None:
        me = _car("A", 0.1, 1)
        self.assertFalse(lane_is_safe(me, [_car("X", 6.0, 0)], self.policy.safe_gap))
        self.assertTrue(lane_is_safe(me, [_car("X", 5.3, 0)], self.policy.safe_gap))

    def test_wide_gap_between_neighbours(self) -> None:
        me = _car("A", 2.0, 1)
        others = sorted([_car("X", 1.0, 0), _car("Y", 3.0, 0)], key=lambda c: c.angle)
        self.assertTrue(lane_is_safe(me, others, self.policy.safe_gap))

    def test_nearest_neighbour_decides(self) -> None:
        me = _car("A", 2.0, 1)
        others = sorted([_car("X", 1.0, 0), _car("Y", 2.3, 0)], key=lambda c: c.angle)
        self.assertFalse(lane_is_safe(me, others, self.policy.safe_gap))


class TryLaneChangeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.policy = TrafficPolicy()

    def _groups(self, cars: List[Vehicle], lanes: int = 3):
        return group_by_lane(cars, lanes)

    def test_inner_lane_tried_first(self) -> None:
        me = _car("A", 1.0, 1)
        groups = self._groups([me, _car("B", 1.1, 1)])
        self.assertEqual(try_lane_change(me, groups, 3, self.policy), 0)

    def test_falls_back_to_outer_lane(self) -> None:
        me = _car("A", 1.0, 1)
        groups = self._groups([me, _car("B", 1.1, 1), _car("X", 1.3, 0)])
        self.assertEqual(try_lane_change(me, groups, 3, self.policy), 2)

    def test_none_when_both_blocked(self) -> None:
        me = _car("A", 1.0, 1)
        groups = self._groups([me, _car("X", 1.3, 0), _car("Y", 0.8, 2)])
        self.assertIsNone(try_lane_change(me, groups, 3, self.policy))

    def test_out_of_range_lanes_skipped(self) -> None:
        me = _car("A", 1.0, 0, lane_count=1)
        groups = self._groups([me, _car("B", 1.1, 0, lane_count=1)], lanes=1)
        self.assertIsNone(try_lane_change(me, groups, 1, self.policy))

    def test_top_lane_only_looks_inward(self) -> None:
        me = _car("A", 1.0, 2)
        groups = self._groups([me, _car("X", 1.2, 1)])
        self.assertIsNone(try_lane_change(me, groups, 3, self.policy))


class ApplyTrafficRulesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.policy = TrafficPolicy()

    def test_blocked_vehicle_slows_and_requests(self) -> None:
        a = _car("A", 0.0, 0, lane_count=2)
        b = _car("B", 0.1, 0, lane_count=2)
        requests = apply_traffic_rules([a, b], 2, now=5.0, dt=_DT, policy=self.policy)
        self.assertEqual(requests, 1)
        self.assertEqual(a.target_lane, 1)
        self.assertAlmostEqual(a.target_offset, lane_offset(1, 2, 30.0))
        self.assertEqual(a.last_lane_change_time, 5.0)
        self.assertEqual(a.lane, 0)
        # speed moved 10 % of the way to 0.3 * base
        self.assertAlmostEqual(a.speed, 1.0 + (0.3 - 1.0) * 0.1)
        self.assertTrue(a.congested)
        self.assertFalse(b.congested)
        self.assertEqual(b.target_lane, 0)

    def test_cooldown_blocks_request(self) -> None:
        a = _car("A", 0.0, 0, lane_count=2, last_change=4.0)
        b = _car("B", 0.1, 0, lane_count=2)
        requests = apply_traffic_rules([a, b], 2, now=5.0, dt=_DT, policy=self.policy)
        self.assertEqual(requests, 0)
        self.assertEqual(a.target_lane, 0)
        self.assertEqual(a.last_lane_change_time, 4.0)

    def test_cooldown_boundary_is_strict(self) -> None:
        a = _car("A", 0.0, 0, lane_count=2, last_change=3.0)
        b = _car("B", 0.1, 0, lane_count=2)
        apply_traffic_rules([a, b], 2, now=5.0, dt=_DT, policy=self.policy)
        self.assertEqual(a.target_lane, 0)

    def test_lone_vehicle_recovers_toward_base_speed(self) -> None:
        a = _car("A", 2.0, 1, base_speed=0.8)
        a.speed = 0.4
        apply_traffic_rules([a], 3, now=1.0, dt=_DT, policy=self.policy)
        self.assertAlmostEqual(a.speed, 0.44)
        self.assertFalse(a.congested)

    def test_result_independent_of_input_order(self) -> None:
        def build() -> List[Vehicle]:
            return [
                _car("A", 0.0, 0), _car("B", 0.2, 0),
                _car("C", 3.0, 1), _car("D", 3.1, 1),
                _car("E", 5.0, 2), _car("F", 5.05, 2),
            ]

        forward = build()
        backward = list(reversed(build()))
        apply_traffic_rules(forward, 3, now=10.0, dt=_DT, policy=self.policy)
        apply_traffic_rules(backward, 3, now=10.0, dt=_DT, policy=self.policy)
        by_id = {c.id: c for c in backward}
        for car in forward:
            other = by_id[car.id]
            self.assertEqual(car.target_lane, other.target_lane, msg=car.id)
            self.assertAlmostEqual(car.speed, other.speed, msg=car.id)

    def test_per_frame_smoothing_ignores_dt(self) -> None:
        policy = TrafficPolicy(smoothing_reference_dt=None)
        a = _car("A", 0.0, 0, lane_count=1)
        b = _car("B", 0.1, 0, lane_count=1)
        apply_traffic_rules([a, b], 1, now=1.0, dt=0.5, policy=policy)
        self.assertAlmostEqual(a.speed, 0.93)

    def test_speed_never_negative(self) -> None:
        a = _car("A", 0.0, 0, lane_count=1)
        b = _car("B", TWO_PI - 0.05, 0, lane_count=1)
        for _ in range(500):
            apply_traffic_rules([a, b], 1, now=1.0, dt=_DT, policy=self.policy)
            self.assertGreaterEqual(a.speed, 0.0)
            self.assertGreaterEqual(b.speed, 0.0)


if __name__ == "__main__":
    unittest.main()
