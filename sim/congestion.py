#!/usr/bin/env python3
"""
sim/congestion.py
=================
Per-tick traffic rules: lane grouping, gap analysis, speed targets and
lane-change requests.

Lanes are treated as circular sequences: vehicles are sorted by angle
and the last vehicle's leader wraps around to the first.  Grouping is
always by the *committed* ``lane``, so a vehicle mid-animation still
counts as traffic in the lane it is leaving.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from sim.geometry import circular_gap, smoothing_alpha
from sim.traffic_policy import TrafficPolicy, lane_offset
from sim.vehicle import Vehicle

log = logging.getLogger("congestion")

LaneGroups = List[List[Vehicle]]

# Order in which adjacent lanes are tried: inner first, then outer.
_LANE_CHANGE_DIRECTIONS = (-1, 1)


def group_by_lane(vehicles: Sequence[Vehicle], lane_count: int) -> LaneGroups:
    """Partition *vehicles* by committed lane, each group sorted by angle.

    Vehicles outside ``[0, lane_count)`` are ignored; the world clamps
    them before this is ever called.
    """
    groups: LaneGroups = [[] for _ in range(lane_count)]
    for vehicle in vehicles:
        if 0 <= vehicle.lane < lane_count:
            groups[vehicle.lane].append(vehicle)
    for group in groups:
        group.sort(key=lambda v: (v.angle, v.id))
    return groups


def leader_of(group: Sequence[Vehicle], index: int) -> Vehicle:
    """Next vehicle ahead of ``group[index]`` in circular lane order."""
    return group[(index + 1) % len(group)]


def leader_angles(groups: LaneGroups) -> Dict[str, Optional[float]]:
    """Snapshot each vehicle's leader angle; None for a vehicle alone in its lane."""
    angles: Dict[str, Optional[float]] = {}
    for group in groups:
        for idx, vehicle in enumerate(group):
            angles[vehicle.id] = leader_of(group, idx).angle if len(group) > 1 else None
    return angles


def target_speed(vehicle: Vehicle, gap: Optional[float], policy: TrafficPolicy) -> float:
    """Cruise at ``base_speed`` unless the leader is closer than ``safe_angle``."""
    if gap is not None and gap < policy.safe_angle:
        return vehicle.base_speed * policy.slowdown_factor
    return vehicle.base_speed


def lane_is_safe(vehicle: Vehicle, others: Sequence[Vehicle], safe_gap: float) -> bool:
    """True when *vehicle* could merge between its nearest neighbours in *others*.

    ``ahead`` is the vehicle with the smallest forward gap, ``behind``
    the one with the smallest reverse gap; a vehicle level with
    *vehicle* has a gap of zero both ways and always blocks the merge.
    """
    if not others:
        return True
    ahead = min(others, key=lambda o: circular_gap(vehicle.angle, o.angle))
    behind = min(others, key=lambda o: circular_gap(o.angle, vehicle.angle))
    gap_ahead = circular_gap(vehicle.angle, ahead.angle)
    gap_behind = circular_gap(behind.angle, vehicle.angle)
    return gap_ahead > safe_gap and gap_behind > safe_gap


def try_lane_change(
    vehicle: Vehicle,
    groups: LaneGroups,
    lane_count: int,
    policy: TrafficPolicy,
) -> Optional[int]:
    """Return the first safe adjacent lane (inner, then outer), or None."""
    for direction in _LANE_CHANGE_DIRECTIONS:
        candidate = vehicle.lane + direction
        if candidate < 0 or candidate >= lane_count:
            continue
        if lane_is_safe(vehicle, groups[candidate], policy.safe_gap):
            return candidate
    return None


def apply_traffic_rules(
    vehicles: Sequence[Vehicle],
    lane_count: int,
    now: float,
    dt: float,
    policy: TrafficPolicy,
) -> int:
    """Run one congestion pass: speed targets, smoothing, lane-change requests.

    Lane groups are built once up front.  The pass only mutates
    ``speed``, ``congested`` and the lane-change request fields, never
    ``lane`` or ``angle``, so the outcome does not depend on the order
    in which lanes are visited.

    Returns
    -------
    int
        Number of lane-change requests issued.
    """
    groups = group_by_lane(vehicles, lane_count)
    alpha = smoothing_alpha(policy.speed_smoothing, dt, policy.smoothing_reference_dt)
    requests = 0

    for lane, group in enumerate(groups):
        for idx, car in enumerate(group):
            gap = circular_gap(car.angle, leader_of(group, idx).angle) if len(group) > 1 else None
            target = target_speed(car, gap, policy)
            car.speed = max(0.0, car.speed + (target - car.speed) * alpha)
            car.congested = gap is not None and gap < policy.safe_angle

            if not car.congested:
                continue
            if not car.can_change_lane(now, policy.lane_change_cooldown_s):
                continue
            new_lane = try_lane_change(car, groups, lane_count, policy)
            if new_lane is None:
                continue
            car.request_lane_change(
                new_lane,
                lane_offset(new_lane, lane_count, policy.lane_spacing),
                now,
            )
            requests += 1
            log.debug(
                "LANE CHANGE %s: %d -> %d  angle=%.3f gap=%.3f t=%.2f",
                car.id, lane, new_lane, car.angle, gap, now,
            )
    return requests
