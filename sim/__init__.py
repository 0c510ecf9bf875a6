"""
sim — Simulation core
=====================

Modules
-------
world
    :class:`RingWorld` entity manager and tick loop.
vehicle
    :class:`Vehicle` state and per-vehicle motion step.
congestion
    Lane grouping, speed targets and lane-change selection.
traffic_policy
    :class:`TrafficPolicy` tunable constants and lane layout helpers.
settings
    :class:`SimSettings` live configuration snapshot.
sim_bridge
    :class:`SimBridge` frame-driven orchestrator for the UI.
geometry
    Angle normalisation and circular-gap helpers.
"""
