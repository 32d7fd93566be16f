"""Simulation primitives: geometry, range sensing, kinematics and wall sources."""
