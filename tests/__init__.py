"""Planner test suite."""
