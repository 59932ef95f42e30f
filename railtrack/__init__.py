"""Simulated live train tracking engine."""
