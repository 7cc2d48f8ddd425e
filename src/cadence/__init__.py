"""Cadence - recurring events and scheduling conflicts."""
