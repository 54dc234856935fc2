"""Seed data for ticktock."""

from ticktock.data.baseline import SEED_WEEKS, Baseline, load_baseline, parse_baseline

__all__ = ["SEED_WEEKS", "Baseline", "load_baseline", "parse_baseline"]
