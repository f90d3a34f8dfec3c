"""Tournament organiser toolkit: double-elimination brackets, conflict-aware seeding, rating biases and a local player cache."""

__version__ = "0.1.0"