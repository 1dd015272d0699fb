"""NU Schedule: course catalog seeding and student schedule API."""

__version__ = "1.0.0"
