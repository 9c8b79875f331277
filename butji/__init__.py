"""butji: directory of anti-AI resources and companies with moderation and news aggregation."""

__version__ = "0.1.0"
