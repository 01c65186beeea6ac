"""riftstats: cached, concurrent aggregation of Riot match statistics."""

__version__ = "0.1.0"
