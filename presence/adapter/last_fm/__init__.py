"""last.fm adapter."""

from .client import LastFmClient, MockLastFmClient, RealLastFmClient

__all__ = ["LastFmClient", "MockLastFmClient", "RealLastFmClient"]
