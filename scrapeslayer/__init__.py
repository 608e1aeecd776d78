"""scrapeslayer — creator profile metadata from Twitch and YouTube about pages."""

__version__ = "1.0.0"
