from .news import FeedMetadata, NewsCandidate, NewsItem

__all__ = ["FeedMetadata", "NewsCandidate", "NewsItem"]
