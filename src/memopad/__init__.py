"""memopad - personal memo service."""
