"""
Crawlers for MOHRE index pages and the UAE legislation portal.
"""

from .http_client import HttpClient
from .index_crawler import IndexCrawler

__all__ = [
    "HttpClient",
    "IndexCrawler",
]
