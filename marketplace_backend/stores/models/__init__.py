from .store import Store
from .store_follow import StoreFollow
from .store_news import StoreNews
from .store_review import StoreReview

__all__ = ["Store", "StoreFollow", "StoreNews", "StoreReview"]
