"""Domain services."""

from app.services.category_service import CategoryService
from app.services.download_counter import DownloadCounter
from app.services.file_service import FileService
from app.services.quota import QuotaAccountant
from app.services.share_access import DenyReason, ShareAccessDecision, ShareAccessEvaluator
from app.services.share_service import ShareService
from app.services.user_service import UserService

__all__ = [
    "CategoryService",
    "DenyReason",
    "DownloadCounter",
    "FileService",
    "QuotaAccountant",
    "ShareAccessDecision",
    "ShareAccessEvaluator",
    "ShareService",
    "UserService",
]
