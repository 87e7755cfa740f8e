from .blog_service import BlogService
from .artwork_service import ArtworkService
from .contact_service import ContactService
from .analytics_service import AnalyticsService
from .dashboard_service import DashboardService
from .auth_service import AuthService, AuthStateNotifier, AuthSubscription
from .upload_service import ImageUploader, UploadLocks
