from .google_drive_adapter import GoogleDriveAdapter
from .google_oauth_adapter import GoogleOAuthAdapter
from .local_document_adapter import LocalDocumentAdapter
from .oauth_callback_server import OAuthCallbackServer

__all__ = [
    "GoogleDriveAdapter",
    "GoogleOAuthAdapter",
    "LocalDocumentAdapter",
    "OAuthCallbackServer",
]
