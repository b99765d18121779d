"""Authorization state, summary and callback relay."""
from auth.oauth import OAuthPrefs
from auth.presenter import AuthorizationStatusPresenter, summarize
from auth.relay import AuthorizationCallbackRelay

__all__ = [
    'AuthorizationCallbackRelay',
    'AuthorizationStatusPresenter',
    'OAuthPrefs',
    'summarize',
]
