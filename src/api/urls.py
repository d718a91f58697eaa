"""Main API URL router for /api/v1/."""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from api.auth_views import (
    CSRFTokenAPIView,
    LoginAPIView,
    LogoutAPIView,
    MeView,
    PasswordChangeAPIView,
)
from api.v1 import views as v1_views

router = DefaultRouter()
router.register(r'leads', v1_views.LeadViewSet, basename='lead')
router.register(r'merchants', v1_views.MerchantViewSet, basename='merchant')
router.register(r'users', v1_views.UserViewSet, basename='user')

app_name = 'api'

urlpatterns = [
    path('', include(router.urls)),

    # Auth
    path('auth/csrf/', CSRFTokenAPIView.as_view(), name='auth-csrf'),
    path('auth/login/', LoginAPIView.as_view(), name='auth-login'),
    path('auth/logout/', LogoutAPIView.as_view(), name='auth-logout'),
    path('auth/me/', MeView.as_view(), name='auth-me'),
    path('auth/password/change/', PasswordChangeAPIView.as_view(), name='auth-password-change'),
]
