"""Response header middleware for the JSON API."""
from django.conf import settings
from django.utils.cache import add_never_cache_headers


class NoStoreAPIMiddleware:
    """Mark every response below ``API_PATH_PREFIX`` as uncacheable."""

    def __init__(self, get_response):
        self.get_response = get_response
        self.prefix = getattr(settings, "API_PATH_PREFIX", "/api/")

    def __call__(self, request):
        response = self.get_response(request)
        if request.path.startswith(self.prefix):
            add_never_cache_headers(response)
            response["Pragma"] = "no-cache"
        return response
