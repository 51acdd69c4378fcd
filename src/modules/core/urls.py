from django.urls import path

from modules.core.views import MeView, health_check

urlpatterns = [
    path("health", health_check, name="health_check"),
    path("api/me", MeView.as_view(), name="me"),
]
