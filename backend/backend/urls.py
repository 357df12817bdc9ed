"""
URL configuration for the software-house manager backend.

All API routes live under /api/ and are declared without trailing slashes.
"""
from django.contrib import admin
from django.urls import path, include
from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

schema_view = get_schema_view(
    openapi.Info(
        title="Software-House Manager API",
        default_version='v1',
        description="Projects, scrum backlog ordering, task timers and commissions.",
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)

api_urlpatterns = [
    path('auth/', include('authentication.urls')),
    path('', include('project.urls')),
    path('', include('scrum.urls')),
    path('', include('timetracking.urls')),
    path('', include('commission.urls')),
]

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include(api_urlpatterns)),

    # API documentation
    path('swagger<format>/', schema_view.without_ui(cache_timeout=0), name='schema-json'),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
