"""URL configuration for the opsportal project."""

from django.urls import include, path

urlpatterns = [
    path("api/estimates/", include("opsportal.estimating.urls")),
    path("api/invoices/", include("opsportal.invoicing.urls")),
]
