"""URL configuration for the estimates API."""

from django.urls import path

from . import views

app_name = "estimating"

urlpatterns = [
    path("", views.estimate_collection, name="estimate-list"),
    path("<uuid:estimate_id>/", views.estimate_detail, name="estimate-detail"),
    path(
        "<uuid:estimate_id>/convert-to-invoice/",
        views.estimate_convert_to_invoice,
        name="estimate-convert",
    ),
]
