"""URL configuration for the invoices API."""

from django.urls import path

from . import views

app_name = "invoicing"

urlpatterns = [
    path("", views.invoice_collection, name="invoice-list"),
    path("<uuid:invoice_id>/", views.invoice_detail, name="invoice-detail"),
]
