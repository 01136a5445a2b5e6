from django.urls import path

from . import views

urlpatterns = [
    path("health/", views.health, name="health"),
    path("generate-pdf", views.GeneratePDFView.as_view(), name="generate_pdf"),
    path("booking-confirmation", views.BookingConfirmationPDFView.as_view(), name="booking_confirmation_pdf"),
]
