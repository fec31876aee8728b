from django.urls import path

from django_razorpay import views

app_name = "django_razorpay"

urlpatterns = [
    path("orders/validate-cod/", views.validate_cod, name="validate_cod"),
    path("razorpay/create-order/", views.create_order, name="create_order"),
    path("razorpay/verify/", views.verify_payment, name="verify"),
    path("razorpay/webhook/", views.webhook, name="webhook"),
]
