from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class DjangoRazorpayAppConfig(AppConfig):
    default = True
    default_auto_field = "django.db.models.BigAutoField"
    name = "django_razorpay"
    verbose_name = _("Django Razorpay")
