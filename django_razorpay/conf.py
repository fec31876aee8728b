from django.conf import settings as dj_settings
from django.core.signals import setting_changed

from django_razorpay.exceptions import ConfigurationError

DEFAULTS = {
    "KEY_ID": None,
    "KEY_SECRET": None,
    "WEBHOOK_SECRET": None,
    "API_BASE_URL": "https://api.razorpay.com/v1",
    "CURRENCY": "INR",
    "PRICE_LOOKUP_BATCH_SIZE": 10,
    "HTTP_TIMEOUT": 30,
    "SHIPPING_API_BASE_URL": "https://apiv2.shiprocket.in/v1/external",
    "SHIPPING_EMAIL": None,
    "SHIPPING_PASSWORD": None,
}

SETTING_PREFIX = "DJANGO_RAZORPAY_"


class Settings(object):
    def __getattr__(self, name):
        if name not in DEFAULTS:
            msg = "'%s' object has no attribute '%s'"
            raise AttributeError(msg % (self.__class__.__name__, name))

        value = self.get_setting(name)

        # Cache the result
        setattr(self, name, value)
        return value

    def get_setting(self, setting):
        return getattr(dj_settings, f"{SETTING_PREFIX}{setting}", DEFAULTS[setting])

    def require(self, setting):
        """Return a setting that must be non-empty, or raise ConfigurationError."""
        value = getattr(self, setting)
        if not value:
            raise ConfigurationError(f"Missing {SETTING_PREFIX}{setting} setting.")
        return value

    def change_setting(self, setting, value, enter, **kwargs):
        if not setting.startswith(SETTING_PREFIX):
            return

        setting = setting[len(SETTING_PREFIX) :]

        # ensure a valid app setting is being overridden
        if setting not in DEFAULTS:
            return

        # drop the cached value so the next access re-reads Django settings
        self.__dict__.pop(setting, None)


settings = Settings()
setting_changed.connect(settings.change_setting)
