"""
School-wide settings utility backed by the system_settings table.
"""
import pytz

from models import SystemSetting, db


class SystemSettings:
    """Utility class for accessing system settings"""

    _cache = {}
    _cache_loaded = False

    DEFAULTS = {
        'general': {
            'school_name': '',
            'currency': 'USD',
            'timezone': 'UTC',
        },
    }

    @classmethod
    def _load_cache(cls):
        """Load all settings into cache"""
        if not cls._cache_loaded:
            cls._cache = {}
            for setting in SystemSetting.query.all():
                cls._cache.setdefault(setting.category, {})[setting.key] = setting.typed_value
            cls._cache_loaded = True

    @classmethod
    def get(cls, category, key, default=None):
        """Get a setting value"""
        cls._load_cache()
        if default is None:
            default = cls.DEFAULTS.get(category, {}).get(key)
        return cls._cache.get(category, {}).get(key, default)

    @classmethod
    def get_category(cls, category):
        """Get all settings for a category, defaults filled in"""
        cls._load_cache()
        values = dict(cls.DEFAULTS.get(category, {}))
        values.update(cls._cache.get(category, {}))
        return values

    @classmethod
    def set(cls, category, key, value, description=None):
        """Set a setting value and commit"""
        SystemSetting.upsert_setting(category, key, value, description)
        db.session.commit()
        cls._cache_loaded = False

    @classmethod
    def invalidate_cache(cls):
        """Invalidate the settings cache"""
        cls._cache = {}
        cls._cache_loaded = False

    @classmethod
    def get_school_name(cls):
        return cls.get('general', 'school_name')

    @classmethod
    def get_currency(cls):
        return cls.get('general', 'currency')

    @classmethod
    def get_timezone(cls):
        return cls.get('general', 'timezone')

    @classmethod
    def format_currency(cls, amount, currency=None):
        """Format amount with currency symbol"""
        if currency is None:
            currency = cls.get_currency()

        try:
            amount = float(amount)
        except (ValueError, TypeError):
            amount = 0.0

        currency_symbols = {
            'KES': 'KSh',
            'UGX': 'UGX',
            'TZS': 'TSh',
            'INR': '₹',
            'USD': '$',
            'EUR': '€',
            'GBP': '£'
        }

        symbol = currency_symbols.get(currency, currency)
        return f"{symbol} {amount:,.2f}"

    @classmethod
    def format_datetime(cls, value, fmt='%b %d, %Y %I:%M %p'):
        """Render a naive UTC datetime in the school's timezone"""
        if value is None:
            return 'N/A'
        try:
            system_tz = pytz.timezone(cls.get_timezone())
        except pytz.UnknownTimeZoneError:
            system_tz = pytz.utc
        if value.tzinfo is None:
            value = pytz.utc.localize(value)
        return value.astimezone(system_tz).strftime(fmt)
