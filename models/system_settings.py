from models import db, iso
from datetime import datetime


class SystemSetting(db.Model):
    """School-level setting stored as text with its declared type"""
    __tablename__ = 'system_settings'

    id = db.Column(db.Integer, primary_key=True)
    category = db.Column(db.String(50), nullable=False, default='general')  # 'general', 'finance', ...
    key = db.Column(db.String(100), nullable=False)
    value = db.Column(db.Text, nullable=True)
    value_type = db.Column(db.String(20), nullable=False, default='string')  # 'string', 'boolean', 'integer', 'float'
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (db.UniqueConstraint('category', 'key', name='unique_system_category_key'),)

    def __repr__(self):
        return f'<SystemSetting {self.category}.{self.key} = {self.value}>'

    @property
    def typed_value(self):
        if self.value is None:
            return None
        if self.value_type == 'boolean':
            return self.value.lower() in ('true', '1', 'yes', 'on')
        if self.value_type == 'integer':
            return int(self.value)
        if self.value_type == 'float':
            return float(self.value)
        return self.value

    @typed_value.setter
    def typed_value(self, val):
        # bool first: it is a subclass of int
        if isinstance(val, bool):
            self.value_type, self.value = 'boolean', 'true' if val else 'false'
        elif isinstance(val, int):
            self.value_type, self.value = 'integer', str(val)
        elif isinstance(val, float):
            self.value_type, self.value = 'float', str(val)
        else:
            self.value_type = 'string'
            self.value = None if val is None else str(val)

    @staticmethod
    def upsert_setting(category, key, value, description=None):
        """Insert or update a setting; the caller commits"""
        setting = SystemSetting.query.filter_by(category=category, key=key).first()
        if setting is None:
            setting = SystemSetting(category=category, key=key)
            db.session.add(setting)
        setting.typed_value = value
        if description:
            setting.description = description
        return setting

    def to_dict(self):
        return {
            'category': self.category,
            'key': self.key,
            'value': self.typed_value,
            'value_type': self.value_type,
            'description': self.description,
            'updated_at': iso(self.updated_at),
        }
