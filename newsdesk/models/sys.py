from newsdesk.extensions import db
from .base import BaseModel


class SiteSetting(BaseModel):
    """Admin-editable site setting, one row per key"""
    __tablename__ = 'site_settings'

    key = db.Column(db.String(64), unique=True, nullable=False)
    value = db.Column(db.JSON)
