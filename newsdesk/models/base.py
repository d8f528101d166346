from datetime import datetime
from newsdesk.extensions import db


class BaseModel(db.Model):
    """
    Newsroom model base class
    Provides: integer primary key, created/updated timestamps, save helper, serialization
    """
    __abstract__ = True

    # Columns never serialized by to_dict
    __serialize_exclude__ = ()

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def save(self):
        db.session.add(self)
        db.session.commit()

    def to_dict(self, expand=()):
        """
        Serialize the row to a plain dict so templates and JSON endpoints see the same shape.
        Datetimes become ISO strings; every relation named in `expand` is nested as its own dict.
        """
        data = {}
        for c in self.__table__.columns:
            if c.name.startswith('_') or c.name in self.__serialize_exclude__:
                continue
            val = getattr(self, c.name)
            if isinstance(val, datetime):
                data[c.name] = val.isoformat()
            else:
                data[c.name] = val
        for name in expand:
            related = getattr(self, name)
            data[name] = related.to_dict() if related is not None else None
        return data
