from datetime import timezone
from enum import IntEnum

from flask_sqlalchemy import SQLAlchemy

# loaded rows keep their values after commit so batches stay a snapshot
db = SQLAlchemy(session_options={'expire_on_commit': False})


class TaskStatus(IntEnum):
    NEW = 0
    IN_PROGRESS = 1
    COMPLETED = 2


class Task(db.Model):
    __tablename__ = 'tasks'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False, default='')
    description = db.Column(db.Text, nullable=False, default='')
    # plain integer column: values outside TaskStatus are stored as given
    status = db.Column(db.SmallInteger, nullable=False, default=TaskStatus.NEW.value)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'status': self.status,
            'created_at': _isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Task {self.id} status={self.status}>'


def _isoformat(value):
    if value is None:
        return None
    # sqlite hands back naive datetimes; everything is written in UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
