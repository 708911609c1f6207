from flask_sqlalchemy import SQLAlchemy

from tasktracker.timeutil import to_iso, utcnow

db = SQLAlchemy()


class Task(db.Model):
    __tablename__ = 'tasks'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text)
    completed = db.Column(db.Boolean, nullable=False, default=False)
    due_date = db.Column(db.DateTime)
    reminder_date = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'completed': self.completed,
            'due_date': to_iso(self.due_date),
            'reminder_date': to_iso(self.reminder_date),
            'created_at': to_iso(self.created_at),
            'updated_at': to_iso(self.updated_at),
        }

    def __repr__(self):
        return f'<Task {self.id} {self.title!r} completed={self.completed}>'
