from triviabot import db
import time


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    external_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(128), nullable=False, default='')
    image_url = db.Column(db.String(512), nullable=True)
    points = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self):
        return {
            'id': self.id,
            'external_id': self.external_id,
            'display_name': self.display_name,
            'image_url': self.image_url,
            'points': self.points,
        }


class Question(db.Model):
    __tablename__ = 'question'
    id = db.Column(db.Integer, primary_key=True)
    author_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    text = db.Column(db.String(128), nullable=False)
    correct_answer_id = db.Column(
        db.Integer,
        db.ForeignKey('answer.id', name='fk_question_correct_answer_id', use_alter=True),
        nullable=True,
    )
    # Epoch seconds; NULL while the question has never been run
    activated_at = db.Column(db.Float, nullable=True, index=True)
    # Stamped exactly once, by the rotation that closes this round
    closed_at = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.Float, nullable=False, default=time.time)

    author = db.relationship('User', foreign_keys=[author_id])
    answers = db.relationship(
        'Answer',
        foreign_keys='Answer.question_id',
        back_populates='question',
        order_by='Answer.id',
    )

    @property
    def state(self):
        if self.activated_at is None:
            return 'dormant'
        return 'active' if self.closed_at is None else 'closed'

    def to_dict(self):
        # The correct answer stays server-side while the question can still be answered
        return {
            'id': self.id,
            'author_id': self.author_id,
            'text': self.text,
            'activated_at': self.activated_at,
        }


class Answer(db.Model):
    __tablename__ = 'answer'
    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False, index=True)
    text = db.Column(db.String(32), nullable=False)

    question = db.relationship('Question', foreign_keys=[question_id], back_populates='answers')

    def to_dict(self):
        return {
            'id': self.id,
            'question_id': self.question_id,
            'text': self.text,
        }


class AnswerEntry(db.Model):
    __tablename__ = 'answer_entry'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'question_id', name='uq_answer_entry_user_question'),
    )
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False, index=True)
    answer_id = db.Column(db.Integer, db.ForeignKey('answer.id'), nullable=False)
    updated_at = db.Column(db.Float, nullable=False, default=time.time, onupdate=time.time)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'question_id': self.question_id,
            'answer_id': self.answer_id,
        }


class Image(db.Model):
    __tablename__ = 'image'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    url = db.Column(db.String(512), nullable=False)
    created_at = db.Column(db.Float, nullable=False, default=time.time)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'url': self.url,
            'created_at': self.created_at,
        }


class Message(db.Model):
    __tablename__ = 'message'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    text = db.Column(db.Text, nullable=False)
    posted_at = db.Column(db.Float, nullable=False, default=time.time, index=True)

    user = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'display_name': self.user.display_name if self.user else None,
            'text': self.text,
            'posted_at': self.posted_at,
        }
