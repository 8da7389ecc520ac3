from datetime import datetime, timezone
from flask import current_app
from flask_login import UserMixin
from wordgroups import db
import random

# Look-alike characters (0/O, 1/I) are left out so codes can be read aloud
GROUP_CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
CATEGORY_COLORS = ('yellow', 'green', 'blue', 'purple')
CATEGORIES_PER_PUZZLE = 4
WORDS_PER_CATEGORY = 4


def _utcnow():
    return datetime.now(timezone.utc)


def generate_group_code(length=None):
    """Generate a unique, short group join code."""
    if length is None:
        length = int(current_app.config.get('GROUP_CODE_LENGTH', 6))
    while True:
        code = ''.join(random.choices(GROUP_CODE_ALPHABET, k=length))
        if not Group.query.filter_by(code=code).first():
            return code


class Group(db.Model):
    __tablename__ = 'group'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    code = db.Column(db.String(16), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    members = db.relationship('Member', back_populates='group', order_by='Member.id')

    def __init__(self, **kwargs):
        super(Group, self).__init__(**kwargs)
        if not self.code:
            self.code = generate_group_code()

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'code': self.code,
        }


class Member(UserMixin, db.Model):
    __tablename__ = 'member'
    __table_args__ = (db.UniqueConstraint('group_id', 'name', name='uq_member_group_name'),)
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    group_id = db.Column(db.Integer, db.ForeignKey('group.id'), nullable=False, index=True)
    # Only ever changed through an in-database increment, see services.puzzles.attempts
    score = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    group = db.relationship('Group', back_populates='members')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'group_id': self.group_id,
            'score': self.score,
        }


class Puzzle(db.Model):
    __tablename__ = 'puzzle'
    id = db.Column(db.Integer, primary_key=True)
    difficulty = db.Column(db.String(32), nullable=False)
    group_id = db.Column(db.Integer, db.ForeignKey('group.id'), nullable=False, index=True)
    author_id = db.Column(db.Integer, db.ForeignKey('member.id'), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    author = db.relationship('Member', foreign_keys=[author_id])
    categories = db.relationship('Category', back_populates='puzzle', order_by='Category.position',
                                 cascade='all, delete-orphan')
    attempts = db.relationship('Attempt', back_populates='puzzle', order_by='Attempt.id')

    def to_dict(self):
        return {
            'id': self.id,
            'difficulty': self.difficulty,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'author': {'name': self.author.name if self.author else None},
            'categories': [c.to_dict() for c in self.categories],
            'attempts': [
                {'completed': a.completed, 'member': {'name': a.member.name}}
                for a in self.attempts
            ],
        }


class Category(db.Model):
    __tablename__ = 'category'
    __table_args__ = (db.UniqueConstraint('puzzle_id', 'name', name='uq_category_puzzle_name'),)
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    color = db.Column(db.String(16), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    puzzle_id = db.Column(db.Integer, db.ForeignKey('puzzle.id'), nullable=False, index=True)
    puzzle = db.relationship('Puzzle', back_populates='categories')
    words = db.relationship('Word', back_populates='category', order_by='Word.id',
                            cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'color': self.color,
            'words': [w.to_dict() for w in self.words],
        }


class Word(db.Model):
    __tablename__ = 'word'
    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.String(100), nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey('category.id'), nullable=False, index=True)
    category = db.relationship('Category', back_populates='words')

    def to_dict(self):
        return {
            'id': self.id,
            'text': self.text,
        }


class Attempt(db.Model):
    __tablename__ = 'attempt'
    # One row per (member, puzzle); concurrent first completions collide here
    __table_args__ = (db.UniqueConstraint('member_id', 'puzzle_id', name='uq_attempt_member_puzzle'),)
    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey('member.id'), nullable=False, index=True)
    puzzle_id = db.Column(db.Integer, db.ForeignKey('puzzle.id'), nullable=False, index=True)
    completed = db.Column(db.Boolean, default=False, nullable=False)
    incorrect_guesses = db.Column(db.Integer, default=0, nullable=False)
    score = db.Column(db.Integer, default=0, nullable=False)
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    member = db.relationship('Member')
    puzzle = db.relationship('Puzzle', back_populates='attempts')
