from sqlalchemy import (
    Column, Integer, String, DateTime, Boolean, Text,
    ForeignKey, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

class Team(Base):
    __tablename__ = 'teams'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)

    # Relationships
    members = relationship("Player", back_populates="team")

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}')>"

class Player(Base):
    __tablename__ = 'players'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
    handicap = Column(Integer, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)
    team_id = Column(Integer, ForeignKey('teams.id', ondelete='SET NULL'), nullable=True, index=True)

    # Metadata
    registered_at = Column(DateTime, default=func.now())

    # Relationships
    team = relationship("Team", back_populates="members")
    scores = relationship("Score", back_populates="player", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Player(id={self.id}, name='{self.name}', handicap={self.handicap})>"

class Course(Base):
    __tablename__ = 'courses'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)

    # Relationships
    holes = relationship("Hole", back_populates="course", cascade="all, delete-orphan",
                         order_by="Hole.hole_num")

    def __repr__(self):
        return f"<Course(id={self.id}, name='{self.name}')>"

class Hole(Base):
    __tablename__ = 'holes'

    id = Column(Integer, primary_key=True)
    course_id = Column(Integer, ForeignKey('courses.id', ondelete='CASCADE'), nullable=False)
    hole_num = Column(Integer, nullable=False)
    par = Column(Integer, nullable=False)
    handicap = Column(Integer, nullable=False)  # Handicap index, 1 = hardest

    course = relationship("Course", back_populates="holes")

    __table_args__ = (
        UniqueConstraint('course_id', 'hole_num'),
        CheckConstraint('hole_num >= 1 AND hole_num <= 18', name='ck_hole_num_range'),
        CheckConstraint('par >= 1', name='ck_hole_par_positive'),
    )

    def __repr__(self):
        return f"<Hole(course_id={self.course_id}, hole={self.hole_num}, par={self.par}, index={self.handicap})>"

class Score(Base):
    __tablename__ = 'scores'

    id = Column(Integer, primary_key=True)
    player_id = Column(Integer, ForeignKey('players.id', ondelete='CASCADE'), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey('courses.id'), nullable=False)
    hole_num = Column(Integer, nullable=False)
    day_num = Column(Integer, nullable=False)
    score = Column(Integer, nullable=True)  # NULL means not yet played

    player = relationship("Player", back_populates="scores")

    __table_args__ = (
        UniqueConstraint('player_id', 'course_id', 'hole_num', 'day_num'),
        CheckConstraint('hole_num >= 1 AND hole_num <= 18', name='ck_score_hole_range'),
        CheckConstraint('day_num >= 1 AND day_num <= 3', name='ck_score_day_range'),
    )

    def __repr__(self):
        return f"<Score(player_id={self.player_id}, day={self.day_num}, hole={self.hole_num}, score={self.score})>"

class Setting(Base):
    __tablename__ = 'settings'

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Setting(key='{self.key}', value='{self.value}')>"
