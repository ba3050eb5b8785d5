"""SQLAlchemy models for projects, tasks and comments."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from teamhub.infrastructure.database import Base, generate_id
from teamhub.utils import utcnow_naive


class ProjectModel(Base):
    """Database representation of a project."""

    __tablename__ = "project"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(30), nullable=False, default="ACTIVE")
    manager_id = Column(String(32), ForeignKey("user.id"), nullable=False, index=True)
    team_id = Column(
        String(32), ForeignKey("team.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at = Column(DateTime, nullable=False, default=utcnow_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=utcnow_naive)

    team = relationship("TeamModel", lazy="joined")
    tasks = relationship(
        "TaskModel",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class TaskModel(Base):
    """Database representation of a task."""

    __tablename__ = "task"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(30), nullable=False, default="TODO")
    priority = Column(String(20), nullable=False, default="MEDIUM")
    due_date = Column(DateTime, nullable=True)
    project_id = Column(
        String(32), ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_to_id = Column(String(32), ForeignKey("user.id"), nullable=True, index=True)
    created_by_id = Column(String(32), ForeignKey("user.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=utcnow_naive)

    project = relationship("ProjectModel", back_populates="tasks")
    comments = relationship(
        "CommentModel",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class CommentModel(Base):
    """Comment left by a user on a task."""

    __tablename__ = "comment"

    id = Column(String(32), primary_key=True, default=generate_id)
    content = Column(Text, nullable=False)
    attachments = Column(JSON, nullable=False, default=list)
    task_id = Column(
        String(32), ForeignKey("task.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_id = Column(String(32), ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow_naive)

    task = relationship("TaskModel", back_populates="comments")
    author = relationship("UserModel", lazy="joined")


__all__ = ["ProjectModel", "TaskModel", "CommentModel"]
