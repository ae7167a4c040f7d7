from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class Application(Base):
    """
    Records that a user applied to a job.

    The composite primary key makes a second application for the same
    (username, job_id) pair fail at insert time.
    """
    __tablename__ = "applications"

    username = Column(
        String(25),
        ForeignKey("users.username", ondelete="CASCADE"),
        primary_key=True,
    )
    job_id = Column(
        Integer,
        ForeignKey("jobs.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # Relationships
    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<Application(username='{self.username}', job_id={self.job_id})>"
