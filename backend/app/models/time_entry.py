from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Index, Integer, Numeric, String, Text

from app.db.session import Base


class TimeEntry(Base):
    __tablename__ = "time_entries"
    __table_args__ = (Index("ix_time_entries_manager_date", "project_manager", "date"),)

    id = Column(Integer, primary_key=True, index=True)
    project_manager = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)
    # Absences store the literal "Absent".
    order_nr = Column(String(20), nullable=False)
    duration = Column(Numeric(5, 2, asdecimal=False), nullable=False)
    day_type = Column(String(20), nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def as_row(self) -> dict:
        return {
            "id": self.id,
            "project_manager": self.project_manager,
            "date": self.date,
            "order_nr": self.order_nr,
            "duration": self.duration,
            "day_type": self.day_type,
            "comment": self.comment,
            "created_at": self.created_at,
        }
