from sqlalchemy import Column, String

from app.db.session import Base


class HiddenOrder(Base):
    __tablename__ = "hidden_orders"

    project_manager = Column(String(100), primary_key=True)
    order_nr = Column(String(20), primary_key=True)
