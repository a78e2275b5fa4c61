from sqlalchemy import Column, String, Integer, Date, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from expiry_tracker.database import Base, BaseMixin


class Grocery(BaseMixin, Base):
    """Server-side grocery row. The live list is held by the browser; this
    table only backs the per-user counts shown in the admin listing."""

    __tablename__ = "groceries"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    category = Column(String, default="other")
    purchase_date = Column(Date)
    expiry_date = Column(Date)
    shelf_life_days = Column(Integer)
    eaten = Column(Boolean, default=False)
    eaten_at = Column(DateTime(timezone=True))
    marked_expired = Column(Boolean, default=False)

    user = relationship("User", back_populates="groceries")
