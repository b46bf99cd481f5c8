"""Daily send counter model."""

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.database import Base


class DailySendCounter(Base):
    """Number of organic transfers an account sent on a calendar date."""

    __tablename__ = "daily_send_counters"
    __table_args__ = (
        UniqueConstraint("account_id", "send_date", name="daily_send_counters_unique"),
        CheckConstraint("send_count >= 0", name="daily_send_counters_count_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(String, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    send_date = Column(Date, nullable=False)
    send_count = Column(Integer, nullable=False, default=0)

    account = relationship("Account", back_populates="send_counters")
