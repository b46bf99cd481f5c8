"""Transfer model recording point movements between accounts."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import local_now


class Transfer(Base):
    """Immutable ledger entry: sender, receiver and point amount.

    Organic sends never have ``sender_id == receiver_id``; distribution
    entries use the acting administrator as sender and may carry any
    integer amount, so neither rule is a table constraint.
    """

    __tablename__ = "transfers"
    __table_args__ = (
        Index("transfers_receiver_created_idx", "receiver_id", "created_at"),
        Index("transfers_sender_created_idx", "sender_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(String, ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False)
    receiver_id = Column(String, ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False)
    points = Column(Integer, nullable=False)
    message = Column(Text)
    created_at = Column(DateTime, default=local_now, nullable=False)

    sender = relationship("Account", foreign_keys=[sender_id], back_populates="transfers_sent")
    receiver = relationship("Account", foreign_keys=[receiver_id], back_populates="transfers_received")
