"""Key/value system settings written by superadmins."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from ..core.database import Base
from ..utils.datetime import local_now


class SystemConfig(Base):
    __tablename__ = "system_config"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String, nullable=False, unique=True)
    value = Column(Text, nullable=False)
    updated_by = Column(String, ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False)
    updated_at = Column(DateTime, default=local_now, nullable=False)
