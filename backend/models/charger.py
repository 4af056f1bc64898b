"""Charger model for DB persistence."""
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Charger(Base):
    """Charger table: id (partner-chosen), partner_id, status, meter_value, last_update."""

    __tablename__ = "charger"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    # Owner is set at creation and never changes.
    partner_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("partner.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="AVAILABLE")
    # Cumulative meter reading in kWh.
    meter_value: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    last_update: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    partner: Mapped["Partner"] = relationship("Partner", back_populates="chargers")
