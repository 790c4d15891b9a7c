"""SQLAlchemy ORM model for the order event store."""

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, UniqueConstraint

from .base import Base


class OrderEventModel(Base):
    """
    Event store model.

    Append-only storage for immutable order event records.
    """

    __tablename__ = "order_events"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Event identifier (unique, indexed)
    event_id = Column(String(36), unique=True, nullable=False, index=True)

    # Event metadata
    event_type = Column(String(100), nullable=False, index=True)
    event_version = Column(Integer, nullable=False, default=1)

    # Aggregate information
    aggregate_id = Column(String(36), nullable=False, index=True)
    aggregate_type = Column(String(100), nullable=False)

    # Event data (flexible JSON schema)
    event_data = Column(JSON, nullable=False)

    # Execution context
    execution_id = Column(String(36), nullable=True)

    occurred_at = Column(DateTime, nullable=False)

    # Sequence number (for per-aggregate ordering)
    sequence_number = Column(Integer, nullable=False)

    __table_args__ = (
        Index('ix_order_events_aggregate_sequence', 'aggregate_id', 'sequence_number'),
        UniqueConstraint('aggregate_id', 'sequence_number', name='uq_order_events_aggregate_sequence'),
    )

    def __repr__(self):
        return f"<OrderEventModel(id={self.id}, type={self.event_type}, aggregate={self.aggregate_id}, sequence={self.sequence_number})>"
