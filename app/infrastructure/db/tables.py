from sqlalchemy import JSON, Column, Date, DateTime, Integer, MetaData, Numeric, String, Table, Text

metadata = MetaData()

rooms = Table(
    "rooms",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("room_number", String(20), nullable=False, unique=True),
    Column("status", String(16), nullable=False, default="available"),
    Column("lock_version", Integer, nullable=False, default=0),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("room_id", Integer, nullable=False, index=True),
    Column("guest_id", Integer),
    Column("status", String(16), nullable=False, default="pending"),
    Column("payment_status", String(16), nullable=False, default="pending"),
    Column("total_price", Numeric(10, 2), nullable=False, default=0),
    Column("check_in_date", Date),
    Column("check_out_date", Date),
    Column("lock_version", Integer, nullable=False, default=0),
)

notification_outbox = Table(
    "notification_outbox",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("kind", String(32), nullable=False),
    Column("booking_id", Integer, nullable=False, index=True),
    Column("status", String(16), nullable=False, default="RETRY"),
    Column("attempts", Integer, nullable=False, default=0),
    Column("next_attempt_at", DateTime),
    Column("error_message", Text),
    Column("payload", JSON),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
)
