from extensions import db

OPEN = "open"
PENDING = "pending"
COMPLETED = "completed"
LOCKED = "locked"
APPLICATION_STATUSES = (OPEN, PENDING, COMPLETED, LOCKED)

# Only ever returned by a rejected submission, never stored
UNAVAILABLE = "unavailable"


class Application(db.Model):
    __tablename__ = "applications"

    id = db.Column(db.Integer, primary_key=True)
    receiver_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)

    motivation = db.Column(db.Text, nullable=False)

    status = db.Column(
        db.Enum(*APPLICATION_STATUSES, name="application_status"),
        nullable=False,
        default=OPEN
    )

    created_at = db.Column(db.DateTime, nullable=False)
    last_modified = db.Column(db.DateTime)
    date_of_donation = db.Column(db.DateTime)  # only set while pending/completed

    # Relationships
    receiver = db.relationship("User", back_populates="applications")
    product = db.relationship("Product", back_populates="applications")
    contract = db.relationship("Contract", back_populates="application", uselist=False, cascade="all, delete-orphan")
