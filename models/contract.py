from extensions import db


class Contract(db.Model):
    __tablename__ = "contracts"

    application_id = db.Column(db.Integer, db.ForeignKey("applications.id", ondelete="CASCADE"), primary_key=True)

    confirm_key = db.Column(db.String(255))
    shared_address = db.Column(db.String(255))  # smart wallet holding the donation

    donor_wallet = db.Column(db.String(255))
    donor_device = db.Column(db.String(255))
    producer_wallet = db.Column(db.String(255))
    producer_device = db.Column(db.String(255))

    price = db.Column(db.Integer)
    bytes = db.Column(db.BigInteger, nullable=False, default=0)
    completed = db.Column(db.Boolean, nullable=False, default=False)

    creation_time = db.Column(db.DateTime)

    application = db.relationship("Application", back_populates="contract")
