from extensions import db


class Producer(db.Model):
    __tablename__ = "producers"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    pairing_secret = db.Column(db.String(255), nullable=False)
    wallet_address = db.Column(db.String(255))
    device_address = db.Column(db.String(255))

    # Pickup address of the shop
    street = db.Column(db.String(255), nullable=False)
    street_number = db.Column(db.String(255), nullable=False)
    zipcode = db.Column(db.String(255))
    city = db.Column(db.String(255), nullable=False)

    user = db.relationship("User", back_populates="producer")

    @property
    def address(self):
        if self.zipcode:
            return f"{self.street} {self.street_number}, {self.zipcode} {self.city}"
        return f"{self.street} {self.street_number}, {self.city}"
