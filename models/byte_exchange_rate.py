from extensions import db

BYTES_PER_GBYTE = 1_000_000_000


class ByteExchangeRate(db.Model):
    __tablename__ = "byte_exchange_rates"

    id = db.Column(db.Integer, primary_key=True)
    gbyte_usd = db.Column(db.Numeric(18, 8), nullable=False)

    @classmethod
    def latest(cls):
        return cls.query.order_by(cls.id.desc()).first()

    def to_usd(self, amount_bytes):
        return float(self.gbyte_usd) * amount_bytes / BYTES_PER_GBYTE
