from extensions import db
from utils import utcnow


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = db.Column(db.String(255), nullable=False)
    price = db.Column(db.Integer, nullable=False, default=0)  # whole dollars
    description = db.Column(db.Text)
    location = db.Column(db.String(255))
    country = db.Column(db.String(255))
    thumbnail = db.Column(db.String(255))
    available = db.Column(db.Boolean, nullable=False, default=True)
    rank = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    user = db.relationship("User", back_populates="products")
    applications = db.relationship("Application", back_populates="product", cascade="all, delete")
