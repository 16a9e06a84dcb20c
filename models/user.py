from werkzeug.security import generate_password_hash, check_password_hash
from extensions import db
from utils import utcnow

PRODUCER = "producer"
RECEIVER = "receiver"
USER_ROLES = (PRODUCER, RECEIVER)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(255), nullable=False)
    sur_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(191), nullable=False, unique=True)
    country = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    thumbnail = db.Column(db.String(255))  # file name under the static folder
    password_hash = db.Column(db.String(255), nullable=False)

    # Fixed at registration
    role = db.Column(db.Enum(*USER_ROLES, name="user_roles"), nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    producer = db.relationship("Producer", back_populates="user", uselist=False, cascade="all, delete-orphan")
    receiver = db.relationship("Receiver", back_populates="user", uselist=False, cascade="all, delete-orphan")
    products = db.relationship("Product", back_populates="user", cascade="all, delete")
    applications = db.relationship("Application", back_populates="receiver", cascade="all, delete")

    @property
    def full_name(self):
        return f"{self.first_name} {self.sur_name}"

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
