import random
from app import create_app
from extensions import db
from models import ByteExchangeRate, Product
from models.application import PENDING, COMPLETED
from repositories import ApplicationRepository, UserRepository

# ====== CONFIG ======
NUM_PRODUCERS = 3
NUM_RECEIVERS = 10
PRODUCTS_PER_PRODUCER = 4
PASSWORD = "password123"
# =====================

COUNTRIES = {
    "Kenya": ["Nairobi", "Mombasa"],
    "Uganda": ["Kampala", "Gulu"],
    "Philippines": ["Manila", "Cebu"],
}

PRODUCTS = [
    ("5 chickens", 42),
    ("School uniform", 15),
    ("Bag of rice", 20),
    ("Solar lamp", 30),
    ("Water filter", 35),
    ("Mosquito net", 8),
]

MOTIVATIONS = [
    "Our family needs eggs for the children.",
    "My daughter starts school next month.",
    "We lost our harvest in the flood.",
    "There is no electricity in our village after dark.",
]


class NoopEmailClient:
    def send_email(self, to_email, subject, body):
        return True, None


def create_producers(users):
    print("Creating producers...")
    producers = []
    for i in range(NUM_PRODUCERS):
        country = random.choice(list(COUNTRIES))
        created = users.create({
            "email": f"shop{i}@example.com",
            "password": PASSWORD,
            "first_name": f"Shop{i}",
            "sur_name": "Owner",
            "country": country,
            "role": "producer",
            "street": "Market Street",
            "street_number": str(random.randint(1, 99)),
            "zipcode": random.choice([None, "00100"]),
            "city": random.choice(COUNTRIES[country]),
        })
        if created:
            producers.append(created["user"])
    print(f"Created {len(producers)} producers.")
    return producers


def create_products(producers):
    print("Creating products...")
    products = []
    for producer in producers:
        for title, price in random.sample(PRODUCTS, PRODUCTS_PER_PRODUCER):
            products.append(Product(
                user_id=producer["user_id"],
                title=title,
                price=price,
                description=f"{title} from {producer['city']}",
                location=producer["city"],
                country=producer["country"],
                available=random.random() > 0.1,
            ))

    db.session.add_all(products)
    db.session.add(ByteExchangeRate(gbyte_usd=25))
    db.session.commit()
    print(f"Created {len(products)} products.")
    return products


def create_receivers(users):
    print("Creating receivers...")
    receivers = []
    for i in range(NUM_RECEIVERS):
        created = users.create({
            "email": f"receiver{i}@example.com",
            "password": PASSWORD,
            "first_name": f"Receiver{i}",
            "sur_name": "Test",
            "country": random.choice(list(COUNTRIES)),
            "role": "receiver",
        })
        if created:
            receivers.append(created["user"])
    print(f"Created {len(receivers)} receivers.")
    return receivers


def create_applications(applications, receivers, products):
    print("Creating applications...")
    created = 0
    for receiver in receivers:
        for product in random.sample(products, 2):
            result = applications.submit(receiver["user_id"], product.id, random.choice(MOTIVATIONS))
            if not result or not result["application_id"]:
                continue
            created += 1

            step = random.random()
            if step > 0.5:
                applications.update_status(result["application_id"], PENDING, receiver["user_id"], contract={
                    "shared_address": f"SHARED{result['application_id']:04d}",
                    "price": product.price,
                    "bytes": random.randint(1_000_000, 50_000_000),
                    "completed": True,
                })
            if step > 0.75:
                applications.update_status(result["application_id"], COMPLETED, receiver["user_id"])
    print(f"Created {created} applications.")


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        print("Seeding PolloPollo demo data...\n")
        db.create_all()

        users = UserRepository()
        applications = ApplicationRepository(email_client=NoopEmailClient())

        producers = create_producers(users)
        products = create_products(producers)
        receivers = create_receivers(users)
        create_applications(applications, receivers, products)

        print("\nDone.")
