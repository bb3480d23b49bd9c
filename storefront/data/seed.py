# storefront/data/seed.py
from storefront.data.database import SessionLocal, init_db
from storefront.data.models import CategoryModel, ProductModel, UserModel
from storefront.services.identity_service import ROLE_ADMIN, hash_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_CATEGORIES = ["Cakes", "Cookies", "Bread"]

DEMO_PRODUCTS = [
    ("Brownie", "Fudgy chocolate brownie", 20000, 5, "Cakes"),
    ("Cheesecake", "Baked New York style cheesecake", 45000, 3, "Cakes"),
    ("Choco Chip Cookie", "Crunchy cookie with chocolate chips", 8000, 40, "Cookies"),
    ("Sourdough Loaf", "Naturally leavened bread", 35000, 0, "Bread"),
]


def seed(admin_email: str = "admin@gmail.com", admin_password: str = "admin12345"):
    init_db()
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(UserModel).first():
            logger.info("Database already seeded")
            return

        db.add(
            UserModel(
                username="admin",
                email=admin_email,
                password=hash_password(admin_password),
                role=ROLE_ADMIN,
            )
        )

        categories = {name: CategoryModel(name=name) for name in DEMO_CATEGORIES}
        db.add_all(categories.values())
        db.flush()

        for name, description, price, stock, category in DEMO_PRODUCTS:
            db.add(
                ProductModel(
                    name=name,
                    description=description,
                    price=price,
                    stock=stock,
                    category_id=categories[category].id,
                    image_url=f"https://placehold.co/600x400?text={name.replace(' ', '+')}",
                )
            )
        db.commit()
        logger.info(f"Seeded admin {admin_email}, {len(DEMO_CATEGORIES)} categories, {len(DEMO_PRODUCTS)} products")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
