import os
from typing import List
from dotenv import load_dotenv

# grab env vars from .env file
load_dotenv()


def _csv(raw: str) -> List[str]:
    return [v.strip() for v in raw.split(",") if v.strip()]


class Settings:
    # app settings
    APP_ENV: str = os.getenv("APP_ENV", "dev")
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS stuff
    _origins_raw: str = os.getenv("ALLOWED_ORIGINS", "*")
    ALLOWED_ORIGINS: List[str] = _csv(_origins_raw) if _origins_raw else ["*"]

    # payments via Stripe
    PAYMENTS_PROVIDER: str = os.getenv("PAYMENTS_PROVIDER", "stripe")
    STRIPE_SECRET_KEY: str | None = os.getenv("STRIPE_SECRET_KEY")
    STRIPE_WEBHOOK_SECRET: str = os.getenv("STRIPE_WEBHOOK_SECRET", "")
    STRIPE_WEBHOOK_TOLERANCE: int = int(os.getenv("STRIPE_WEBHOOK_TOLERANCE", "300"))

    # checkout session policy
    CHECKOUT_CURRENCY: str = os.getenv("CHECKOUT_CURRENCY", "usd")
    CHECKOUT_ALLOWED_COUNTRIES: List[str] = _csv(os.getenv("CHECKOUT_ALLOWED_COUNTRIES", "SG"))
    CHECKOUT_SUCCESS_URL: str = os.getenv("CHECKOUT_SUCCESS_URL", "https://laptopnomad.co/success")
    CHECKOUT_CANCEL_URL: str = os.getenv("CHECKOUT_CANCEL_URL", "https://laptopnomad.co/cart")
    CATALOG_LOOKUP_WORKERS: int = int(os.getenv("CATALOG_LOOKUP_WORKERS", "8"))

    # document store via Firebase
    STORE_PROVIDER: str = os.getenv("STORE_PROVIDER", "firestore")
    GOOGLE_APPLICATION_CREDENTIALS: str | None = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    FIRESTORE_PROJECT_ID: str | None = os.getenv("FIRESTORE_PROJECT_ID")

    # collection names
    PRODUCTS_COLLECTION: str = os.getenv("PRODUCTS_COLLECTION", "products")
    ORDERS_COLLECTION: str = os.getenv("ORDERS_COLLECTION", "orders")
    FORMS_COLLECTION: str = os.getenv("FORMS_COLLECTION", "emails")
    FAILED_FULFILLMENTS_COLLECTION: str = os.getenv("FAILED_FULFILLMENTS_COLLECTION", "failed_fulfillments")


settings = Settings()
