from fastapi import APIRouter

from app.api.v1.routers import checkout as checkout_router
from app.api.v1.routers import webhooks_stripe as webhooks_stripe_router
from app.api.v1.routers import forms as forms_router

router = APIRouter()

# storefront checkout routes
router.include_router(checkout_router.router)

# webhook routes
router.include_router(webhooks_stripe_router.router)

# contact form routes
router.include_router(forms_router.router)
