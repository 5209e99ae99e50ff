from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from app.api.deps import get_fulfillment
from app.services.orders.fulfillment import OrderFulfillment, Outcome

router = APIRouter(tags=["webhooks"])


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(None),
    fulfillment: OrderFulfillment = Depends(get_fulfillment),
):
    """
    Handle payment events from Stripe.

    Only checkout.session.completed is acted on; every verified delivery
    gets a 200 so Stripe stops retrying it.
    """
    # raw body, the signature covers the exact bytes
    body = await request.body()
    result = await run_in_threadpool(fulfillment.handle, body, stripe_signature)
    if result.outcome is Outcome.REJECTED:
        return PlainTextResponse(f"Webhook Error: {result.error}", status_code=result.status_code)
    return Response(status_code=result.status_code)
