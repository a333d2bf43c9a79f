"""Alert feed endpoint: returns buffered cart/wishlist alerts and empties the buffer."""

from fastapi import APIRouter, Depends

from storefront.routes.deps import notification_feed
from storefront.schemas import AlertOut
from storefront.services.notifications import NotificationFeed

router = APIRouter()


@router.get("", response_model=list[AlertOut])
async def drain_notifications(feed: NotificationFeed = Depends(notification_feed)) -> list[AlertOut]:
    return [
        AlertOut(severity=alert.severity.value, message=alert.message, created_at=alert.created_at)
        for alert in feed.drain()
    ]
