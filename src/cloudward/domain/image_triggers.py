"""Read-only listing of SWR image triggers."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .model import ImageTriggerFilter

if TYPE_CHECKING:
    from .model import ImageTrigger
    from .ports import ImageTriggerGateway

log = getLogger(__name__)


async def list_image_triggers(
    gateway: ImageTriggerGateway,
    *,
    organization: str,
    repository: str,
    trigger_filter: ImageTriggerFilter | None = None,
) -> list[ImageTrigger]:
    """Return the repository's triggers matching ``trigger_filter``.

    Filtering happens client-side; a filter that matches nothing yields ``[]``.
    """

    triggers = await gateway.list_triggers(organization, repository)
    effective = trigger_filter or ImageTriggerFilter()
    matched = [trigger for trigger in triggers if effective.matches(trigger)]
    log.debug(
        "Image triggers for %s/%s: %d listed, %d matched",
        organization,
        repository,
        len(triggers),
        len(matched),
    )
    return matched
