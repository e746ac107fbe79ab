"""Device directory record."""

from __future__ import annotations

import logging

from pydantic import Field

from pyairbox.models._base import AirboxBaseModel

_logger = logging.getLogger(__name__)


class DeviceDirectory(AirboxBaseModel):
    """Site label → device identifier mapping read once per pass.

    Stored as a single document (``id="AirBoxes"`` by default) whose
    ``airBoxSite`` object lists one device per site label.
    """

    id: str
    partition_key: str = Field(default="", alias="partitionKey")
    sites: dict[str, str | None] = Field(default_factory=dict, alias="airBoxSite")

    def device_ids(self) -> list[str]:
        """Device identifiers in directory order.

        Duplicates are kept: two labels pointing at the same device give
        two reconciliations. Blank entries are skipped.
        """
        ids: list[str] = []
        for label, device_id in self.sites.items():
            if not device_id or not device_id.strip():
                _logger.warning("Directory %s has no device for site %s", self.id, label)
                continue
            ids.append(device_id)
        return ids
