"""Housekeeping services offered by a provider inside the hotel."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from hotelhub.core.errors import Forbidden, MarketplaceError, NotFoundOrUnreachable, Unauthorized
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.schemas.housekeeping import (
    HousekeepingCategory,
    HousekeepingService,
    HousekeepingServiceCreate,
    HousekeepingServiceRead,
    HousekeepingServiceUpdate,
    ServiceAvailability,
)
from hotelhub.schemas.schedule import DaySchedule, OperatingSchedule
from hotelhub.services.notice_service import Notice, notice_for_error
from hotelhub.services.operating_schedule_service import summarize

logger = logging.getLogger(__name__)


def _business_hours() -> ServiceAvailability:
    closed = DaySchedule(is_available=False)
    return ServiceAvailability(
        mode="business-hours",
        schedule=OperatingSchedule(saturday=closed, sunday=closed.model_copy()),
    )


def default_services() -> list[HousekeepingService]:
    """Services shown when the provider has none stored on the marketplace."""
    return [
        HousekeepingService(
            id="extra-cleaning",
            name="Extra Room Cleaning",
            description="Deep cleaning of guest room including bathroom and all surfaces",
            category=HousekeepingCategory.CLEANING,
            estimated_duration=45,
            requirements=["Room must be vacant during cleaning"],
            instructions="Please ensure all personal items are stored safely",
        ),
        HousekeepingService(
            id="linen-change",
            name="Fresh Linen Change",
            description="Complete change of bed linens and towels",
            category=HousekeepingCategory.LAUNDRY,
            estimated_duration=15,
            requirements=["Guest can be present during service"],
            instructions="Standard linen replacement service",
        ),
        HousekeepingService(
            id="amenity-restock",
            name="Amenity Restocking",
            description="Restock bathroom amenities, toiletries, and room supplies",
            category=HousekeepingCategory.AMENITIES,
            estimated_duration=10,
            requirements=["Quick service, minimal disruption"],
            instructions="Check all amenity levels and restock as needed",
        ),
        HousekeepingService(
            id="maintenance-request",
            name="Room Maintenance",
            description="General maintenance and repair requests for room issues",
            category=HousekeepingCategory.MAINTENANCE,
            estimated_duration=60,
            availability=_business_hours(),
            requirements=["Room inspection required", "May require multiple visits"],
            instructions="Please describe the specific issue when booking",
        ),
    ]


def _to_body(service: HousekeepingServiceCreate | HousekeepingService) -> dict[str, Any]:
    schedule = {
        day: {
            "isAvailable": entry.is_available,
            "startTime": entry.start_time,
            "endTime": entry.end_time,
        }
        for day, entry in service.availability.schedule
    }
    return {
        "name": service.name,
        "description": service.description,
        "category": service.category.value,
        "estimatedDuration": service.estimated_duration,
        "availability": {"mode": service.availability.mode, "schedule": schedule},
        "requirements": list(service.requirements),
        "instructions": service.instructions,
    }


def _local_id() -> str:
    return f"custom-{uuid.uuid4().hex[:12]}"


class HousekeepingManager:
    """In-memory view of one provider's housekeeping services."""

    def __init__(self, provider_id: str) -> None:
        self.provider_id = provider_id
        self._services: dict[str, HousekeepingService] = {}
        self._local_only: set[str] = set()
        self._unsynced: set[str] = set()
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def to_read(self, service: HousekeepingService) -> HousekeepingServiceRead:
        return HousekeepingServiceRead(
            **service.model_dump(),
            schedule_summary=summarize(service.availability.schedule),
            local_only=service.id in self._local_only or service.id in self._unsynced,
        )

    def list_services(self) -> list[HousekeepingServiceRead]:
        return [self.to_read(service) for service in self._services.values()]

    def get(self, service_id: str) -> HousekeepingService:
        service = self._services.get(service_id)
        if service is None:
            raise ValueError("Housekeeping service not found")
        return service

    def _replace_all(self, services: list[HousekeepingService]) -> None:
        local = [self._services[key] for key in self._local_only if key in self._services]
        self._services = {service.id: service for service in services + local}
        self._unsynced.clear()

    async def load(self, client: MarketplaceClient) -> list[Notice]:
        try:
            rows = await client.list_housekeeping_services()
        except Unauthorized:
            raise
        except Forbidden as exc:
            self._replace_all([])
            self._loaded = True
            notice = notice_for_error(exc, "load housekeeping services")
            return [notice] if notice is not None else []
        except MarketplaceError as exc:
            logger.warning("Housekeeping listing failed, using defaults: %s", exc.message)
            self._replace_all(default_services())
            self._loaded = True
            return [Notice.info("Loaded default housekeeping services")]

        self._loaded = True
        if rows is None:
            self._replace_all(default_services())
            return []
        self._replace_all([HousekeepingService.model_validate(row) for row in rows])
        return []

    async def create(
        self, client: MarketplaceClient, payload: HousekeepingServiceCreate
    ) -> tuple[HousekeepingServiceRead | None, Notice | None]:
        try:
            created = await client.create_housekeeping_service(_to_body(payload))
        except Unauthorized:
            raise
        except NotFoundOrUnreachable:
            service = HousekeepingService(id=_local_id(), **payload.model_dump())
            self._services[service.id] = service
            self._local_only.add(service.id)
            return self.to_read(service), Notice.success(
                f"{service.name} created locally (offline mode)"
            )
        except MarketplaceError as exc:
            return None, notice_for_error(exc, "create housekeeping service")

        server_id = created.get("_id") or created.get("id") or _local_id()
        service = HousekeepingService(id=str(server_id), **payload.model_dump())
        self._services[service.id] = service
        logger.info("Provider %s created housekeeping service %s", self.provider_id, service.id)
        return self.to_read(service), Notice.success(
            "Housekeeping service created successfully"
        )

    async def update(
        self,
        client: MarketplaceClient,
        service_id: str,
        payload: HousekeepingServiceUpdate,
    ) -> tuple[HousekeepingServiceRead | None, Notice | None]:
        current = self.get(service_id)
        data = current.model_dump()
        data.update(payload.model_dump(exclude_unset=True))
        updated = HousekeepingService.model_validate(data)
        if service_id not in self._local_only:
            try:
                await client.update_housekeeping_service(service_id, _to_body(updated))
            except Unauthorized:
                raise
            except NotFoundOrUnreachable:
                self._unsynced.add(service_id)
                self._services[service_id] = updated
                return self.to_read(updated), Notice.success(
                    f"{updated.name} updated locally (offline mode)"
                )
            except MarketplaceError as exc:
                return self.to_read(current), notice_for_error(
                    exc, "update housekeeping service"
                )
        self._services[service_id] = updated
        return self.to_read(updated), Notice.success("Service updated successfully")

    async def delete(self, client: MarketplaceClient, service_id: str) -> Notice | None:
        self.get(service_id)
        if service_id not in self._local_only:
            try:
                await client.delete_housekeeping_service(service_id)
            except Unauthorized:
                raise
            except NotFoundOrUnreachable:
                logger.info("Deleting housekeeping service %s locally", service_id)
            except MarketplaceError as exc:
                return notice_for_error(exc, "delete housekeeping service")
        del self._services[service_id]
        self._local_only.discard(service_id)
        self._unsynced.discard(service_id)
        return Notice.success("Service deleted successfully")

    async def toggle(
        self, client: MarketplaceClient, service_id: str
    ) -> tuple[HousekeepingServiceRead | None, Notice | None]:
        current = self.get(service_id)
        target = not current.is_active
        action = "activated" if target else "deactivated"
        if service_id not in self._local_only:
            try:
                await client.set_housekeeping_service_active(service_id, target)
            except Unauthorized:
                raise
            except NotFoundOrUnreachable:
                self._unsynced.add(service_id)
                updated = current.model_copy(update={"is_active": target})
                self._services[service_id] = updated
                return self.to_read(updated), Notice.success(
                    f"{current.name} {action} locally (offline mode)"
                )
            except MarketplaceError as exc:
                return self.to_read(current), notice_for_error(
                    exc, f"{action[:-1]} housekeeping service"
                )
        updated = current.model_copy(update={"is_active": target})
        self._services[service_id] = updated
        return self.to_read(updated), Notice.success(f"Service {action} successfully")


class HousekeepingRegistry:
    def __init__(self) -> None:
        self._managers: dict[str, HousekeepingManager] = {}

    def for_provider(self, provider_id: str) -> HousekeepingManager:
        manager = self._managers.get(provider_id)
        if manager is None:
            manager = self._managers[provider_id] = HousekeepingManager(provider_id)
        return manager

    def clear(self) -> None:
        self._managers.clear()


__all__ = [
    "HousekeepingManager",
    "HousekeepingRegistry",
    "default_services",
]
